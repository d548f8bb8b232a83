from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class CatalogItemDraft(BaseModel):
    """A catalog item that has not been assigned an id yet."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    brand: str
    category: str
    description: str = ""
    price: Decimal = Field(ge=0)
    stock: int = Field(ge=0)
    image: str = ""

    @field_serializer("price", when_used="json")
    def _serialize_price(self, price: Decimal) -> float:
        return float(price)


class CatalogItem(CatalogItemDraft):
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # json-server style resources hand out numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Deletion(BaseModel):
    """Body of a delete response. Only the echoed id matters."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class CartLine(BaseModel):
    """An item snapshot paired with the quantity requested for it."""

    model_config = ConfigDict(frozen=True)

    item: CatalogItem
    quantity: int = Field(gt=0)

    @property
    def subtotal(self) -> Decimal:
        return self.item.price * self.quantity
