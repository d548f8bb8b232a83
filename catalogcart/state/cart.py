"""Cart state: line items and the running total."""

import logging
from decimal import Decimal, ROUND_HALF_UP

from ..exceptions import (
    CartError,
    InsufficientStockError,
    InvalidQuantityError,
    LineNotFoundError,
)
from ..model import CartLine, CatalogItem
from .channel import Publication
from .errors import ErrorChannel, get_error_channel

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def compute_total(lines: tuple[CartLine, ...]) -> Decimal:
    """Sum of price times quantity, rounded to cents."""
    total = sum((line.subtotal for line in lines), Decimal("0"))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


class CartStore:
    """Owns the cart lines.

    Lines hold the item snapshot they were created with. Stock checks use
    that snapshot (or the item passed to add_item), never the live catalog,
    so a line can go stale if the catalog's stock changes afterwards.

    Rejected mutations publish one message on the error channel and leave
    the cart untouched; nothing is raised to the caller.
    """

    def __init__(self, errors: ErrorChannel | None = None):
        self.errors = errors if errors is not None else get_error_channel()
        self.lines: Publication[tuple[CartLine, ...]] = Publication("lines", ())
        self.total: Publication[Decimal] = Publication("total", compute_total(()))
        self._total_subscription = self.lines.subscribe(self._recalculate_total)

    def add_item(self, item: CatalogItem, quantity: int) -> None:
        """Add quantity of item, merging with an existing line for the same id."""
        try:
            self._check_quantity(quantity)
            lines = self.lines.value
            existing = self.line_for(item.id)

            if existing is not None:
                new_quantity = existing.quantity + quantity
                if new_quantity > item.stock:
                    raise InsufficientStockError(item.id, new_quantity, item.stock)
                updated = tuple(
                    line.model_copy(update={"quantity": new_quantity})
                    if line.item.id == item.id
                    else line
                    for line in lines
                )
            else:
                if quantity > item.stock:
                    raise InsufficientStockError(item.id, quantity, item.stock)
                updated = lines + (CartLine(item=item, quantity=quantity),)
        except CartError as e:
            self._reject(f"add {quantity} x {item.id}", e)
            return

        self.lines.publish(updated)

    def remove_item(self, item_id: str) -> None:
        if self.line_for(item_id) is None:
            return
        self.lines.publish(
            tuple(line for line in self.lines.value if line.item.id != item_id)
        )

    def set_quantity(self, item_id: str, quantity: int) -> None:
        try:
            self._check_quantity(quantity)
            line = self.line_for(item_id)
            if line is None:
                raise LineNotFoundError(item_id)
            if quantity > line.item.stock:
                raise InsufficientStockError(item_id, quantity, line.item.stock)
        except CartError as e:
            self._reject(f"set {item_id} to {quantity}", e)
            return

        self.lines.publish(
            tuple(
                line.model_copy(update={"quantity": quantity})
                if line.item.id == item_id
                else line
                for line in self.lines.value
            )
        )

    def clear(self) -> None:
        self.lines.publish(())

    def line_for(self, item_id: str) -> CartLine | None:
        for line in self.lines.value:
            if line.item.id == item_id:
                return line
        return None

    def _check_quantity(self, quantity) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantityError(quantity)

    def _reject(self, action: str, error: CartError) -> None:
        logger.info(f"Cart rejected {action}: {error}")
        self.errors.publish(str(error))

    def _recalculate_total(self, lines: tuple[CartLine, ...]) -> None:
        self.total.publish(compute_total(lines))
