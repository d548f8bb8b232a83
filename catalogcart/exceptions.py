"""Exception types raised inside the state layer and its gateways."""


class CatalogCartError(Exception):
    """Base class for all catalogcart errors."""


class GatewayError(CatalogCartError):
    """A remote catalog call did not succeed."""


class CartError(CatalogCartError):
    """A cart mutation was rejected."""


class InsufficientStockError(CartError):
    def __init__(self, item_id: str, requested: int, stock: int):
        super().__init__("Insufficient stock")
        self.item_id = item_id
        self.requested = requested
        self.stock = stock


class LineNotFoundError(CartError):
    def __init__(self, item_id: str):
        super().__init__("Item not found in cart")
        self.item_id = item_id


class InvalidQuantityError(CartError):
    def __init__(self, quantity):
        super().__init__("Quantity must be a positive integer")
        self.quantity = quantity
