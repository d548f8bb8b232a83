from .cart import CartStore, compute_total
from .catalog import ALL_CATEGORIES, CatalogStore
from .channel import Broadcast, Publication, Subscription
from .context import StoreContext
from .errors import ErrorChannel, get_error_channel, reset_error_channel

__all__ = [
    "ALL_CATEGORIES",
    "Broadcast",
    "CartStore",
    "CatalogStore",
    "ErrorChannel",
    "Publication",
    "StoreContext",
    "Subscription",
    "compute_total",
    "get_error_channel",
    "reset_error_channel",
]
