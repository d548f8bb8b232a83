from .model import CartLine, CatalogItem, CatalogItemDraft, Deletion
from .protocol import Gateway
from .state import CartStore, CatalogStore, ErrorChannel, StoreContext

__all__ = [
    "CartLine",
    "CartStore",
    "CatalogItem",
    "CatalogItemDraft",
    "CatalogStore",
    "Deletion",
    "ErrorChannel",
    "Gateway",
    "StoreContext",
]
