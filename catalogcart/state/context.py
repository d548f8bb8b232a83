"""The shared set of stores handed to every view in a process."""

import logging

from ..protocol import Gateway
from .cart import CartStore
from .catalog import CatalogStore
from .errors import ErrorChannel, get_error_channel

logger = logging.getLogger(__name__)


class StoreContext:
    """One error channel, one catalog and one cart.

    Build it once at startup and pass it to each consumer; consumers that
    need the same catalog must be given the same context.
    """

    def __init__(self, gateway: Gateway, errors: ErrorChannel | None = None):
        self.errors = errors if errors is not None else get_error_channel()
        self.catalog = CatalogStore(gateway, self.errors)
        self.cart = CartStore(self.errors)
        logger.debug(f"Store context created with {type(gateway).__name__}")
