"""Process-wide channel carrying human-readable failure messages."""

import logging
from typing import Callable

from .channel import Broadcast, Subscription

logger = logging.getLogger(__name__)


class ErrorChannel:
    """Broadcasts failure messages to whoever is listening right now.

    Messages are not buffered: a message published while nobody is
    subscribed is dropped (it is still logged).
    """

    def __init__(self):
        self._broadcast: Broadcast[str] = Broadcast("errors")

    def publish(self, message: str) -> None:
        logger.warning(f"Error published: {message}")
        self._broadcast.publish(message)

    def subscribe(self, handler: Callable[[str], None]) -> Subscription:
        return self._broadcast.subscribe(handler)

    @property
    def subscriber_count(self) -> int:
        return self._broadcast.subscriber_count


# Global error channel instance
_error_channel: ErrorChannel | None = None


def get_error_channel() -> ErrorChannel:
    """Get the process-wide error channel, creating it on first use."""
    global _error_channel
    if _error_channel is None:
        _error_channel = ErrorChannel()
    return _error_channel


def reset_error_channel() -> None:
    """Forget the process-wide error channel."""
    global _error_channel
    _error_channel = None
