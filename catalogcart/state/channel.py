"""Observer registries used by the stores to publish state."""

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Handler = Callable[[T], None]


class Subscription:
    """Handle returned by subscribe(). Call release() on teardown."""

    def __init__(self, channel: "Broadcast", handler: Handler):
        self._channel = channel
        self._handler = handler
        self.active = True

    def release(self) -> None:
        if self.active:
            self._channel._remove(self._handler)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class Broadcast(Generic[T]):
    """Delivers each published value to the handlers registered at that moment."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Handler] = []

    def subscribe(self, handler: Handler) -> Subscription:
        self._handlers.append(handler)
        logger.debug(f"Subscribed to {self.name} ({len(self._handlers)} handlers)")
        return Subscription(self, handler)

    def publish(self, value: T) -> None:
        self._deliver(value)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def _deliver(self, value: T) -> None:
        # Iterate over a copy so handlers may subscribe or release mid-delivery
        for handler in list(self._handlers):
            self._call(handler, value)

    def _call(self, handler: Handler, value: T) -> None:
        try:
            handler(value)
        except Exception as e:
            logger.error(f"Subscriber to {self.name} failed: {e}", exc_info=True)

    def _remove(self, handler: Handler) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass


class Publication(Broadcast[T]):
    """A broadcast that remembers its last value and replays it to new subscribers."""

    def __init__(self, name: str, initial: T):
        super().__init__(name)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, handler: Handler) -> Subscription:
        subscription = super().subscribe(handler)
        self._call(handler, self._value)
        return subscription

    def publish(self, value: T) -> None:
        self._value = value
        self._deliver(value)
