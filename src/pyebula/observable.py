"""Single-value live stream with explicit subscriptions.

An :class:`Observable` always holds a current value.  Subscribing
delivers that value immediately and then every later publication,
until the returned :class:`Subscription` is cancelled.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by :meth:`Observable.subscribe`."""

    def __init__(self, release: Callable[[Subscription], None]) -> None:
        self._release: Callable[[Subscription], None] | None = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def unsubscribe(self) -> None:
        """Stop deliveries.  Safe to call more than once."""
        release = self._release
        self._release = None
        if release is not None:
            release(self)


class Observable(Generic[T]):
    """Holds the latest value of type ``T`` and pushes it to subscribers."""

    def __init__(self, initial: T, *, name: str = "") -> None:
        self._value = initial
        self._name = name
        self._subscribers: dict[Subscription, Callable[[T], None]] = {}
        self._pending: deque[T] = deque()
        self._delivering = False

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register *callback* and call it with the current value."""
        subscription = Subscription(self._release)
        self._subscribers[subscription] = callback
        self._deliver(callback, self._value)
        return subscription

    def publish(self, value: T) -> None:
        """Replace the current value and notify every subscriber.

        A publish from inside a subscriber callback is queued and
        delivered once the running round finishes, so every subscriber
        sees values in publish order and ends on the latest one.
        """
        self._value = value
        self._pending.append(value)
        if self._delivering:
            return
        self._delivering = True
        try:
            while self._pending:
                current = self._pending.popleft()
                for subscription, callback in list(self._subscribers.items()):
                    if subscription.active:
                        self._deliver(callback, current)
        finally:
            self._delivering = False

    def _release(self, subscription: Subscription) -> None:
        self._subscribers.pop(subscription, None)

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            _logger.warning("Subscriber of %s raised", self._name or "observable", exc_info=True)
