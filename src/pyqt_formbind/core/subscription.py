"""
Disposable listener handles.

Every ``on()`` call returns a Subscription. Code that wires several listeners
at once collects them in a SubscriptionGroup and disposes the group as a unit,
so rebind and teardown paths cannot leak a listener.

Usage:
    group = SubscriptionGroup()
    group.add(model.on("change:value", handler))
    group.add(other.on("change", handler))
    ...
    group.dispose()  # releases both, newest first
"""

import logging
from typing import Any, Callable, Iterable, List

logger = logging.getLogger(__name__)


class Subscription:
    """Handle for one ``(emitter, event, callback)`` registration."""

    __slots__ = ("emitter", "event", "callback", "_active")

    def __init__(self, emitter: Any, event: str, callback: Callable[..., Any]):
        self.emitter = emitter
        self.event = event
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def dispose(self) -> None:
        """Remove the listener from its emitter. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self.emitter.off(self.event, self.callback)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "active" if self._active else "disposed"
        return f"<Subscription {self.event!r} on {type(self.emitter).__name__} ({state})>"


class SubscriptionGroup:
    """A bundle of subscriptions released together."""

    def __init__(self, subscriptions: Iterable[Subscription] = ()):
        self._subscriptions: List[Subscription] = list(subscriptions)

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def extend(self, subscriptions: Iterable[Subscription]) -> None:
        self._subscriptions.extend(subscriptions)

    def dispose(self) -> None:
        """Release every subscription, newest first."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in reversed(subscriptions):
            subscription.dispose()
        logger.debug(f"Disposed {len(subscriptions)} subscription(s)")

    @property
    def active(self) -> bool:
        return any(subscription.active for subscription in self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __iter__(self):
        return iter(self._subscriptions)

    def __enter__(self) -> "SubscriptionGroup":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()
