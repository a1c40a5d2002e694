"""Change notifications with explicit subscription handles.

Each store owns its emitters. Consumers subscribe and keep the returned
``Subscription``; disposing it (or leaving its ``with`` block) removes the
listener. Owners that subscribe to several emitters collect the handles in a
``SubscriptionGroup`` and dispose them together on teardown.

Example::

    emitter = EventEmitter("regions")
    with emitter.subscribe(lambda: print("changed")):
        emitter.fire()  # prints "changed"
    emitter.fire()  # no listeners left
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

import structlog

logger = structlog.get_logger()

Listener = Callable[[], None]


class Subscription:
    """Handle for one registered listener."""

    def __init__(self, emitter: EventEmitter, listener: Listener) -> None:
        self._emitter: EventEmitter | None = emitter
        self._listener = listener

    @property
    def is_active(self) -> bool:
        return self._emitter is not None

    def dispose(self) -> None:
        """Remove the listener. Safe to call more than once."""
        if self._emitter is None:
            return
        self._emitter._remove(self._listener)
        self._emitter = None

    def __enter__(self) -> Subscription:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()


class EventEmitter:
    """A void notification fired when some derived value changes."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Listener] = []
        self._disposed = False

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Subscription:
        """Register a listener and return its subscription handle."""
        if self._disposed:
            raise RuntimeError(f"Cannot subscribe to disposed emitter '{self.name}'")
        self._listeners.append(listener)
        return Subscription(self, listener)

    def fire(self) -> None:
        """Invoke every listener in registration order.

        A failing listener is logged and does not stop delivery to the rest.
        """
        # Copy: listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("event_listener_failed", emitter=self.name)

    def dispose(self) -> None:
        self._listeners.clear()
        self._disposed = True

    def _remove(self, listener: Listener) -> None:
        # Identity match: the same callable may be registered twice
        for i, registered in enumerate(self._listeners):
            if registered is listener:
                del self._listeners[i]
                return


class SubscriptionGroup:
    """Collects subscriptions so an owner can release them in one call."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        self._subscriptions.append(subscription)
        return subscription

    def __len__(self) -> int:
        return len(self._subscriptions)

    def dispose(self) -> None:
        while self._subscriptions:
            self._subscriptions.pop().dispose()

    def __enter__(self) -> SubscriptionGroup:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()
