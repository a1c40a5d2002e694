"""Trailing-edge debouncing on the asyncio event loop.

Every recomputation entry point owns one ``Debouncer``. Scheduling again
before the delay elapses cancels the pending timer, so a burst of triggers
runs the callback once, after the burst. Work never runs concurrently: the
callback executes synchronously on the loop thread when its timer fires.

Without a running loop (CLI, plain unit tests) a scheduled call stays pending
until ``flush()`` runs it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import structlog

logger = structlog.get_logger()


class Debouncer:
    """Coalesces repeated triggers into one deferred call."""

    def __init__(self, delay_sec: float, callback: Callable[[], None], *, name: str) -> None:
        if delay_sec < 0:
            raise ValueError(f"Debounce delay must be >= 0, got {delay_sec}")
        self.delay_sec = delay_sec
        self.name = name
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def schedule(self) -> asyncio.TimerHandle | None:
        """(Re)start the timer. Returns the loop handle, or None without a loop."""
        self.cancel()
        self._pending = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("debounce_deferred_without_loop", debouncer=self.name)
            return None
        self._handle = loop.call_later(self.delay_sec, self._fire)
        return self._handle

    def cancel(self) -> None:
        """Discard the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = False

    def flush(self) -> bool:
        """Run the pending call now. Returns True if something ran."""
        if not self._pending:
            return False
        if self._handle is not None:
            self._handle.cancel()
        self._fire()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._pending = False
        self._callback()
