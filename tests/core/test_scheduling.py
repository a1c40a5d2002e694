"""Tests for the trailing-edge debouncer."""

import asyncio

import pytest

from regionscope.core.scheduling import Debouncer


class TestDebouncerWithoutLoop:
    """Debouncer behavior when no event loop is running."""

    def test_given_no_loop_when_schedule_then_pending_until_flush(self) -> None:
        """Without a loop the call waits for flush()."""
        # Given
        calls: list[int] = []
        debouncer = Debouncer(0.1, lambda: calls.append(1), name="test")

        # When
        handle = debouncer.schedule()

        # Then
        assert handle is None
        assert debouncer.pending
        assert calls == []

        # When
        ran = debouncer.flush()

        # Then
        assert ran is True
        assert calls == [1]
        assert not debouncer.pending

    def test_given_repeated_schedules_when_flush_then_runs_once(self) -> None:
        """Bursts coalesce into one call."""
        calls: list[int] = []
        debouncer = Debouncer(0.1, lambda: calls.append(1), name="test")

        for _ in range(5):
            debouncer.schedule()
        debouncer.flush()

        assert calls == [1]

    def test_given_nothing_pending_when_flush_then_returns_false(self) -> None:
        """Flush is a no-op without a pending call."""
        debouncer = Debouncer(0.1, lambda: None, name="test")

        assert debouncer.flush() is False

    def test_given_pending_when_cancel_then_flush_does_nothing(self) -> None:
        """A cancelled call is discarded."""
        calls: list[int] = []
        debouncer = Debouncer(0.1, lambda: calls.append(1), name="test")
        debouncer.schedule()

        debouncer.cancel()

        assert debouncer.flush() is False
        assert calls == []

    def test_given_negative_delay_when_created_then_raises(self) -> None:
        """Negative delays are rejected."""
        with pytest.raises(ValueError, match="must be >= 0"):
            Debouncer(-0.5, lambda: None, name="test")


class TestDebouncerOnLoop:
    """Debouncer behavior on a running asyncio loop."""

    @pytest.mark.asyncio
    async def test_given_loop_when_delay_elapses_then_callback_runs(self) -> None:
        """The callback fires after the delay."""
        # Given
        calls: list[int] = []
        debouncer = Debouncer(0.01, lambda: calls.append(1), name="test")

        # When
        handle = debouncer.schedule()
        await asyncio.sleep(0.05)

        # Then
        assert handle is not None
        assert calls == [1]
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_given_burst_when_delay_elapses_then_runs_once(self) -> None:
        """Rescheduling cancels the pending timer."""
        calls: list[int] = []
        debouncer = Debouncer(0.02, lambda: calls.append(1), name="test")

        for _ in range(3):
            debouncer.schedule()
            await asyncio.sleep(0.005)
        await asyncio.sleep(0.08)

        assert calls == [1]

    @pytest.mark.asyncio
    async def test_given_cancelled_timer_when_delay_elapses_then_not_run(self) -> None:
        """Cancel discards a scheduled timer."""
        calls: list[int] = []
        debouncer = Debouncer(0.01, lambda: calls.append(1), name="test")
        debouncer.schedule()

        debouncer.cancel()
        await asyncio.sleep(0.05)

        assert calls == []

    @pytest.mark.asyncio
    async def test_given_flushed_timer_when_delay_elapses_then_not_run_again(self) -> None:
        """Flushing consumes the pending timer."""
        calls: list[int] = []
        debouncer = Debouncer(0.01, lambda: calls.append(1), name="test")
        debouncer.schedule()

        debouncer.flush()
        await asyncio.sleep(0.05)

        assert calls == [1]
