"""
Refresh Scheduler

Provides RefreshLoop, a cancellable background task that fires a refresh
callback on a fixed interval.

Unlike a bare `while True: await asyncio.sleep(interval)` loop, this one:
- Keeps ticks on the original schedule regardless of callback duration
- Skips missed ticks instead of queueing them
- Wakes immediately on stop() instead of finishing the sleep
- Reports refresh metrics for observability

Usage:
    loop = RefreshLoop(30.0, store.load_config, name="billing")
    loop.start()

    # Later:
    await loop.stop()
    print(loop.get_stats())
"""

import asyncio
import enum
import time
from datetime import timedelta
from typing import Awaitable, Callable

from .exceptions import RefreshError, StoreStateError
from .logging_setup import get_service_logger, log_refresh

logger = get_service_logger("scheduler")


class LoopState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


def interval_seconds(interval: timedelta | float) -> float:
    """Normalize an interval to positive seconds."""
    seconds = interval.total_seconds() if isinstance(interval, timedelta) else float(interval)
    if seconds <= 0:
        raise ValueError(f"refresh interval must be positive, got {interval!r}")
    return seconds


class RefreshLoop:
    """
    Interval scheduler with cooperative cancellation.

    The first callback fires one full interval after start(). A callback
    already running when stop() is called completes before the task exits.

    Attributes:
        interval: Seconds between refreshes
        callback: Async function to call each interval
        name: Name for logging (usually the namespace key)
    """

    def __init__(
        self,
        interval: timedelta | float,
        callback: Callable[[], Awaitable[None]],
        name: str = "unnamed",
    ):
        self.interval = interval_seconds(interval)
        self.callback = callback
        self.name = name

        self._state = LoopState.IDLE
        self._task: asyncio.Task | None = None
        self._stop_event = asyncio.Event()
        self._stop_task: asyncio.Future | None = None
        self._next_run: float = 0

        # Observability metrics
        self._refresh_count: int = 0
        self._failure_count: int = 0
        self._skipped_count: int = 0
        self._last_duration: float = 0
        self._last_error: str | None = None

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is LoopState.RUNNING

    def start(self) -> None:
        """
        Start the loop in a background task on the running event loop.

        Raises:
            StoreStateError: the loop was already stopped
        """
        if self._state is LoopState.STOPPED:
            raise StoreStateError(f"Refresh loop '{self.name}' was stopped and cannot restart")
        if self._state is LoopState.RUNNING:
            logger.warning(f"Refresh loop '{self.name}' already running, ignoring start")
            return

        self._state = LoopState.RUNNING
        self._task = asyncio.create_task(self._run(), name=f"refresh:{self.name}")
        logger.info(
            f"Refresh loop '{self.name}' started (every {self.interval:g}s)",
            extra={"interval_s": self.interval},
        )

    async def stop(self) -> None:
        """
        Signal cancellation and wait until the task has fully exited.

        Concurrent callers all wait for the same shutdown.
        """
        if self._stop_task is None:
            self._state = LoopState.STOPPED
            self._stop_event.set()
            self._stop_task = asyncio.ensure_future(self._join())
        await asyncio.shield(self._stop_task)

    async def _join(self) -> None:
        if self._task is not None:
            await self._task
            self._task = None

        logger.info(
            f"Refresh loop '{self.name}' stopped after {self._refresh_count} refreshes",
            extra={"stats": self.get_stats()},
        )

    async def _wait_for_tick(self) -> bool:
        """Sleep until the next tick. Returns False if stop() fired first."""
        delay = self._next_run - time.monotonic()
        if delay > 0:
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass
        return not self._stop_event.is_set()

    async def _run(self) -> None:
        self._next_run = time.monotonic() + self.interval

        while await self._wait_for_tick():
            start = time.monotonic()
            try:
                await self.callback()
                self._refresh_count += 1
                self._last_error = None
            except RefreshError as e:
                self._failure_count += 1
                self._last_error = str(e)
                log_refresh(logger, self.name, 0, (time.monotonic() - start) * 1000, success=False, error=e)
            except Exception as e:
                self._failure_count += 1
                self._last_error = str(e)
                logger.error(f"Refresh loop '{self.name}' callback error: {e}", exc_info=True)
            self._last_duration = time.monotonic() - start

            # Skip missed ticks (don't queue up missed refreshes)
            now = time.monotonic()
            skipped = 0
            while self._next_run <= now:
                self._next_run += self.interval
                skipped += 1

            # First skip is the tick we just handled
            if skipped > 1:
                self._skipped_count += skipped - 1
                logger.warning(
                    f"Refresh loop '{self.name}' skipped {skipped - 1} ticks "
                    f"(refresh took {self._last_duration:.3f}s)"
                )

    @property
    def refresh_count(self) -> int:
        """Number of successful refreshes."""
        return self._refresh_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def skipped_count(self) -> int:
        return self._skipped_count

    def get_stats(self) -> dict:
        """Get loop statistics for observability."""
        return {
            "name": self.name,
            "state": self._state.value,
            "interval_s": self.interval,
            "refresh_count": self._refresh_count,
            "failure_count": self._failure_count,
            "skipped_count": self._skipped_count,
            "last_refresh_s": round(self._last_duration, 3),
            "last_error": self._last_error,
        }
