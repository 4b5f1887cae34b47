"""
Interval timers driving PlaybackController ticks

IntervalTimer is the pluggable clock: start(interval_ms, callback) begins
periodic callbacks, cancel() ends them. Restarting an active timer replaces
the running schedule, so one timer instance never fires on two schedules.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

from led_converter.models.enums import LogCategory
from led_converter.utils.logger import get_category_logger

log = get_category_logger(LogCategory.PLAYBACK)


class IntervalTimer(ABC):
    """Periodic callback source"""

    @abstractmethod
    def start(self, interval_ms: float, callback: Callable[[], None]) -> None:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...

    @property
    @abstractmethod
    def active(self) -> bool:
        ...


class AsyncioIntervalTimer(IntervalTimer):
    """
    Timer backed by an asyncio task

    The callback runs on the event loop every interval_ms milliseconds until
    cancel() is called. Must be started from inside a running loop.
    """

    def __init__(self) -> None:
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval_ms: float, callback: Callable[[], None]) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(
            self._run(interval_ms / 1000, callback)
        )

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self, delay: float, callback: Callable[[], None]) -> None:
        try:
            while True:
                await asyncio.sleep(delay)
                callback()
        except asyncio.CancelledError:
            log.debug("Interval timer cancelled")
            raise


class ManualIntervalTimer(IntervalTimer):
    """
    Timer advanced explicitly with tick()

    Used by tests and by hosts that own their own clock (render loops,
    PLC-style cyclic tasks).

    Example:
        timer = ManualIntervalTimer()
        controller = PlaybackController(timer=timer)
        controller.play()
        timer.tick(3)
    """

    def __init__(self) -> None:
        self._callback: Optional[Callable[[], None]] = None
        self.interval_ms: Optional[float] = None
        self.start_count = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, interval_ms: float, callback: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self._callback = callback
        self.start_count += 1

    def cancel(self) -> None:
        self._callback = None

    def tick(self, count: int = 1) -> None:
        """Fire the callback count times (stops early once cancelled)"""
        for _ in range(count):
            if self._callback is None:
                return
            self._callback()
