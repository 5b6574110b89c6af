"""
Timer scheduling for the player polling loop and deferred loads.

Everything runs on one logical thread: callbacks are invoked by an event
loop (AsyncioScheduler) or by an explicitly advanced virtual clock
(ManualScheduler), never concurrently.
"""

import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """Handle returned by a scheduler; cancel() stops any further calls."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class Scheduler:
    """Interface for single-threaded timers."""

    def time(self) -> float:
        raise NotImplementedError

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        raise NotImplementedError

    def call_every(self, interval: float, callback: Callable[[], Any]) -> TimerHandle:
        raise NotImplementedError


class _AsyncioRepeatingTimer(TimerHandle):

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], Any]):
        super().__init__()
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = self._loop.call_later(interval, self._tick)

    def _tick(self) -> None:
        if self._cancelled:
            return
        # Reschedule first so a failing callback does not stop the timer
        self._handle = self._loop.call_later(self._interval, self._tick)
        self._callback()

    def cancel(self) -> None:
        super().cancel()
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class _AsyncioOneShotTimer(TimerHandle):

    def __init__(self, handle: asyncio.TimerHandle):
        super().__init__()
        self._handle = handle

    def cancel(self) -> None:
        super().cancel()
        self._handle.cancel()


class AsyncioScheduler(Scheduler):
    """
    Scheduler backed by an asyncio event loop.

    Args:
        loop: Event loop to schedule on. Defaults to the loop running when
            the first timer is created, so without an explicit loop the
            first timer must be created from inside a running loop.

    Raises:
        RuntimeError: If a timer is created with no loop given and none
            running
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError(
                    "AsyncioScheduler needs a running event loop; create timers from "
                    "inside one or pass loop= explicitly"
                ) from e
        return self._loop

    def time(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        return _AsyncioOneShotTimer(self.loop.call_later(delay, callback))

    def call_every(self, interval: float, callback: Callable[[], Any]) -> TimerHandle:
        return _AsyncioRepeatingTimer(self.loop, interval, callback)


class _ManualTimer(TimerHandle):

    def __init__(self, due: float, callback: Callable[[], Any], interval: Optional[float] = None):
        super().__init__()
        self.due = due
        self.callback = callback
        self.interval = interval


class ManualScheduler(Scheduler):
    """
    Virtual-clock scheduler advanced explicitly with advance().

    Due timers run in time order (ties in creation order). Used for
    deterministic tests and headless simulations.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, _ManualTimer]] = []
        self._counter = itertools.count()

    def time(self) -> float:
        return self._now

    def _push(self, timer: _ManualTimer) -> None:
        heapq.heappush(self._queue, (timer.due, next(self._counter), timer))

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle:
        timer = _ManualTimer(self._now + max(0.0, delay), callback)
        self._push(timer)
        return timer

    def call_every(self, interval: float, callback: Callable[[], Any]) -> TimerHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        timer = _ManualTimer(self._now + interval, callback, interval=interval)
        self._push(timer)
        return timer

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every timer that falls due."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled():
                continue
            self._now = due
            if timer.interval is not None:
                timer.due = due + timer.interval
                self._push(timer)
            timer.callback()
        self._now = target

    @property
    def pending(self) -> int:
        """Number of live timers still queued."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled())
