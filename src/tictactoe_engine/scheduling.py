"""
Cancellable deferred tasks.

The controller never applies the computer's move in the same call as the
human's; it asks a scheduler to run it later and keeps the returned handle
so the move can be dropped on reset.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop.

    The loop is looked up at call time unless one is given, so the
    scheduler can be built before the loop starts running.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ManualHandle:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler: nothing runs until the clock is advanced."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, ManualHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every callback that became due.

        Callbacks scheduled while firing are honoured if they fall inside the
        window. Returns the number of callbacks run.
        """
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        fired = 0
        while self._queue:
            due = self._queue[0][0]
            fired += self.advance(max(0.0, due - self.now))
        return fired


def default_scheduler() -> Scheduler:
    """AsyncioScheduler on the running loop, else a ManualScheduler.

    Without a running loop nothing would ever fire an asyncio timer, so the
    caller gets a clock it can advance itself.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return ManualScheduler()
    return AsyncioScheduler(loop)
