"""Cancelable periodic and one-shot callbacks for the progression clock."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol

Callback = Callable[[], None]


class TaskHandle(Protocol):
    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """Single-threaded source of time and deferred callbacks."""

    def monotonic(self) -> float:
        """Return the current time in seconds from a monotonic clock."""

    def call_later(self, delay: float, callback: Callback) -> TaskHandle:
        """Run ``callback`` once after ``delay`` seconds."""

    def call_every(self, interval: float, callback: Callback) -> TaskHandle:
        """Run ``callback`` every ``interval`` seconds until cancelled."""


class _PeriodicTask:
    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._task.cancel()

    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def monotonic(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callback) -> TaskHandle:
        return self.loop.call_later(delay, callback)

    def call_every(self, interval: float, callback: Callback) -> TaskHandle:
        task = self.loop.create_task(self._periodic(interval, callback), name="resource-hunt-tick")
        return _PeriodicTask(task)

    async def _periodic(self, interval: float, callback: Callback) -> None:
        while True:
            await asyncio.sleep(interval)
            callback()


class _ManualHandle:
    __slots__ = ("due", "interval", "callback", "_cancelled")

    def __init__(self, due: float, interval: float | None, callback: Callback) -> None:
        self.due = due
        self.interval = interval
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """Virtual clock for tests and offline playtests; time only moves on ``advance``."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._order = itertools.count()
        self._queue: list[tuple[float, int, _ManualHandle]] = []

    def monotonic(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callback) -> TaskHandle:
        handle = _ManualHandle(self._now + max(0.0, delay), None, callback)
        self._push(handle)
        return handle

    def call_every(self, interval: float, callback: Callback) -> TaskHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = _ManualHandle(self._now + interval, interval, callback)
        self._push(handle)
        return handle

    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled())

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every due callback in time order."""
        if seconds < 0:
            raise ValueError("cannot move a monotonic clock backwards")
        deadline = self._now + seconds
        while self._queue and self._queue[0][0] <= deadline:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled():
                continue
            self._now = due
            if handle.interval is not None:
                handle.due = due + handle.interval
                self._push(handle)
            handle.callback()
        self._now = deadline

    def _push(self, handle: _ManualHandle) -> None:
        heapq.heappush(self._queue, (handle.due, next(self._order), handle))
