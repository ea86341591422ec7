# trivia/scheduler.py - Delayed background work in scheduler ticks

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List, Optional, Set

logger = logging.getLogger(__name__)

TICK_SECONDS = 0.05  # 20 ticks per second

AsyncCallback = Callable[[], Awaitable[None]]


def seconds_to_ticks(seconds: float) -> int:
    """Whole ticks covering the given duration"""
    if seconds <= 0:
        return 0
    return int(math.ceil(seconds / TICK_SECONDS))


class TaskScheduler(ABC):
    """Runs a coroutine function once, some ticks from now, without blocking"""

    @abstractmethod
    def run_delayed(self, callback: AsyncCallback, delay_ticks: int) -> None:
        pass


class AsyncioScheduler(TaskScheduler):
    """Scheduler backed by the running asyncio event loop"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._timers: Set[asyncio.TimerHandle] = set()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending_count(self) -> int:
        return len(self._timers) + len(self._tasks)

    def run_delayed(self, callback: AsyncCallback, delay_ticks: int) -> None:
        delay = max(0, delay_ticks) * TICK_SECONDS
        loop = self.loop

        try:
            on_loop = asyncio.get_running_loop() is loop
        except RuntimeError:
            on_loop = False

        # call_later is not thread-safe
        if on_loop:
            self._schedule(callback, delay)
        else:
            loop.call_soon_threadsafe(self._schedule, callback, delay)

    def _schedule(self, callback: AsyncCallback, delay: float) -> None:
        timer: List[asyncio.TimerHandle] = []

        def _fire():
            self._timers.discard(timer[0])
            name = getattr(callback, "__name__", "task")
            task = self.loop.create_task(callback(), name=f"delayed:{name}")
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

        timer.append(self.loop.call_later(delay, _fire))
        self._timers.add(timer[0])

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Scheduled task {task.get_name()} failed", exc_info=exc)

    def cancel_all(self) -> None:
        """Drop every pending timer and running task (process teardown)"""
        for handle in list(self._timers):
            handle.cancel()
        self._timers.clear()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
