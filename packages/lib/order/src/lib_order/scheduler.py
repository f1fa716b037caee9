"""Main-loop scheduler for delayed callbacks.

The frame loop owns the scheduler and advances it once per frame, so every
callback runs on the loop thread. Other threads hand work back through
``call_soon_threadsafe``.
"""

from __future__ import annotations

import heapq
import itertools
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, List


@dataclass(order=True)
class ScheduledCall:
    when: float
    seq: int
    callback: Callable[[], None] = field(compare=False)


class Scheduler:
    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[ScheduledCall] = []
        self._counter = itertools.count()
        self._lock = threading.Lock()
        self._incoming: Deque[Callable[[], None]] = deque()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run ``callback`` once ``delay`` seconds of loop time have passed."""
        call = ScheduledCall(self._now + max(delay, 0.0), next(self._counter), callback)
        heapq.heappush(self._queue, call)
        return call

    def call_soon_threadsafe(self, callback: Callable[[], None]) -> None:
        """Queue ``callback`` for the next ``advance``; safe from any thread."""
        with self._lock:
            self._incoming.append(callback)

    def pending(self) -> List[ScheduledCall]:
        return sorted(self._queue)

    def advance(self, dt: float) -> int:
        """Move loop time forward and run everything that became due.

        Returns the number of callbacks that ran. Callbacks scheduled while
        advancing run in the same pass if they are already due. Callbacks
        handed over from other threads stay queued until they have run, so
        one that raises does not drop the others.
        """
        self._now += max(dt, 0.0)
        ran = 0

        with self._lock:
            waiting = len(self._incoming)
        for _ in range(waiting):
            with self._lock:
                callback = self._incoming.popleft()
            callback()
            ran += 1

        while self._queue and self._queue[0].when <= self._now:
            call = heapq.heappop(self._queue)
            call.callback()
            ran += 1
        return ran
