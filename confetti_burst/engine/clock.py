"""Timer abstraction used by the scheduler and the completion tracker.

Every deferred action in the engine goes through ``Clock.schedule_after``.
Timers fire on the thread that calls ``advance``/``pump``, one at a time, in
deadline order (ties keep scheduling order).
"""

from __future__ import annotations

import heapq
import itertools
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from ..math.util import now_sec


@dataclass(eq=False)
class TimerHandle:
    deadline: float
    seq: int
    callback: Callable[[], None] = field(repr=False)
    fired: bool = False


class Clock(Protocol):
    def now(self) -> float:
        ...

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class TimerQueue:
    """Deadline-ordered timer heap shared by the concrete clocks."""

    def __init__(self):
        self._heap: List[tuple] = []
        self._seq = itertools.count()
        # heap and sequence only; callbacks always run outside it
        self._lock = threading.Lock()

    def now(self) -> float:
        raise NotImplementedError

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        delay = float(delay)
        if delay < 0.0:
            delay = 0.0
        deadline = self.now() + delay
        with self._lock:
            h = TimerHandle(deadline, next(self._seq), callback)
            heapq.heappush(self._heap, (h.deadline, h.seq, h))
        return h

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._heap)

    def next_deadline(self) -> Optional[float]:
        with self._lock:
            return self._heap[0][0] if self._heap else None

    def _pop_due(self, t: float) -> Optional[TimerHandle]:
        with self._lock:
            if self._heap and self._heap[0][0] <= t:
                return heapq.heappop(self._heap)[2]
        return None

    def _fire(self, h: TimerHandle) -> None:
        h.fired = True
        h.callback()


class VirtualClock(TimerQueue):
    """Manually advanced clock for tests and offline rendering."""

    def __init__(self, start: float = 0.0):
        super().__init__()
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, dt: float) -> int:
        return self.advance_to(self._now + float(dt))

    def advance_to(self, t: float) -> int:
        """Fire every timer due at or before ``t``; returns how many fired.

        During each callback ``now()`` reads the timer's own deadline, so
        timers scheduled from inside a callback are placed relative to it and
        still fire within this call if they fall due before ``t``.
        """
        t = float(t)
        fired = 0
        while True:
            h = self._pop_due(t)
            if h is None:
                break
            if h.deadline > self._now:
                self._now = h.deadline
            self._fire(h)
            fired += 1
        if t > self._now:
            self._now = t
        return fired


class RealtimeClock(TimerQueue):
    """Wall-clock timers, fired cooperatively by ``pump()`` from a frame loop."""

    def __init__(self):
        super().__init__()
        self._t0 = now_sec()

    def now(self) -> float:
        return now_sec() - self._t0

    def pump(self) -> int:
        t = self.now()
        fired = 0
        while True:
            h = self._pop_due(t)
            if h is None:
                break
            self._fire(h)
            fired += 1
        return fired
