"""Burst completion tracking.

The tracker owns the record of every burst that has started and not yet been
compacted away. ``finished_count`` is a low-water mark: the first
``finished_count`` bursts ever tracked are retired, the rest are active.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from functools import partial
from typing import Callable, Deque, Iterator, List

from .burst import BurstInstance
from .clock import Clock, TimerHandle


class CompletionTracker:
    def __init__(self, clock: Clock):
        self.clock = clock
        self._records: Deque[BurstInstance] = deque()
        self._finished_count = 0
        self._total_scheduled = 0
        self._lock = threading.Lock()
        self._on_retire: List[Callable[[BurstInstance], None]] = []
        self._logger = logging.getLogger(__name__)

    @property
    def finished_count(self) -> int:
        return self._finished_count

    @property
    def total_scheduled(self) -> int:
        return self._total_scheduled

    @property
    def active_count(self) -> int:
        return self._total_scheduled - self._finished_count

    @property
    def record_count(self) -> int:
        """Burst records still held in memory (active plus not yet compacted)."""
        return len(self._records)

    def add_retire_listener(self, cb: Callable[[BurstInstance], None]) -> None:
        self._on_retire.append(cb)

    def track(self, burst: BurstInstance) -> TimerHandle:
        """Start tracking a burst that has just begun; retires it after its total duration."""
        with self._lock:
            self._records.append(burst)
            self._total_scheduled += 1
        return self.clock.schedule_after(burst.config.total_duration_sec, partial(self.retire, burst))

    def retire(self, burst: BurstInstance) -> bool:
        """Mark a burst finished. Only the first call for a burst counts."""
        with self._lock:
            if burst.retired:
                return False
            burst.retired = True
            self._finished_count += 1
            while self._records and self._records[0].retired:
                self._records.popleft()

        self._logger.debug(
            "burst %s retired (finished=%s/%s)",
            burst.burst_id,
            self._finished_count,
            self._total_scheduled,
        )
        for cb in list(self._on_retire):
            cb(burst)
        return True

    def active(self) -> Iterator[BurstInstance]:
        for b in list(self._records):
            if not b.retired:
                yield b
