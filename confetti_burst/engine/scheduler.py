"""Trigger handling and burst repetition scheduling."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Callable, List, Optional, Set

from ..config.schema import BurstConfig
from .burst import BurstInstance
from .clock import Clock, TimerHandle
from .tracker import CompletionTracker
from .trajectory import TrajectoryGenerator


class SchedulerPhase(Enum):
    IDLE = "idle"
    ARMED = "armed"


@dataclass
class SchedulerState:
    last_trigger_value: int = 0
    pending_timers: Set[TimerHandle] = field(default_factory=set)


class BurstScheduler:
    """Turns trigger changes into timed bursts.

    Triggers are ignored until ``mount()``. Afterwards each strictly
    increasing trigger value schedules ``repetitions + 1`` bursts spaced by
    ``repetition_interval_sec``; any other value is a no-op. Scheduled bursts
    cannot be cancelled.
    """

    def __init__(
        self,
        config: BurstConfig,
        clock: Clock,
        tracker: CompletionTracker,
        generator: Optional[TrajectoryGenerator] = None,
    ):
        self.config = config
        self.clock = clock
        self.tracker = tracker
        self.generator = generator or TrajectoryGenerator()
        self.phase = SchedulerPhase.IDLE
        self.state = SchedulerState()
        self._ids = itertools.count()
        self._lock = threading.Lock()
        self._on_start: List[Callable[[BurstInstance], None]] = []
        self._logger = logging.getLogger(__name__)

    @property
    def armed(self) -> bool:
        return self.phase is SchedulerPhase.ARMED

    def add_start_listener(self, cb: Callable[[BurstInstance], None]) -> None:
        self._on_start.append(cb)

    def mount(self, initial_value: int = 0) -> None:
        """Arm the scheduler; ``initial_value`` is the trigger's current value."""
        with self._lock:
            if self.phase is SchedulerPhase.ARMED:
                return
            self.phase = SchedulerPhase.ARMED
            self.state.last_trigger_value = int(initial_value)
        self._logger.debug("scheduler armed (trigger=%s)", initial_value)

    def rebase(self, value: int) -> None:
        with self._lock:
            self.state.last_trigger_value = int(value)

    def on_trigger(self, value: int) -> List[TimerHandle]:
        """React to a new trigger value; returns the timers scheduled for it."""
        value = int(value)
        with self._lock:
            if self.phase is not SchedulerPhase.ARMED:
                self._logger.debug("trigger %s ignored: not mounted", value)
                return []
            last = self.state.last_trigger_value
            if value <= last:
                self._logger.warning("trigger %s ignored: not greater than %s", value, last)
                return []
            self.state.last_trigger_value = value

            handles = []
            for i, offset in enumerate(self.config.repetition_offsets()):
                h = self.clock.schedule_after(offset, partial(self._start_burst, value, i))
                self.state.pending_timers.add(h)
                handles.append(h)

        self._logger.debug(
            "trigger %s: %s burst(s) every %.3fs",
            value,
            len(handles),
            self.config.repetition_interval_sec,
        )
        return handles

    def _start_burst(self, trigger_value: int, repetition: int) -> None:
        with self._lock:
            self.state.pending_timers = {h for h in self.state.pending_timers if not h.fired}
            burst_id = next(self._ids)

        burst = BurstInstance(
            burst_id=burst_id,
            start_time=self.clock.now(),
            particles=tuple(self.generator.generate_burst(self.config)),
            config=self.config,
            trigger_value=trigger_value,
            repetition=repetition,
        )
        self.tracker.track(burst)
        self._logger.debug(
            "burst %s started at %.3f (trigger=%s rep=%s particles=%s)",
            burst.burst_id,
            burst.start_time,
            trigger_value,
            repetition,
            len(burst.particles),
        )
        for cb in list(self._on_start):
            cb(burst)
