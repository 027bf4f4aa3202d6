"""Public entry point tying config, clock, scheduler and tracker together."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from ..config.schema import BurstConfig
from ..types import ParticleFrame
from .burst import BurstInstance
from .clock import Clock, TimerHandle, VirtualClock
from .scheduler import BurstScheduler
from .tracker import CompletionTracker
from .trajectory import TrajectoryGenerator

BurstListener = Callable[[str, BurstInstance], None]


class TriggerCounter:
    """Externally owned integer; every change is pushed to its observers."""

    def __init__(self, value: int = 0):
        self._value = int(value)
        self._observers: List[Callable[[int], None]] = []

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, v: int) -> None:
        v = int(v)
        if v == self._value:
            return
        self._value = v
        for cb in list(self._observers):
            cb(v)

    def increment(self, n: int = 1) -> int:
        self.value = self._value + int(n)
        return self._value

    def observe(self, cb: Callable[[int], None]) -> None:
        self._observers.append(cb)

    def unobserve(self, cb: Callable[[int], None]) -> None:
        if cb in self._observers:
            self._observers.remove(cb)


class ConfettiCannon:
    """A confetti emitter bound to a trigger counter.

    The rendering layer calls ``mount()`` once the cannon is on screen, then
    reads ``frames(now)`` every frame. Lifecycle events are pushed to
    listeners registered with ``add_listener`` as ``("started", burst)`` and
    ``("finished", burst)``.
    """

    def __init__(
        self,
        config: BurstConfig,
        clock: Optional[Clock] = None,
        *,
        counter: Optional[TriggerCounter] = None,
        seed: Optional[int] = None,
        generator: Optional[TrajectoryGenerator] = None,
    ):
        self.config = config
        self.clock = clock if clock is not None else VirtualClock()
        self.tracker = CompletionTracker(self.clock)
        self.scheduler = BurstScheduler(
            config,
            self.clock,
            self.tracker,
            generator or TrajectoryGenerator(seed=seed),
        )
        self.counter = counter if counter is not None else TriggerCounter()
        self.counter.observe(self.scheduler.on_trigger)

        self._listeners: List[BurstListener] = []
        self.scheduler.add_start_listener(lambda b: self._emit("started", b))
        self.tracker.add_retire_listener(lambda b: self._emit("finished", b))
        self._logger = logging.getLogger(__name__)

    def bind(self, counter: TriggerCounter) -> None:
        """Follow another trigger counter from now on.

        When already mounted, the new counter's current value becomes the
        baseline, so only later increases fire.
        """
        if counter is self.counter:
            return
        self.counter.unobserve(self.scheduler.on_trigger)
        self.counter = counter
        counter.observe(self.scheduler.on_trigger)
        if self.scheduler.armed:
            self.scheduler.rebase(counter.value)

    def add_listener(self, cb: BurstListener) -> None:
        self._listeners.append(cb)

    def _emit(self, event: str, burst: BurstInstance) -> None:
        for cb in list(self._listeners):
            cb(event, burst)

    def mount(self) -> None:
        self.scheduler.mount(self.counter.value)
        self._logger.info(
            "cannon mounted (particles=%s, bursts/trigger=%s, duration=%.3fs)",
            self.config.particle_count,
            self.config.bursts_per_trigger,
            self.config.total_duration_sec,
        )

    def fire(self) -> int:
        """Increment the bound counter, which schedules a burst sequence once mounted."""
        return self.counter.increment()

    def schedule_fires(self, count: int, every: float, delay: float = 0.0) -> List[TimerHandle]:
        """Fire ``count`` times on the cannon's clock, ``every`` seconds apart."""
        return [
            self.clock.schedule_after(delay + k * float(every), self.fire)
            for k in range(max(0, int(count)))
        ]

    def quiet_after(self, count: int, every: float, delay: float = 0.0) -> float:
        """Time at which ``schedule_fires(count, every, delay)`` leaves no burst on screen."""
        if count <= 0:
            return delay
        last_trigger = delay + (int(count) - 1) * float(every)
        last_start = last_trigger + self.config.repetition_offsets()[-1]
        return last_start + self.config.total_duration_sec

    @property
    def finished_count(self) -> int:
        return self.tracker.finished_count

    @property
    def total_scheduled(self) -> int:
        return self.tracker.total_scheduled

    def active_bursts(self) -> Iterator[BurstInstance]:
        return self.tracker.active()

    def frames(self, now: Optional[float] = None) -> Iterator[Tuple[BurstInstance, Iterator[ParticleFrame]]]:
        """Lazily yield each active burst with its particles' state at ``now``."""
        t = self.clock.now() if now is None else float(now)
        for burst in self.tracker.active():
            yield burst, burst.iter_frames(t)
