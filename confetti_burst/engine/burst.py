from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Tuple

from ..config.schema import BurstConfig
from ..types import BurstState, ParticleFrame, ParticleTrajectory
from .motion import evaluate


@dataclass
class BurstInstance:
    burst_id: int
    start_time: float
    particles: Tuple[ParticleTrajectory, ...]
    config: BurstConfig = field(repr=False)
    trigger_value: int = 0
    repetition: int = 0
    retired: bool = field(default=False, repr=False)

    def __post_init__(self):
        self.particles = tuple(self.particles)

    @property
    def end_time(self) -> float:
        return self.start_time + self.config.total_duration_sec

    def elapsed(self, now: float) -> float:
        return now - self.start_time

    def state_at(self, now: float) -> BurstState:
        if self.retired:
            return BurstState.FINISHED
        dt = self.elapsed(now)
        if dt < self.config.explosion_duration_sec:
            return BurstState.EXPLODING
        if dt < self.config.total_duration_sec:
            return BurstState.RAINING
        return BurstState.FINISHED

    def iter_frames(self, now: float) -> Iterator[ParticleFrame]:
        dt = self.elapsed(now)
        for p in self.particles:
            yield evaluate(p, self.config, dt)
