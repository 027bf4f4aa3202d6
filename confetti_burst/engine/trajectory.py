from __future__ import annotations

import math
import random as _rnd
from typing import List, Optional

from ..config.schema import BurstConfig
from ..math.util import deg2rad
from ..types import ParticleTrajectory

_SPIN_DIRECTIONS = (-1, 1)


def sample_angle_deg(opening: float, closing: float, rng: _rnd.Random) -> float:
    """Uniform direction inside the burst cone.

    A cone whose opening angle is numerically larger than its closing angle
    crosses 0/360 degrees; it is sampled on the unrolled arc and folded back.
    """
    if opening <= closing:
        return rng.uniform(opening, closing)
    a = rng.uniform(opening, closing + 360.0) % 360.0
    return 0.0 if a >= 360.0 else a


def generate(config: BurstConfig, rng: _rnd.Random) -> ParticleTrajectory:
    angle = sample_angle_deg(config.opening_angle_deg, config.closing_angle_deg, rng)
    distance = rng.uniform(0.5, 1.0) * config.radius

    rad = deg2rad(angle)
    # screen y grows downward, so "up" is negative
    endpoint = (distance * math.cos(rad), -distance * math.sin(rad))

    return ParticleTrajectory(
        shape_index=rng.randrange(len(config.shapes)),
        color_index=rng.randrange(len(config.colors)),
        spin_axis_x_dir=rng.choice(_SPIN_DIRECTIONS),
        spin_axis_z_dir=rng.choice(_SPIN_DIRECTIONS),
        spin_speed_x=rng.uniform(1.0, 2.0),
        spin_speed_z=rng.uniform(1.0, 2.0),
        rotation_anchor=int(round(rng.uniform(0.0, 1.0))),
        explosion_endpoint=endpoint,
        angle_deg=angle,
        distance=distance,
    )


class TrajectoryGenerator:
    """Random particle parameters for a burst, from one seedable RNG."""

    def __init__(self, rng: Optional[_rnd.Random] = None, *, seed: Optional[int] = None):
        if rng is None:
            rng = _rnd.Random(seed)
        self.rng = rng

    def generate(self, config: BurstConfig) -> ParticleTrajectory:
        return generate(config, self.rng)

    def generate_burst(self, config: BurstConfig) -> List[ParticleTrajectory]:
        return [generate(config, self.rng) for _ in range(config.particle_count)]
