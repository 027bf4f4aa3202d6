"""Two-segment particle animation.

Not a physics simulation: a particle eases from the origin to its explosion
endpoint, then eases straight down by the rain height, while spinning about
two axes at its own speeds.
"""

from __future__ import annotations

from typing import Tuple

from ..config.schema import BurstConfig
from ..math.easing import EXPLOSION_CURVE, RAIN_CURVE, linear
from ..math.util import lerp, progress
from ..types import ParticleFrame, ParticleTrajectory

# particles appear fully opaque and ease towards max_opacity
INITIAL_OPACITY = 1.0
# x-axis spin stops after this many turns, z-axis spin never stops
X_SPIN_TURNS = 10


def _spin_deg(elapsed: float, period: float, turns=None) -> float:
    if elapsed <= 0.0 or period <= 0.0:
        return 0.0
    cycles = elapsed / period
    if turns is not None and cycles >= turns:
        return 0.0
    return 360.0 * linear(cycles - int(cycles))


def position_opacity(traj: ParticleTrajectory, config: BurstConfig, elapsed: float) -> Tuple[float, float, float]:
    ex, ey = traj.explosion_endpoint
    t_exp = config.explosion_duration_sec

    if elapsed < t_exp:
        e = EXPLOSION_CURVE(progress(elapsed, 0.0, t_exp))
        return lerp(0.0, ex, e), lerp(0.0, ey, e), lerp(INITIAL_OPACITY, config.max_opacity, e)

    target = 0.0 if config.fades_out else config.max_opacity
    e = RAIN_CURVE(progress(elapsed, t_exp, config.rain_duration_sec))
    return ex, ey + config.rain_height * e, lerp(config.max_opacity, target, e)


def evaluate(traj: ParticleTrajectory, config: BurstConfig, elapsed: float) -> ParticleFrame:
    """Particle state ``elapsed`` seconds after its burst started."""
    if elapsed < 0.0:
        elapsed = 0.0
    x, y, opacity = position_opacity(traj, config, elapsed)
    return ParticleFrame(
        x=x,
        y=y,
        opacity=opacity,
        rot_x_deg=traj.spin_axis_x_dir * _spin_deg(elapsed, traj.spin_speed_x, X_SPIN_TURNS),
        rot_z_deg=traj.spin_axis_z_dir * _spin_deg(elapsed, traj.spin_speed_z),
        anchor=float(traj.rotation_anchor),
        shape=config.shapes[traj.shape_index],
        color=config.colors[traj.color_index],
        size=config.particle_size,
    )
