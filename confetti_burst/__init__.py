"""
confetti_burst - bursting particle ("confetti") trajectory and timing engine
"""

from .config.schema import BurstConfig, resolve_shapes
from .engine import (
    BurstInstance,
    BurstScheduler,
    CompletionTracker,
    ConfettiCannon,
    RealtimeClock,
    TrajectoryGenerator,
    TriggerCounter,
    VirtualClock,
)
from .errors import ConfettiError, ConfigError
from .types import BurstState, ParticleFrame, ParticleTrajectory, ShapeKind, ShapeRef

__version__ = "0.1.0"
__all__ = [
    'BurstConfig',
    'BurstInstance',
    'BurstScheduler',
    'BurstState',
    'CompletionTracker',
    'ConfettiCannon',
    'ConfettiError',
    'ConfigError',
    'ParticleFrame',
    'ParticleTrajectory',
    'RealtimeClock',
    'ShapeKind',
    'ShapeRef',
    'TrajectoryGenerator',
    'TriggerCounter',
    'VirtualClock',
    'resolve_shapes',
]
