"""Burst engine.

Trajectory sampling, particle motion, burst scheduling and completion
tracking, all driven by an explicit clock.
"""

from .burst import BurstInstance
from .cannon import ConfettiCannon, TriggerCounter
from .clock import Clock, RealtimeClock, TimerHandle, VirtualClock
from .scheduler import BurstScheduler, SchedulerPhase, SchedulerState
from .tracker import CompletionTracker
from .trajectory import TrajectoryGenerator, generate, sample_angle_deg

__all__ = [
    "BurstInstance",
    "BurstScheduler",
    "Clock",
    "CompletionTracker",
    "ConfettiCannon",
    "RealtimeClock",
    "SchedulerPhase",
    "SchedulerState",
    "TimerHandle",
    "TrajectoryGenerator",
    "TriggerCounter",
    "VirtualClock",
    "generate",
    "sample_angle_deg",
]
