from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Color = Tuple[int, int, int]


class ShapeKind(Enum):
    SQUARE = "square"
    CIRCLE = "circle"
    GLYPH = "glyph"


@dataclass(frozen=True)
class ShapeRef:
    kind: ShapeKind
    text: Optional[str] = None    # only set for GLYPH

    @classmethod
    def square(cls) -> ShapeRef:
        return cls(ShapeKind.SQUARE)

    @classmethod
    def circle(cls) -> ShapeRef:
        return cls(ShapeKind.CIRCLE)

    @classmethod
    def glyph(cls, text: str) -> ShapeRef:
        return cls(ShapeKind.GLYPH, str(text))

    @property
    def is_glyph(self) -> bool:
        return self.kind is ShapeKind.GLYPH


DEFAULT_SHAPES: Tuple[ShapeRef, ...] = (ShapeRef.square(), ShapeRef.circle())


class BurstState(Enum):
    EXPLODING = "exploding"
    RAINING = "raining"
    FINISHED = "finished"


@dataclass(frozen=True)
class ParticleTrajectory:
    shape_index: int
    color_index: int
    spin_axis_x_dir: int          # -1 or +1
    spin_axis_z_dir: int          # -1 or +1
    spin_speed_x: float           # seconds per turn, 1..2
    spin_speed_z: float           # seconds per turn, 1..2
    rotation_anchor: int          # 0 or 1
    explosion_endpoint: Tuple[float, float]
    angle_deg: float = 0.0
    distance: float = 0.0


@dataclass(frozen=True)
class ParticleFrame:
    """Interpolated state of one particle at a point in time.

    Coordinates are relative to the burst origin, y grows downward.
    """

    x: float
    y: float
    opacity: float
    rot_x_deg: float
    rot_z_deg: float
    anchor: float
    shape: ShapeRef
    color: Color
    size: float
