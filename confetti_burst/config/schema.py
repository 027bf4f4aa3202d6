"""Immutable burst configuration.

A BurstConfig is built once from user parameters and shared by every burst a
cannon fires. Timing constants are derived from the geometry at construction
and can never drift from it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

from ..errors import ConfigError
from ..types import Color, DEFAULT_SHAPES, ShapeRef
from ..utils.colors import DEFAULT_COLORS, parse_color

# px per second of outward travel during the explosion
EXPLOSION_SPEED = 1500.0
# px per second of fall during the rain phase
RAIN_SPEED = 200.0


def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def resolve_shapes(emojis: Iterable[str] = (), include_default_shapes: bool = False) -> Tuple[ShapeRef, ...]:
    """Emoji glyphs first, then the built-in square/circle.

    The built-ins are always added when there are no emojis, so the result is
    never empty.
    """
    shapes = [ShapeRef.glyph(e) for e in emojis if str(e)]
    if include_default_shapes or not shapes:
        shapes.extend(DEFAULT_SHAPES)
    return tuple(shapes)


@dataclass(frozen=True)
class BurstConfig:
    """Immutable parameter bundle for one cannon.

    Raises ConfigError from the constructor when the parameters cannot
    produce a valid burst.
    """

    particle_count: int = 20
    shapes: Tuple[ShapeRef, ...] = DEFAULT_SHAPES
    colors: Tuple[Color, ...] = DEFAULT_COLORS
    particle_size: float = 10.0
    rain_height: float = 600.0
    fades_out: bool = True
    max_opacity: float = 1.0
    opening_angle_deg: float = 60.0
    closing_angle_deg: float = 120.0
    radius: float = 300.0
    repetitions: int = 0
    repetition_interval_sec: float = 1.0

    # Derived, never passed in
    explosion_duration_sec: float = field(init=False)
    rain_duration_sec: float = field(init=False)
    total_duration_sec: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "shapes", tuple(self.shapes))
        object.__setattr__(self, "colors", tuple(parse_color(c) for c in self.colors))
        self._validate()

        explosion = self.radius / EXPLOSION_SPEED
        rain = (self.rain_height + self.radius) / RAIN_SPEED
        object.__setattr__(self, "explosion_duration_sec", explosion)
        object.__setattr__(self, "rain_duration_sec", rain)
        object.__setattr__(self, "total_duration_sec", explosion + rain)

    def _validate(self) -> None:
        if not _is_int(self.particle_count):
            raise ConfigError(f"particle_count must be an integer, got {self.particle_count!r}")
        if self.particle_count <= 0:
            raise ConfigError(f"particle_count must be > 0, got {self.particle_count}")
        if not self.shapes:
            raise ConfigError("shape set is empty")
        for s in self.shapes:
            if not isinstance(s, ShapeRef):
                raise ConfigError(f"not a shape: {s!r}")
        if not self.colors:
            raise ConfigError("color set is empty")
        if not (self.radius > 0):
            raise ConfigError(f"radius must be > 0, got {self.radius}")
        if not (self.particle_size > 0):
            raise ConfigError(f"particle_size must be > 0, got {self.particle_size}")
        if not (self.rain_height >= 0):
            raise ConfigError(f"rain_height must be >= 0, got {self.rain_height}")
        if not (0.0 <= self.max_opacity <= 1.0):
            raise ConfigError(f"max_opacity must be within [0, 1], got {self.max_opacity}")
        if not _is_int(self.repetitions) or self.repetitions < 0:
            raise ConfigError(f"repetitions must be an integer >= 0, got {self.repetitions!r}")
        if not (self.repetition_interval_sec >= 0):
            raise ConfigError(f"repetition_interval_sec must be >= 0, got {self.repetition_interval_sec}")

    @classmethod
    def from_options(
        cls,
        *,
        particle_count: int = 20,
        emojis: Sequence[str] = (),
        include_default_shapes: bool = False,
        colors: Optional[Sequence[object]] = None,
        particle_size: float = 10.0,
        rain_height: float = 600.0,
        fades_out: bool = True,
        max_opacity: float = 1.0,
        opening_angle_deg: float = 60.0,
        closing_angle_deg: float = 120.0,
        radius: float = 300.0,
        repetitions: int = 0,
        repetition_interval_sec: float = 1.0,
    ) -> BurstConfig:
        """Build a config from the public parameter surface.

        Args:
            particle_count: particles per burst
            emojis: text glyphs used as particles
            include_default_shapes: also use square/circle when emojis are given
            colors: colors for the default shapes (names, hex or rgb); None keeps the presets
            particle_size: render size of one particle in px
            rain_height: fall distance after the explosion
            fades_out: fade to transparent while falling
            max_opacity: peak opacity reached during the explosion
            opening_angle_deg: start of the burst cone
            closing_angle_deg: end of the burst cone
            radius: explosion radius in px
            repetitions: extra bursts per trigger
            repetition_interval_sec: spacing between repeated bursts

        Raises:
            ConfigError: on any invalid parameter
        """
        if colors is None:
            palette: Tuple[Color, ...] = DEFAULT_COLORS
        else:
            palette = tuple(parse_color(c) for c in colors)

        try:
            numbers = dict(
                particle_size=float(particle_size),
                rain_height=float(rain_height),
                max_opacity=float(max_opacity),
                opening_angle_deg=float(opening_angle_deg),
                closing_angle_deg=float(closing_angle_deg),
                radius=float(radius),
                repetition_interval_sec=float(repetition_interval_sec),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"numeric option expected: {e}") from e

        return cls(
            particle_count=particle_count,
            shapes=resolve_shapes(emojis, include_default_shapes),
            colors=palette,
            fades_out=bool(fades_out),
            repetitions=repetitions,
            **numbers,
        )

    @property
    def bursts_per_trigger(self) -> int:
        return int(self.repetitions) + 1

    def repetition_offsets(self) -> Tuple[float, ...]:
        """Start offsets of every burst fired by one trigger, relative to the trigger."""
        return tuple(i * self.repetition_interval_sec for i in range(self.bursts_per_trigger))
