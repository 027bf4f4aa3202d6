from __future__ import annotations

from typing import Any, Dict, Tuple

from ..errors import ConfigError
from ..types import Color

# Apple system palette, matches what the default shapes were designed against.
NAMED_COLORS: Dict[str, Color] = {
    "blue": (0, 122, 255),
    "red": (255, 59, 48),
    "green": (52, 199, 89),
    "yellow": (255, 204, 0),
    "pink": (255, 45, 85),
    "purple": (175, 82, 222),
    "orange": (255, 149, 0),
    "white": (255, 255, 255),
    "black": (0, 0, 0),
}

DEFAULT_COLORS: Tuple[Color, ...] = tuple(
    NAMED_COLORS[k] for k in ("blue", "red", "green", "yellow", "pink", "purple", "orange")
)


def _channel(v: Any) -> int:
    c = int(v)
    if c < 0 or c > 255:
        raise ConfigError(f"color channel out of range: {v!r}")
    return c


def parse_color(v: Any) -> Color:
    """Accepts '#rrggbb', '#rgb', a preset name or an [r, g, b] sequence."""
    if isinstance(v, str):
        s = v.strip().lower()
        if s in NAMED_COLORS:
            return NAMED_COLORS[s]
        if s.startswith("#"):
            h = s[1:]
            if len(h) == 3:
                h = "".join(ch * 2 for ch in h)
            if len(h) == 6:
                try:
                    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
                except ValueError:
                    pass
        raise ConfigError(f"unknown color: {v!r}")
    if isinstance(v, (list, tuple)) and len(v) in (3, 4):
        try:
            return (_channel(v[0]), _channel(v[1]), _channel(v[2]))
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigError(f"bad color: {v!r}") from e
    raise ConfigError(f"bad color: {v!r}")


def to_hex(rgb: Color) -> str:
    r, g, b = rgb
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"
