from __future__ import annotations

import math
from typing import Dict, Iterable, Tuple

import pygame

from ...math.util import clamp, deg2rad
from ...types import Color, ParticleFrame, ShapeKind, ShapeRef

# Pre-rendered base sprites keyed by (shape, color, size)
_sprite_cache: Dict[Tuple[ShapeRef, Color, int], pygame.Surface] = {}
_font_cache: Dict[int, pygame.font.Font] = {}


def _get_font(size: int) -> pygame.font.Font:
    f = _font_cache.get(size)
    if f is None:
        if not pygame.font.get_init():
            pygame.font.init()
        f = pygame.font.Font(None, size)
        _font_cache[size] = f
    return f


def _get_sprite(shape: ShapeRef, color: Color, size: int) -> pygame.Surface:
    """
    Get or create the unrotated sprite for one particle look.

    Args:
        shape: Square, circle or glyph
        color: RGB color (glyphs are tinted with it as text color)
        size: Edge length in pixels (font size for glyphs)

    Returns:
        Sprite surface with per-pixel alpha
    """
    key = (shape, color, size)
    surf = _sprite_cache.get(key)
    if surf is not None:
        return surf

    if shape.kind is ShapeKind.GLYPH:
        surf = _get_font(max(8, int(size * 1.4))).render(shape.text or "", True, color)
    else:
        surf = pygame.Surface((size, size), pygame.SRCALPHA)
        if shape.kind is ShapeKind.CIRCLE:
            pygame.draw.circle(surf, color, (size // 2, size // 2), max(1, size // 2))
        else:
            surf.fill(color)

    # Limit cache size to prevent memory growth
    if len(_sprite_cache) > 200:
        _sprite_cache.clear()
    _sprite_cache[key] = surf
    return surf


def rotated_center(cx: float, cy: float, w: float, h: float, anchor: float, rot_deg: float) -> Tuple[float, float]:
    """Center of a w*h box after rotating it by rot_deg about a unit anchor point.

    anchor 0 is the top-left corner, 1 the bottom-right, 0.5 the center.
    Positive angles turn clockwise on screen.
    """
    px = cx + (anchor - 0.5) * w
    py = cy + (anchor - 0.5) * h
    a = deg2rad(rot_deg)
    c = math.cos(a); s = math.sin(a)
    dx, dy = cx - px, cy - py
    return (px + c * dx - s * dy, py + s * dx + c * dy)


def draw_particle(screen: pygame.Surface, frame: ParticleFrame, origin: Tuple[float, float]) -> None:
    alpha = int(round(255 * clamp(frame.opacity, 0.0, 1.0)))
    if alpha <= 0:
        return

    size = max(1, int(round(frame.size)))
    sprite = _get_sprite(frame.shape, frame.color, size)
    w, h = sprite.get_size()

    # Spin about the x axis, seen head-on, is a vertical squash.
    squash = abs(math.cos(deg2rad(frame.rot_x_deg)))
    sh = max(1, int(round(h * squash)))
    if sh != h:
        sprite = pygame.transform.smoothscale(sprite, (w, sh))

    cx, cy = rotated_center(origin[0] + frame.x, origin[1] + frame.y, w, sh, frame.anchor, frame.rot_z_deg)
    # pygame rotates counter-clockwise for positive angles
    sprite = pygame.transform.rotate(sprite, -frame.rot_z_deg)
    sprite.set_alpha(alpha)

    rect = sprite.get_rect(center=(int(cx), int(cy)))
    screen.blit(sprite, rect)


def draw_frames(screen: pygame.Surface, frames: Iterable[ParticleFrame], origin: Tuple[float, float]) -> int:
    n = 0
    for fr in frames:
        draw_particle(screen, fr, origin)
        n += 1
    return n


def clear_caches() -> None:
    _sprite_cache.clear()
    _font_cache.clear()
