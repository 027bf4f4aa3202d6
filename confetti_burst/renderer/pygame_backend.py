from __future__ import annotations

import logging
import math
import os
from typing import Any, Optional, Tuple

import pygame

from ..engine.cannon import ConfettiCannon
from ..engine.clock import RealtimeClock, VirtualClock
from ..recording.base import RecorderBackend
from ..recording.frame_recorder import FrameRecorder
from ..types import Color
from ..utils.colors import parse_color
from .pygame.particles import clear_caches, draw_frames


def _origin(args: Any, W: int, H: int) -> Tuple[float, float]:
    ox = getattr(args, "origin_x", None)
    oy = getattr(args, "origin_y", None)
    ox = 0.5 if ox is None else float(ox)
    oy = 0.75 if oy is None else float(oy)
    return (ox * W, oy * H)


def _bg(args: Any) -> Color:
    return parse_color(getattr(args, "bg_color", None) or "#101018")


def render_scene(
    surface: pygame.Surface,
    cannon: ConfettiCannon,
    now: float,
    origin: Tuple[float, float],
    bg: Color,
    font: Optional[pygame.font.Font] = None,
) -> int:
    """Draw every active burst at time ``now``; returns the particle count drawn."""
    surface.fill(bg)
    drawn = 0
    for _burst, frames in cannon.frames(now):
        drawn += draw_frames(surface, frames, origin)

    if font is not None:
        hud = f"t={now:6.2f}s  active={cannon.total_scheduled - cannon.finished_count}  finished={cannon.finished_count}  particles={drawn}"
        surface.blit(font.render(hud, True, (200, 200, 200)), (8, 8))
    return drawn


def run_interactive(args: Any, cannon: ConfettiCannon, W: int, H: int) -> None:
    logger = logging.getLogger(__name__)
    if not isinstance(cannon.clock, RealtimeClock):
        raise TypeError("interactive mode needs a RealtimeClock")

    pygame.init()
    try:
        screen = pygame.display.set_mode((W, H))
        pygame.display.set_caption("confetti_burst")
        fps = float(getattr(args, "fps", 60.0) or 60.0)
        clock = pygame.time.Clock()
        origin = _origin(args, W, H)
        bg = _bg(args)
        hud_font = pygame.font.Font(None, 20) if bool(getattr(args, "debug_bursts", False)) else None

        cannon.mount()
        cannon.schedule_fires(int(getattr(args, "fire_count", 1) or 0), float(getattr(args, "fire_every", 1.5) or 0.0))
        logger.info("[pygame] window %sx%s, SPACE or click to fire, ESC to quit", W, H)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                    cannon.fire()
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    cannon.fire()

            cannon.clock.pump()
            render_scene(screen, cannon, cannon.clock.now(), origin, bg, hud_font)
            pygame.display.flip()
            clock.tick(fps)
    finally:
        clear_caches()
        pygame.quit()
        logger.info("[pygame] closed (bursts=%s)", cannon.total_scheduled)


def run_recording(
    args: Any,
    cannon: ConfettiCannon,
    W: int,
    H: int,
    recorder: Optional[RecorderBackend] = None,
) -> int:
    """Render deterministically on a VirtualClock; returns frames written.

    Frames go to a PNG sequence in ``args.record_dir`` unless another
    ``recorder`` is given.
    """
    logger = logging.getLogger(__name__)
    if not isinstance(cannon.clock, VirtualClock):
        raise TypeError("recording needs a VirtualClock")

    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    try:
        fps = float(getattr(args, "record_fps", 60.0) or 60.0)
        fire_count = int(getattr(args, "fire_count", 1) or 0)
        fire_every = float(getattr(args, "fire_every", 1.5) or 0.0)

        cannon.mount()
        cannon.schedule_fires(fire_count, fire_every)

        seconds = getattr(args, "record_seconds", None)
        if seconds is None:
            seconds = cannon.quiet_after(fire_count, fire_every)
        n_frames = max(1, int(math.ceil(float(seconds) * fps)))

        surface = pygame.Surface((W, H))
        origin = _origin(args, W, H)
        bg = _bg(args)
        hud_font = pygame.font.Font(None, 20) if bool(getattr(args, "debug_bursts", False)) else None

        if recorder is None:
            recorder = FrameRecorder(str(args.record_dir), W, H, fps)
        recorder.open()
        logger.info("[record] %s frames @ %.1f fps -> %s", n_frames, fps, recorder.get_output_path())
        try:
            for i in range(n_frames):
                t = i / fps
                cannon.clock.advance_to(t)
                render_scene(surface, cannon, t, origin, bg, hud_font)
                # surfarray is (W, H, 3)
                recorder.write_frame(pygame.surfarray.array3d(surface).swapaxes(0, 1))
                if i and i % max(1, int(fps)) == 0:
                    logger.debug("[record] frame %s/%s", i, n_frames)
        finally:
            recorder.close()
        return recorder.frame_count
    finally:
        clear_caches()
        pygame.quit()
