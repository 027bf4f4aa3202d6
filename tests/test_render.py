from __future__ import annotations

import argparse
import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from confetti_burst.config.schema import BurstConfig  # noqa: E402
from confetti_burst.engine.cannon import ConfettiCannon  # noqa: E402
from confetti_burst.engine.clock import RealtimeClock, VirtualClock  # noqa: E402
from confetti_burst.renderer.pygame.particles import rotated_center  # noqa: E402
from confetti_burst.renderer.pygame_backend import render_scene, run_recording  # noqa: E402


@pytest.mark.parametrize("rot", [0.0, 45.0, 180.0, -90.0])
def test_center_anchor_does_not_move(rot):
    assert rotated_center(10.0, 20.0, 8.0, 4.0, 0.5, rot) == pytest.approx((10.0, 20.0))


def test_corner_anchor_half_turn():
    assert rotated_center(0.0, 0.0, 10.0, 10.0, 0.0, 180.0) == pytest.approx((-10.0, -10.0))


def test_render_scene_draws_particles():
    pygame.init()
    try:
        cfg = BurstConfig.from_options(particle_count=6, emojis=("*",), include_default_shapes=True)
        cannon = ConfettiCannon(cfg, VirtualClock(), seed=5)
        cannon.mount()
        cannon.fire()
        cannon.clock.advance(0.1)
        surface = pygame.Surface((64, 64))
        assert render_scene(surface, cannon, 0.1, (32.0, 48.0), (0, 0, 0)) == 6
    finally:
        pygame.quit()


def test_run_recording_writes_frames(tmp_path):
    args = argparse.Namespace(
        record_dir=str(tmp_path / "frames"),
        record_fps=10.0,
        record_seconds=0.5,
        fire_count=1,
        fire_every=1.5,
        origin_x=0.5,
        origin_y=0.75,
        bg_color="black",
        debug_bursts=True,
    )
    cannon = ConfettiCannon(BurstConfig.from_options(particle_count=4), VirtualClock(), seed=1)
    assert run_recording(args, cannon, 32, 24) == 5
    assert len(os.listdir(args.record_dir)) == 5
    assert cannon.total_scheduled == 1


def test_recording_requires_virtual_clock(tmp_path):
    args = argparse.Namespace(record_dir=str(tmp_path))
    cannon = ConfettiCannon(BurstConfig.from_options(), RealtimeClock())
    with pytest.raises(TypeError):
        run_recording(args, cannon, 8, 8)


class _MemoryRecorder:
    def __init__(self):
        self.frames = []
        self.frame_count = 0
        self.closed = False

    def open(self):
        pass

    def write_frame(self, frame):
        self.frames.append(frame.copy())
        self.frame_count += 1

    def close(self):
        self.closed = True

    def get_output_path(self):
        return None


def test_run_recording_into_custom_recorder():
    args = argparse.Namespace(record_fps=20.0, record_seconds=None, fire_count=1, fire_every=1.0)
    cfg = BurstConfig.from_options(particle_count=3, radius=30.0, rain_height=10.0)
    cannon = ConfettiCannon(cfg, VirtualClock(), seed=2)
    rec = _MemoryRecorder()

    # quiet after 0.02 + 0.2 = 0.22 s -> 5 frames at 20 fps
    assert run_recording(args, cannon, 16, 12, recorder=rec) == 5
    assert rec.closed
    assert all(f.shape == (12, 16, 3) for f in rec.frames)
    assert cannon.finished_count == 0
