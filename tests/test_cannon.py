from __future__ import annotations

import pytest

from confetti_burst.config.schema import BurstConfig
from confetti_burst.engine.cannon import ConfettiCannon, TriggerCounter
from confetti_burst.engine.clock import VirtualClock
from confetti_burst.types import ParticleFrame


def _recording_cannon(config, **kw):
    cannon = ConfettiCannon(config, VirtualClock(), seed=42, **kw)
    events = []
    cannon.add_listener(lambda ev, b: events.append((ev, b.burst_id, cannon.clock.now())))
    return cannon, events


def test_single_burst_lifecycle(default_config):
    cannon, events = _recording_cannon(default_config)
    cannon.mount()
    cannon.fire()
    cannon.clock.advance(0.0)
    assert cannon.total_scheduled == 1
    assert cannon.finished_count == 0

    cannon.clock.advance_to(4.69)
    assert cannon.finished_count == 0
    cannon.clock.advance_to(4.71)
    assert cannon.finished_count == 1

    assert [e[:2] for e in events] == [("started", 0), ("finished", 0)]
    assert events[1][2] == pytest.approx(default_config.total_duration_sec)


def test_repeated_bursts_finish_in_start_order(repeating_config):
    cannon, events = _recording_cannon(repeating_config)
    cannon.mount()
    cannon.fire()
    cannon.clock.advance_to(10.0)
    finished = [(bid, t) for ev, bid, t in events if ev == "finished"]
    assert [bid for bid, _ in finished] == [0, 1, 2]
    assert [t for _, t in finished] == pytest.approx([4.7, 5.2, 5.7])
    assert cannon.finished_count == cannon.total_scheduled == 3


def test_fire_before_mount_does_nothing(default_config):
    cannon, events = _recording_cannon(default_config)
    cannon.fire()
    cannon.clock.advance(10.0)
    assert events == []
    assert cannon.total_scheduled == 0


def test_mount_takes_current_counter_as_baseline(default_config):
    counter = TriggerCounter(4)
    cannon, events = _recording_cannon(default_config, counter=counter)
    cannon.mount()
    counter.value = 4
    counter.value = 3
    cannon.clock.advance(1.0)
    assert events == []
    counter.value = 5
    cannon.clock.advance(0.0)
    assert [e[0] for e in events] == ["started"]


def test_counter_only_notifies_on_change():
    counter = TriggerCounter()
    seen = []
    counter.observe(seen.append)
    counter.value = 0
    counter.increment()
    counter.increment(2)
    assert seen == [1, 3]
    assert counter.value == 3


def test_frames_cover_active_bursts(default_config):
    cannon, _events = _recording_cannon(default_config)
    cannon.mount()
    cannon.fire()
    cannon.clock.advance(0.1)

    out = [(b, list(frames)) for b, frames in cannon.frames()]
    assert len(out) == 1
    burst, frames = out[0]
    assert len(frames) == default_config.particle_count
    assert all(isinstance(f, ParticleFrame) for f in frames)

    cannon.clock.advance(5.0)
    assert list(cannon.frames()) == []


def test_schedule_fires_and_quiet_after(repeating_config):
    cannon, events = _recording_cannon(repeating_config)
    cannon.mount()
    cannon.schedule_fires(2, 1.5)
    quiet = cannon.quiet_after(2, 1.5)
    assert quiet == pytest.approx(1.5 + 1.0 + 4.7)

    cannon.clock.advance_to(quiet - 0.01)
    assert cannon.finished_count == 5
    cannon.clock.advance_to(quiet)
    assert cannon.finished_count == cannon.total_scheduled == 6


def test_quiet_after_one_trigger(repeating_config):
    cannon = ConfettiCannon(repeating_config)
    assert cannon.quiet_after(1, 1.5) == pytest.approx(5.7)
    assert cannon.quiet_after(0, 1.5, delay=2.0) == 2.0


def test_many_bursts_leave_no_records_behind():
    cfg = BurstConfig.from_options(particle_count=1, radius=15.0, rain_height=5.0)
    cannon, _events = _recording_cannon(cfg)
    cannon.mount()
    cannon.schedule_fires(200, 0.05)
    cannon.clock.advance_to(cannon.quiet_after(200, 0.05) + 1.0)
    assert cannon.finished_count == 200
    assert cannon.tracker.record_count == 0
    assert cannon.clock.pending == 0


def test_same_seed_gives_same_particles(default_config):
    def first_burst(seed):
        cannon = ConfettiCannon(default_config, VirtualClock(), seed=seed)
        cannon.mount()
        cannon.fire()
        cannon.clock.advance(0.0)
        return next(cannon.active_bursts()).particles

    assert first_burst(9) == first_burst(9)
    assert first_burst(9) != first_burst(10)


def test_bind_switches_trigger_source(default_config):
    old, new = TriggerCounter(), TriggerCounter(10)
    cannon, events = _recording_cannon(default_config, counter=old)
    cannon.mount()
    cannon.bind(new)

    old.increment()
    new.value = 9
    cannon.clock.advance(0.0)
    assert events == []

    new.value = 11
    cannon.clock.advance(0.0)
    assert [e[0] for e in events] == ["started"]
    assert next(cannon.active_bursts()).trigger_value == 11
