from __future__ import annotations

import threading

from confetti_burst.engine.clock import RealtimeClock, VirtualClock


def test_timers_fire_in_deadline_order():
    clock = VirtualClock()
    fired = []
    clock.schedule_after(0.3, lambda: fired.append("c"))
    clock.schedule_after(0.1, lambda: fired.append("a"))
    clock.schedule_after(0.2, lambda: fired.append("b"))
    assert clock.advance(1.0) == 3
    assert fired == ["a", "b", "c"]
    assert clock.now() == 1.0


def test_equal_deadlines_keep_scheduling_order():
    clock = VirtualClock()
    fired = []
    for i in range(5):
        clock.schedule_after(0.5, lambda i=i: fired.append(i))
    clock.advance(0.5)
    assert fired == [0, 1, 2, 3, 4]


def test_timer_not_due_does_not_fire():
    clock = VirtualClock()
    fired = []
    h = clock.schedule_after(1.0, lambda: fired.append(1))
    clock.advance(0.999)
    assert fired == []
    assert not h.fired
    assert clock.pending == 1
    assert clock.next_deadline() == 1.0
    clock.advance(0.001)
    assert fired == [1]
    assert h.fired


def test_now_is_deadline_inside_callback():
    clock = VirtualClock(start=10.0)
    seen = []
    clock.schedule_after(0.25, lambda: seen.append(clock.now()))
    clock.advance_to(20.0)
    assert seen == [10.25]


def test_nested_timers_fire_in_same_advance_when_due():
    clock = VirtualClock()
    seen = []

    def first():
        seen.append(("first", clock.now()))
        clock.schedule_after(0.5, lambda: seen.append(("second", clock.now())))

    clock.schedule_after(0.5, first)
    clock.advance(2.0)
    assert seen == [("first", 0.5), ("second", 1.0)]


def test_negative_delay_fires_immediately():
    clock = VirtualClock()
    fired = []
    clock.schedule_after(-5.0, lambda: fired.append(clock.now()))
    clock.advance(0.0)
    assert fired == [0.0]


def test_realtime_clock_pump_fires_due_timers():
    clock = RealtimeClock()
    fired = []
    clock.schedule_after(0.0, lambda: fired.append(1))
    clock.schedule_after(3600.0, lambda: fired.append(2))
    assert clock.pump() == 1
    assert fired == [1]
    assert clock.pending == 1


def test_concurrent_scheduling_keeps_every_timer():
    clock = VirtualClock()
    fired = []

    def worker(k):
        for i in range(200):
            clock.schedule_after((i % 7) * 0.1, lambda k=k, i=i: fired.append((k, i)))

    threads = [threading.Thread(target=worker, args=(k,)) for k in range(4)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert clock.pending == 800
    assert clock.advance(1.0) == 800
    assert len(set(fired)) == 800
