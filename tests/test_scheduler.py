import pytest

from scheduler import ClockScheduler, Scheduler


def test_callbacks_fire_in_due_order():
    s = Scheduler()
    fired = []
    s.schedule_after(2.0, lambda: fired.append("b"))
    s.schedule_after(1.0, lambda: fired.append("a"))
    s.schedule_after(2.0, lambda: fired.append("c"))
    assert s.advance(1.5) == 1
    assert fired == ["a"]
    s.advance(0.5)
    assert fired == ["a", "b", "c"]
    assert s.now == 2.0


def test_cancelled_timer_never_fires():
    s = Scheduler()
    fired = []
    t = s.schedule_after(1.0, lambda: fired.append(1))
    s.cancel(t)
    s.cancel(None)
    assert s.advance(5) == 0
    assert fired == []
    assert s.pending() == 0


def test_chained_timers_fire_within_one_advance():
    s = Scheduler()
    ticks = []

    def tick():
        ticks.append(s.now)
        if len(ticks) < 3:
            s.schedule_after(1.0, tick)

    s.schedule_after(1.0, tick)
    s.advance(10)
    assert ticks == [1.0, 2.0, 3.0]


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        Scheduler().schedule_after(-1, lambda: None)


def test_clock_scheduler_follows_clock():
    now = [100.0]
    s = ClockScheduler(clock=lambda: now[0], unit_seconds=0.5)
    fired = []
    s.schedule_after(2.0, lambda: fired.append(True))
    now[0] = 100.9
    s.sync()
    assert fired == []
    now[0] = 101.0
    s.sync()
    assert fired == [True]
    assert s.now == 2.0
