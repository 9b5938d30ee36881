import pytest

from playback.timer import PlaybackTimer


def make_timer(timers, interval=500):
    ticks = []
    timer = PlaybackTimer(lambda: ticks.append(1), interval, timer_factory=timers)
    return timer, timers.timers[-1], ticks


@pytest.mark.parametrize("value", [0, -20, float("nan"), float("inf"), "fast", None])
def test_invalid_interval_falls_back_to_default(timers, value):
    timer, _, _ = make_timer(timers, value)
    assert timer.interval_ms == 500


def test_start_uses_interval_and_ticks(timers):
    timer, qt, ticks = make_timer(timers, 250)
    timer.start()
    assert qt.isActive() and qt.interval() == 250
    qt.fire()
    qt.fire()
    assert len(ticks) == 2
    assert timer.is_active()


def test_set_interval_while_running_restarts(timers):
    timer, qt, _ = make_timer(timers)
    timer.start()
    assert timer.set_interval(100) is True
    assert qt.interval() == 100
    assert qt.start_count == 2
    assert timer.is_active()


def test_set_interval_while_stopped_does_not_start(timers):
    timer, qt, _ = make_timer(timers)
    assert timer.set_interval(100) is False
    assert not qt.isActive()
    assert timer.interval_ms == 100


def test_stopped_timer_does_not_tick(timers):
    timer, qt, ticks = make_timer(timers)
    timer.start()
    timer.stop()
    qt.fire()
    assert ticks == []
