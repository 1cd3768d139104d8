"""Tests for the countdown timer and clock formatting."""

import logging

import pytest

from launch_timeline.engine.animator import SimulatedClock
from launch_timeline.engine.tick_source import AsyncioTickSource, ManualTickSource
from launch_timeline.engine.timer import MonotonicCountdownTimer, TimerMode, format_clock
from launch_timeline.errors import InvalidInputError, TimerPreconditionError


@pytest.fixture
def clock() -> SimulatedClock:
    return SimulatedClock(start_ms=1_000_000)


@pytest.fixture
def source() -> ManualTickSource:
    return ManualTickSource()


@pytest.fixture
def timer(clock, source) -> MonotonicCountdownTimer:
    return MonotonicCountdownTimer(-10, tick_source=source, clock=clock)


@pytest.mark.parametrize(
    "offset, sign, text",
    [
        (-0.3, "-", "00:00:01"),
        (0.9, "+", "00:00:00"),
        (-3661, "-", "01:01:01"),
        (0, "+", "00:00:00"),
        (-60, "-", "00:01:00"),
        (3725.5, "+", "01:02:05"),
    ],
)
def test_format_clock(offset, sign, text):
    display = format_clock(offset)
    assert display.sign == sign
    assert display.time_string == text


def test_format_clock_string_form():
    assert str(format_clock(-0.01)) == "T - 00:00:01"
    assert format_clock(0).is_positive


def test_new_timer_is_idle_at_initial_offset(timer, source):
    assert timer.mode is TimerMode.IDLE
    assert timer.current_offset_seconds == -10
    assert not source.is_active


def test_start_counts_from_current_offset(timer, clock, source):
    timer.start()
    assert timer.mode is TimerMode.RUNNING
    assert source.is_active

    clock.advance(2500)
    source.fire()

    assert timer.current_offset_seconds == pytest.approx(-7.5)
    assert timer.state.is_started


def test_pause_freezes_offset_and_stops_ticks(timer, clock, source):
    timer.start()
    clock.advance(2500)
    source.fire()
    timer.pause()

    clock.advance(5000)
    assert source.fire() is False
    assert timer.mode is TimerMode.PAUSED
    assert timer.current_offset_seconds == pytest.approx(-7.5)


def test_resume_skips_paused_time(timer, clock, source):
    timer.start()
    clock.advance(2500)
    source.fire()
    timer.pause()
    clock.advance(5000)
    timer.resume()
    clock.advance(1000)
    source.fire()

    assert timer.current_offset_seconds == pytest.approx(-6.5)


def test_pause_then_immediate_resume_keeps_offset(timer, clock, source):
    timer.start()
    clock.advance(1234)
    source.fire()
    before = timer.current_offset_seconds

    timer.pause()
    timer.resume()

    assert timer.current_offset_seconds == pytest.approx(before)


def test_jump_while_running(timer, clock, source):
    timer.start()
    clock.advance(700)
    timer.jump(100)
    clock.advance(50)
    source.fire()

    assert timer.mode is TimerMode.RUNNING
    assert timer.current_offset_seconds == pytest.approx(100.05)


def test_jump_while_paused_only_counts_time_after_resume(timer, clock, source):
    timer.start()
    clock.advance(1000)
    source.fire()
    timer.pause()
    clock.advance(5000)

    timer.jump(50)
    assert timer.mode is TimerMode.PAUSED
    assert timer.current_offset_seconds == 50

    clock.advance(3000)
    timer.resume()
    assert timer.current_offset_seconds == pytest.approx(50)

    clock.advance(1000)
    source.fire()
    assert timer.current_offset_seconds == pytest.approx(51)


def test_jump_while_idle_keeps_idle(timer):
    timer.jump(-3)
    assert timer.mode is TimerMode.IDLE
    assert timer.current_offset_seconds == -3


@pytest.mark.parametrize("target", [float("nan"), float("inf"), 10**400, "12", None, True])
def test_jump_rejects_non_finite_numbers(timer, target):
    with pytest.raises(InvalidInputError):
        timer.jump(target)
    assert timer.current_offset_seconds == -10
    assert timer.mode is TimerMode.IDLE


def test_start_while_running_is_ignored(timer, clock, source, caplog):
    timer.start()
    clock.advance(1000)
    source.fire()
    anchor = timer.state.anchor_epoch_ms

    with caplog.at_level(logging.WARNING):
        timer.start()

    assert timer.mode is TimerMode.RUNNING
    assert timer.state.anchor_epoch_ms == anchor
    assert "already running" in caplog.text


def test_pause_while_idle_is_ignored(timer):
    timer.pause()
    assert timer.mode is TimerMode.IDLE


def test_toggle_cycles_modes(timer):
    timer.toggle()
    assert timer.mode is TimerMode.RUNNING
    timer.toggle()
    assert timer.mode is TimerMode.PAUSED
    timer.toggle()
    assert timer.mode is TimerMode.RUNNING


def test_reset_returns_to_initial_offset(timer, clock, source):
    timer.start()
    clock.advance(30_000)
    source.fire()

    timer.reset()

    assert timer.mode is TimerMode.IDLE
    assert timer.current_offset_seconds == -10
    assert timer.state.anchor_epoch_ms is None
    assert timer.state.pause_epoch_ms is None
    assert not source.is_active


def test_set_initial_offset_applies_on_next_reset(timer):
    timer.set_initial_offset(-120)
    assert timer.current_offset_seconds == -10
    timer.reset()
    assert timer.current_offset_seconds == -120


def test_ticks_never_decrease_while_running(timer, clock, source):
    timer.start()
    offsets = []
    for _ in range(20):
        clock.advance(50)
        source.fire()
        offsets.append(timer.current_offset_seconds)
    assert offsets == sorted(offsets)


def test_dispose_stops_ticking_and_blocks_restart(timer, clock, source):
    timer.start()
    timer.dispose()

    assert not source.is_active
    assert timer.mode is TimerMode.PAUSED

    with pytest.raises(TimerPreconditionError):
        timer.start()
    assert timer.mode is TimerMode.IDLE
    assert not source.is_active


def test_on_tick_receives_state(clock, source):
    states = []
    timer = MonotonicCountdownTimer(0, tick_source=source, clock=clock, on_tick=states.append)
    timer.start()
    clock.advance(500)
    source.fire()

    assert [state.current_offset_seconds for state in states] == [0, 0.5]
    assert states[-1].is_t_plus


def test_start_without_event_loop_leaves_timer_idle(clock):
    timer = MonotonicCountdownTimer(-10, tick_source=AsyncioTickSource(), clock=clock)

    with pytest.raises(RuntimeError):
        timer.start()

    assert timer.mode is TimerMode.IDLE
    assert timer.state.anchor_epoch_ms is None
    assert timer.current_offset_seconds == -10
    assert not timer.tick_source.is_active
