"""Tests for the timeline orchestrator."""

import logging

import pytest

from launch_timeline.engine.animator import SimulatedClock
from launch_timeline.engine.geometry import geometry_for_viewport
from launch_timeline.engine.layouts import FULL_LAYOUT
from launch_timeline.engine.orchestrator import TimelineOrchestrator, build_snapshot
from launch_timeline.engine.tick_source import ManualTickSource
from launch_timeline.engine.timer import TimerMode
from launch_timeline.errors import EventFloorError, InvalidInputError
from launch_timeline.profile import MissionEvent, MissionProfile


@pytest.fixture
def clock() -> SimulatedClock:
    return SimulatedClock()


@pytest.fixture
def source() -> ManualTickSource:
    return ManualTickSource()


def make_orchestrator(profile, clock, source) -> TimelineOrchestrator:
    return TimelineOrchestrator(
        profile, FULL_LAYOUT, geometry_for_viewport(), tick_source=source, clock=clock
    )


@pytest.fixture
def orchestrator(clock, source) -> TimelineOrchestrator:
    return make_orchestrator(MissionProfile.default(), clock, source)


def test_initial_snapshot_shows_countdown(orchestrator):
    snapshot = orchestrator.snapshot()

    assert snapshot.current_offset_seconds == -300
    assert str(snapshot.clock_display) == "T - 00:05:00"
    assert snapshot.mode is TimerMode.IDLE
    assert not snapshot.is_t_plus
    assert [node.name for node in snapshot.visible_nodes][:1] == ["ENGINE CHILL"]


def test_running_snapshot_advances(orchestrator, clock, source):
    orchestrator.start()
    clock.advance(1500)
    snapshot = orchestrator.tick()

    assert snapshot.current_offset_seconds == pytest.approx(-298.5)
    assert snapshot.mode is TimerMode.RUNNING


def test_jump_accepts_numeric_text(orchestrator):
    orchestrator.jump("120")
    snapshot = orchestrator.snapshot()

    assert snapshot.current_offset_seconds == 120
    assert snapshot.is_t_plus


@pytest.mark.parametrize("target", ["abc", "", "nan", "inf", 10**400, None])
def test_invalid_jump_is_rejected(orchestrator, target, caplog):
    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidInputError):
            orchestrator.jump(target)

    assert orchestrator.current_offset_seconds == -300
    assert "Invalid jump target" in caplog.text


def test_removing_the_last_event_is_refused(clock, source):
    orchestrator = make_orchestrator(
        MissionProfile.from_events([MissionEvent(0, "LIFTOFF")]), clock, source
    )

    with pytest.raises(EventFloorError):
        orchestrator.remove_event(0)

    assert len(orchestrator.events) == 1


def test_remove_event(orchestrator):
    removed = orchestrator.remove_event(0)

    assert removed.name == "ENGINE CHILL"
    assert len(orchestrator.events) == 9


@pytest.mark.parametrize("index", [10, -1, "0", True])
def test_remove_event_rejects_bad_index(orchestrator, index):
    with pytest.raises(InvalidInputError):
        orchestrator.remove_event(index)
    assert len(orchestrator.events) == 10


def test_add_event_appends_at_t_zero(orchestrator):
    added = orchestrator.add_event()

    assert added == MissionEvent(0.0, "New event 11")
    assert orchestrator.events[-1] == added
    assert orchestrator.add_event("HOTFIRE").name == "HOTFIRE"


def test_update_event(orchestrator):
    updated = orchestrator.update_event(0, timestamp="-250")
    assert updated == MissionEvent(-250, "ENGINE CHILL")

    renamed = orchestrator.update_event(0, name="CHILLDOWN")
    assert renamed == MissionEvent(-250, "CHILLDOWN")


def test_update_event_rejects_bad_timestamp(orchestrator):
    with pytest.raises(InvalidInputError):
        orchestrator.update_event(0, timestamp="later")
    assert orchestrator.events[0] == MissionEvent(-300, "ENGINE CHILL")


def test_mission_duration_must_not_be_negative(orchestrator):
    with pytest.raises(InvalidInputError):
        orchestrator.set_mission_duration(-1)
    assert orchestrator.mission_duration == 1800

    orchestrator.set_mission_duration(600)
    assert orchestrator.mission_duration == 600


def test_zero_mission_duration_projects_nothing(orchestrator):
    orchestrator.set_mission_duration(0)
    assert orchestrator.snapshot().projected_nodes == ()


def test_countdown_start_applies_on_reset(orchestrator):
    orchestrator.set_countdown_start(120)
    assert orchestrator.current_offset_seconds == -300

    orchestrator.reset()
    assert orchestrator.current_offset_seconds == -120

    orchestrator.set_countdown_start(0)
    orchestrator.reset()
    assert orchestrator.current_offset_seconds == 0


def test_to_profile_reflects_edits(orchestrator):
    orchestrator.add_event("EXTRA")
    orchestrator.set_countdown_start(90)

    profile = orchestrator.to_profile()

    assert profile.events[-1].name == "EXTRA"
    assert profile.countdown_start_seconds == 90
    assert profile.mission_name == "Starlink"


def test_subscribe_receives_snapshots_until_unsubscribed(orchestrator, clock, source):
    received = []
    unsubscribe = orchestrator.subscribe(received.append)

    orchestrator.start()
    clock.advance(50)
    source.fire()
    assert [snapshot.current_offset_seconds for snapshot in received] == pytest.approx(
        [-300, -299.95]
    )

    unsubscribe()
    clock.advance(50)
    source.fire()
    assert len(received) == 2


def test_dispose_stops_ticking(orchestrator, source):
    received = []
    orchestrator.subscribe(received.append)
    orchestrator.start()

    orchestrator.dispose()

    assert not source.is_active
    assert source.fire() is False
    assert len(received) == 1


def test_empty_profile_is_rejected(clock, source):
    profile = MissionProfile(events=[], mission_duration=600, countdown_start_seconds=60)
    with pytest.raises(EventFloorError):
        make_orchestrator(profile, clock, source)


def test_build_snapshot_is_pure(orchestrator):
    state = orchestrator.timer.state
    args = (state, orchestrator.events, 1800, FULL_LAYOUT, geometry_for_viewport())

    assert build_snapshot(*args) == build_snapshot(*args)
