"""Tests for scheduled timer actions."""

import pytest

from launch_timeline.engine.actions import ScheduledAction, parse_action
from launch_timeline.engine.geometry import geometry_for_viewport
from launch_timeline.engine.layouts import HALF_LAYOUT
from launch_timeline.engine.orchestrator import TimelineOrchestrator
from launch_timeline.engine.timer import TimerMode
from launch_timeline.profile import MissionProfile


def test_parse_simple_action():
    action = parse_action("5000:pause")
    assert action == ScheduledAction(at_ms=5000, operation="pause")


def test_parse_jump_action():
    action = parse_action(" 8000:JUMP:-12.5 ")
    assert action == ScheduledAction(at_ms=8000, operation="jump", target=-12.5)
    assert repr(action) == "ScheduledAction(JUMP -12.5 @8000ms)"


@pytest.mark.parametrize(
    "text",
    [
        "pause",
        "soon:pause",
        "-1:pause",
        "100:explode",
        "100:jump",
        "100:jump:later",
        "100:pause:3",
        "1:2:3:4",
    ],
)
def test_parse_rejects_malformed_actions(text):
    with pytest.raises(ValueError):
        parse_action(text)


def test_actions_drive_the_orchestrator():
    orchestrator = TimelineOrchestrator(
        MissionProfile.default(), HALF_LAYOUT, geometry_for_viewport()
    )
    try:
        parse_action("0:start").apply(orchestrator)
        assert orchestrator.timer.mode is TimerMode.RUNNING

        parse_action("0:jump:42").apply(orchestrator)
        assert orchestrator.current_offset_seconds == pytest.approx(42, abs=0.5)

        parse_action("0:reset").apply(orchestrator)
        assert orchestrator.timer.mode is TimerMode.IDLE
        assert orchestrator.current_offset_seconds == -300
    finally:
        orchestrator.dispose()
