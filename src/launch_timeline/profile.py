"""Mission profile data: events, mission duration and countdown start."""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from .constants import (
    DEFAULT_COUNTDOWN_SECONDS,
    DEFAULT_EVENTS,
    DEFAULT_MISSION_DURATION,
    DEFAULT_MISSION_NAME,
    DEFAULT_VEHICLE,
    MISSION_DURATION_STEP,
)
from .errors import ProfileError


@dataclass(frozen=True, slots=True)
class MissionEvent:
    """A named event at a signed offset from T-0."""

    timestamp_seconds: float
    name: str


@dataclass(slots=True)
class MissionProfile:
    """Everything the timeline needs to know about one mission."""

    events: list[MissionEvent]
    mission_duration: float
    countdown_start_seconds: float
    mission_name: str = DEFAULT_MISSION_NAME
    vehicle: str = DEFAULT_VEHICLE
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return f"{self.mission_name} ({self.vehicle})"

    @property
    def initial_countdown_offset(self) -> float:
        return initial_countdown_offset(self.countdown_start_seconds)

    @classmethod
    def from_events(
        cls,
        events: Iterable[MissionEvent],
        *,
        mission_duration: float | None = None,
        countdown_start_seconds: float | None = None,
        mission_name: str = DEFAULT_MISSION_NAME,
        vehicle: str = DEFAULT_VEHICLE,
    ) -> "MissionProfile":
        """Build a profile, deriving any unspecified durations from the events."""
        event_list = list(events)
        if not event_list:
            raise ProfileError("A mission profile needs at least one event")
        times = [event.timestamp_seconds for event in event_list]
        return cls(
            events=event_list,
            mission_duration=(
                mission_duration
                if mission_duration is not None
                else derive_mission_duration(times)
            ),
            countdown_start_seconds=(
                countdown_start_seconds
                if countdown_start_seconds is not None
                else derive_countdown_start(times)
            ),
            mission_name=mission_name,
            vehicle=vehicle,
        )

    @classmethod
    def default(cls) -> "MissionProfile":
        return cls.from_events(MissionEvent(time, name) for time, name in DEFAULT_EVENTS)


def derive_mission_duration(times: Iterable[float]) -> float:
    """Round the event span (T-0 included) up to a step and add one step of margin."""
    values = list(times)
    span = max(*values, 0) - min(*values, 0) if values else 0
    if span <= 0:
        return DEFAULT_MISSION_DURATION
    return math.ceil(span / MISSION_DURATION_STEP) * MISSION_DURATION_STEP + MISSION_DURATION_STEP


def derive_countdown_start(times: Iterable[float]) -> float:
    """Count down from the first negative event, or the default countdown."""
    for time in times:
        if time < 0:
            return abs(time)
    return DEFAULT_COUNTDOWN_SECONDS


def initial_countdown_offset(countdown_start_seconds: float) -> float:
    """Timer offset a reset returns to: T-minus the countdown, or T-0."""
    if not math.isfinite(countdown_start_seconds) or countdown_start_seconds <= 0:
        return 0.0
    return -float(countdown_start_seconds)


def parse_profile(data: Mapping[str, Any]) -> MissionProfile:
    """
    Validate raw profile data (for example decoded JSON).

    Expected shape::

        {
          "mission_name": "Starlink",
          "vehicle": "Falcon 9 Block 5",
          "mission_duration": 1200,
          "countdown_start": 300,
          "events": [{"time": -300, "name": "ENGINE CHILL"}, ...]
        }

    Only ``events`` is required.

    Raises:
        ProfileError: If any field is missing or malformed
    """
    if not isinstance(data, Mapping):
        raise ProfileError("Profile must be a JSON object")

    raw_events = data.get("events")
    if not isinstance(raw_events, list) or not raw_events:
        raise ProfileError("Profile 'events' must be a non-empty list")

    events = [_parse_event(raw, index) for index, raw in enumerate(raw_events)]
    mission_duration = _optional_number(data, "mission_duration")
    if mission_duration is not None and mission_duration < 0:
        raise ProfileError("Profile 'mission_duration' must not be negative")

    return MissionProfile.from_events(
        events,
        mission_duration=mission_duration,
        countdown_start_seconds=_optional_number(data, "countdown_start"),
        mission_name=_optional_text(data, "mission_name", DEFAULT_MISSION_NAME),
        vehicle=_optional_text(data, "vehicle", DEFAULT_VEHICLE),
    )


def profile_to_dict(profile: MissionProfile) -> dict[str, Any]:
    return {
        "mission_name": profile.mission_name,
        "vehicle": profile.vehicle,
        "mission_duration": profile.mission_duration,
        "countdown_start": profile.countdown_start_seconds,
        "events": [
            {"time": event.timestamp_seconds, "name": event.name} for event in profile.events
        ],
    }


def load_profile(path: str | Path) -> MissionProfile:
    """Read and validate a profile JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ProfileError(f"Invalid JSON in '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise ProfileError(f"Profile '{path}' is not valid UTF-8: {e}") from e
    return parse_profile(data)


def dump_profile(profile: MissionProfile, path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(profile_to_dict(profile), f, indent=2)


def _parse_event(raw: Any, index: int) -> MissionEvent:
    if not isinstance(raw, Mapping):
        raise ProfileError(f"Event #{index} must be an object")
    time = raw.get("time")
    if not _is_number(time):
        raise ProfileError(f"Event #{index} has a non-numeric 'time': {time!r}")
    name = raw.get("name", f"Event {index + 1}")
    if not isinstance(name, str):
        raise ProfileError(f"Event #{index} has a non-text 'name': {name!r}")
    return MissionEvent(float(time), name)


def _optional_number(data: Mapping[str, Any], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if not _is_number(value):
        raise ProfileError(f"Profile '{key}' must be a number, got {value!r}")
    return float(value)


def _optional_text(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ProfileError(f"Profile '{key}' must be text, got {value!r}")
    return value


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False
