"""Composition of timer, projector and colors into per-tick snapshots."""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Sequence

from ..errors import EventFloorError, InvalidInputError
from ..profile import MissionEvent, MissionProfile
from .geometry import GeometryDescriptor
from .projector import ProjectedNode, ProjectorConfig, project_events
from .tick_source import TickSource
from .timer import (
    Clock,
    ClockDisplay,
    MonotonicCountdownTimer,
    TimerMode,
    TimerState,
    format_clock,
    monotonic_ms,
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[["TimelineSnapshot"], None]


@dataclass(frozen=True, slots=True)
class TimelineSnapshot:
    """Everything a renderer needs for one tick."""

    current_offset_seconds: float
    clock_display: ClockDisplay
    mode: TimerMode
    projected_nodes: tuple[ProjectedNode, ...]

    @property
    def is_t_plus(self) -> bool:
        return self.current_offset_seconds >= 0

    @property
    def visible_nodes(self) -> tuple[ProjectedNode, ...]:
        return tuple(node for node in self.projected_nodes if node.is_visible)


def build_snapshot(
    timer_state: TimerState,
    events: Sequence[MissionEvent],
    mission_duration: float,
    config: ProjectorConfig,
    geometry: GeometryDescriptor,
) -> TimelineSnapshot:
    """Pure per-tick recomputation, independent of any scheduling model."""
    offset = timer_state.current_offset_seconds
    return TimelineSnapshot(
        current_offset_seconds=offset,
        clock_display=format_clock(offset),
        mode=timer_state.mode,
        projected_nodes=tuple(
            project_events(events, offset, mission_duration, config, geometry)
        ),
    )


class TimelineOrchestrator:
    """Public surface of the engine: timer controls, event editing, snapshots."""

    def __init__(
        self,
        profile: MissionProfile,
        config: ProjectorConfig,
        geometry: GeometryDescriptor,
        *,
        tick_source: TickSource | None = None,
        clock: Clock = monotonic_ms,
    ) -> None:
        """
        Initialize the orchestrator with an idle timer at the initial countdown.

        Args:
            profile: Mission events and durations; events are copied
            config: Projector layout
            geometry: Circle placement supplied by the host
            tick_source: Recurring callback driving the timer
            clock: Millisecond clock shared with the timer
        """
        if not profile.events:
            raise EventFloorError("A timeline needs at least one event")
        self.config = config
        self.geometry = geometry
        self.mission_name = profile.mission_name
        self.vehicle = profile.vehicle
        self._events: list[MissionEvent] = list(profile.events)
        self._mission_duration = _require_duration(profile.mission_duration)
        self._countdown_start = profile.countdown_start_seconds
        self._listeners: list[SnapshotListener] = []
        self.timer = MonotonicCountdownTimer(
            profile.initial_countdown_offset,
            tick_source=tick_source,
            clock=clock,
            on_tick=self._handle_tick,
        )

    @property
    def events(self) -> tuple[MissionEvent, ...]:
        return tuple(self._events)

    @property
    def mission_duration(self) -> float:
        return self._mission_duration

    @property
    def countdown_start_seconds(self) -> float:
        return self._countdown_start

    @property
    def current_offset_seconds(self) -> float:
        return self.timer.current_offset_seconds

    def to_profile(self) -> MissionProfile:
        return MissionProfile(
            events=list(self._events),
            mission_duration=self._mission_duration,
            countdown_start_seconds=self._countdown_start,
            mission_name=self.mission_name,
            vehicle=self.vehicle,
        )

    # Timer controls

    def start(self) -> None:
        self.timer.start()

    def pause(self) -> None:
        self.timer.pause()

    def resume(self) -> None:
        self.timer.resume()

    def toggle(self) -> None:
        self.timer.toggle()

    def jump(self, target_offset_seconds: float | str) -> None:
        """
        Jump the clock to a target offset.

        Strings are parsed as numbers so raw form input can be passed through.

        Raises:
            InvalidInputError: If the target is not a finite number
        """
        try:
            target = _parse_seconds(target_offset_seconds)
        except InvalidInputError:
            logger.warning("Invalid jump target %r", target_offset_seconds)
            raise
        self.timer.jump(target)

    def reset(self) -> None:
        self.timer.reset()

    def dispose(self) -> None:
        """Stop the tick source and drop all listeners."""
        self.timer.dispose()
        self._listeners.clear()

    # Event editing

    def add_event(self, name: str | None = None) -> MissionEvent:
        """Append an event at T-0."""
        event = MissionEvent(0.0, name or f"New event {len(self._events) + 1}")
        self._events.append(event)
        return event

    def remove_event(self, index: int) -> MissionEvent:
        """
        Remove the event at ``index``.

        Raises:
            EventFloorError: If it is the only remaining event
            InvalidInputError: If the index is out of range
        """
        if len(self._events) <= 1:
            logger.warning("At least one event must remain; remove_event(%s) ignored", index)
            raise EventFloorError("At least one event must remain on the timeline")
        self._check_index(index)
        return self._events.pop(index)

    def update_event(
        self, index: int, *, timestamp: float | str | None = None, name: str | None = None
    ) -> MissionEvent:
        """Replace the timestamp and/or name of an existing event."""
        self._check_index(index)
        current = self._events[index]
        updated = MissionEvent(
            _parse_seconds(timestamp) if timestamp is not None else current.timestamp_seconds,
            name if name is not None else current.name,
        )
        self._events[index] = updated
        return updated

    # Mission parameters

    def set_mission_duration(self, seconds: float) -> None:
        self._mission_duration = _require_duration(seconds)

    def set_countdown_start(self, seconds: float) -> None:
        """Change the T-minus countdown applied by the next ``reset``."""
        value = _parse_seconds(seconds)
        self.timer.set_initial_offset(-value if value > 0 else 0.0)
        self._countdown_start = value

    # Snapshots

    def tick(self) -> TimelineSnapshot:
        """Advance the timer once (when running) and return the new snapshot."""
        self.timer.tick()
        return self.snapshot()

    def snapshot(self) -> TimelineSnapshot:
        return build_snapshot(
            self.timer.state, self._events, self._mission_duration, self.config, self.geometry
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Receive a snapshot after every timer tick. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _handle_tick(self, state: TimerState) -> None:
        if not self._listeners:
            return
        snapshot = build_snapshot(
            state, self._events, self._mission_duration, self.config, self.geometry
        )
        for listener in list(self._listeners):
            listener(snapshot)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidInputError(f"Event index must be an integer, got {index!r}")
        if not 0 <= index < len(self._events):
            raise InvalidInputError(
                f"Event index {index} out of range (0..{len(self._events) - 1})"
            )


def _parse_seconds(value: float | str) -> float:
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            raise InvalidInputError(f"Not a number of seconds: {value!r}") from None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = float(value)
        except OverflowError:
            raise InvalidInputError(f"Seconds out of range: {value!r}") from None
    else:
        raise InvalidInputError(f"Not a number of seconds: {value!r}")
    if not math.isfinite(parsed):
        raise InvalidInputError(f"Seconds must be finite, got {value!r}")
    return parsed


def _require_duration(seconds: float) -> float:
    value = _parse_seconds(seconds)
    if value < 0:
        raise InvalidInputError(f"Mission duration must not be negative, got {seconds!r}")
    return value
