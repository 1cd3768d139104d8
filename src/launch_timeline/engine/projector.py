"""Density-scaled projection of mission events onto the timeline circle."""

import math
from dataclasses import dataclass, field
from typing import Literal, Sequence

from ..constants import (
    COLOR_FUTURE,
    COLOR_INNER_DOT_START,
    COLOR_PAST_PRESENT,
    COLOR_TRANSITION_SECONDS,
)
from ..profile import MissionEvent
from .color import RgbaColor, ease_in_out_sine, marker_colors
from .geometry import GeometryDescriptor

Baseline = Literal["text-after-edge", "text-before-edge"]


@dataclass(frozen=True, slots=True)
class DensityProfile:
    """How strongly the past and future halves of the arc are scaled.

    Below ``transition_start_offset`` both halves use ``average_factor``; over
    the following ``transition_duration_seconds`` of timer offset they ease
    towards ``past_factor`` and ``future_factor``.
    """

    average_factor: float
    past_factor: float
    future_factor: float
    transition_start_offset: float
    transition_duration_seconds: float

    @classmethod
    def uniform(cls, factor: float = 1.0) -> "DensityProfile":
        return cls(factor, factor, factor, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class MarkerPalette:
    future: RgbaColor = field(default_factory=lambda: RgbaColor.from_tuple(COLOR_FUTURE))
    past_present: RgbaColor = field(
        default_factory=lambda: RgbaColor.from_tuple(COLOR_PAST_PRESENT)
    )
    inner_dot_start: RgbaColor = field(
        default_factory=lambda: RgbaColor.from_tuple(COLOR_INNER_DOT_START)
    )


@dataclass(frozen=True, slots=True)
class ProjectorConfig:
    """Layout parameters for :func:`project_events`.

    ``angular_span`` is the angle swept by half a mission duration of
    virtual time; it has no default because both pi and pi/2 are used.
    """

    angular_span: float
    density: DensityProfile
    filter_to_view_window: bool = False
    node_radius: float = 6.0
    inner_dot_radius: float = 2.0
    label_distance: float = 6.0  # Node center to label anchor
    connector_gap: float = 0.0  # Space between connector end and label
    split_label_words: bool = False
    colors: MarkerPalette = field(default_factory=MarkerPalette)
    color_transition_seconds: float = COLOR_TRANSITION_SECONDS


@dataclass(frozen=True, slots=True)
class Point:
    cx: float
    cy: float


@dataclass(frozen=True, slots=True)
class ConnectorLine:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True, slots=True)
class LabelGeometry:
    lines: tuple[str, ...]
    x: float
    y: float
    rotation_degrees: float
    baseline: Baseline
    connector: ConnectorLine | None
    anchor: str = "middle"

    @property
    def transform(self) -> str:
        return f"rotate({self.rotation_degrees}, {self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class ProjectedNode:
    """Renderable state of one event for the current tick."""

    key: str
    name: str
    index: int
    timestamp: float
    angle_radians: float
    position: Point
    is_visible: bool
    is_past: bool
    color: RgbaColor
    inner_dot_color: RgbaColor
    should_draw_inner_dot: bool
    node_radius: float
    inner_dot_radius: float
    label: LabelGeometry

    @property
    def angle_degrees(self) -> float:
        return math.degrees(self.angle_radians)


def blended_density_factors(
    density: DensityProfile, current_offset_seconds: float
) -> tuple[float, float]:
    """Return the ``(past, future)`` scale factors in effect at this offset."""
    start = density.transition_start_offset
    end = start + density.transition_duration_seconds

    if current_offset_seconds < start:
        return density.average_factor, density.average_factor
    if current_offset_seconds >= end:
        return density.past_factor, density.future_factor

    progress = ease_in_out_sine(
        (current_offset_seconds - start) / density.transition_duration_seconds
    )
    past = density.average_factor * (1 - progress) + density.past_factor * progress
    future = density.average_factor * (1 - progress) + density.future_factor * progress
    return past, future


def map_time(t: float, past_factor: float, future_factor: float) -> float:
    """Map real offset seconds onto the stretched virtual time axis."""
    return t * (past_factor if t <= 0 else future_factor)


def project_events(
    events: Sequence[MissionEvent],
    current_offset_seconds: float,
    mission_duration: float,
    config: ProjectorConfig,
    geometry: GeometryDescriptor,
) -> list[ProjectedNode]:
    """
    Place every event on the circle for the given timer offset.

    "Now" always sits at -90 degrees (top of the circle). Events outside the
    view window are dropped entirely when ``config.filter_to_view_window``
    is set; otherwise they are projected and only culled via ``is_visible``.

    Args:
        events: Events in display order
        current_offset_seconds: Timer offset (negative before T-0)
        mission_duration: Real seconds represented by the whole arc
        config: Layout parameters
        geometry: Circle placement

    Returns:
        Projected nodes, in event order
    """
    half_duration = mission_duration / 2
    if half_duration <= 0:
        return []

    past_factor, future_factor = blended_density_factors(
        config.density, current_offset_seconds
    )
    mapped_now = map_time(current_offset_seconds, past_factor, future_factor)
    window_start = current_offset_seconds - half_duration
    window_end = current_offset_seconds + half_duration

    nodes: list[ProjectedNode] = []
    for index, event in enumerate(events):
        timestamp = event.timestamp_seconds
        if config.filter_to_view_window and not (window_start <= timestamp <= window_end):
            continue

        virtual_delta = map_time(timestamp, past_factor, future_factor) - mapped_now
        angle = (virtual_delta / half_duration) * config.angular_span - math.pi / 2
        cx = geometry.center_x + geometry.radius * math.cos(angle)
        cy = geometry.center_y + geometry.radius * math.sin(angle)

        time_relative_to_now = timestamp - current_offset_seconds
        colors = marker_colors(
            time_relative_to_now,
            future=config.colors.future,
            past_present=config.colors.past_present,
            inner_dot_start=config.colors.inner_dot_start,
            transition_seconds=config.color_transition_seconds,
        )
        name = event.name or f"Event {index + 1}"

        nodes.append(
            ProjectedNode(
                key=f"{timestamp:g}-{name}",
                name=name,
                index=index,
                timestamp=timestamp,
                angle_radians=angle,
                position=Point(cx, cy),
                is_visible=(
                    -config.node_radius <= cy <= geometry.view_height + config.node_radius
                ),
                is_past=time_relative_to_now <= 0,
                color=colors.outer,
                inner_dot_color=colors.inner_dot,
                should_draw_inner_dot=colors.should_draw_inner_dot,
                node_radius=config.node_radius,
                inner_dot_radius=config.inner_dot_radius,
                label=_label_geometry(name, index, cx, cy, angle, config),
            )
        )
    return nodes


def _label_geometry(
    name: str, index: int, cx: float, cy: float, angle: float, config: ProjectorConfig
) -> LabelGeometry:
    # Odd indices sit outside the circle, even indices inside.
    is_outside = index % 2 == 1
    direction = 1 if is_outside else -1
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    connector = None
    connector_length = config.label_distance - config.connector_gap - config.node_radius
    if connector_length >= 1:
        start = config.node_radius
        end = config.node_radius + connector_length
        connector = ConnectorLine(
            x1=cx + direction * start * cos_a,
            y1=cy + direction * start * sin_a,
            x2=cx + direction * end * cos_a,
            y2=cy + direction * end * sin_a,
        )

    x = cx + direction * config.label_distance * cos_a
    y = cy + direction * config.label_distance * sin_a
    return LabelGeometry(
        lines=tuple(name.split()) if config.split_label_words else (name,),
        x=x,
        y=y,
        rotation_degrees=math.degrees(angle) + 90,
        baseline="text-after-edge" if is_outside else "text-before-edge",
        connector=connector,
    )
