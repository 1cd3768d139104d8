"""Timeline engine: countdown timer, circular projection and snapshots."""

from .actions import ScheduledAction, parse_action
from .animator import Animator, SimulatedClock
from .color import MarkerColors, RgbaColor, interpolate_color, marker_colors, parse_rgba
from .geometry import GeometryDescriptor, geometry_for_viewport
from .layouts import DEFAULT_LAYOUT_NAME, resolve_layout, supported_layout_names
from .orchestrator import TimelineOrchestrator, TimelineSnapshot, build_snapshot
from .projector import (
    DensityProfile,
    MarkerPalette,
    ProjectedNode,
    ProjectorConfig,
    map_time,
    project_events,
)
from .raster_animation import generate_raster_frames
from .renderer import Renderer
from .svg_animation import generate_svg_timeline_frames
from .tick_source import AsyncioTickSource, ManualTickSource, TickSource
from .timeline_frame import TimelineFrame
from .timer import ClockDisplay, MonotonicCountdownTimer, TimerMode, TimerState, format_clock

__all__ = [
    "Animator",
    "AsyncioTickSource",
    "ClockDisplay",
    "DEFAULT_LAYOUT_NAME",
    "DensityProfile",
    "GeometryDescriptor",
    "ManualTickSource",
    "MarkerColors",
    "MarkerPalette",
    "MonotonicCountdownTimer",
    "ProjectedNode",
    "ProjectorConfig",
    "Renderer",
    "RgbaColor",
    "ScheduledAction",
    "SimulatedClock",
    "TickSource",
    "TimelineFrame",
    "TimelineOrchestrator",
    "TimelineSnapshot",
    "TimerMode",
    "TimerState",
    "build_snapshot",
    "format_clock",
    "generate_raster_frames",
    "generate_svg_timeline_frames",
    "geometry_for_viewport",
    "interpolate_color",
    "map_time",
    "marker_colors",
    "parse_action",
    "parse_rgba",
    "project_events",
    "resolve_layout",
    "supported_layout_names",
]
