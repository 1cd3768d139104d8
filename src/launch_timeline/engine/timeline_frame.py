"""Timeline frame payloads for animation encoding."""

from dataclasses import dataclass

from .geometry import GeometryDescriptor
from .orchestrator import TimelineSnapshot


@dataclass(frozen=True)
class TimelineFrame:
    """A full timeline snapshot at a specific animation time."""

    width: int
    height: int
    time_ms: int
    geometry: GeometryDescriptor
    snapshot: TimelineSnapshot

    @property
    def clock_text(self) -> str:
        return str(self.snapshot.clock_display)


def snapshot_timeline_frame(
    snapshot: TimelineSnapshot,
    geometry: GeometryDescriptor,
    *,
    time_ms: int,
) -> TimelineFrame:
    """Wrap an engine snapshot with the canvas it is drawn on."""
    return TimelineFrame(
        width=int(round(geometry.view_width)),
        height=int(round(geometry.view_height)),
        time_ms=time_ms,
        geometry=geometry,
        snapshot=snapshot,
    )
