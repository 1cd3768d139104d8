"""SVG-specific animation frame generators built on top of Animator timelines."""

from typing import Iterator

from .animator import Animator
from .timeline_frame import TimelineFrame, snapshot_timeline_frame


def generate_svg_timeline_frames(
    animator: Animator, max_frames: int | None = None
) -> Iterator[TimelineFrame]:
    """Build timeline frames for the SVG encoder from an animator timeline."""
    for snapshot, elapsed_ms in animator.iter_state_timeline(max_frames=max_frames):
        yield snapshot_timeline_frame(snapshot, animator.geometry, time_ms=elapsed_ms)
