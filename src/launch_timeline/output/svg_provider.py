"""SVG output provider."""

from typing import Iterator

from ..engine.animator import Animator
from ..engine.svg_animation import generate_svg_timeline_frames
from ..engine.timeline_frame import TimelineFrame
from ._svg_timeline_encoder import encode_svg_timeline_sequence
from .base import OutputProvider


class SvgOutputProvider(OutputProvider[TimelineFrame]):
    """Output provider for animated (SMIL) timeline SVG format."""

    def frames(
        self, animator: Animator, max_frames: int | None = None
    ) -> Iterator[TimelineFrame]:
        return generate_svg_timeline_frames(animator, max_frames)

    def encode(
        self, frames: Iterator[TimelineFrame], frame_duration: int, title: str = ""
    ) -> bytes:
        frame_list = list(frames)
        if not frame_list:
            return b""

        for index, frame in enumerate(frame_list):
            if not isinstance(frame, TimelineFrame):
                raise TypeError(
                    "SVG output only supports timeline frames "
                    f"(got {type(frame).__name__} at index {index})"
                )

        return encode_svg_timeline_sequence(frame_list, max(1, frame_duration), title=title)
