"""Animated raster output (GIF, WebP) drawn frame by frame with Pillow."""

from dataclasses import dataclass, field
from io import BytesIO
from typing import Iterator, Mapping

from PIL import Image

from ..engine.animator import Animator
from ..engine.raster_animation import generate_raster_frames
from .base import OutputProvider


@dataclass(frozen=True)
class RasterFormat:
    """Pillow encoder settings for one animated image format."""

    pillow_format: str
    save_options: Mapping[str, object] = field(default_factory=dict)
    min_frame_duration_ms: int = 1  # shorter delays are not honoured by viewers
    embeds_comment: bool = False


GIF_FORMAT = RasterFormat(
    "gif",
    {"optimize": False},
    min_frame_duration_ms=20,
    embeds_comment=True,
)
WEBP_FORMAT = RasterFormat(
    "webp",
    {"lossless": True, "quality": 80, "method": 4},
)


class RasterOutputProvider(OutputProvider[Image.Image]):
    """Renders every timeline snapshot and saves them as one animated image."""

    def __init__(self, path: str = "", raster_format: RasterFormat = GIF_FORMAT):
        super().__init__(path)
        self.raster_format = raster_format

    def frames(self, animator: Animator, max_frames: int | None = None) -> Iterator[Image.Image]:
        return generate_raster_frames(animator, max_frames)

    def encode(self, frames: Iterator[Image.Image], frame_duration: int, title: str = "") -> bytes:
        frame_list = list(frames)
        if not frame_list:
            return b""

        options = dict(self.raster_format.save_options)
        if title and self.raster_format.embeds_comment:
            options["comment"] = title.encode("utf-8")

        buffer = BytesIO()
        frame_list[0].save(
            buffer,
            format=self.raster_format.pillow_format,
            save_all=True,
            append_images=frame_list[1:],
            duration=max(1, frame_duration),
            loop=0,
            **options,
        )
        return buffer.getvalue()

    def playback_warning(self, frame_duration: int) -> str | None:
        minimum = self.raster_format.min_frame_duration_ms
        if frame_duration >= minimum:
            return None
        return (
            f"{self.raster_format.pillow_format.upper()} delay will be {frame_duration}ms, "
            f"but browsers clamp delays < {minimum}ms to ~100ms"
        )
