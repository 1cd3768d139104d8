"""Rendering configuration shared by the raster and SVG outputs."""

from dataclasses import dataclass

from ..constants import ARC_COLOR, BACKGROUND_COLOR, CLOCK_COLOR
from .color import RgbaColor


@dataclass(frozen=True)
class RenderContext:
    background_color: tuple[int, int, int]
    arc_color: RgbaColor
    clock_color: tuple[int, int, int]
    label_color: tuple[int, int, int]
    arc_width: int = 2
    label_font_size: int = 12
    clock_font_size: int = 28
    clock_margin: int = 8
    font_family: str = "Aileron, sans-serif"

    @classmethod
    def darkmode(cls) -> "RenderContext":
        return cls(
            background_color=BACKGROUND_COLOR,
            arc_color=RgbaColor.from_tuple(ARC_COLOR),
            clock_color=CLOCK_COLOR,
            label_color=(255, 255, 255),
        )
