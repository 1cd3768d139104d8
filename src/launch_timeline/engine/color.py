"""RGBA color blending for event markers crossing "now"."""

import math
import re
from dataclasses import dataclass
from typing import Callable

_RGBA_PATTERN = re.compile(
    r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)"
)


@dataclass(frozen=True, slots=True)
class RgbaColor:
    """Color with integer channels and a float alpha in ``0..1``."""

    r: int
    g: int
    b: int
    a: float = 1.0

    @classmethod
    def from_tuple(cls, value: tuple[int, int, int, float]) -> "RgbaColor":
        r, g, b, a = value
        return cls(r, g, b, float(a))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """Pillow-style tuple with alpha scaled to 0..255."""
        return (self.r, self.g, self.b, int(round(self.a * 255)))

    def to_css(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a:.3f})"


@dataclass(frozen=True, slots=True)
class MarkerColors:
    """Colors of one event marker at a given instant."""

    outer: RgbaColor
    inner_dot: RgbaColor
    should_draw_inner_dot: bool


def parse_rgba(value: str) -> RgbaColor | None:
    """Parse ``rgb(...)``/``rgba(...)`` text, returning None when it doesn't match."""
    match = _RGBA_PATTERN.search(value)
    if not match:
        return None
    alpha = match.group(4)
    return RgbaColor(
        r=int(match.group(1)),
        g=int(match.group(2)),
        b=int(match.group(3)),
        a=float(alpha) if alpha is not None else 1.0,
    )


def ease_in_out_sine(t: float) -> float:
    clamped = max(0.0, min(1.0, t))
    return 0.5 * (1 - math.cos(math.pi * clamped))


def linear(t: float) -> float:
    return max(0.0, min(1.0, t))


def interpolate_color(
    start: RgbaColor,
    end: RgbaColor,
    progress: float,
    easing: Callable[[float], float] = linear,
) -> RgbaColor:
    """
    Blend two colors.

    Args:
        start: Color at progress 0
        end: Color at progress 1
        progress: Blend position, clamped to ``[0, 1]``
        easing: Curve applied to the clamped progress before blending

    Returns:
        The blended color; RGB channels are rounded, alpha is kept as float
    """
    t = easing(max(0.0, min(1.0, progress)))
    return RgbaColor(
        r=int(round(start.r + (end.r - start.r) * t)),
        g=int(round(start.g + (end.g - start.g) * t)),
        b=int(round(start.b + (end.b - start.b) * t)),
        a=start.a + (end.a - start.a) * t,
    )


def marker_colors(
    time_relative_to_now: float,
    *,
    future: RgbaColor,
    past_present: RgbaColor,
    inner_dot_start: RgbaColor,
    transition_seconds: float,
) -> MarkerColors:
    """Colors for a marker ``time_relative_to_now`` seconds away from now.

    The marker fades from ``future`` to ``past_present`` over a window of
    ``transition_seconds`` centered on the instant the event is reached.
    """
    half_window = transition_seconds / 2
    should_draw_inner_dot = time_relative_to_now <= half_window

    if transition_seconds > 0 and -half_window <= time_relative_to_now <= half_window:
        progress = (half_window - time_relative_to_now) / transition_seconds
        return MarkerColors(
            outer=interpolate_color(future, past_present, progress, ease_in_out_sine),
            inner_dot=interpolate_color(inner_dot_start, past_present, progress, ease_in_out_sine),
            should_draw_inner_dot=should_draw_inner_dot,
        )

    if time_relative_to_now > 0:
        return MarkerColors(future, inner_dot_start, should_draw_inner_dot)
    return MarkerColors(past_present, past_present, should_draw_inner_dot)
