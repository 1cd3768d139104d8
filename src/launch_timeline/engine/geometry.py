"""Circle placement for the bottom-cropped timeline arc."""

import math
from dataclasses import dataclass

from ..constants import EXPOSED_ARC_DEGREES, VIEW_HEIGHT, VIEW_WIDTH


@dataclass(frozen=True, slots=True)
class GeometryDescriptor:
    """Circle the events travel along, in viewport pixels."""

    radius: float
    center_x: float
    center_y: float
    view_height: float
    view_width: float = VIEW_WIDTH


def geometry_for_viewport(
    width: float = VIEW_WIDTH,
    height: float = VIEW_HEIGHT,
    exposed_arc_degrees: float = EXPOSED_ARC_DEGREES,
) -> GeometryDescriptor:
    """
    Size a circle spanning the viewport width with only its top exposed.

    The center is pushed below the viewport so that the chord at
    ``y = height`` cuts off an arc of ``exposed_arc_degrees``.

    Args:
        width: Viewport width in pixels (non-positive falls back to the default)
        height: Viewport height in pixels (non-positive falls back to the default)
        exposed_arc_degrees: Arc angle visible above the bottom edge
    """
    effective_width = width if width > 0 else VIEW_WIDTH
    effective_height = height if height > 0 else VIEW_HEIGHT
    radius = effective_width / 2
    dist_center_to_chord = radius * math.cos(math.radians(exposed_arc_degrees) / 2)
    return GeometryDescriptor(
        radius=radius,
        center_x=effective_width / 2,
        center_y=effective_height + dist_center_to_chord,
        view_height=effective_height,
        view_width=effective_width,
    )
