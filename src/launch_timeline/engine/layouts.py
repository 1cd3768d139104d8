"""Named projector layouts."""

from ..constants import (
    DENSITY_TRANSITION_DURATION,
    DENSITY_TRANSITION_START,
    FULL_CIRCLE_SPAN,
    HALF_ARC_SPAN,
)
from .projector import DensityProfile, ProjectorConfig

DEFAULT_LAYOUT_NAME = "full"

# Full circle: half a mission sweeps half a turn, off-window events are
# dropped and labels hang off a short connector line.
FULL_LAYOUT = ProjectorConfig(
    angular_span=FULL_CIRCLE_SPAN,
    density=DensityProfile(
        average_factor=1.0,
        past_factor=2.0,
        future_factor=2.0,
        transition_start_offset=DENSITY_TRANSITION_START,
        transition_duration_seconds=DENSITY_TRANSITION_DURATION,
    ),
    filter_to_view_window=True,
    node_radius=6.5,
    label_distance=18.0,
    connector_gap=7.0,
    split_label_words=True,
)

# Half arc: a quarter turn per half mission, labels right beside the node.
HALF_LAYOUT = ProjectorConfig(
    angular_span=HALF_ARC_SPAN,
    density=DensityProfile(
        average_factor=0.5,
        past_factor=2.0,
        future_factor=1.0,
        transition_start_offset=DENSITY_TRANSITION_START,
        transition_duration_seconds=DENSITY_TRANSITION_DURATION,
    ),
    filter_to_view_window=False,
    node_radius=6.0,
    label_distance=6.0,
    connector_gap=0.0,
)

LAYOUTS: dict[str, ProjectorConfig] = {
    "full": FULL_LAYOUT,
    "half": HALF_LAYOUT,
}


def supported_layout_names() -> tuple[str, ...]:
    """Return supported layout names in deterministic order."""
    return tuple(LAYOUTS.keys())


def resolve_layout(name: str, default: str | None = None) -> ProjectorConfig:
    """Look up a layout by name."""
    layout_name = name.lower() if name.lower() in LAYOUTS else default
    if layout_name is None:
        available = ", ".join(supported_layout_names())
        raise ValueError(f"Unknown layout '{name}'. Available: {available}")
    return LAYOUTS[layout_name]
