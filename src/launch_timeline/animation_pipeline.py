"""Shared animation orchestration used by CLI and web app entry points."""

import logging
from typing import Any, Sequence

from .constants import VIEW_HEIGHT, VIEW_WIDTH
from .engine.actions import ScheduledAction
from .engine.animator import Animator
from .engine.geometry import geometry_for_viewport
from .engine.projector import ProjectorConfig
from .output import resolve_output_provider
from .output.base import OutputProvider
from .profile import MissionProfile

logger = logging.getLogger(__name__)


def encode_animation(
    profile: MissionProfile,
    output_path: str,
    *,
    config: ProjectorConfig,
    fps: int,
    duration_seconds: float,
    max_frames: int | None = None,
    actions: Sequence[ScheduledAction] = (),
    width: int = VIEW_WIDTH,
    height: int = VIEW_HEIGHT,
    provider: OutputProvider[Any] | None = None,
) -> bytes:
    """Encode animation bytes for the given profile and output path."""
    target_provider = provider or resolve_output_provider(output_path)
    animator = Animator(
        profile,
        config,
        geometry_for_viewport(width, height),
        fps=fps,
        duration_seconds=duration_seconds,
        actions=actions,
    )
    logger.info(
        "Encoding %d frames at %d fps to %s (%d actions)",
        animator.total_frames if max_frames is None else min(max_frames, animator.total_frames),
        fps,
        output_path,
        len(animator.actions),
    )
    return target_provider.render(animator, max_frames)
