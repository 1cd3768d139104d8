"""Settings read from the environment (and a ``.env`` file at entry points)."""

import os
from dataclasses import dataclass
from typing import Mapping

from .constants import DEFAULT_FPS
from .engine.layouts import DEFAULT_LAYOUT_NAME, supported_layout_names
from .errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_LAYOUT = "LAUNCH_TIMELINE_LAYOUT"
ENV_FPS = "LAUNCH_TIMELINE_FPS"
ENV_LOG_LEVEL = "LAUNCH_TIMELINE_LOG_LEVEL"
ENV_PROFILE = "LAUNCH_TIMELINE_PROFILE"


@dataclass(frozen=True)
class Settings:
    layout: str = DEFAULT_LAYOUT_NAME
    fps: int = DEFAULT_FPS
    log_level: str = "WARNING"
    profile_path: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Variables to read; defaults to ``os.environ``

        Raises:
            ConfigError: If a variable holds an unusable value
        """
        env = os.environ if environ is None else environ

        layout = env.get(ENV_LAYOUT, DEFAULT_LAYOUT_NAME).strip().lower()
        if layout not in supported_layout_names():
            available = ", ".join(supported_layout_names())
            raise ConfigError(f"{ENV_LAYOUT}='{layout}' is not a layout. Available: {available}")

        raw_fps = env.get(ENV_FPS, str(DEFAULT_FPS)).strip()
        try:
            fps = int(raw_fps)
        except ValueError:
            raise ConfigError(f"{ENV_FPS}='{raw_fps}' is not an integer") from None
        if fps <= 0:
            raise ConfigError(f"{ENV_FPS} must be positive, got {fps}")

        log_level = env.get(ENV_LOG_LEVEL, "WARNING").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"{ENV_LOG_LEVEL}='{log_level}' is not one of {', '.join(LOG_LEVELS)}"
            )

        profile_path = env.get(ENV_PROFILE, "").strip() or None
        return cls(layout=layout, fps=fps, log_level=log_level, profile_path=profile_path)
