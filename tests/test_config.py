"""Tests for environment settings."""

import pytest

from launch_timeline.config import Settings
from launch_timeline.errors import ConfigError


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings == Settings(layout="full", fps=20, log_level="WARNING", profile_path=None)


def test_values_are_normalized():
    settings = Settings.from_env(
        {
            "LAUNCH_TIMELINE_LAYOUT": " Half ",
            "LAUNCH_TIMELINE_FPS": "25",
            "LAUNCH_TIMELINE_LOG_LEVEL": "debug",
            "LAUNCH_TIMELINE_PROFILE": "mission.json",
        }
    )

    assert settings.layout == "half"
    assert settings.fps == 25
    assert settings.log_level == "DEBUG"
    assert settings.profile_path == "mission.json"


@pytest.mark.parametrize(
    "environ",
    [
        {"LAUNCH_TIMELINE_LAYOUT": "spiral"},
        {"LAUNCH_TIMELINE_FPS": "fast"},
        {"LAUNCH_TIMELINE_FPS": "0"},
        {"LAUNCH_TIMELINE_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_values_raise(environ):
    with pytest.raises(ConfigError):
        Settings.from_env(environ)
