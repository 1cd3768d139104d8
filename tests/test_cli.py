"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from launch_timeline.cli import app
from launch_timeline.profile import MissionProfile, dump_profile

runner = CliRunner()


def _flat(output: str) -> str:
    """Collapse rich's line wrapping so long paths do not split messages."""
    return " ".join(output.split())


def test_prints_default_timeline():
    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "LIFTOFF" in result.output
    assert "T - 00:05:00" in result.output


def test_unknown_layout_fails():
    result = runner.invoke(app, ["--layout", "spiral"])

    assert result.exit_code == 1
    assert "Unknown layout 'spiral'" in result.output


def test_countdown_override():
    result = runner.invoke(app, ["--countdown", "30"])

    assert result.exit_code == 0
    assert "T - 00:00:30" in result.output


def test_negative_countdown_fails():
    result = runner.invoke(app, ["--countdown=-5"])

    assert result.exit_code == 1
    assert "Countdown must not be negative" in result.output


def test_missing_profile_file_fails(tmp_path):
    result = runner.invoke(app, ["--profile", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "not found" in _flat(result.output)


def test_invalid_profile_file_fails(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"events": []}))

    result = runner.invoke(app, ["--profile", str(path)])

    assert result.exit_code == 1
    assert "Invalid profile" in _flat(result.output)


def test_undecodable_profile_file_fails(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b'{"events":[{"time":1,"name":"\xff\xfe"}]}')

    result = runner.invoke(app, ["--profile", str(path)])

    assert result.exit_code == 1
    assert "Invalid profile" in _flat(result.output)
    assert "Unexpected error" not in result.output


def test_profile_round_trip(tmp_path):
    source = tmp_path / "in.json"
    target = tmp_path / "out.json"
    profile = MissionProfile.default()
    profile.mission_name = "Transporter"
    dump_profile(profile, source)

    result = runner.invoke(
        app, ["--profile", str(source), "--save-profile", str(target), "--countdown", "10"]
    )

    assert result.exit_code == 0
    saved = json.loads(target.read_text())
    assert saved["mission_name"] == "Transporter"
    assert saved["countdown_start"] == 10


def test_renders_svg(tmp_path):
    out = tmp_path / "timeline.svg"

    result = runner.invoke(
        app, ["--output", str(out), "--duration", "1", "--fps", "5", "--action", "400:pause"]
    )

    assert result.exit_code == 0
    assert out.read_bytes().startswith(b"<?xml")


def test_renders_gif(tmp_path):
    out = tmp_path / "timeline.gif"

    result = runner.invoke(
        app, ["-o", str(out), "--duration", "1", "--fps", "4", "--layout", "half"]
    )

    assert result.exit_code == 0
    assert out.read_bytes().startswith(b"GIF89")


def test_fast_gif_warns_about_browser_delay(tmp_path):
    out = tmp_path / "fast.gif"

    result = runner.invoke(
        app, ["-o", str(out), "--duration", "0.1", "--fps", "60", "--layout", "half"]
    )

    assert result.exit_code == 0
    assert "browsers clamp delays < 20ms" in _flat(result.output)
    assert out.read_bytes().startswith(b"GIF89")


def test_zero_fps_fails(tmp_path):
    result = runner.invoke(app, ["-o", str(tmp_path / "t.svg"), "--fps", "0"])

    assert result.exit_code == 1
    assert "FPS must be positive" in _flat(result.output)


def test_unsupported_output_fails(tmp_path):
    result = runner.invoke(app, ["--output", str(tmp_path / "timeline.bmp")])

    assert result.exit_code == 1
    assert "Unsupported output format" in result.output


def test_malformed_action_fails(tmp_path):
    result = runner.invoke(
        app, ["--output", str(tmp_path / "timeline.svg"), "--action", "later:pause"]
    )

    assert result.exit_code == 1
    assert "not an integer" in result.output


def test_invalid_environment_fails():
    result = runner.invoke(app, [], env={"LAUNCH_TIMELINE_FPS": "fast"})

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
