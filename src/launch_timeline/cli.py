"""CLI interface for launch-timeline."""

import dataclasses
import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .animation_pipeline import encode_animation
from .config import LOG_LEVELS, Settings
from .console_printer import TimelineConsolePrinter
from .constants import DEFAULT_ANIMATION_SECONDS, VIEW_HEIGHT, VIEW_WIDTH
from .engine.actions import ScheduledAction, parse_action
from .engine.geometry import geometry_for_viewport
from .engine.layouts import resolve_layout, supported_layout_names
from .engine.orchestrator import TimelineOrchestrator
from .engine.projector import ProjectorConfig
from .errors import ConfigError, ProfileError, TimelineError
from .output import resolve_output_provider, supported_output_formats
from .profile import MissionProfile, dump_profile, load_profile

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def main(
    profile_path: str = typer.Option(
        None,
        "--profile",
        "-p",
        help="Load the mission profile from a JSON file (defaults to the built-in Falcon 9 profile)",
    ),
    save_profile: str = typer.Option(
        None,
        "--save-profile",
        help="Save the effective mission profile to a JSON file",
    ),
    out: str = typer.Option(
        None,
        "--output",
        "-out",
        "-o",
        help=f"Render an animated timeline ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    layout: str = typer.Option(
        None,
        "--layout",
        "-l",
        help=f"Timeline layout ({', '.join(supported_layout_names())})",
    ),
    fps: int = typer.Option(
        None,
        "--fps",
        help="Frames per second for the animation",
    ),
    duration: float = typer.Option(
        DEFAULT_ANIMATION_SECONDS,
        "--duration",
        "-d",
        help="Length of the animation in seconds",
    ),
    countdown: float = typer.Option(
        None,
        "--countdown",
        help="Override the countdown start in seconds (0 starts at T-0)",
    ),
    action_specs: list[str] = typer.Option(
        None,
        "--action",
        "-a",
        help="Timer operation during the animation as MS:OP[:TARGET], e.g. 5000:pause",
    ),
    width: int = typer.Option(VIEW_WIDTH, "--width", help="Viewport width in pixels"),
    height: int = typer.Option(VIEW_HEIGHT, "--height", help="Viewport height in pixels"),
    max_frames: int | None = typer.Option(
        None,
        "--max-frame",
        help="Maximum number of frames to generate",
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        help=f"Logging level ({', '.join(LOG_LEVELS)})",
    ),
) -> None:
    """
    Show a launch countdown timeline and optionally render it as an animation.

    Examples:
      # Print the default Falcon 9 timeline
      launch-timeline

      # Render 20 seconds of a custom profile, pausing after 5 seconds
      launch-timeline -p mission.json -o timeline.svg -d 20 -a 5000:pause -a 8000:resume
    """
    try:
        settings = _load_settings()
        _configure_logging(log_level or settings.log_level)

        profile = _load_mission_profile(profile_path or settings.profile_path)
        if countdown is not None:
            profile = _override_countdown(profile, countdown)
        config = _resolve_layout(layout or settings.layout)

        _display_timeline(profile, config, width, height)

        if save_profile:
            _save_profile_to_file(profile, save_profile)

        if out:
            _generate_output(
                profile,
                out,
                config,
                fps=fps if fps is not None else settings.fps,
                duration=duration,
                actions=_parse_actions(action_specs or []),
                width=width,
                height=height,
                max_frames=max_frames,
            )

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigError as e:
        raise CLIError(f"Invalid configuration: {e}")


def _configure_logging(level: str) -> None:
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise CLIError(f"Unknown log level '{level}'. Choose from: {', '.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=level_name,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_mission_profile(file_path: str | None) -> MissionProfile:
    """Load a mission profile from a JSON file, or the default one."""
    if not file_path:
        return MissionProfile.default()
    console.print(f"[bold blue]Loading profile from {file_path}...[/bold blue]")
    try:
        return load_profile(file_path)
    except FileNotFoundError:
        raise CLIError(f"File '{file_path}' not found")
    except ProfileError as e:
        raise CLIError(f"Invalid profile '{file_path}': {e}")


def _override_countdown(profile: MissionProfile, countdown: float) -> MissionProfile:
    if countdown < 0:
        raise CLIError(f"Countdown must not be negative, got {countdown:g}")
    return dataclasses.replace(profile, countdown_start_seconds=countdown)


def _save_profile_to_file(profile: MissionProfile, file_path: str) -> None:
    """Save a mission profile to a JSON file."""
    try:
        dump_profile(profile, file_path)
        console.print(f"\n[green]✓[/green] Profile saved to {file_path}")
    except IOError as e:
        raise CLIError(f"Failed to save file '{file_path}': {e}")


def _resolve_layout(layout_name: str) -> ProjectorConfig:
    try:
        return resolve_layout(layout_name)
    except ValueError as exc:
        raise CLIError(str(exc))


def _parse_actions(specs: list[str]) -> list[ScheduledAction]:
    try:
        return [parse_action(spec) for spec in specs]
    except ValueError as exc:
        raise CLIError(str(exc))


def _display_timeline(
    profile: MissionProfile, config: ProjectorConfig, width: int, height: int
) -> None:
    printer = TimelineConsolePrinter(console)
    printer.display_profile(profile)
    orchestrator = TimelineOrchestrator(profile, config, geometry_for_viewport(width, height))
    try:
        printer.display_snapshot(orchestrator.snapshot())
    finally:
        orchestrator.dispose()


def _generate_output(
    profile: MissionProfile,
    output_path: str,
    config: ProjectorConfig,
    *,
    fps: int,
    duration: float,
    actions: list[ScheduledAction],
    width: int,
    height: int,
    max_frames: int | None,
) -> None:
    """Generate animation in the format specified by output_path."""
    try:
        provider = resolve_output_provider(output_path)
    except ValueError as e:
        raise CLIError(str(e))

    warning = provider.playback_warning(1000 // fps) if fps > 0 else None
    if warning:
        console.print(f"[yellow]Warning:[/yellow] FPS {fps} may not display correctly ({warning})")

    ext = Path(output_path).suffix[1:].upper()
    console.print(f"\n[bold blue]Generating {ext} animation...[/bold blue]")

    try:
        encoded = encode_animation(
            profile,
            output_path,
            config=config,
            fps=fps,
            duration_seconds=duration,
            max_frames=max_frames,
            actions=actions,
            width=width,
            height=height,
            provider=provider,
        )
    except (TimelineError, ValueError) as e:
        raise CLIError(f"Failed to generate output: {e}")

    console.print(f"[bold blue]Saving to {output_path}...[/bold blue]")
    try:
        provider.write(encoded)
    except IOError as e:
        raise CLIError(f"Failed to save file '{output_path}': {e}")
    console.print(f"[green]✓[/green] {ext} saved to {output_path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
