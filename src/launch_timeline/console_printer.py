"""Console output for mission profiles and timeline snapshots."""

from rich.console import Console
from rich.table import Table

from .engine.orchestrator import TimelineSnapshot
from .engine.timer import format_clock
from .profile import MissionProfile


class TimelineConsolePrinter:
    """Prints mission data with rich formatting."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def display_profile(self, profile: MissionProfile) -> None:
        """Show the mission header and one table row per event."""
        self.console.print(
            f"\n[bold cyan]{profile.mission_name}[/bold cyan] [dim]({profile.vehicle})[/dim]"
        )
        self.console.print(
            f"Mission window: [bold]{profile.mission_duration:g}s[/bold]   "
            f"Countdown: [bold]{profile.countdown_start_seconds:g}s[/bold]"
        )

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Time", justify="right")
        table.add_column("Event")
        for index, event in enumerate(profile.events, start=1):
            clock = format_clock(event.timestamp_seconds)
            style = "green" if clock.is_positive else "yellow"
            table.add_row(str(index), f"[{style}]{clock}[/{style}]", event.name)
        self.console.print(table)

    def display_snapshot(self, snapshot: TimelineSnapshot) -> None:
        visible = snapshot.visible_nodes
        self.console.print(
            f"[bold]{snapshot.clock_display}[/bold]  "
            f"[dim]{snapshot.mode.value}, {len(visible)} of "
            f"{len(snapshot.projected_nodes)} events on screen[/dim]"
        )
