"""Timer operations scheduled at fixed points of an exported animation."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, get_args

if TYPE_CHECKING:
    from .orchestrator import TimelineOrchestrator

Operation = Literal["start", "pause", "resume", "toggle", "jump", "reset"]
OPERATIONS: tuple[str, ...] = get_args(Operation)


@dataclass(frozen=True, slots=True)
class ScheduledAction:
    """Represents one timer operation at an animation time."""
    at_ms: int
    operation: Operation
    target: float | None = None

    def __repr__(self) -> str:
        suffix = f" {self.target:g}" if self.target is not None else ""
        return f"ScheduledAction({self.operation.upper()}{suffix} @{self.at_ms}ms)"

    def apply(self, orchestrator: "TimelineOrchestrator") -> None:
        if self.operation == "jump":
            orchestrator.jump(self.target)  # type: ignore[arg-type]
        else:
            getattr(orchestrator, self.operation)()


def parse_action(text: str) -> ScheduledAction:
    """
    Parse ``MS:OPERATION[:TARGET]``, e.g. ``5000:pause`` or ``8000:jump:120``.

    Raises:
        ValueError: If the text is malformed
    """
    parts = text.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Action '{text}' must look like MS:OPERATION[:TARGET]")

    raw_time, operation = parts[0], parts[1].lower()
    try:
        at_ms = int(raw_time)
    except ValueError:
        raise ValueError(f"Action time '{raw_time}' is not an integer millisecond value") from None
    if at_ms < 0:
        raise ValueError(f"Action time must not be negative: {at_ms}")
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown operation '{operation}'. Available: {', '.join(OPERATIONS)}")

    target = None
    if operation == "jump":
        if len(parts) != 3:
            raise ValueError("A jump action needs a target offset, e.g. 8000:jump:120")
        try:
            target = float(parts[2])
        except ValueError:
            raise ValueError(f"Jump target '{parts[2]}' is not a number") from None
    elif len(parts) == 3:
        raise ValueError(f"Operation '{operation}' takes no target")

    return ScheduledAction(at_ms=at_ms, operation=operation, target=target)  # type: ignore[arg-type]
