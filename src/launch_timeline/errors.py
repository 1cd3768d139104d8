"""Exception hierarchy for rejected timeline operations."""


class TimelineError(Exception):
    """Base exception for timeline engine errors.

    Every operation that raises one of these leaves the engine state exactly
    as it was before the call.
    """
    pass


class InvalidInputError(TimelineError, ValueError):
    """Raised when an operation receives an unusable argument."""
    pass


class ProfileError(InvalidInputError):
    """Raised when mission profile data is malformed."""
    pass


class ConfigError(TimelineError, ValueError):
    """Raised when settings from the environment are invalid."""
    pass


class InvariantViolationError(TimelineError):
    """Raised when an operation would break a timeline invariant."""
    pass


class EventFloorError(InvariantViolationError):
    """Raised when removing an event would leave the timeline empty."""
    pass


class TimerPreconditionError(TimelineError):
    """Raised when the timer cannot tick because it has no anchor epoch."""
    pass


__all__ = [
    "TimelineError",
    "InvalidInputError",
    "ProfileError",
    "ConfigError",
    "InvariantViolationError",
    "EventFloorError",
    "TimerPreconditionError",
]
