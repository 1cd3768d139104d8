"""Countdown/elapsed timer anchored to T-0 with pause, resume and jumps."""

import enum
import logging
import math
import time
from dataclasses import dataclass, replace
from typing import Callable

from ..errors import InvalidInputError, TimerPreconditionError
from .tick_source import ManualTickSource, TickSource

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Milliseconds from a monotonic high resolution clock."""
    return time.perf_counter() * 1000


class TimerMode(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True, slots=True)
class TimerState:
    """Immutable view of the timer.

    ``anchor_epoch_ms`` is the clock reading that corresponds to T-0; while
    running, the offset is ``(now - anchor_epoch_ms) / 1000``.
    """

    mode: TimerMode
    anchor_epoch_ms: float | None
    pause_epoch_ms: float | None
    current_offset_seconds: float

    @property
    def is_started(self) -> bool:
        return self.mode is not TimerMode.IDLE

    @property
    def is_t_plus(self) -> bool:
        return self.current_offset_seconds >= 0


@dataclass(frozen=True, slots=True)
class ClockDisplay:
    sign: str
    time_string: str

    @property
    def is_positive(self) -> bool:
        return self.sign == "+"

    def __str__(self) -> str:
        return f"T {self.sign} {self.time_string}"


def format_clock(offset_seconds: float) -> ClockDisplay:
    """
    Format a timer offset as a signed ``HH:MM:SS`` clock.

    Negative offsets round their magnitude up and non-negative offsets round
    down, so the clock never reads T-00:00:00 while T-0 is still ahead and
    reads T+00:00:00 as soon as it is reached.
    """
    magnitude = abs(offset_seconds)
    if offset_seconds < 0:
        whole_seconds = math.ceil(magnitude)
    else:
        whole_seconds = math.floor(magnitude)

    hours, remainder = divmod(whole_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return ClockDisplay(
        sign="-" if offset_seconds < 0 else "+",
        time_string=f"{hours:02d}:{minutes:02d}:{seconds:02d}",
    )


class MonotonicCountdownTimer:
    """Idle/Running/Paused state machine producing the current T-0 offset.

    The timer owns its tick source: it is started when the timer starts
    running and stopped on pause, reset and dispose.
    """

    def __init__(
        self,
        initial_offset_seconds: float = 0.0,
        *,
        tick_source: TickSource | None = None,
        clock: Clock = monotonic_ms,
        on_tick: Callable[[TimerState], None] | None = None,
    ) -> None:
        """
        Initialize an idle timer.

        Args:
            initial_offset_seconds: Offset restored by ``reset`` (negative for T-minus)
            tick_source: Recurring callback driver; defaults to a manual source
            clock: Millisecond clock; must never go backwards
            on_tick: Called with the new state after every effective tick
        """
        self.tick_source = tick_source or ManualTickSource()
        self.clock = clock
        self.on_tick = on_tick
        self._initial_offset = _require_offset(initial_offset_seconds)
        self._disposed = False
        self._state = TimerState(
            mode=TimerMode.IDLE,
            anchor_epoch_ms=None,
            pause_epoch_ms=None,
            current_offset_seconds=self._initial_offset,
        )

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def mode(self) -> TimerMode:
        return self._state.mode

    @property
    def current_offset_seconds(self) -> float:
        return self._state.current_offset_seconds

    @property
    def initial_offset_seconds(self) -> float:
        return self._initial_offset

    def set_initial_offset(self, offset_seconds: float) -> None:
        """Change the offset the next ``reset`` returns to."""
        self._initial_offset = _require_offset(offset_seconds)

    def clock_display(self) -> ClockDisplay:
        return format_clock(self._state.current_offset_seconds)

    def start(self) -> None:
        """Start counting from the current offset (resumes when paused)."""
        mode = self._state.mode
        if mode is TimerMode.RUNNING:
            logger.warning("Timer is already running; start ignored")
            return
        if mode is TimerMode.PAUSED:
            self.resume()
            return

        previous = self._state
        now = self.clock()
        self._state = replace(
            self._state,
            mode=TimerMode.RUNNING,
            anchor_epoch_ms=now - self._state.current_offset_seconds * 1000,
            pause_epoch_ms=None,
        )
        self._start_ticking(previous)

    def pause(self) -> None:
        """Freeze the offset at its last computed value."""
        if self._state.mode is not TimerMode.RUNNING:
            logger.warning("Timer is %s; pause ignored", self._state.mode.value)
            return
        self.tick_source.stop()
        self._state = replace(self._state, mode=TimerMode.PAUSED, pause_epoch_ms=self.clock())

    def resume(self) -> None:
        """Continue ticking, shifting the anchor by the time spent paused."""
        if self._state.mode is not TimerMode.PAUSED:
            logger.warning("Timer is %s; resume ignored", self._state.mode.value)
            return

        previous = self._state
        anchor = self._state.anchor_epoch_ms
        pause_epoch = self._state.pause_epoch_ms
        if anchor is not None and pause_epoch is not None:
            anchor += self.clock() - pause_epoch
        self._state = replace(
            self._state, mode=TimerMode.RUNNING, anchor_epoch_ms=anchor, pause_epoch_ms=None
        )
        self._start_ticking(previous)

    def toggle(self) -> None:
        """Start when idle, pause when running, resume when paused."""
        if self._state.mode is TimerMode.RUNNING:
            self.pause()
        else:
            self.start()

    def jump(self, target_offset_seconds: float) -> None:
        """
        Move the clock to ``target_offset_seconds`` without changing mode.

        Raises:
            InvalidInputError: If the target is not a finite number
        """
        target = _require_offset(target_offset_seconds)
        mode = self._state.mode
        if mode is TimerMode.IDLE:
            self._state = replace(self._state, current_offset_seconds=target)
            return

        now = self.clock()
        self._state = replace(
            self._state,
            current_offset_seconds=target,
            anchor_epoch_ms=now - target * 1000,
            # A paused jump restarts the pause so resume only skips time after it.
            pause_epoch_ms=now if mode is TimerMode.PAUSED else None,
        )

    def reset(self) -> None:
        """Stop ticking and return to the initial countdown offset."""
        self.tick_source.stop()
        self._state = TimerState(
            mode=TimerMode.IDLE,
            anchor_epoch_ms=None,
            pause_epoch_ms=None,
            current_offset_seconds=self._initial_offset,
        )

    def tick(self) -> None:
        if self._state.mode is not TimerMode.RUNNING or self._state.anchor_epoch_ms is None:
            return
        offset = (self.clock() - self._state.anchor_epoch_ms) / 1000
        self._state = replace(self._state, current_offset_seconds=offset)
        if self.on_tick is not None:
            self.on_tick(self._state)

    def dispose(self) -> None:
        """Cancel the tick source for good; the timer can no longer run."""
        self.tick_source.stop()
        self._disposed = True
        if self._state.mode is TimerMode.RUNNING:
            self._state = replace(self._state, mode=TimerMode.PAUSED, pause_epoch_ms=self.clock())

    def _start_ticking(self, previous: TimerState) -> None:
        """Begin periodic ticks; if the tick source cannot start, restore ``previous``."""
        self.tick_source.stop()
        if self._disposed or self._state.anchor_epoch_ms is None:
            reason = "timer has been disposed" if self._disposed else "no T-0 anchor is set"
            logger.warning("Cannot start ticking: %s", reason)
            self._state = replace(
                self._state, mode=TimerMode.IDLE, anchor_epoch_ms=None, pause_epoch_ms=None
            )
            raise TimerPreconditionError(f"Cannot start timer: {reason}")
        try:
            self.tick_source.start(self.tick)
        except Exception:
            logger.warning("Tick source failed to start; timer stays %s", previous.mode.value)
            self._state = previous
            raise
        self.tick()


def _require_offset(value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"Timer offset must be a finite number, got {value!r}")
    try:
        offset = float(value)
    except OverflowError:
        raise InvalidInputError(f"Timer offset is out of range: {value!r}") from None
    if not math.isfinite(offset):
        raise InvalidInputError(f"Timer offset must be a finite number, got {value!r}")
    return offset
