"""Animator for generating timeline animations on a simulated clock."""

import math
from typing import Iterator, Sequence

from ..profile import MissionProfile
from .actions import ScheduledAction
from .geometry import GeometryDescriptor
from .orchestrator import TimelineOrchestrator, TimelineSnapshot
from .projector import ProjectorConfig
from .tick_source import ManualTickSource


class SimulatedClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, delta_ms: float) -> None:
        if delta_ms < 0:
            raise ValueError("Simulated clock cannot go backwards")
        self.now_ms += delta_ms


class Animator:
    """Generates timeline snapshots frame by frame."""

    def __init__(
        self,
        profile: MissionProfile,
        config: ProjectorConfig,
        geometry: GeometryDescriptor,
        fps: int,
        duration_seconds: float,
        actions: Sequence[ScheduledAction] = (),
        autostart: bool = True,
    ):
        """
        Initialize animator.

        Args:
            profile: Mission events and countdown
            config: Projector layout
            geometry: Canvas circle placement
            fps: Frames per second for the animation
            duration_seconds: Length of the animation
            actions: Timer operations applied when their time is reached
            autostart: Whether the countdown starts on the first frame
        """
        if fps <= 0:
            raise ValueError("FPS must be positive")
        if fps > 1000:
            raise ValueError("FPS must not exceed 1000 (frames are timed in whole milliseconds)")
        if duration_seconds <= 0:
            raise ValueError("Animation duration must be positive")
        self.profile = profile
        self.config = config
        self.geometry = geometry
        self.fps = fps
        self.duration_seconds = duration_seconds
        self.actions = tuple(sorted(actions, key=lambda action: action.at_ms))
        self.autostart = autostart
        self.frame_duration = 1000 // fps
        self.total_frames = max(1, math.ceil(duration_seconds * 1000 / self.frame_duration))

    def create_orchestrator(self) -> tuple[TimelineOrchestrator, SimulatedClock, ManualTickSource]:
        clock = SimulatedClock()
        tick_source = ManualTickSource()
        orchestrator = TimelineOrchestrator(
            self.profile,
            self.config,
            self.geometry,
            tick_source=tick_source,
            clock=clock,
        )
        return orchestrator, clock, tick_source

    def iter_state_timeline(
        self, max_frames: int | None = None
    ) -> Iterator[tuple[TimelineSnapshot, int]]:
        """Yield one snapshot per frame with elapsed time in milliseconds."""
        orchestrator, clock, tick_source = self.create_orchestrator()
        pending = list(self.actions)
        if self.autostart:
            orchestrator.start()

        frame_count = self.total_frames
        if max_frames is not None:
            frame_count = min(frame_count, max_frames)

        try:
            for frame_index in range(frame_count):
                elapsed_ms = frame_index * self.frame_duration
                clock.advance(elapsed_ms - clock.now_ms)
                while pending and pending[0].at_ms <= elapsed_ms:
                    pending.pop(0).apply(orchestrator)
                tick_source.fire()
                yield orchestrator.snapshot(), elapsed_ms
        finally:
            orchestrator.dispose()
