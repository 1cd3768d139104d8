"""Base class for timeline output providers."""

import logging
from abc import ABC, abstractmethod
from typing import Generic, Iterator, TypeVar

from ..engine.animator import Animator

FrameT = TypeVar("FrameT")

logger = logging.getLogger(__name__)


class OutputProvider(ABC, Generic[FrameT]):
    """Turns an animator's countdown timeline into one file format.

    ``frames`` picks the payload the format is built from (raster images or
    timeline frames) and ``encode`` packs a sequence of them into bytes.
    """

    def __init__(self, path: str = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def frames(self, animator: Animator, max_frames: int | None = None) -> Iterator[FrameT]:
        """Frame payloads for this format, one per animator frame."""
        raise NotImplementedError

    @abstractmethod
    def encode(self, frames: Iterator[FrameT], frame_duration: int, title: str = "") -> bytes:
        """
        Encode frames into the output format.

        Args:
            frames: Iterator of frame payloads consumed by this provider
            frame_duration: Frame duration in milliseconds
            title: Mission title, embedded where the format has room for it

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def render(self, animator: Animator, max_frames: int | None = None) -> bytes:
        """Encode the animator's timeline, optionally cut to ``max_frames``."""
        logger.debug(
            "%s rendering %s at %dms per frame",
            type(self).__name__,
            animator.profile.title,
            animator.frame_duration,
        )
        return self.encode(
            self.frames(animator, max_frames),
            animator.frame_duration,
            title=animator.profile.title,
        )

    def playback_warning(self, frame_duration: int) -> str | None:
        """Describe how viewers will mistime ``frame_duration``, if they will."""
        return None

    def write(self, data: bytes) -> None:
        """
        Write encoded data to a file.

        Args:
            data: Encoded data to write

        Raises:
            ValueError: If the provider has no output path
        """
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)
        logger.debug("Wrote %d bytes to %s", len(data), self.path)
