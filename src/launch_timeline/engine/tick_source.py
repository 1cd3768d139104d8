"""Periodic tick sources that drive the countdown timer."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable

from ..constants import TICK_INTERVAL_MS

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TickSource(ABC):
    """A cancellable recurring callback.

    At most one callback is registered at a time; ``start`` replaces any
    previous registration and ``stop`` must leave nothing scheduled.
    """

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def is_active(self) -> bool:
        raise NotImplementedError


class ManualTickSource(TickSource):
    """Tick source fired explicitly by the caller (render loops, tests)."""

    def __init__(self) -> None:
        self._callback: TickCallback | None = None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def fire(self) -> bool:
        """Invoke the registered callback. Returns False when stopped."""
        if self._callback is None:
            return False
        self._callback()
        return True


class AsyncioTickSource(TickSource):
    """Tick source scheduled on an asyncio event loop with ``call_later``."""

    def __init__(
        self,
        interval_ms: float = TICK_INTERVAL_MS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval = interval_ms / 1000
        self._loop = loop
        self._callback: TickCallback | None = None
        self._handle: asyncio.TimerHandle | None = None

    def start(self, callback: TickCallback) -> None:
        """
        Schedule ``callback`` every interval.

        Raises:
            RuntimeError: If no loop was given and none is running
        """
        loop = self._loop or asyncio.get_running_loop()
        self.stop()
        self._callback = callback
        self._handle = loop.call_later(self.interval, self._fire)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    @property
    def is_active(self) -> bool:
        return self._handle is not None

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        # Reschedule before running so a callback that stops us wins.
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.interval, self._fire)
        try:
            callback()
        except Exception:
            logger.exception("Tick callback failed; stopping tick source")
            self.stop()
            raise
