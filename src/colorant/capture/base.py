"""Abstract base class for frame sources.

A frame source produces fixed-size BGR frames from a capture region,
typically on its own thread, and hands the latest one to the engine on
request. The engine only relies on this interface, so screen capture
can be swapped for a file-based or synthetic source in tests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from colorant.domain.models import CapturedFrame, CaptureRegion

logger = logging.getLogger(__name__)


class FrameSource(ABC):
    """Abstract interface for a pausable frame producer.

    Sources start paused. While paused no frames are produced, and a
    stopped source never produces again.

    Example usage::

        with ScreenCapture.with_region(0, 0, 75, 75) as source:
            source.resume()
            frame = source.next_frame(timeout=0.1)
    """

    def __init__(self, region: CaptureRegion) -> None:
        self._region = region
        self._frame_counter: int = 0

    @property
    def region(self) -> CaptureRegion:
        return self._region

    @property
    @abstractmethod
    def is_paused(self) -> bool:
        """Whether frame production is currently paused."""
        ...

    @property
    @abstractmethod
    def is_stopped(self) -> bool:
        """Whether the source has been stopped for good."""
        ...

    @abstractmethod
    def pause(self) -> None:
        """Stop producing frames until ``resume()`` is called."""
        ...

    @abstractmethod
    def resume(self) -> None:
        """Resume producing frames."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop producing frames and release resources.

        Must be idempotent and must not raise.
        """
        ...

    @abstractmethod
    def next_frame(self, timeout: float) -> CapturedFrame | None:
        """Return the next frame, waiting at most ``timeout`` seconds.

        Returns:
            The frame, or None if none arrived in time. A timeout is
            not an error.
        """
        ...

    def __enter__(self) -> FrameSource:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.stop()


class CaptureError(Exception):
    """Raised when a frame source cannot be created or fails to grab."""
