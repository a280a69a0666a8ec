"""Screen capture frame source using mss.

A daemon thread grabs the capture region as fast as it can (or at a
fixed poll interval) while resumed and keeps only the most recent
frame, so the engine never works on a stale backlog.
"""

from __future__ import annotations

import logging
import queue
import threading
from datetime import datetime

import cv2
import mss
import mss.exception
import numpy as np
from pydantic import ValidationError

from colorant.capture.base import CaptureError, FrameSource
from colorant.domain.models import CapturedFrame, CaptureRegion

logger = logging.getLogger(__name__)

# How often a paused producer re-checks its state (seconds)
PAUSE_POLL_INTERVAL = 0.05
# How long stop() waits for the producer thread to exit (seconds)
STOP_JOIN_TIMEOUT = 1.0


class ScreenCapture(FrameSource):
    """Grabs a screen region on a background thread."""

    def __init__(self, region: CaptureRegion, poll_interval: float = 0.0) -> None:
        super().__init__(region=region)
        self._poll_interval = poll_interval
        self._frames: queue.Queue[CapturedFrame] = queue.Queue(maxsize=1)
        self._slot_lock = threading.Lock()
        self._resumed = threading.Event()
        # Bumped on every pause; a grab started in an earlier epoch is stale
        self._epoch = 0
        self._stopping = threading.Event()
        self._stopped = False
        self._thread: threading.Thread | None = None

    @classmethod
    def with_region(
        cls,
        left: int,
        top: int,
        width: int,
        height: int,
        poll_interval: float = 0.0,
    ) -> ScreenCapture:
        """Create a paused, running capture for the given region.

        Raises:
            CaptureError: If the region is invalid or cannot be grabbed.
        """
        try:
            region = CaptureRegion(left=left, top=top, width=width, height=height)
        except ValidationError as e:
            raise CaptureError(f"Invalid capture region: {e}") from e

        try:
            with mss.mss() as sct:
                sct.grab(region.as_monitor())
        except mss.exception.ScreenShotError as e:
            raise CaptureError(f"Failed to grab region {region.as_monitor()}: {e}") from e

        capture = cls(region, poll_interval=poll_interval)
        capture.start()
        return capture

    @property
    def is_paused(self) -> bool:
        return not self._resumed.is_set()

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def start(self) -> None:
        """Start the producer thread (paused)."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="colorant-capture", daemon=True
        )
        self._thread.start()
        logger.info(
            "Screen capture started for %dx%d at (%d, %d)",
            self._region.width, self._region.height, self._region.left, self._region.top,
        )

    def pause(self) -> None:
        with self._slot_lock:
            self._resumed.clear()
            self._epoch += 1
            self._drain()

    def resume(self) -> None:
        if self._stopped:
            return
        with self._slot_lock:
            self._drain()
            self._resumed.set()

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._stopping.set()
        self._resumed.clear()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=STOP_JOIN_TIMEOUT)
            if self._thread.is_alive():
                logger.warning("Capture thread did not exit within %.1fs", STOP_JOIN_TIMEOUT)
        self._drain()
        logger.info("Screen capture stopped")

    def next_frame(self, timeout: float) -> CapturedFrame | None:
        if self._stopped:
            return None
        try:
            return self._frames.get(timeout=timeout)
        except queue.Empty:
            return None

    def _run(self) -> None:
        """Producer loop (runs on the capture thread)."""
        monitor = self._region.as_monitor()
        with mss.mss() as sct:
            while not self._stopping.is_set():
                if not self._resumed.wait(timeout=PAUSE_POLL_INTERVAL):
                    continue
                epoch = self._epoch
                try:
                    shot = sct.grab(monitor)
                except mss.exception.ScreenShotError:
                    logger.exception("Screen grab failed; capture thread exiting")
                    break
                self._publish(self._to_frame(np.asarray(shot)), epoch)
                if self._poll_interval > 0:
                    self._stopping.wait(self._poll_interval)

    def _to_frame(self, bgra: np.ndarray) -> CapturedFrame:
        self._frame_counter += 1
        return CapturedFrame(
            image=cv2.cvtColor(bgra, cv2.COLOR_BGRA2BGR),
            timestamp=datetime.now(),
            frame_number=self._frame_counter,
            source_device="screen",
            region=self._region,
        )

    def _publish(self, frame: CapturedFrame, epoch: int | None = None) -> None:
        """Replace whatever is in the single frame slot.

        Frames arriving while paused, or grabbed before the latest pause,
        are dropped.
        """
        with self._slot_lock:
            self._drain()
            stale = epoch is not None and epoch != self._epoch
            if self._resumed.is_set() and not stale:
                self._frames.put_nowait(frame)

    def _drain(self) -> None:
        try:
            while True:
                self._frames.get_nowait()
        except queue.Empty:
            pass
