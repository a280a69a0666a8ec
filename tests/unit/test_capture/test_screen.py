"""Tests for the ScreenCapture implementation."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import mss.exception
import numpy as np
import pytest

from colorant.capture.base import CaptureError
from colorant.capture.screen import ScreenCapture
from colorant.domain.models import CapturedFrame, CaptureRegion


@pytest.fixture
def region() -> CaptureRegion:
    return CaptureRegion(left=100, top=50, width=8, height=6)


def _frame(n: int) -> CapturedFrame:
    return CapturedFrame(image=np.zeros((6, 8, 3), dtype=np.uint8), frame_number=n)


def _fake_mss(width: int = 8, height: int = 6) -> MagicMock:
    """Patchable stand-in for ``mss.mss`` whose grabs return BGRA zeros."""
    sct = MagicMock()
    sct.__enter__.return_value = sct
    sct.grab.return_value = np.zeros((height, width, 4), dtype=np.uint8)
    return MagicMock(return_value=sct)


class TestScreenCaptureInit:
    def test_starts_paused(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        assert capture.is_paused is True
        assert capture.is_stopped is False
        assert capture.region == region

    def test_region_as_monitor(self, region: CaptureRegion) -> None:
        assert region.as_monitor() == {"left": 100, "top": 50, "width": 8, "height": 6}


class TestWithRegion:
    def test_rejects_empty_region(self) -> None:
        with pytest.raises(CaptureError, match="Invalid capture region"):
            ScreenCapture.with_region(0, 0, 0, 10)

    def test_wraps_grab_failure(self) -> None:
        fake = _fake_mss()
        fake.return_value.grab.side_effect = mss.exception.ScreenShotError("no display")
        with patch("colorant.capture.screen.mss.mss", fake):
            with pytest.raises(CaptureError, match="Failed to grab region"):
                ScreenCapture.with_region(0, 0, 8, 6)

    def test_produces_frames_when_resumed(self) -> None:
        with patch("colorant.capture.screen.mss.mss", _fake_mss()):
            capture = ScreenCapture.with_region(100, 50, 8, 6)
            try:
                assert capture.next_frame(timeout=0.05) is None
                capture.resume()
                frame = capture.next_frame(timeout=2.0)
            finally:
                capture.stop()
        assert frame is not None
        assert frame.image.shape == (6, 8, 3)
        assert frame.frame_number >= 1
        assert frame.region == CaptureRegion(left=100, top=50, width=8, height=6)


class TestFrameSlot:
    def test_next_frame_times_out(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        assert capture.next_frame(timeout=0.01) is None

    def test_keeps_only_latest_frame(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture.resume()
        capture._publish(_frame(1))
        capture._publish(_frame(2))
        assert capture.next_frame(timeout=0.01).frame_number == 2
        assert capture.next_frame(timeout=0.01) is None

    def test_pause_discards_pending_frame(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture.resume()
        capture._publish(_frame(1))
        capture.pause()
        assert capture.is_paused is True
        assert capture.next_frame(timeout=0.01) is None

    def test_frame_published_while_paused_is_dropped(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture.resume()
        capture.pause()
        capture._publish(_frame(7))
        capture.resume()
        assert capture.next_frame(timeout=0.0) is None

    def test_grab_started_before_pause_is_dropped(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture.resume()
        epoch = capture._epoch
        capture.pause()
        capture.resume()
        capture._publish(_frame(3), epoch)
        assert capture.next_frame(timeout=0.0) is None
        capture._publish(_frame(4), capture._epoch)
        assert capture.next_frame(timeout=0.0).frame_number == 4

    def test_resume_clears_slot(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture.resume()
        capture._publish(_frame(1))
        capture.resume()
        assert capture.next_frame(timeout=0.0) is None


class TestStop:
    def test_stop_is_idempotent(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture.stop()
        capture.stop()
        assert capture.is_stopped is True

    def test_no_frames_after_stop(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture._publish(_frame(1))
        capture.stop()
        assert capture.next_frame(timeout=0.01) is None

    def test_resume_after_stop_stays_paused(self, region: CaptureRegion) -> None:
        capture = ScreenCapture(region)
        capture.stop()
        capture.resume()
        assert capture.is_paused is True
