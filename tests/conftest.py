"""Shared test fixtures for the colorant test suite.

Provides synthetic frames, engine configurations, and mock frame
sources and pointer outputs.
"""

from __future__ import annotations

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from colorant.domain.models import CapturedFrame, EngineConfig


# Pure magenta in BGR; HSV (150, 255, 255), inside the default window
MAGENTA_BGR = (255, 0, 255)


def _make_frame(image: np.ndarray, frame_number: int = 1) -> CapturedFrame:
    return CapturedFrame(
        image=image,
        timestamp=datetime(2025, 1, 1, 12, 0, 0),
        frame_number=frame_number,
        source_device="test",
    )


def _paint_block(
    image: np.ndarray, x0: int, y0: int, x1: int, y1: int, bgr: tuple[int, int, int] = MAGENTA_BGR
) -> np.ndarray:
    """Paint the inclusive rectangle [x0, x1] x [y0, y1]."""
    image[y0 : y1 + 1, x0 : x1 + 1] = bgr
    return image


# ---------------------------------------------------------------------------
# Frame / Image Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def blank_image() -> np.ndarray:
    """A 10x10 black image."""
    return np.zeros((10, 10, 3), dtype=np.uint8)


@pytest.fixture
def target_image(blank_image: np.ndarray) -> np.ndarray:
    """A 10x10 image with a 6x6 magenta block spanning [3, 8] x [3, 8]."""
    return _paint_block(blank_image.copy(), 3, 3, 8, 8)


@pytest.fixture
def target_frame(target_image: np.ndarray) -> CapturedFrame:
    return _make_frame(target_image)


# ---------------------------------------------------------------------------
# Config Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def unit_config() -> EngineConfig:
    """A 10x10 FOV with unit gains and a magenta window."""
    return EngineConfig(
        x=0,
        y=0,
        x_fov=10,
        y_fov=10,
        move_speed=1.0,
        flick_speed=1.0,
        lower_hsv=(140, 120, 180),
        upper_hsv=(160, 255, 255),
        min_cluster=5,
    )


@pytest.fixture
def fov_config() -> EngineConfig:
    """The default 75x75 FOV with fixed gains."""
    return EngineConfig(move_speed=0.5, flick_speed=2.0)


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_frame_source(target_frame: CapturedFrame) -> MagicMock:
    """A mock FrameSource that always returns the target frame."""
    mock = MagicMock()
    mock.next_frame.return_value = target_frame
    mock.is_paused = True
    mock.is_stopped = False
    return mock


@pytest.fixture
def mock_pointer() -> AsyncMock:
    """A mock PointerOutput recording every call."""
    return AsyncMock()


@pytest.fixture
def frame_factory():
    """Build a CapturedFrame from an image."""
    return _make_frame


@pytest.fixture
def paint_block():
    """Paint an inclusive rectangle of an image (magenta by default)."""
    return _paint_block
