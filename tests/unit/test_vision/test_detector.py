"""Tests for HSV-window region detection."""

from __future__ import annotations

import numpy as np
import pytest

from colorant.domain.models import Centroid, EngineConfig, HueWrap
from colorant.vision.detector import RegionDetector, find_target, hsv_mask, scan_frame

MAGENTA_WINDOW = ((140, 120, 180), (160, 255, 255))


class TestFindTarget:
    def test_no_matching_pixels(self, blank_image: np.ndarray) -> None:
        assert find_target(blank_image, *MAGENTA_WINDOW) is None

    def test_centered_block(self, target_image: np.ndarray) -> None:
        assert find_target(target_image, *MAGENTA_WINDOW, min_cluster=5) == Centroid(x=5, y=5)

    def test_cluster_at_threshold_is_rejected(self, blank_image: np.ndarray, paint_block) -> None:
        image = paint_block(blank_image, 0, 0, 2, 1)  # 6 pixels
        assert find_target(image, *MAGENTA_WINDOW, min_cluster=6) is None

    def test_cluster_above_threshold_is_accepted(self, blank_image: np.ndarray, paint_block) -> None:
        image = paint_block(blank_image, 0, 0, 2, 1)  # 6 pixels
        assert find_target(image, *MAGENTA_WINDOW, min_cluster=5) == Centroid(x=1, y=0)

    def test_single_pixel_with_default_threshold(self, blank_image: np.ndarray, paint_block) -> None:
        image = paint_block(blank_image, 7, 2, 7, 2)
        assert find_target(image, *MAGENTA_WINDOW) == Centroid(x=7, y=2)

    @pytest.mark.parametrize(
        "rect",
        [(0, 0, 0, 0), (2, 3, 9, 4), (5, 10, 18, 27), (1, 1, 2, 2), (0, 0, 19, 29)],
    )
    def test_rectangle_centroid_is_truncated_center(self, paint_block, rect) -> None:
        x0, y0, x1, y1 = rect
        image = paint_block(np.zeros((30, 20, 3), dtype=np.uint8), x0, y0, x1, y1)
        assert find_target(image, *MAGENTA_WINDOW) == Centroid(x=(x0 + x1) // 2, y=(y0 + y1) // 2)

    def test_mean_of_two_blobs(self, paint_block) -> None:
        image = np.zeros((10, 20, 3), dtype=np.uint8)
        paint_block(image, 0, 0, 0, 0)
        paint_block(image, 19, 9, 19, 9)
        assert find_target(image, *MAGENTA_WINDOW) == Centroid(x=9, y=4)

    def test_inverted_window_never_matches(self, target_image: np.ndarray) -> None:
        assert find_target(target_image, (160, 255, 255), (140, 120, 180)) is None


class TestHsvMask:
    def test_bounds_are_inclusive(self) -> None:
        image = np.zeros((1, 1, 3), dtype=np.uint8)
        image[0, 0] = (255, 0, 255)  # HSV (150, 255, 255)
        assert hsv_mask(image, (150, 255, 255), (150, 255, 255))[0, 0]

    def test_every_component_must_match(self) -> None:
        image = np.zeros((1, 1, 3), dtype=np.uint8)
        image[0, 0] = (255, 0, 255)
        assert not hsv_mask(image, (140, 120, 180), (160, 254, 255))[0, 0]

    def test_mask_shape(self, target_image: np.ndarray) -> None:
        mask = hsv_mask(target_image, *MAGENTA_WINDOW)
        assert mask.shape == (10, 10)
        assert mask.sum() == 36


class TestScanFrame:
    def test_reports_pixel_count(self, target_image: np.ndarray) -> None:
        result = scan_frame(target_image, *MAGENTA_WINDOW)
        assert result.matched_pixels == 36
        assert result.centroid == Centroid(x=5, y=5)

    def test_rejected_cluster_still_reports_count(self, target_image: np.ndarray) -> None:
        result = scan_frame(target_image, *MAGENTA_WINDOW, min_cluster=36)
        assert result.centroid is None
        assert result.matched_pixels == 36


class TestRegionDetector:
    def test_uses_config_window(self, unit_config: EngineConfig, target_image: np.ndarray) -> None:
        detector = RegionDetector(unit_config)
        assert detector.detect(target_image) == Centroid(x=5, y=5)

    def test_uses_config_min_cluster(self, target_image: np.ndarray) -> None:
        config = EngineConfig(
            x_fov=10, y_fov=10, lower_hsv=MAGENTA_WINDOW[0], upper_hsv=MAGENTA_WINDOW[1],
            min_cluster=100,
        )
        assert RegionDetector(config).detect(target_image) is None

    def test_hue_wrap_policy_is_passed_through(self, target_image: np.ndarray) -> None:
        config = EngineConfig(
            x_fov=10, y_fov=10, lower_hsv=MAGENTA_WINDOW[0], upper_hsv=MAGENTA_WINDOW[1],
            hue_wrap=HueWrap.MODULO,
        )
        assert RegionDetector(config).scan(target_image).matched_pixels == 36
