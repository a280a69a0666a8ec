"""Color-window region detection.

Classifies every pixel of a frame against an inclusive HSV window and
reduces the matches to a single centroid.
"""

from __future__ import annotations

import logging

import numpy as np

from colorant.domain.models import Centroid, EngineConfig, HsvTriple, HueWrap, ScanResult
from colorant.vision.color import image_to_hsv

logger = logging.getLogger(__name__)


def hsv_mask(
    image: np.ndarray,
    lower_hsv: HsvTriple,
    upper_hsv: HsvTriple,
    hue_wrap: HueWrap = HueWrap.OFFSET,
) -> np.ndarray:
    """Boolean H x W mask of pixels whose HSV lies inside the window."""
    hsv = image_to_hsv(image, hue_wrap)
    lower = np.asarray(lower_hsv, dtype=np.uint8)
    upper = np.asarray(upper_hsv, dtype=np.uint8)
    return np.all((hsv >= lower) & (hsv <= upper), axis=-1)


def scan_frame(
    image: np.ndarray,
    lower_hsv: HsvTriple,
    upper_hsv: HsvTriple,
    min_cluster: int = 0,
    hue_wrap: HueWrap = HueWrap.OFFSET,
) -> ScanResult:
    """Scan the full frame and return the centroid plus the match count.

    The centroid is the integer-truncated mean position of all matching
    pixels, reported only when the match count is strictly greater than
    ``min_cluster``.
    """
    mask = hsv_mask(image, lower_hsv, upper_hsv, hue_wrap)
    ys, xs = np.nonzero(mask)
    count = int(xs.size)
    if count == 0 or count <= min_cluster:
        return ScanResult(centroid=None, matched_pixels=count)

    sum_x = int(xs.sum(dtype=np.int64))
    sum_y = int(ys.sum(dtype=np.int64))
    return ScanResult(
        centroid=Centroid(x=sum_x // count, y=sum_y // count),
        matched_pixels=count,
    )


def find_target(
    image: np.ndarray,
    lower_hsv: HsvTriple,
    upper_hsv: HsvTriple,
    min_cluster: int = 0,
    hue_wrap: HueWrap = HueWrap.OFFSET,
) -> Centroid | None:
    """Return the centroid of the matching pixels, or None if there is no target."""
    return scan_frame(image, lower_hsv, upper_hsv, min_cluster, hue_wrap).centroid


class RegionDetector:
    """Binds an HSV window and noise threshold from an EngineConfig."""

    def __init__(self, config: EngineConfig) -> None:
        self._lower = config.lower_hsv
        self._upper = config.upper_hsv
        self._min_cluster = config.min_cluster
        self._hue_wrap = config.hue_wrap

    def scan(self, image: np.ndarray) -> ScanResult:
        result = scan_frame(image, self._lower, self._upper, self._min_cluster, self._hue_wrap)
        if result.centroid is None and result.matched_pixels:
            logger.debug(
                "Rejected cluster of %d pixels (min_cluster=%d)",
                result.matched_pixels, self._min_cluster,
            )
        return result

    def detect(self, image: np.ndarray) -> Centroid | None:
        return self.scan(image).centroid
