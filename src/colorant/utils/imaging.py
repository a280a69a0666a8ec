"""Image utilities for colorant diagnostics.

Used by the ``capture-test`` command to show what the detector saw.
"""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from colorant.domain.models import Centroid

logger = logging.getLogger(__name__)

CENTER_COLOR = (255, 255, 255)  # BGR
TARGET_COLOR = (0, 255, 0)


def annotate_target(image: np.ndarray, centroid: Centroid | None) -> np.ndarray:
    """Return a copy of a BGR frame with the center and the centroid marked."""
    annotated = image.copy()
    h, w = annotated.shape[:2]
    cv2.drawMarker(
        annotated, (w // 2, h // 2), CENTER_COLOR,
        markerType=cv2.MARKER_CROSS, markerSize=max(3, min(w, h) // 8), thickness=1,
    )
    if centroid is not None:
        cv2.circle(annotated, (centroid.x, centroid.y), max(2, min(w, h) // 20), TARGET_COLOR, 1)
    return annotated


def mask_to_image(mask: np.ndarray) -> np.ndarray:
    """Turn a boolean match mask into a BGR image (white = match)."""
    gray = mask.astype(np.uint8) * 255
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def save_debug_image(
    image: np.ndarray, mask: np.ndarray, centroid: Centroid | None, path: Path
) -> Path:
    """Write the annotated frame and its mask side by side as one PNG."""
    panel = np.hstack([annotate_target(image, centroid), mask_to_image(mask)])
    # Frames are tiny; scale up so they are readable
    scale = max(1, 300 // max(panel.shape[0], 1))
    if scale > 1:
        panel = cv2.resize(panel, None, fx=scale, fy=scale, interpolation=cv2.INTER_NEAREST)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), panel):
        raise ValueError(f"Failed to write image to {path}")
    logger.info("Saved debug image to %s", path)
    return path
