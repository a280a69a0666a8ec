"""RGB to HSV conversion on the half-range hue scale.

Hue is reported in 0-180 (degrees halved), saturation and value in
0-255, the same layout OpenCV uses for 8-bit images. Hue is truncated
after halving rather than rounded, so results differ from
``cv2.cvtColor(..., cv2.COLOR_BGR2HSV)`` by at most one hue step; the
thresholds this package is tuned against were taken with this
truncating conversion. Saturation rounds half away from zero.

``rgb_to_hsv`` and ``image_to_hsv`` perform the same float64 operations
in the same order and must stay bit-for-bit identical.
"""

from __future__ import annotations

import math

import numpy as np

from colorant.domain.models import HueWrap

HUE_SCALE = 2.0


def rgb_to_hsv(
    r: int, g: int, b: int, hue_wrap: HueWrap = HueWrap.OFFSET
) -> tuple[int, int, int]:
    """Convert one 8-bit RGB pixel to ``(h, s, v)``."""
    r, g, b = int(r), int(g), int(b)
    mx = max(r, g, b)
    mn = min(r, g, b)
    delta = mx - mn

    # Ratios are scale invariant; raw byte values are used directly
    v = mx
    s = math.floor(delta * 255.0 / mx + 0.5) if mx > 0 else 0

    if delta == 0:
        h = 0.0
    elif mx == r:
        ratio = (g - b) / delta
        if hue_wrap is HueWrap.MODULO:
            ratio = ratio % 6.0
        h = 60.0 * ratio
    elif mx == g:
        h = 60.0 * ((b - r) / delta + 2.0)
    else:
        h = 60.0 * ((r - g) / delta + 4.0)
    if h < 0.0:
        h += 360.0

    return int(h / HUE_SCALE), s, v


def image_to_hsv(image: np.ndarray, hue_wrap: HueWrap = HueWrap.OFFSET) -> np.ndarray:
    """Convert an H x W x 3 BGR uint8 image to an H x W x 3 HSV uint8 image."""
    if image.ndim != 3 or image.shape[2] < 3:
        raise ValueError(f"Expected an H x W x 3 image, got shape {image.shape}")

    b = image[..., 0].astype(np.float64)
    g = image[..., 1].astype(np.float64)
    r = image[..., 2].astype(np.float64)

    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    delta = mx - mn

    safe_mx = np.where(mx > 0, mx, 1.0)
    s = np.where(mx > 0, np.floor(delta * 255.0 / safe_mx + 0.5), 0.0)

    safe_delta = np.where(delta > 0, delta, 1.0)
    red_ratio = (g - b) / safe_delta
    if hue_wrap is HueWrap.MODULO:
        red_ratio = np.mod(red_ratio, 6.0)
    h_red = 60.0 * red_ratio
    h_green = 60.0 * ((b - r) / safe_delta + 2.0)
    h_blue = 60.0 * ((r - g) / safe_delta + 4.0)

    # Ties resolve red, then green, then blue
    h = np.where(mx == r, h_red, np.where(mx == g, h_green, h_blue))
    h = np.where(delta == 0, 0.0, h)
    h = np.where(h < 0.0, h + 360.0, h)

    hsv = np.empty(image.shape[:2] + (3,), dtype=np.uint8)
    hsv[..., 0] = (h / HUE_SCALE).astype(np.uint8)
    hsv[..., 1] = s.astype(np.uint8)
    hsv[..., 2] = mx.astype(np.uint8)
    return hsv
