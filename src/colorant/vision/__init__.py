"""Vision module for colorant.

Pure image-processing functions: HSV conversion and thresholded
centroid detection. Nothing here touches capture or output devices.

Public API:
    rgb_to_hsv -- Scalar half-range HSV conversion
    image_to_hsv -- Vectorized conversion for whole frames
    find_target -- Centroid of pixels inside an HSV window
    RegionDetector -- Detector bound to an EngineConfig
"""

from colorant.vision.color import image_to_hsv, rgb_to_hsv
from colorant.vision.detector import RegionDetector, find_target, hsv_mask, scan_frame

__all__ = [
    "RegionDetector",
    "find_target",
    "hsv_mask",
    "image_to_hsv",
    "rgb_to_hsv",
    "scan_frame",
]
