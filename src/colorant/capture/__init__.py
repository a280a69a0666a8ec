"""Frame capture module for colorant.

Provides the frame source interface and a screen-region implementation.
The abstract base class allows alternative sources (e.g., synthetic
frames in tests) without changing the engine.

Public API:
    FrameSource -- Abstract base class
    CaptureError -- Raised when a source cannot be created
    ScreenCapture -- mss screen-region implementation
"""

from colorant.capture.base import CaptureError, FrameSource

__all__ = ["FrameSource", "CaptureError", "ScreenCapture"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "ScreenCapture":
        from colorant.capture.screen import ScreenCapture
        return ScreenCapture
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
