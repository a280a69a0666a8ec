"""Pointer output module for colorant.

Translates dispatcher decisions into pointer commands via pluggable
backends.

Public API:
    PointerOutput -- Abstract base class
    PointerOutputError -- Raised on delivery failure
    HttpPointerOutput -- HTTP backend for a pointer endpoint
"""

from colorant.output.base import PointerOutput, PointerOutputError

__all__ = ["PointerOutput", "PointerOutputError", "HttpPointerOutput"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "HttpPointerOutput":
        from colorant.output.http_backend import HttpPointerOutput
        return HttpPointerOutput
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
