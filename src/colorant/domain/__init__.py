"""Domain models for colorant.

This package contains the core data structures, enumerations, and value
objects used throughout the system. All models use Pydantic v2 for
validation.
"""

from colorant.domain.models import (
    Action,
    CaptureRegion,
    CapturedFrame,
    Centroid,
    CycleTrace,
    EngineConfig,
    HueWrap,
    ScanResult,
    derive_gains,
)

__all__ = [
    "Action",
    "CaptureRegion",
    "CapturedFrame",
    "Centroid",
    "CycleTrace",
    "EngineConfig",
    "HueWrap",
    "ScanResult",
    "derive_gains",
]
