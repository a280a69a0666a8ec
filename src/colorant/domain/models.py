"""Core domain models for the colorant system.

These models represent the data flowing through one targeting cycle:
the engine configuration, captured frames from the screen grabber,
detected centroids, and the per-cycle trace handed to observers.
"""

from __future__ import annotations

import enum
import logging
from datetime import datetime

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

# Empirical curve fits calibrating pointer units to in-game sensitivity
FLICK_GAIN_COEFFICIENT = 1.07437623
FLICK_GAIN_EXPONENT = -0.9936827126
MOVE_GAIN_DIVISOR = 10.0

HsvTriple = tuple[int, int, int]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Action(str, enum.Enum):
    """Output action requested for a cycle."""

    MOVE = "move"
    CLICK = "click"
    FLICK = "flick"


class HueWrap(str, enum.Enum):
    """How the red-dominant hue branch is brought into [0, 360).

    Two revisions of the reference conversion disagree here:

    - OFFSET: scale the ratio, then add 360 when the result is negative.
    - MODULO: floor-modulo the ratio by 6 before scaling.

    They agree everywhere except hue values within one step of the 0/360
    seam, where float rounding can land them on different sides.
    """

    OFFSET = "offset"
    MODULO = "modulo"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def derive_gains(ingame_sensitivity: float) -> tuple[float, float]:
    """Return ``(move_speed, flick_speed)`` for an in-game sensitivity."""
    flick_speed = FLICK_GAIN_COEFFICIENT * ingame_sensitivity ** FLICK_GAIN_EXPONENT
    move_speed = 1.0 / (MOVE_GAIN_DIVISOR * ingame_sensitivity)
    return move_speed, flick_speed


def _check_triple(triple: HsvTriple, name: str) -> HsvTriple:
    h, s, v = triple
    if not 0 <= h <= 180:
        raise ValueError(f"{name} hue must be within 0-180, got {h}")
    for label, value in (("saturation", s), ("value", v)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} {label} must be within 0-255, got {value}")
    return triple


class EngineConfig(BaseModel):
    """Immutable configuration for a targeting engine.

    Built once at engine startup. The only transformation applied
    afterwards is the one-time gain derivation in ``with_derived_gains``.
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(default=0, description="Capture region left edge (may be negative)")
    y: int = Field(default=0, description="Capture region top edge (may be negative)")
    x_fov: int = Field(default=75, gt=0, description="Capture region width in pixels")
    y_fov: int = Field(default=75, gt=0, description="Capture region height in pixels")
    ingame_sensitivity: float = Field(default=0.23, gt=0)
    move_speed: float = Field(default=0.435, ge=0, description="0 means derive from sensitivity")
    flick_speed: float = Field(default=4.628, ge=0, description="0 means derive from sensitivity")
    lower_hsv: HsvTriple = Field(default=(140, 120, 180))
    upper_hsv: HsvTriple = Field(default=(160, 200, 255))
    min_cluster: int = Field(
        default=0, ge=0, description="Matched pixel count must exceed this to count as a target"
    )
    flick_restore_gain: float = Field(
        default=1.0, ge=0, description="1.0 restores by the exact inverse, 0.5 by half"
    )
    flick_x_bias: int = Field(default=0, description="Horizontal pixel bias added before a flick")
    hue_wrap: HueWrap = Field(default=HueWrap.OFFSET)
    click_tolerance: tuple[int, int] = Field(
        default=(4, 10), description="Max |dx|, |dy| from center that still triggers a click"
    )

    @model_validator(mode="after")
    def _check_window(self) -> EngineConfig:
        _check_triple(self.lower_hsv, "lower_hsv")
        _check_triple(self.upper_hsv, "upper_hsv")
        if any(lo > hi for lo, hi in zip(self.lower_hsv, self.upper_hsv)):
            logger.warning(
                "HSV window lower bound %s exceeds upper bound %s; nothing will match",
                self.lower_hsv, self.upper_hsv,
            )
        return self

    @property
    def region(self) -> CaptureRegion:
        return CaptureRegion(left=self.x, top=self.y, width=self.x_fov, height=self.y_fov)

    @property
    def center(self) -> tuple[float, float]:
        """Geometric center of the capture region, in frame coordinates."""
        return self.x_fov / 2.0, self.y_fov / 2.0

    def with_derived_gains(self) -> EngineConfig:
        """Return a copy with gains derived from sensitivity if either is unset.

        Caller-supplied gains are kept verbatim when both are non-zero.
        """
        if self.move_speed != 0.0 and self.flick_speed != 0.0:
            return self
        move_speed, flick_speed = derive_gains(self.ingame_sensitivity)
        logger.debug(
            "Derived gains from sensitivity %.4f: move=%.4f flick=%.4f",
            self.ingame_sensitivity, move_speed, flick_speed,
        )
        return self.model_copy(update={"move_speed": move_speed, "flick_speed": flick_speed})


# ---------------------------------------------------------------------------
# Vision / Capture Models
# ---------------------------------------------------------------------------


class CaptureRegion(BaseModel):
    """A rectangular screen region in virtual-screen coordinates."""

    model_config = ConfigDict(frozen=True)

    left: int = Field(description="Left edge x-coordinate in pixels")
    top: int = Field(description="Top edge y-coordinate in pixels")
    width: int = Field(gt=0, description="Width of the region in pixels")
    height: int = Field(gt=0, description="Height of the region in pixels")

    def as_monitor(self) -> dict[str, int]:
        """The region in the dict form ``mss`` grabs accept."""
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}


class CapturedFrame(BaseModel):
    """A single frame grabbed from the capture region.

    Owned by one cycle and discarded afterwards; never mutated.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    image: np.ndarray = Field(description="Raw image data as BGR numpy array (OpenCV format)")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the frame was captured")
    frame_number: int = Field(ge=0, description="Sequential frame counter")
    source_device: str = Field(default="screen", description="Identifier for the capture source")
    region: CaptureRegion | None = Field(default=None, description="Region the frame was grabbed from")


class Centroid(BaseModel):
    """Mean pixel coordinate of all matching pixels in a frame."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class ScanResult(BaseModel):
    """Outcome of a full-frame scan."""

    model_config = ConfigDict(frozen=True)

    centroid: Centroid | None = None
    matched_pixels: int = Field(default=0, ge=0)


class CycleTrace(BaseModel):
    """What a single processed cycle saw and did."""

    model_config = ConfigDict(frozen=True)

    action: Action
    frame_number: int = Field(ge=0)
    centroid: Centroid | None = None
    matched_pixels: int = Field(default=0, ge=0)
    commands: tuple[str, ...] = Field(default=(), description="Output commands issued, in order")
    timestamp: datetime = Field(default_factory=datetime.now)
