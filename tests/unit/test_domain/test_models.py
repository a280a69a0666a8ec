"""Tests for the domain models."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from colorant.domain.models import (
    Action,
    Centroid,
    CycleTrace,
    EngineConfig,
    derive_gains,
)


class TestDeriveGains:
    def test_reference_sensitivity(self) -> None:
        move_speed, flick_speed = derive_gains(0.23)
        assert move_speed == pytest.approx(0.435, abs=1e-3)
        assert flick_speed == pytest.approx(4.628, abs=1e-3)

    def test_formulas(self) -> None:
        move_speed, flick_speed = derive_gains(0.8)
        assert move_speed == 1.0 / (10.0 * 0.8)
        assert flick_speed == 1.07437623 * 0.8 ** -0.9936827126


class TestEngineConfig:
    def test_defaults(self) -> None:
        config = EngineConfig()
        assert (config.x_fov, config.y_fov) == (75, 75)
        assert config.click_tolerance == (4, 10)
        assert config.center == (37.5, 37.5)

    def test_region(self) -> None:
        region = EngineConfig(x=-100, y=40, x_fov=20, y_fov=30).region
        assert region.as_monitor() == {"left": -100, "top": 40, "width": 20, "height": 30}

    def test_frozen(self) -> None:
        config = EngineConfig()
        with pytest.raises(ValidationError):
            config.move_speed = 1.0  # type: ignore[misc]

    @pytest.mark.parametrize("gains", [(0.0, 2.0), (2.0, 0.0), (0.0, 0.0)])
    def test_zero_gain_derives_both(self, gains: tuple[float, float]) -> None:
        move_speed, flick_speed = gains
        config = EngineConfig(ingame_sensitivity=0.5, move_speed=move_speed, flick_speed=flick_speed)
        derived = config.with_derived_gains()
        assert (derived.move_speed, derived.flick_speed) == derive_gains(0.5)

    def test_explicit_gains_are_kept(self) -> None:
        config = EngineConfig(ingame_sensitivity=0.5, move_speed=1.25, flick_speed=3.5)
        assert config.with_derived_gains() is config

    def test_rejects_hue_above_180(self) -> None:
        with pytest.raises(ValidationError):
            EngineConfig(upper_hsv=(181, 255, 255))

    def test_rejects_non_positive_fov(self) -> None:
        with pytest.raises(ValidationError):
            EngineConfig(x_fov=0)

    def test_inverted_window_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="colorant.domain.models"):
            EngineConfig(lower_hsv=(160, 120, 180), upper_hsv=(140, 200, 255))
        assert "nothing will match" in caplog.text


class TestCycleTrace:
    def test_defaults(self) -> None:
        trace = CycleTrace(action=Action.CLICK, frame_number=0)
        assert trace.centroid is None
        assert trace.commands == ()

    def test_centroid_equality(self) -> None:
        assert Centroid(x=1, y=2) == Centroid(x=1, y=2)
        assert Centroid(x=1, y=2) != Centroid(x=2, y=1)
