"""Configuration management for colorant.

Loads settings from a YAML configuration file with environment variable
overrides. Supports .env files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from colorant.domain.models import Action, EngineConfig, HueWrap

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/colorant.yaml")


class CaptureConfig(BaseModel):
    left: int = Field(default=0, description="Capture region left edge")
    top: int = Field(default=0, description="Capture region top edge")
    width: int = Field(default=75, gt=0)
    height: int = Field(default=75, gt=0)
    frame_timeout: float = Field(default=0.1, gt=0, description="Max wait for a frame per cycle")
    poll_interval: float = Field(default=0.0, ge=0, description="Delay between grabs; 0 grabs continuously")


class TargetingConfig(BaseModel):
    ingame_sensitivity: float = Field(default=0.23, gt=0)
    move_speed: float = Field(default=0.435, ge=0, description="0 derives from sensitivity")
    flick_speed: float = Field(default=4.628, ge=0, description="0 derives from sensitivity")
    lower_hsv: tuple[int, int, int] = Field(default=(140, 120, 180))
    upper_hsv: tuple[int, int, int] = Field(default=(160, 200, 255))
    min_cluster: int = Field(default=0, ge=0)
    flick_restore_gain: float = Field(default=1.0, ge=0)
    flick_x_bias: int = Field(default=0)
    hue_wrap: HueWrap = Field(default=HueWrap.OFFSET)
    click_tolerance: tuple[int, int] = Field(default=(4, 10))


class OutputConfig(BaseModel):
    backend: Literal["http"] = Field(default="http")
    http_base_url: str = Field(default="http://localhost:8090")
    http_timeout: float = Field(default=1.0, gt=0)


class LoopConfig(BaseModel):
    action: Action = Field(default=Action.MOVE)
    cycle_delay: float = Field(default=0.0, ge=0)
    start_enabled: bool = Field(default=True)
    max_consecutive_errors: int = Field(default=5, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the colorant system.

    Loads from YAML file and supports environment variable overrides,
    e.g. ``COLORANT_TARGETING__INGAME_SENSITIVITY=0.4``.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "COLORANT_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    targeting: TargetingConfig = Field(default_factory=TargetingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    loop: LoopConfig = Field(default_factory=LoopConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; environment wins over them
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)


def build_engine_config(settings: Settings) -> EngineConfig:
    """Map the capture and targeting sections onto an EngineConfig."""
    capture = settings.capture
    targeting = settings.targeting
    return EngineConfig(
        x=capture.left,
        y=capture.top,
        x_fov=capture.width,
        y_fov=capture.height,
        ingame_sensitivity=targeting.ingame_sensitivity,
        move_speed=targeting.move_speed,
        flick_speed=targeting.flick_speed,
        lower_hsv=targeting.lower_hsv,
        upper_hsv=targeting.upper_hsv,
        min_cluster=targeting.min_cluster,
        flick_restore_gain=targeting.flick_restore_gain,
        flick_x_bias=targeting.flick_x_bias,
        hue_wrap=targeting.hue_wrap,
        click_tolerance=targeting.click_tolerance,
    )
