"""Configuration management for colorant.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for every field.
"""

from colorant.config.settings import Settings, build_engine_config, load_settings

__all__ = ["Settings", "build_engine_config", "load_settings"]
