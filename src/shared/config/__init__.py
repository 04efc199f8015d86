"""Configuration management module.

This module provides:
- Environment-based configuration with validation
- Per-region API connection parameters
- Cached settings access via get_settings()
"""

from .settings import (
    DEFAULT_REGIONS,
    BattleNetSettings,
    Environment,
    LogFormat,
    LogLevel,
    RegionConfig,
    Settings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    # Component settings
    "BattleNetSettings",
    "RegionConfig",
    "DEFAULT_REGIONS",
]
