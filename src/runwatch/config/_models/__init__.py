"""Configuration models.

This module provides Pydantic models for runwatch configuration sections
and the main Config container class.
"""

from runwatch.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from runwatch.config._models._config import Config
from runwatch.config._models._logging import LoggingConfig
from runwatch.config._models._paths import PathsConfig
from runwatch.config._models._runner import RunnerSettings

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "PathsConfig",
    "RunnerSettings",
]
