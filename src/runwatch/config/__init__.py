"""runwatch configuration.

This module provides the public API for runwatch configuration management,
including layered loading, validation, and typed access to configuration
values.

Example:
    >>> from runwatch.config import Config
    >>> config = Config.load()
    >>> config.runner.attempts
    5
"""

from runwatch.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._discovery import (
    LOCAL_CONFIG_NAME,
    PROJECT_CONFIG_NAME,
    discover_sources,
    find_project_root,
    get_user_config_path,
)
from ._load import STRICT_CONFIG_ENV, safe_load_config
from ._loader import (
    ENV_PREFIX,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PathsConfig,
    RunnerSettings,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "LOCAL_CONFIG_NAME",
    "PROJECT_CONFIG_NAME",
    "STRICT_CONFIG_ENV",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "PathsConfig",
    "RunnerSettings",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "get_user_config_path",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
