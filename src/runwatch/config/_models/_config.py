# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing runwatch configuration values.
"""

from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any, ClassVar, Self, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError

from runwatch.config._defaults import DEFAULT_CONFIG
from runwatch.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from runwatch.config._models._common import ConfigSource, ConfigSourceName
from runwatch.config._models._logging import LoggingConfig
from runwatch.config._models._paths import PathsConfig
from runwatch.config._models._runner import RunnerSettings
from runwatch.exceptions import ConfigValidationError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


def _parse_section(
    model: type[M],
    name: str,
    data: dict[str, Any],
    *,
    source: str | None = None,
) -> M:
    """Validate one configuration section.

    Args:
        model: Pydantic model for the section.
        name: Section name, used in error keys.
        data: Merged configuration dictionary.
        source: Description of where the values came from.

    Returns:
        The validated section.

    Raises:
        ConfigValidationError: If the section is invalid.
    """
    section = data.get(name, {})
    if not isinstance(section, dict):
        msg = f"Configuration section '{name}' must be a table"
        raise ConfigValidationError(
            msg, key=name, value=section, expected="table", source=source
        )

    try:
        return model.model_validate(section)
    except ValidationError as e:
        error = e.errors()[0]
        key = ".".join([name, *(str(part) for part in error["loc"])])
        msg = f"Invalid configuration value for '{key}': {error['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=error.get("input"),
            expected=error["msg"],
            source=source,
        ) from e


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to runwatch
    configuration. Use factory methods to create instances rather than the
    constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _paths: PathsConfig = PrivateAttr(default_factory=PathsConfig)
    _runner: RunnerSettings = PrivateAttr(default_factory=RunnerSettings)
    _project_root: Path | None = PrivateAttr(default=None)

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
        _project_root: Path | None = None,
        source: str | None = None,
    ) -> None:
        """Initialize configuration container.

        This constructor is intended for internal use. Use factory methods
        like from_dict(), from_file(), or load() to create Config instances.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
            _project_root: Project root the configuration was loaded for.
            source: Description of the values' origin for error messages.

        Raises:
            ConfigValidationError: If a section fails validation.
        """
        super().__init__()
        data = _data if _data is not None else copy_value(DEFAULT_CONFIG)
        self._data = data
        self._sources = _sources
        self._project_root = _project_root
        self._logging = _parse_section(LoggingConfig, "logging", data, source=source)
        self._paths = _parse_section(PathsConfig, "paths", data, source=source)
        self._runner = _parse_section(RunnerSettings, "runner", data, source=source)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.

        Returns:
            Configuration object from the dictionary merged over defaults.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return cls(_data=deep_merge(DEFAULT_CONFIG, data))

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=path,
            exists=True,
            values=data,
        )
        return cls(
            _data=deep_merge(DEFAULT_CONFIG, data),
            _sources=(source,),
            _project_root=path.parent.resolve(),
            source=str(path),
        )

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Discovers all configuration sources and merges them in precedence order
        (defaults -> user -> project -> local -> env -> cli).

        Args:
            project_root: Project root directory. If None, auto-detect by
                searching upward for `runwatch.toml`.
            include_env: Include environment variables as a source.
            include_cli: Include CLI overrides.
            cli_overrides: Dict of CLI argument overrides. Only used if
                include_cli is True.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If config files cannot be loaded.
            ConfigValidationError: If merged config fails validation.
        """
        # Deferred import to avoid circular dependency
        from runwatch.config._discovery import (  # noqa: PLC0415
            discover_sources,
            find_project_root,
        )

        resolved_root = project_root if project_root else find_project_root()
        sources = discover_sources(
            project_root=resolved_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        # Sources are discovered highest-to-lowest, so reverse for merging
        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []

        for source in reversed(sources):
            values: dict[str, Any] = {}

            if source.name == ConfigSourceName.DEFAULT:
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.name == ConfigSourceName.CLI:
                values = cli_overrides or {}
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )

            if values:
                merged = deep_merge(merged, values)

        return cls(
            _data=merged,
            _sources=tuple(reversed(loaded_sources)),
            _project_root=resolved_root,
        )

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration."""
        return list(self._sources)

    @property
    def project_root(self) -> Path | None:
        """Return the project root, if one was found."""
        return self._project_root

    @property
    def logging(self) -> LoggingConfig:
        """Return the logging configuration section."""
        return self._logging

    @property
    def paths(self) -> PathsConfig:
        """Return the paths configuration section."""
        return self._paths

    @property
    def runner(self) -> RunnerSettings:
        """Return the runner configuration section."""
        return self._runner

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., "runner.attempts").
            default: Default value if key not found.

        Returns:
            The configuration value, or default if not found.

        Examples:
            >>> config.get("runner.attempts")
            5
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data

        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def to_dict(self, *, include_defaults: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.

        Returns:
            Dictionary representation of the configuration.
        """
        if include_defaults:
            return copy_value(self._data)
        return _diff_from_defaults(self._data, DEFAULT_CONFIG)

    def to_toml(self, *, include_defaults: bool = False) -> str:
        """Convert configuration to a TOML string.

        Args:
            include_defaults: Whether to include default values. If False,
                only values that differ from defaults are included.

        Returns:
            TOML string representation of the configuration.
        """
        return tomli_w.dumps(self.to_dict(include_defaults=include_defaults))


def _diff_from_defaults(
    data: dict[str, Any],
    defaults: dict[str, Any],
) -> dict[str, Any]:
    """Extract values that differ from defaults.

    Args:
        data: Current configuration data.
        defaults: Default configuration values.

    Returns:
        Dictionary containing only non-default values.
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        if key not in defaults:
            result[key] = copy_value(value)
        elif isinstance(value, dict) and isinstance(defaults[key], dict):
            nested_diff = _diff_from_defaults(value, defaults[key])
            if nested_diff:
                result[key] = nested_diff
        elif value != defaults[key]:
            result[key] = copy_value(value)

    return result
