"""Locating the settings files that apply to a run.

A project is the nearest directory, walking up from the working
directory, that holds a `runwatch.toml`. Next to it may sit a
`runwatch.local.toml` with machine-specific overrides (a simulator name,
a developer directory) that is usually kept out of version control. A
per-user file in the platform's config directory applies to every
project.
"""

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

PROJECT_CONFIG_NAME = "runwatch.toml"
LOCAL_CONFIG_NAME = "runwatch.local.toml"


def find_project_root(start: Path | None = None) -> Path | None:
    """Return the nearest directory at or above `start` with a runwatch.toml.

    A directory that happens to be named `runwatch.toml` does not count.

    Args:
        start: Where to begin. Defaults to the working directory.

    Returns:
        The project directory, or None when the walk reaches the
        filesystem root without finding one.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        if (current / PROJECT_CONFIG_NAME).is_file():
            return current
        if current.parent == current:
            return None
        current = current.parent


def get_user_config_path() -> Path:
    """Return where the per-user `config.toml` lives on this platform.

    The file does not have to exist.
    """
    return platformdirs.user_config_path("runwatch") / "config.toml"


def _file_exists(path: Path) -> bool:
    # An unreadable directory counts as a missing file
    try:
        return path.is_file()
    except OSError:
        return False


def _file_source(name: ConfigSourceName, path: Path) -> ConfigSource:
    return ConfigSource(name=name, path=path, exists=_file_exists(path), values={})


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """List the settings sources for a project, highest precedence first.

    The order is command line, `RUNWATCH_*` variables, `runwatch.local.toml`,
    `runwatch.toml`, the per-user file and the built-in defaults. The two
    project files are left out when there is no project. File sources
    record whether the file exists; their values are read later by
    `Config.load`.

    Args:
        project_root: Project directory. Found with find_project_root()
            when None.
        include_env: List the environment as a source.
        include_cli: List command line overrides as a source.
        cli_overrides: The overrides, used when include_cli is True.

    Returns:
        The sources, highest precedence first.
    """
    sources: list[ConfigSource] = []
    resolved_root = project_root if project_root else find_project_root()

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    if resolved_root:
        sources.append(
            _file_source(ConfigSourceName.LOCAL, resolved_root / LOCAL_CONFIG_NAME)
        )
        sources.append(
            _file_source(ConfigSourceName.PROJECT, resolved_root / PROJECT_CONFIG_NAME)
        )

    sources.append(_file_source(ConfigSourceName.USER, get_user_config_path()))
    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
