"""Enums and records shared by the settings models."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any


class LogLevel(StrEnum):
    """Lowest level written to the run log."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Rendering of run log entries: one JSON object or one text line each."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Where a layer of settings came from.

    Members are listed from the layer that wins (command line options) to
    the layer every other one overrides (built-in defaults).
    """

    CLI = "cli"
    ENV = "env"
    LOCAL = "local"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One layer of settings, as shown by `runwatch config show --show-sources`.

    Attributes:
        name: Which layer this is.
        path: The layer's file, or None for the command line, the
            environment and the defaults.
        exists: Whether the file was found (or, for the command line,
            whether any override was given).
        values: Settings contributed by this layer.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]  # pyright: ignore[reportExplicitAny]
