"""runwatch exceptions."""

from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any


class RunwatchError(Exception):
    """Base exception for runwatch errors."""


class ConfigError(RunwatchError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Runner Exceptions
# =============================================================================


class RunnerError(RunwatchError):
    """Base exception for runner errors."""


class ProcessSpawnError(RunnerError):
    """Raised when the automation tool cannot be spawned at all.

    Attributes:
        command: The launch command that failed to spawn.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and launch context.

        Args:
            message: Human-readable error message.
            command: The launch command that failed to spawn.
            cause: The underlying exception that caused the failure.
        """
        super().__init__(message)
        self.command: str | None = command
        self.cause: Exception | None = cause
