# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- JSON output formatting
- Console utilities for error handling
"""

from enum import IntEnum
from typing import Any, Never

import orjson
from rich.console import Console

FormattableData = dict[str, Any] | list[Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_with_error",
    "format_json",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Exit codes for runwatch CLI commands.

    The first three are the outcomes of ``runwatch run``.
    """

    SUCCESS = 0
    ABNORMAL = 1
    FATAL = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 4
    IO_ERROR = 5


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Data to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def get_error_console(*, no_color: bool = False) -> Console:
    """Get a Rich console configured for error output to stderr."""
    return Console(stderr=True, no_color=no_color)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.IO_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use.
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)
