# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, A002, TC003
"""Parse command for classifying saved automation output."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from runwatch.runner import ConsoleListener, ParsedMessage, parse_line

from .._context import CLIContext, OutputFormat
from .._shared import ExitCode, exit_with_error, format_json, get_error_console


def message_to_dict(message: ParsedMessage) -> dict[str, str | None]:
    """Convert a parsed line to a JSON-serializable dictionary."""
    timestamp = message.timestamp
    return {
        "status": message.status.value,
        "text": message.text,
        "date": message.date,
        "time": message.time,
        "tz": message.tz,
        "timestamp": timestamp.isoformat() if timestamp is not None else None,
        "raw_line": message.raw_line,
    }


def _parse(
    file: Path,
    /,
    *,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (plain, json)"),
    ] = OutputFormat.PLAIN,
) -> None:
    """Classify the lines of a saved tool log

    Each line is matched against the tool's log line layout and given the
    status named by its label. Lines that do not match are reported with
    the unknown status.

    Args:
        file: Path to a file holding captured tool output.
        format: Output format (plain, json).
    """
    ctx = CLIContext.get_current()
    error_console = get_error_console(no_color=ctx.no_color)

    if format is OutputFormat.TOML:
        exit_with_error(
            "parse supports plain and json output only",
            ExitCode.CONFIG_ERROR,
            console=error_console,
        )

    try:
        content = file.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        exit_with_error(
            f"File not found: {file}", ExitCode.NOT_FOUND, console=error_console
        )
    except OSError as e:
        exit_with_error(
            f"Failed to read {file}: {e}", ExitCode.IO_ERROR, console=error_console
        )

    messages = [parse_line(line) for line in content.splitlines()]

    if format is OutputFormat.JSON:
        print(format_json([message_to_dict(message) for message in messages]))  # noqa: T201
        return

    listener = ConsoleListener(ctx.console(), show_unmatched=not ctx.quiet)
    for message in messages:
        listener.receive(message)
