"""Execution utilities for short-lived host commands.

This module provides a helper for running host commands (process cleanup,
simulator resets) with timeout handling, output capture, and error
reporting through result values rather than exceptions.
"""

import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

# Default timeout in milliseconds
DEFAULT_TIMEOUT_MS: int = 30000  # 30 seconds

# Maximum output size in bytes
MAX_OUTPUT_BYTES: int = 102400  # 100KB


@dataclass(frozen=True, slots=True)
class ScriptConfig:
    """Configuration for command execution.

    Attributes:
        command: Single-line command to execute.
        shell: Shell to run the command with (None splits it into argv).
        cwd: Working directory for execution.
        env: Additional environment variables to set.
        timeout_ms: Execution timeout in milliseconds.
    """

    command: str | None = None
    shell: str | None = None
    cwd: str | Path | None = None
    env: dict[str, str] = field(default_factory=dict)
    timeout_ms: int = DEFAULT_TIMEOUT_MS


@dataclass(frozen=True, slots=True)
class ScriptResult:
    """Result from command execution.

    Attributes:
        success: Whether the command executed without errors.
        exit_code: Process exit code, or None if execution failed.
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        error: Error message if execution failed (timeout, not found, etc.).
        timed_out: Whether the command timed out.
        command_not_found: Whether the command was not found.
    """

    success: bool
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    timed_out: bool = False
    command_not_found: bool = False


def truncate_output(output: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate output to max bytes, preserving valid UTF-8.

    Args:
        output: The string to truncate.
        max_bytes: Maximum size in bytes.

    Returns:
        Truncated string with indicator if truncated.
    """
    if not output:
        return output

    encoded = output.encode("utf-8")
    if len(encoded) <= max_bytes:
        return output

    # Drop incomplete multi-byte sequences at the cut
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")

    return truncated + "\n... [output truncated]"


def build_command(config: ScriptConfig) -> list[str]:
    """Build the argv for a command configuration.

    Args:
        config: Script configuration.

    Returns:
        Command argv, empty if no command is configured.
    """
    if not config.command:
        return []
    if config.shell:
        return [config.shell, "-c", config.command]
    return shlex.split(config.command)


def run_script(config: ScriptConfig) -> ScriptResult:
    """Execute a host command.

    Handles timeouts and missing commands, and captures stdout/stderr.

    Args:
        config: Script configuration specifying command, env, cwd, timeout.

    Returns:
        ScriptResult with execution outcome.
    """
    cmd = build_command(config)
    if not cmd:
        return ScriptResult(
            success=False,
            error="No command specified",
        )

    env = {**os.environ, **config.env}
    cwd = str(config.cwd) if config.cwd else None
    timeout_seconds = config.timeout_ms / 1000.0

    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            env=env,
            cwd=cwd,
            capture_output=True,
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return ScriptResult(
            success=False,
            error=f"Command timed out after {timeout_seconds}s",
            timed_out=True,
        )
    except FileNotFoundError as e:
        return ScriptResult(
            success=False,
            error=str(e),
            command_not_found=True,
        )
    except OSError as e:
        return ScriptResult(
            success=False,
            error=str(e),
        )

    return ScriptResult(
        success=True,
        exit_code=result.returncode,
        stdout=truncate_output(result.stdout.decode("utf-8", errors="replace")),
        stderr=truncate_output(result.stderr.decode("utf-8", errors="replace")),
    )
