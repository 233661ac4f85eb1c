"""Pseudo-terminal process handle for the automation tool.

The tool block-buffers its output when attached to a plain pipe, so it is
run on a PTY to receive output line by line. Expected lifecycle conditions
(end of output, child already gone) are reported as result values rather
than exceptions.
"""

import signal
from dataclasses import dataclass
from enum import StrEnum
from typing import final

import pexpect

from runwatch.exceptions import ProcessSpawnError

# PTYs translate "\n" into "\r\n"; accept both.
_LINE_END = r"\r?\n"


class ReadOutcome(StrEnum):
    """Outcome of waiting for a line of output.

    - LINE: A complete line was read
    - TIMEOUT: No complete line arrived within the timeout
    - END_OF_STREAM: The child closed its output normally
    - DIED: The child was terminated by a signal or the terminal failed
    """

    LINE = "line"
    TIMEOUT = "timeout"
    END_OF_STREAM = "end_of_stream"
    DIED = "died"


class KillResult(StrEnum):
    """Outcome of killing the child."""

    KILLED = "killed"
    ALREADY_EXITED = "already_exited"


@dataclass(frozen=True, slots=True)
class ReadResult:
    """Result of a bounded read.

    Attributes:
        outcome: What happened while waiting.
        line: The line read, or trailing unterminated output at end of stream.
        detail: Description of an abrupt death, if any.
    """

    outcome: ReadOutcome
    line: str | None = None
    detail: str | None = None


@final
class PtyProcess:
    """A spawned child attached to a pseudo-terminal."""

    __slots__ = ("_child",)

    def __init__(self, child: pexpect.spawn) -> None:  # pyright: ignore[reportMissingTypeArgument]
        self._child = child

    @property
    def pid(self) -> int | None:
        """Return the process ID of the child."""
        return self._child.pid

    def read_line(self, timeout: float) -> ReadResult:
        """Wait up to ``timeout`` seconds for one line of output.

        Args:
            timeout: Seconds to wait for a complete line.

        Returns:
            The outcome of the wait.
        """
        try:
            _ = self._child.expect(_LINE_END, timeout=timeout)
        except pexpect.TIMEOUT:
            return ReadResult(ReadOutcome.TIMEOUT)
        except pexpect.EOF:
            trailing = self._child.before or None
            return self._end_of_stream(trailing)
        except OSError as e:
            return ReadResult(ReadOutcome.DIED, detail=str(e))

        return ReadResult(ReadOutcome.LINE, line=self._child.before)

    def _end_of_stream(self, trailing: str | None) -> ReadResult:
        """Reap the child and classify the end of output as clean or abrupt."""
        try:
            self._child.close(force=True)
        except (OSError, pexpect.ExceptionPexpect) as e:
            return ReadResult(ReadOutcome.DIED, line=trailing, detail=str(e))

        if self._child.signalstatus is not None:
            return ReadResult(
                ReadOutcome.DIED,
                line=trailing,
                detail=f"terminated by signal {self._child.signalstatus}",
            )
        return ReadResult(ReadOutcome.END_OF_STREAM, line=trailing)

    def kill(self) -> KillResult:
        """Send SIGKILL, close the terminal, and reap the child.

        Returns:
            KILLED if a signal was delivered, ALREADY_EXITED if the child
            was gone before it could be signalled.
        """
        try:
            if not self._child.isalive():
                self.close()
                return KillResult.ALREADY_EXITED
            self._child.kill(signal.SIGKILL)
        except (ProcessLookupError, pexpect.ExceptionPexpect):
            self.close()
            return KillResult.ALREADY_EXITED

        self.close()
        return KillResult.KILLED

    def close(self) -> None:
        """Close the terminal, forcing the child down if it is still alive."""
        if self._child.closed:
            return
        try:
            self._child.close(force=True)
        except (OSError, pexpect.ExceptionPexpect):
            # Child already reaped or terminal already gone
            pass


def spawn_pty(command: str, *, shell: str = "/bin/sh") -> PtyProcess:
    """Spawn a shell command on a pseudo-terminal.

    Args:
        command: Shell command line to run.
        shell: Shell used to interpret the command line.

    Returns:
        A handle to the spawned child.

    Raises:
        ProcessSpawnError: If the terminal or the shell cannot be started.
    """
    try:
        child = pexpect.spawn(
            shell,
            ["-c", command],
            encoding="utf-8",
            codec_errors="replace",
            timeout=None,
        )
    except (OSError, pexpect.ExceptionPexpect) as e:
        msg = f"Failed to spawn automation tool: {e}"
        raise ProcessSpawnError(msg, command=command, cause=e) from e
    return PtyProcess(child)
