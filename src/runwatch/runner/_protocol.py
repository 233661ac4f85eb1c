"""Protocol definitions for the runner.

This module defines the interfaces that decouple the Runner from its
collaborators:
- Listener: Consumes classified output lines
- RunnerEventSink: Receives detector findings (implemented by the Runner)
- AttemptProcess: A spawned automation tool process
- Toolchain: Host-side process management for the automation tool
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from ._models import ParsedMessage  # noqa: TC001 - Used in runtime type annotations
from ._process import KillResult, ReadResult  # noqa: TC001


@runtime_checkable
class Listener(Protocol):
    """Protocol for observers of the automation output stream.

    Listeners are invoked synchronously on the runner's thread and must
    not block.
    """

    def receive(self, message: ParsedMessage) -> None:
        """Receive one classified line, in the order lines were read.

        Args:
            message: The parsed output line.
        """
        ...

    def on_attempt_finished(self) -> None:
        """Called exactly once when an attempt's process session ends.

        Called whether the attempt ended normally, by explicit stop, or by
        abnormal process exit. Must not raise.
        """
        ...


@runtime_checkable
class RunnerEventSink(Protocol):
    """Protocol through which detectors report findings to the runner.

    Detectors hold a reference to this interface, never to the Runner.
    """

    def on_start_detected(self) -> None:
        """Report that the automation script is actually executing."""
        ...

    def on_stop_detected(self, fatal: bool, reason: str) -> None:  # noqa: FBT001
        """Report that the run should stop.

        Args:
            fatal: Whether retrying is futile.
            reason: Human-readable reason for stopping.
        """
        ...

    def on_intermittent_failure_detected(self, reason: str) -> None:
        """Report a known intermittent failure of the automation tool.

        Args:
            reason: Human-readable description of the failure.
        """
        ...

    def on_trace_error_detected(self, fatal: bool, reason: str) -> None:  # noqa: FBT001
        """Report an error from the tool's trace machinery.

        Args:
            fatal: Whether retrying is futile.
            reason: Human-readable description of the error.
        """
        ...


@runtime_checkable
class AttemptProcess(Protocol):
    """Protocol for a spawned automation tool process."""

    @property
    def pid(self) -> int | None:
        """Return the process ID of the child."""
        ...

    def read_line(self, timeout: float) -> ReadResult:
        """Wait up to ``timeout`` seconds for one line of output.

        Args:
            timeout: Seconds to wait.

        Returns:
            A line, a timeout, a clean end of stream, or an abrupt death.
        """
        ...

    def kill(self) -> KillResult:
        """Forcefully terminate the child and release its terminal."""
        ...

    def close(self) -> None:
        """Release the terminal and reap the child if it has exited."""
        ...


ProcessSpawner = Callable[[str], AttemptProcess]


@runtime_checkable
class Toolchain(Protocol):
    """Protocol for host-side process management around the automation tool.

    Implementations must not raise for processes that are already gone.
    """

    def terminate_stray_tools(self) -> None:
        """Kill leftover automation tool processes from earlier attempts."""
        ...

    def terminate_simulators(self, device: str | None) -> None:
        """Kill simulator processes.

        Args:
            device: Simulator identifier, or None for all simulators.
        """
        ...

    def reset_simulator(self, device: str) -> None:
        """Reset a simulator to a clean state.

        Args:
            device: Simulator identifier.
        """
        ...
