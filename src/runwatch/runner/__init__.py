"""Runner package for supervising a line-oriented automation tool.

This package launches an external UI automation tool on a pseudo-terminal,
classifies each line it prints, dispatches the lines to listeners, and
relaunches the tool until it starts, fails fatally, or runs out of attempts.

Key Components:
    - ParsedMessage / parse_line: Line classification
    - Listener: Protocol for output observers
    - RunnerEventSink: Protocol through which detectors report findings
    - StartDetector: Recognizes the saltinel that marks the script's start
    - Toolchain / XcodeToolchain: Host process management
    - PtyProcess / spawn_pty: Pseudo-terminal process handle
    - Runner: The supervisor
    - ExitStatus: Final outcome of a run

Example:
    >>> from runwatch.runner import Runner, RunnerConfig
    >>> runner = Runner(config)
    >>> status = runner.run(saltinel="d41d8cd98f00")
    >>> status.normal
    True
"""

from ._command import build_launch_command
from ._detectors import (
    START_DETECTOR,
    DetectorFactory,
    StartDetector,
    default_detectors,
)
from ._models import (
    DEFAULT_ATTEMPTS,
    DEFAULT_STARTUP_TIMEOUT,
    DEFAULT_TOOL_PATH,
    ExitStatus,
    MessageStatus,
    ParsedMessage,
    RunnerConfig,
    RunnerState,
)
from ._output import ConsoleListener
from ._parser import parse_line, parse_status
from ._process import KillResult, PtyProcess, ReadOutcome, ReadResult, spawn_pty
from ._protocol import (
    AttemptProcess,
    Listener,
    ProcessSpawner,
    RunnerEventSink,
    Toolchain,
)
from ._runner import Runner
from ._toolchain import XcodeToolchain

__all__ = [
    "DEFAULT_ATTEMPTS",
    "DEFAULT_STARTUP_TIMEOUT",
    "DEFAULT_TOOL_PATH",
    "START_DETECTOR",
    "AttemptProcess",
    "ConsoleListener",
    "DetectorFactory",
    "ExitStatus",
    "KillResult",
    "Listener",
    "MessageStatus",
    "ParsedMessage",
    "ProcessSpawner",
    "PtyProcess",
    "ReadOutcome",
    "ReadResult",
    "Runner",
    "RunnerConfig",
    "RunnerEventSink",
    "RunnerState",
    "StartDetector",
    "Toolchain",
    "XcodeToolchain",
    "build_launch_command",
    "default_detectors",
    "parse_line",
    "parse_status",
    "spawn_pty",
]
