"""Data models for the runner.

This module defines the core data types for supervising an automation run:
- MessageStatus: Classification of a single output line
- ParsedMessage: Immutable, classified output line
- RunnerConfig: Immutable per-run configuration
- RunnerState: Mutable supervisory flags, owned by the Runner
- ExitStatus: Final outcome of a run
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations

import pendulum

DEFAULT_ATTEMPTS = 5
DEFAULT_STARTUP_TIMEOUT = 30.0
DEFAULT_TOOL_PATH = "/usr/bin/instruments"


class MessageStatus(StrEnum):
    """Status category of an automation output line.

    The order of members (excluding UNKNOWN) is the order in which labels
    are matched by the parser; the first matching category wins.
    """

    START = "start"
    STOPPED = "stopped"
    PASS = "pass"  # noqa: S105
    FAIL = "fail"
    ERROR = "error"
    WARNING = "warning"
    ISSUE = "issue"
    DEFAULT = "default"
    DEBUG = "debug"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """A single classified line of automation output.

    Lines are expected in the form
    ``2014-10-20 20:43:41 +0000 Default: actual message``. Lines that do not
    match leave the structured fields unset and classify as UNKNOWN.

    Attributes:
        raw_line: The original line, without its line terminator.
        text: Message payload after the label, if the line matched.
        date: Date portion (YYYY-MM-DD), if the line matched.
        time: Time portion (HH:MM:SS), if the line matched.
        tz: Timezone offset (+HHMM or -HHMM), if the line matched.
        status: Classified status of the label.
    """

    raw_line: str
    text: str | None = None
    date: str | None = None
    time: str | None = None
    tz: str | None = None
    status: MessageStatus = MessageStatus.UNKNOWN

    @property
    def matched(self) -> bool:
        """Return True if the line carried the timestamp/label prefix."""
        return self.text is not None

    @property
    def timestamp(self) -> pendulum.DateTime | None:
        """Return the timezone-aware timestamp of the line.

        None when the prefix is absent or its date or time is invalid.
        """
        if self.date is None or self.time is None or self.tz is None:
            return None
        try:
            return pendulum.from_format(
                f"{self.date} {self.time} {self.tz}",
                "YYYY-MM-DD HH:mm:ss ZZ",
            )
        except ValueError:
            # Prefix has the right shape but names an impossible moment
            return None


@dataclass(frozen=True, slots=True)
class RunnerConfig:
    """Configuration for supervising an automation tool.

    Immutable for the duration of a run. A hardware target takes precedence
    over a simulator target when both are given.

    Attributes:
        app_location: Path to the app bundle under test.
        results_dir: Directory the tool writes its results into; also the
            working directory while the tool runs.
        script_path: Path to the UI automation script.
        template_path: Path to the tool's trace template.
        hardware_id: Device identifier for a hardware target.
        sim_device: Simulator identifier for a simulator target.
        sim_language: Language override (e.g. 'es' or 'Spanish').
        sim_locale: Locale override (e.g. 'es_AR').
        developer_dir: Toolchain developer directory exported to the tool.
        tool_path: Path to the automation tool executable.
        attempts: Maximum number of launches before giving up.
        startup_timeout: Seconds to wait for a line of output; also the
            silence accounting tick once the run has started.
        max_silence: Seconds of silence after start before the run is
            aborted. None disables the limit.
    """

    app_location: str
    results_dir: Path
    script_path: str
    template_path: str
    hardware_id: str | None = None
    sim_device: str | None = None
    sim_language: str | None = None
    sim_locale: str | None = None
    developer_dir: str | None = None
    tool_path: str = DEFAULT_TOOL_PATH
    attempts: int = DEFAULT_ATTEMPTS
    startup_timeout: float = DEFAULT_STARTUP_TIMEOUT
    max_silence: float | None = None

    @property
    def target_id(self) -> str | None:
        """Return the launch target, hardware first, then simulator."""
        if self.hardware_id is not None:
            return self.hardware_id
        return self.sim_device


@dataclass(slots=True)
class RunnerState:
    """Mutable supervisory state of a run.

    Owned exclusively by the Runner and reset at the start of every run.
    Event-sink callbacks change it only through the transition methods.

    Attributes:
        fully_started: The start detector confirmed the script is executing.
        should_abort: The current attempt must be stopped (non-fatal).
        fatal_error: Retrying is futile; stop immediately.
        fatal_reason: Why the run stopped fatally.
        should_reset_everything: Kill the attempt and reset the simulator.
        retries_suppressed: No further attempts may be spawned.
        remaining_attempts: Attempts left before giving up.
    """

    fully_started: bool = False
    should_abort: bool = False
    fatal_error: bool = False
    fatal_reason: str | None = None
    should_reset_everything: bool = False
    retries_suppressed: bool = False
    remaining_attempts: int = 0

    def reset(self, attempts: int) -> None:
        """Return to the initial state for a new run."""
        self.fully_started = False
        self.should_abort = False
        self.fatal_error = False
        self.fatal_reason = None
        self.should_reset_everything = False
        self.retries_suppressed = False
        self.remaining_attempts = attempts

    @property
    def should_retry(self) -> bool:
        """Return True if the retry loop should spawn another attempt."""
        return (
            not self.fatal_error
            and not self.fully_started
            and not self.retries_suppressed
            and self.remaining_attempts > 0
        )

    @property
    def should_stop_attempt(self) -> bool:
        """Return True if the current attempt must be killed without reset."""
        return self.should_abort or self.fatal_error

    def begin_attempt(self) -> None:
        self.remaining_attempts -= 1
        self.should_reset_everything = False

    def mark_started(self) -> None:
        self.fully_started = True

    def request_abort(self) -> None:
        self.should_abort = True

    def mark_fatal(self, reason: str | None) -> None:
        self.fatal_error = True
        self.fatal_reason = reason

    def request_reset(self) -> None:
        self.should_reset_everything = True

    def suppress_retries(self) -> None:
        self.retries_suppressed = True


@dataclass(frozen=True, slots=True)
class ExitStatus:
    """Final outcome of a run.

    Attributes:
        normal: The last attempt ended without an explicit failure trigger.
        fatal_error: The run ended in a way that restarting won't fix.
        fatal_reason: Why the run can't be restarted, if fatal.
        attempts_used: Number of attempts that were spawned.
    """

    normal: bool
    fatal_error: bool = False
    fatal_reason: str | None = None
    attempts_used: int = 0
