"""Supervisor for a line-oriented automation tool.

This module provides the Runner class, which launches the automation tool
on a pseudo-terminal, feeds its output through the line parser to every
registered listener, and applies the retry / abort / reset / fatal policy
requested by detectors through the event sink methods.
"""

import contextlib
import shutil
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, final

from runwatch.utils import create_null_logger

from ._command import build_launch_command
from ._detectors import DetectorFactory, default_detectors
from ._models import ExitStatus, RunnerConfig, RunnerState
from ._parser import parse_line
from ._process import ReadOutcome, spawn_pty
from ._protocol import AttemptProcess, Listener, ProcessSpawner, Toolchain
from ._toolchain import XcodeToolchain

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@final
class Runner:
    """Launches the automation tool and relaunches it until it starts.

    The runner is the event sink for its detectors. Each run makes up to
    ``config.attempts`` attempts; an attempt ends when the tool exits, is
    killed on request of a detector, produces no output before starting,
    or stays silent too long after starting. Retrying stops as soon as the
    run has started, a fatal condition is reported, or an intermittent
    failure is reported.

    Attributes:
        config: Immutable configuration for the run.
        state: Supervisory flags for the current run.
    """

    __slots__ = (
        "_detector_factory",
        "_listeners",
        "_logger",
        "_spawner",
        "_toolchain",
        "config",
        "state",
    )

    def __init__(
        self,
        config: RunnerConfig,
        *,
        toolchain: Toolchain | None = None,
        spawner: ProcessSpawner = spawn_pty,
        detector_factory: DetectorFactory = default_detectors,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the runner.

        Args:
            config: Configuration for the run.
            toolchain: Host process management. Uses XcodeToolchain if None.
            spawner: Launches the tool command line and returns its process.
            detector_factory: Creates the detectors installed on every run.
            logger: Structured logger. Events are dropped if None.
        """
        self.config = config
        self.state = RunnerState()
        self._logger = logger or create_null_logger()
        self._toolchain: Toolchain = toolchain or XcodeToolchain(logger=logger)
        self._spawner = spawner
        self._detector_factory = detector_factory
        self._listeners: dict[str, Listener] = {}

    @property
    def listeners(self) -> Mapping[str, Listener]:
        """Return a read-only view of the registered listeners."""
        return MappingProxyType(self._listeners)

    def add_listener(self, name: str, listener: Listener) -> None:
        """Register a listener, replacing any listener with the same name.

        Listeners receive lines in registration order.

        Args:
            name: Unique listener name.
            listener: The listener to register.
        """
        self._listeners[name] = listener

    # -------------------------------------------------------------------------
    # Event sink
    # -------------------------------------------------------------------------

    def on_start_detected(self) -> None:
        self._logger.info("start_detected")
        self.state.mark_started()

    def on_stop_detected(self, fatal: bool, reason: str) -> None:  # noqa: FBT001
        self._logger.info("stop_detected", fatal=fatal, reason=reason)
        if fatal:
            self.state.mark_fatal(reason)
        else:
            self.state.request_abort()

    def on_intermittent_failure_detected(self, reason: str) -> None:
        self._logger.warning("intermittent_failure_detected", reason=reason)
        self.state.suppress_retries()
        self.state.request_abort()

    def on_trace_error_detected(self, fatal: bool, reason: str) -> None:  # noqa: FBT001
        self._logger.warning("trace_error_detected", fatal=fatal, reason=reason)
        if fatal:
            self.state.mark_fatal(reason)
        else:
            self.state.request_reset()

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def build_command(self) -> str:
        """Return the shell command line that launches the tool."""
        return build_launch_command(self.config)

    def run(self, saltinel: str) -> ExitStatus:
        """Run the automation tool until it starts or fails for good.

        The working directory is switched to the results directory for the
        duration of the call and restored afterwards, even on error.

        Args:
            saltinel: Marker token the start detector looks for in output.

        Returns:
            The outcome of the run.

        Raises:
            ProcessSpawnError: If the tool cannot be spawned at all.
        """
        for name, detector in self._detector_factory(saltinel, self).items():
            self.add_listener(name, detector)

        command = self.build_command()
        results_dir = self.config.results_dir
        results_dir.mkdir(parents=True, exist_ok=True)

        with contextlib.chdir(results_dir):
            return self._run_command(command)

    def _run_command(self, command: str) -> ExitStatus:
        """Launch and relaunch the tool until the retry loop ends."""
        self.state.reset(self.config.attempts)
        self._logger.info("run_started", command=command, attempts=self.config.attempts)

        successful_attempt = False
        attempts_used = 0

        while self.state.should_retry:
            self.state.begin_attempt()
            attempts_used += 1
            if attempts_used > 1:
                self._logger.warning(
                    "relaunching", retries_left=self.state.remaining_attempts
                )

            # Leftover tool processes accumulate across attempts
            self._toolchain.terminate_stray_tools()

            process = self._spawner(command)
            self._logger.info("attempt_started", attempt=attempts_used, pid=process.pid)
            try:
                successful_attempt = self._supervise(process)
            finally:
                process.close()
                self._notify_attempt_finished()

            self._logger.info(
                "attempt_finished",
                attempt=attempts_used,
                successful=successful_attempt,
                fully_started=self.state.fully_started,
            )

        exit_status = ExitStatus(
            normal=successful_attempt,
            fatal_error=self.state.fatal_error,
            fatal_reason=self.state.fatal_reason,
            attempts_used=attempts_used,
        )
        self._logger.info(
            "run_finished",
            normal=exit_status.normal,
            fatal_error=exit_status.fatal_error,
            fatal_reason=exit_status.fatal_reason,
            attempts_used=attempts_used,
        )
        return exit_status

    def _supervise(self, process: AttemptProcess) -> bool:
        """Read and dispatch output until the attempt ends.

        Args:
            process: The spawned tool.

        Returns:
            True if the attempt ended without a failure trigger.
        """
        startup_timeout = self.config.startup_timeout
        silence_duration = 0.0
        stream_ended = False

        while True:
            if self.state.should_stop_attempt:
                self._kill(process)
                return False

            if self.state.should_reset_everything:
                self._kill(process)
                sim_device = self.config.sim_device
                if sim_device is not None:
                    self._toolchain.terminate_simulators(sim_device)
                    self._toolchain.reset_simulator(sim_device)
                return False

            if stream_ended:
                return True

            result = process.read_line(startup_timeout)

            if result.outcome is ReadOutcome.LINE:
                # Silence counts from the last line, not from the start
                silence_duration = 0.0
                self._dispatch(result.line or "")

            elif result.outcome is ReadOutcome.TIMEOUT and not self.state.fully_started:
                self._logger.warning("startup_timeout", timeout=startup_timeout)
                self._kill(process)
                self._toolchain.terminate_simulators(self.config.sim_device)
                return False

            elif result.outcome is ReadOutcome.TIMEOUT:
                # Started already; the wait doubles as the silence tick
                silence_duration += startup_timeout
                self._logger.warning("silence", seconds=silence_duration)
                max_silence = self.config.max_silence
                if max_silence is not None and silence_duration > max_silence:
                    self.state.request_abort()

            elif result.outcome is ReadOutcome.END_OF_STREAM:
                if result.line:
                    self._dispatch(result.line)
                # Flags raised by the last line still apply
                stream_ended = True

            else:
                if result.line:
                    self._dispatch(result.line)
                self._logger.error(
                    "process_died",
                    pid=process.pid,
                    detail=result.detail,
                    fully_started=self.state.fully_started,
                )
                if self.state.should_stop_attempt or self.state.should_reset_everything:
                    # Handled like any other flag at the top of the loop
                    continue
                # Before start this only costs an attempt; the loop retries
                return not self.state.fully_started

    def _dispatch(self, line: str) -> None:
        """Parse a line and hand it to every listener in registration order."""
        message = parse_line(line)
        for name, listener in list(self._listeners.items()):
            try:
                listener.receive(message)
            except Exception:  # noqa: BLE001
                self._logger.exception("listener_receive_failed", listener=name)

    def _notify_attempt_finished(self) -> None:
        for name, listener in list(self._listeners.items()):
            try:
                listener.on_attempt_finished()
            except Exception:  # noqa: BLE001
                self._logger.exception("listener_finish_failed", listener=name)

    def _kill(self, process: AttemptProcess) -> None:
        pid = process.pid
        result = process.kill()
        self._logger.warning("process_killed", pid=pid, result=result.value)

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def cleanup(self) -> None:
        """Remove the results directory tree, if it exists.

        The directory is resolved without being created.
        """
        results_dir = self.config.results_dir.resolve()
        if not results_dir.exists():
            self._logger.info("cleanup_skipped", path=str(results_dir))
            return
        self._logger.info("cleanup", path=str(results_dir))
        shutil.rmtree(results_dir)
