"""Default host toolchain for the automation tool.

Runs the host commands that clean up stray tool processes and simulators.
Failures are logged and never raised: a process that is already gone is the
desired end state.
"""

import shlex
from typing import TYPE_CHECKING, final

from runwatch.utils import ScriptConfig, create_null_logger, run_script

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

SIMULATOR_PROCESS_NAMES: tuple[str, ...] = ("Simulator", "iOS Simulator")


@final
class XcodeToolchain:
    """Process management through killall and simctl."""

    __slots__ = ("_logger", "tool_name", "timeout_ms")

    def __init__(
        self,
        *,
        tool_name: str = "instruments",
        timeout_ms: int = 30000,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        self.tool_name = tool_name
        self.timeout_ms = timeout_ms
        self._logger = logger or create_null_logger()

    def _run(self, command: str) -> None:
        result = run_script(ScriptConfig(command=command, timeout_ms=self.timeout_ms))
        if not result.success:
            self._logger.warning(
                "toolchain_command_failed", command=command, error=result.error
            )
        elif result.exit_code != 0:
            # killall exits non-zero when nothing matched
            self._logger.debug(
                "toolchain_command_nonzero",
                command=command,
                exit_code=result.exit_code,
                stderr=result.stderr.strip(),
            )

    def terminate_stray_tools(self) -> None:
        self._run(f"killall -9 {shlex.quote(self.tool_name)}")

    def terminate_simulators(self, device: str | None) -> None:
        self._logger.info("terminating_simulators", device=device)
        for name in SIMULATOR_PROCESS_NAMES:
            self._run(f"killall -9 {shlex.quote(name)}")
        if device is not None:
            self._run(f"xcrun simctl shutdown {shlex.quote(device)}")

    def reset_simulator(self, device: str) -> None:
        self._logger.info("resetting_simulator", device=device)
        self._run(f"xcrun simctl erase {shlex.quote(device)}")
