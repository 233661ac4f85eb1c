# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, TC003
"""Run and cleanup commands."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter
from pydantic import ValidationError

from runwatch.config import RunnerSettings
from runwatch.exceptions import ProcessSpawnError
from runwatch.runner import ConsoleListener, ExitStatus, Runner, RunnerConfig
from runwatch.utils import (
    create_run_logger,
    get_results_dir,
    get_run_log_file,
    resolve_artifacts_dir,
)

from .._context import CLIContext
from .._shared import ExitCode, exit_with_error, get_error_console

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

CONSOLE_LISTENER = "console"

_REQUIRED_SETTINGS = ("app_location", "script_path", "template_path")


def _artifacts_dir(ctx: CLIContext) -> Path:
    return resolve_artifacts_dir(
        ctx.config.paths.artifacts_dir, ctx.effective_project_root
    )


def _create_logger(ctx: CLIContext, command: str) -> "FilteringBoundLogger":  # noqa: UP037
    logging_config = ctx.config.logging
    log_file = logging_config.file or get_run_log_file(_artifacts_dir(ctx))
    return create_run_logger(
        log_file,
        level=logging_config.level.value,
        log_format=logging_config.format.value,  # pyright: ignore[reportArgumentType]
        command=command,
    )


def resolve_runner_config(
    ctx: CLIContext,
    overrides: dict[str, object],
    *,
    require_paths: bool = True,
) -> RunnerConfig:
    """Combine configured runner settings with command line overrides.

    Args:
        ctx: Current CLI context.
        overrides: Option values given on the command line (None values are
            ignored).
        require_paths: Whether app, script and template must be set.

    Returns:
        The runner configuration for this invocation.

    Raises:
        SystemExit: If the combined settings are invalid or incomplete.
    """
    error_console = get_error_console(no_color=ctx.no_color)
    data = ctx.config.runner.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        settings = RunnerSettings.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        key = ".".join(str(part) for part in error["loc"])
        exit_with_error(
            f"Invalid runner setting '{key}': {error['msg']}",
            ExitCode.CONFIG_ERROR,
            console=error_console,
        )

    if require_paths:
        missing = [name for name in _REQUIRED_SETTINGS if not getattr(settings, name)]
        if missing:
            names = ", ".join(f"runner.{name}" for name in missing)
            exit_with_error(
                f"Missing runner settings: {names}",
                ExitCode.CONFIG_ERROR,
                console=error_console,
            )

    results_dir = get_results_dir(_artifacts_dir(ctx), create=False)
    return settings.to_runner_config(results_dir)


def exit_code_for(status: ExitStatus) -> ExitCode:
    """Map a run outcome to the process exit code."""
    if status.fatal_error:
        return ExitCode.FATAL
    if status.normal:
        return ExitCode.SUCCESS
    return ExitCode.ABNORMAL


def _run(
    *,
    saltinel: Annotated[
        str,
        Parameter(
            name=["--saltinel", "-s"],
            help="Marker the automation script prints once it is running",
        ),
    ],
    app: Annotated[
        str | None,
        Parameter(name=["--app", "-a"], help="Path to the app bundle under test"),
    ] = None,
    script: Annotated[
        str | None,
        Parameter(name="--script", help="Path to the automation script"),
    ] = None,
    template: Annotated[
        str | None,
        Parameter(name="--template", help="Path to the trace template"),
    ] = None,
    hardware_id: Annotated[
        str | None,
        Parameter(name="--hardware-id", help="Identifier of a hardware device"),
    ] = None,
    sim_device: Annotated[
        str | None,
        Parameter(name="--sim-device", help="Identifier of a simulator"),
    ] = None,
    sim_language: Annotated[
        str | None,
        Parameter(name="--sim-language", help="Simulator language"),
    ] = None,
    sim_locale: Annotated[
        str | None,
        Parameter(name="--sim-locale", help="Simulator locale"),
    ] = None,
    attempts: Annotated[
        int | None,
        Parameter(name="--attempts", help="Maximum number of launches"),
    ] = None,
    startup_timeout: Annotated[
        float | None,
        Parameter(
            name="--startup-timeout",
            help="Seconds to wait for output before relaunching",
        ),
    ] = None,
    max_silence: Annotated[
        float | None,
        Parameter(
            name="--max-silence",
            help="Seconds of silence allowed once the script is running",
        ),
    ] = None,
) -> None:
    """Launch the automation tool and supervise it

    Relaunches the tool until the automation script starts, a fatal
    condition is reported, or the attempts run out. Exits 0 on a normal
    run, 1 on an abnormal one and 2 after a fatal error.

    Args:
        saltinel: Marker the automation script prints once it is running.
        app: Path to the app bundle under test.
        script: Path to the automation script.
        template: Path to the trace template.
        hardware_id: Identifier of a hardware device.
        sim_device: Identifier of a simulator.
        sim_language: Simulator language.
        sim_locale: Simulator locale.
        attempts: Maximum number of launches.
        startup_timeout: Seconds to wait for output before relaunching.
        max_silence: Seconds of silence allowed once the script is running.
    """
    ctx = CLIContext.get_current()
    console = ctx.console()
    error_console = get_error_console(no_color=ctx.no_color)

    config = resolve_runner_config(
        ctx,
        {
            "app_location": app,
            "script_path": script,
            "template_path": template,
            "hardware_id": hardware_id,
            "sim_device": sim_device,
            "sim_language": sim_language,
            "sim_locale": sim_locale,
            "attempts": attempts,
            "startup_timeout": startup_timeout,
            "max_silence": max_silence,
        },
    )

    logger = _create_logger(ctx, "run")
    runner = Runner(config, logger=logger)
    runner.add_listener(
        CONSOLE_LISTENER, ConsoleListener(console, show_unmatched=not ctx.quiet)
    )

    if ctx.verbose:
        console.print(f"[dim]Results:[/dim] {config.results_dir}")
        console.print(f"[dim]Command:[/dim] {runner.build_command()}")

    try:
        status = runner.run(saltinel)
    except ProcessSpawnError as e:
        logger.error("spawn_failed", error=str(e), command=e.command)
        exit_with_error(str(e), ExitCode.FATAL, console=error_console)

    code = exit_code_for(status)
    if not ctx.quiet:
        if code is ExitCode.SUCCESS:
            console.print(
                f"[green]Run finished[/green] after {status.attempts_used} attempt(s)"
            )
        elif code is ExitCode.FATAL:
            reason = status.fatal_reason or "unknown"
            error_console.print(f"[red]Fatal error:[/red] {reason}")
        else:
            error_console.print(
                f"[yellow]Run ended abnormally[/yellow] "
                f"after {status.attempts_used} attempt(s)"
            )
    raise SystemExit(code)


def _cleanup() -> None:
    """Remove the results directory

    Deletes the directory the automation tool writes its results into.
    Nothing happens if it does not exist.
    """
    ctx = CLIContext.get_current()
    config = resolve_runner_config(ctx, {}, require_paths=False)
    runner = Runner(config, logger=_create_logger(ctx, "cleanup"))

    try:
        runner.cleanup()
    except OSError as e:
        exit_with_error(
            f"Failed to remove {config.results_dir}: {e}",
            ExitCode.IO_ERROR,
            console=get_error_console(no_color=ctx.no_color),
        )

    if not ctx.quiet:
        ctx.console().print(f"Cleaned up {config.results_dir}")
