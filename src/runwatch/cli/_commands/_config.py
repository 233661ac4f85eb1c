# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, A002
"""Config commands for viewing runwatch configuration."""

from typing import Annotated

from cyclopts import App, Parameter

from .._context import CLIContext, OutputFormat
from .._shared import ExitCode, exit_with_error, format_json, get_error_console

app = App(name="config", help="View runwatch configuration")


@app.command(name="show")
def _show(
    *,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (toml, json)"),
    ] = OutputFormat.TOML,
    no_defaults: Annotated[
        bool,
        Parameter(name="--no-defaults", help="Exclude default values"),
    ] = False,
    show_sources: Annotated[
        bool,
        Parameter(name="--show-sources", help="List the sources that were merged"),
    ] = False,
) -> None:
    """Display the effective configuration

    Shows the configuration merged from defaults, the user config file,
    the project and local config files, and RUNWATCH_* environment
    variables.

    Args:
        format: Output format (toml, json).
        no_defaults: Exclude default values from output.
        show_sources: List the merged sources before the configuration.
    """
    ctx = CLIContext.get_current()

    if format is OutputFormat.PLAIN:
        exit_with_error(
            "config show supports toml and json output only",
            ExitCode.CONFIG_ERROR,
            console=get_error_console(no_color=ctx.no_color),
        )

    config = ctx.config

    if show_sources:
        for source in config.sources:
            state = "found" if source.exists else "missing"
            location = f" {source.path}" if source.path else ""
            print(f"# {source.name.value}{location} ({state})")  # noqa: T201

    if format is OutputFormat.JSON:
        print(format_json(config.to_dict(include_defaults=not no_defaults)))  # noqa: T201
    else:
        print(config.to_toml(include_defaults=not no_defaults), end="")  # noqa: T201
