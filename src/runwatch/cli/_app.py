"""The command-line interface for runwatch."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from runwatch.config import safe_load_config

from ._commands import register_commands
from ._context import CLIContext

APP_HELP = "Launch and supervise a UI automation tool."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the runwatch application with its global options.

    Args:
        console: Console for help and version output.
        error_console: Console for parse errors.
        exit_on_error: Exit the interpreter on argument errors.

    Returns:
        The configured cyclopts App. Invoke ``app.meta`` to honor the
        global options.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="runwatch",
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )
    register_commands(app)

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        quiet: Annotated[bool, Parameter(help="Suppress non-essential output")] = False,
        no_color: Annotated[
            bool, Parameter(name="--no-color", help="Disable colored output")
        ] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
    ) -> None:
        """Launch runwatch with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with additional details.
            quiet: Suppress non-essential output.
            no_color: Disable colored output.
            config: Explicit path to config file.
            project_root: Path to project root directory.
        """
        loaded_config, config_error = safe_load_config(
            config_path=config,
            project_root=project_root,
        )

        CLIContext.set_current(
            CLIContext(
                config=loaded_config,
                verbose=verbose,
                quiet=quiet,
                no_color=no_color,
                project_root=project_root,
                config_error=config_error,
            )
        )

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `runwatch` CLI."""
    app.meta()


if __name__ == "__main__":
    main()
