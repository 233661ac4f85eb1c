"""runwatch CLI commands."""

from typing import TYPE_CHECKING

from ._config import app as config_app
from ._parse import _parse, message_to_dict
from ._run import _cleanup, _run, exit_code_for, resolve_runner_config

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "config_app",
    "exit_code_for",
    "message_to_dict",
    "register_commands",
    "resolve_runner_config",
]


def register_commands(app: "App") -> None:  # noqa: UP037
    _ = app.command(_run, name="run")
    _ = app.command(_cleanup, name="cleanup")
    _ = app.command(_parse, name="parse")
    _ = app.command(config_app)
