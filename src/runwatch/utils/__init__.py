"""Shared utilities for runwatch."""

from ._exec import ScriptConfig, ScriptResult, run_script, truncate_output
from ._logging import create_null_logger, create_run_logger
from ._paths import (
    get_log_dir,
    get_results_dir,
    get_run_log_file,
    resolve_artifacts_dir,
)

__all__ = [
    "ScriptConfig",
    "ScriptResult",
    "create_null_logger",
    "create_run_logger",
    "get_log_dir",
    "get_results_dir",
    "get_run_log_file",
    "resolve_artifacts_dir",
    "run_script",
    "truncate_output",
]
