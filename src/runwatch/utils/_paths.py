"""Build artifact paths used by runwatch.

All artifact paths live under a configurable artifacts directory, which is
resolved relative to the project root when it is not absolute.
"""

from pathlib import Path

RESULTS_DIR_NAME = "instruments"
LOG_DIR_NAME = "logs"


def resolve_artifacts_dir(artifacts_dir: str | Path, project_root: Path | None) -> Path:
    """Resolve the artifacts directory against the project root.

    Args:
        artifacts_dir: Configured artifacts directory.
        project_root: Project root, or None to use the working directory.

    Returns:
        Absolute path to the artifacts directory.
    """
    path = Path(artifacts_dir).expanduser()
    if not path.is_absolute():
        path = (project_root or Path.cwd()) / path
    return path.resolve()


def get_results_dir(artifacts_dir: Path, *, create: bool = True) -> Path:
    """Get the directory the automation tool writes its results into.

    Args:
        artifacts_dir: Resolved artifacts directory.
        create: Create the directory (and parents) if it does not exist.

    Returns:
        Path to the results directory.
    """
    path = artifacts_dir / RESULTS_DIR_NAME
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def get_log_dir(artifacts_dir: Path) -> Path:
    """Get the path to the logs/ directory inside the artifacts directory."""
    return artifacts_dir / LOG_DIR_NAME


def get_run_log_file(artifacts_dir: Path) -> Path:
    """Get the path to the runner log file inside logs/."""
    return get_log_dir(artifacts_dir) / "runner.log"
