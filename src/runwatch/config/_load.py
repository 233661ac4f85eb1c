import os
import sys
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations

from runwatch.exceptions import ConfigError

from ._models import Config

STRICT_CONFIG_ENV = "RUNWATCH_STRICT_CONFIG"


def _fail_or_fallback(message: str, *, strict: bool) -> tuple[Config, str]:
    if strict:
        print(f"Error: {message}", file=sys.stderr)  # noqa: T201
        sys.exit(1)
    print(f"Warning: {message}", file=sys.stderr)  # noqa: T201
    return Config.from_dict({}), message


def safe_load_config(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Failures are handled according to the RUNWATCH_STRICT_CONFIG
    environment variable:
    - If unset or "0": warn to stderr and return the defaults
    - If "1": fail fast with sys.exit(1)

    An explicit config_path must exist regardless of strict mode.

    Args:
        config_path: Explicit path to config file (--config flag).
        project_root: Project root directory override (--project-root flag).
        cli_overrides: CLI argument overrides to pass to Config.load().

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
    """
    strict = os.environ.get(STRICT_CONFIG_ENV, "0") == "1"

    if config_path is not None and not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        if config_path is not None:
            config = Config.from_file(config_path)
        else:
            config = Config.load(
                project_root=project_root,
                include_env=True,
                include_cli=cli_overrides is not None,
                cli_overrides=cli_overrides,
            )
    except ConfigError as e:
        return _fail_or_fallback(f"Failed to load config: {e}", strict=strict)
    except OSError as e:
        return _fail_or_fallback(f"Failed to read config: {e}", strict=strict)

    return config, None
