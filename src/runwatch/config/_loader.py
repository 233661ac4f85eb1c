# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Reading and layering of runwatch settings.

runwatch settings come from TOML files (`runwatch.toml`, its local
override and the per-user file) and from `RUNWATCH_*` environment
variables. This module turns each of those into a nested dictionary and
layers the dictionaries on top of each other.
"""

import json
import os
import tomllib
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any

from runwatch.exceptions import ConfigLoadError

ENV_PREFIX = "RUNWATCH_"


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read one runwatch settings file.

    Args:
        path: The TOML file, e.g. a project's `runwatch.toml`.

    Returns:
        The file's tables as nested dictionaries.

    Raises:
        FileNotFoundError: If the file is missing.
        ConfigLoadError: If the file is not valid TOML. The error carries
            the line and column reported by the TOML parser.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=e.lineno,
            column=e.colno,
        ) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Layer one settings dictionary over another.

    A `[runner]` table in `override` only replaces the runner keys it
    names; the rest of `base["runner"]` survives. Anything that is not a
    table on both sides (strings, numbers, arrays) is taken from
    `override` as a whole. The result shares no containers with either
    argument.

    Args:
        base: Lower-precedence settings.
        override: Higher-precedence settings.

    Returns:
        The layered settings.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        else:
            lower = base[key]
            upper = override[key]
            if isinstance(lower, dict) and isinstance(upper, dict):
                result[key] = deep_merge(lower, upper)
            else:
                result[key] = copy_value(upper)

    return result


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Return an independent copy of a settings value."""
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect settings from `RUNWATCH_<SECTION>__<KEY>` variables.

    The double underscore separates the table from the key, so
    `RUNWATCH_RUNNER__SIM_DEVICE` sets `runner.sim_device`. Variables
    without a double underscore, such as `RUNWATCH_DEBUG` or
    `RUNWATCH_STRICT_CONFIG`, are switches read elsewhere and skipped here.

    Args:
        prefix: Variable prefix.
        environ: Environment to read. Defaults to os.environ.

    Returns:
        The collected settings as nested dictionaries.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    source = os.environ if environ is None else environ

    for key, value in source.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :]
        if "__" not in config_key:
            continue

        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, parse_string_value(value))

    return result


def parse_string_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Give an environment variable's text the type TOML would have given it.

    `true`/`false` become booleans, `5` an int, `30.0` a float, and
    bracketed JSON a list or table. Anything else, such as a simulator
    name like `iPhone 6 (8.1 Simulator)` or a version like `1.2.3`, stays
    a string.

    Examples:
        >>> parse_string_value("3")
        3
        >>> parse_string_value("12.5")
        12.5
        >>> parse_string_value("iPad 2")
        'iPad 2'
    """
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"

    if "." not in value:
        try:
            return int(value)
        except ValueError:
            pass
    else:
        try:
            return float(value)
        except ValueError:
            pass

    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Store `value` under a dotted path such as `runner.attempts`.

    Missing tables along the path are created, and a non-table in the way
    is replaced by one.
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value
