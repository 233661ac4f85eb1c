"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is a plain dict for type compatibility with functions
like deep_merge, which copy their inputs.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "paths": {
        "artifacts_dir": "buildArtifacts",
    },
    "runner": {
        "app_location": "",
        "script_path": "",
        "template_path": "",
        "tool_path": "/usr/bin/instruments",
        "attempts": 5,
        "startup_timeout": 30.0,
    },
}
