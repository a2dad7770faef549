"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is intentionally a plain dict for type compatibility
with functions like deep_merge. The merge functions create copies, so mutation
of the original is not a concern in practice.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "store": {
        "kind": "filesystem",
        "path": "specs",
    },
    "search": {
        "default_limit": 20,
        "snippet_window": 160,
    },
    "context": {
        "recent_limit": 10,
    },
    "sync": {
        "interval_seconds": 2.0,
        "watch": False,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 6277,
    },
}

CONFIG_FILE_NAME = "speckeep.toml"
ENV_PREFIX = "SPECKEEP_"
