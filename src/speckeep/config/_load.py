import os
import sys
from pathlib import Path

from speckeep.config._models import Config
from speckeep.exceptions import ConfigError


def safe_load_config(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Attempts to load configuration and handles errors based on the
    SPECKEEP_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    When config_path is provided, the file must exist (explicit user request).

    Args:
        config_path: Explicit path to config file (--config flag).
        project_root: Directory searched for ``speckeep.toml``.

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
        On failure (non-strict mode), returns default Config with error message.
    """
    strict_mode = os.environ.get("SPECKEEP_STRICT_CONFIG", "0") == "1"

    if config_path is not None and not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        config = Config.load(config_path=config_path, project_root=project_root)
    except (ConfigError, OSError) as e:
        error_msg = str(e)
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(  # noqa: T201
            f"Warning: Failed to load config: {error_msg}",
            file=sys.stderr,
        )
        return Config.from_dict({}), error_msg
    else:
        return config, None
