"""Project root and config path discovery utilities.

This module provides functions for locating the SpecKeep project root
by searching upward through the directory tree for a ``speckeep.toml``
file, and for determining platform-specific configuration file paths.
"""

from pathlib import Path

import platformdirs

from speckeep.config._defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG
from speckeep.config._models._common import ConfigSource, ConfigSourceName


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by searching upward for ``speckeep.toml``.

    Args:
        start: Directory to start searching from. Defaults to current
            working directory if not specified.

    Returns:
        Path to the directory containing ``speckeep.toml``, or None if no
        project root is found.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        if _file_exists(current / CONFIG_FILE_NAME):
            return current
        parent = current.parent
        if parent == current:  # Reached filesystem root
            return None
        current = parent


def get_user_config_path() -> Path:
    r"""Get platform-specific user config file path.

    - Linux: ``~/.config/speckeep/config.toml``
    - macOS: ``~/Library/Application Support/speckeep/config.toml``
    - Windows: ``%APPDATA%\speckeep\config.toml``

    The path is returned regardless of whether the file exists.

    Returns:
        Path to the user config file for the current platform.
    """
    config_dir = platformdirs.user_config_path("speckeep")
    return config_dir / "config.toml"


def _file_exists(path: Path) -> bool:
    """Check if a file exists, handling permission errors gracefully."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
    include_env: bool = True,
) -> list[ConfigSource]:
    """Discover all configuration sources.

    Discovers configuration sources in precedence order (highest first).
    File-based sources are checked for existence but not read.

    Args:
        config_path: Explicit config file, placed above the project file.
        project_root: Project root directory. If None, auto-detect by
            searching upward for ``speckeep.toml``.
        include_env: Include environment variables as a source.

    Returns:
        List of ConfigSource objects in precedence order (highest first).
        Sources that don't exist are still included with exists=False.

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist.
    """
    sources: list[ConfigSource] = []

    if include_env:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.ENV,
                path=None,
                exists=True,  # Actual values parsed during loading phase
                values={},
            )
        )

    if config_path is not None:
        if not _file_exists(config_path):
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)
        sources.append(
            ConfigSource(
                name=ConfigSourceName.FILE,
                path=config_path,
                exists=True,
                values={},
            )
        )

    resolved_root = project_root if project_root else find_project_root()
    if resolved_root:
        project_path = resolved_root / CONFIG_FILE_NAME
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
