"""SpecKeep configuration.

This module provides the public API for SpecKeep configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from speckeep.config import Config
    >>> config = Config.load()
    >>> config.search.default_limit
    20
"""

from speckeep.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG, ENV_PREFIX
from ._discovery import discover_sources, find_project_root, get_user_config_path
from ._load import safe_load_config
from ._loader import (
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    ContextConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SearchConfig,
    ServerConfig,
    StoreConfig,
    StoreKind,
    SyncConfig,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "ContextConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SearchConfig",
    "ServerConfig",
    "StoreConfig",
    "StoreKind",
    "SyncConfig",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "get_user_config_path",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
