"""Configuration models.

This module provides Pydantic models for SpecKeep configuration sections
and the main Config container class.
"""

from speckeep.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
    StoreKind,
)
from speckeep.config._models._config import Config
from speckeep.config._models._engine import (
    ContextConfig,
    SearchConfig,
    ServerConfig,
    StoreConfig,
    SyncConfig,
)
from speckeep.config._models._logging import LoggingConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "ContextConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SearchConfig",
    "ServerConfig",
    "StoreConfig",
    "StoreKind",
    "SyncConfig",
]
