# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing SpecKeep configuration values.
"""

from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from speckeep.config._defaults import DEFAULT_CONFIG
from speckeep.config._loader import deep_merge, parse_env_vars, read_toml_file
from speckeep.config._models._common import ConfigSource, ConfigSourceName
from speckeep.config._models._engine import (
    ContextConfig,
    SearchConfig,
    ServerConfig,
    StoreConfig,
    SyncConfig,
)
from speckeep.config._models._logging import LoggingConfig
from speckeep.exceptions import ConfigValidationError


def _validation_error(error: ValidationError, source: str | None) -> ConfigValidationError:
    """Convert the first pydantic error into a ConfigValidationError."""
    first = error.errors()[0]
    key = ".".join(str(part) for part in first["loc"])
    msg = f"Invalid configuration value for {key}: {first['msg']}"
    return ConfigValidationError(
        msg,
        key=key,
        value=first.get("input"),
        expected=first["msg"],
        source=source,
    )


def _validated[C: "Config"](
    cls: type[C],
    merged: dict[str, Any],
    sources: tuple[ConfigSource, ...],
    *,
    source_label: str | None = None,
) -> C:
    """Validate merged values and attach the sources they came from."""
    try:
        config = cls.model_validate(merged)
    except ValidationError as e:
        raise _validation_error(e, source_label) from e
    config._sources = sources  # noqa: SLF001
    return config


class Config(BaseModel):
    """Configuration container with typed access.

    Instances are immutable. Use the factory methods ``from_dict``,
    ``from_file`` and ``load`` rather than the constructor.

    Example:
        >>> config = Config.from_dict({"search": {"default_limit": 5}})
        >>> config.search.default_limit
        5
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    context: ContextConfig = Field(default_factory=ContextConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If a value fails validation.
        """
        return _validated(cls, deep_merge(DEFAULT_CONFIG, data), ())

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a single TOML file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If a value fails validation.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.FILE, path=path, exists=True, values=data
        )
        return _validated(
            cls,
            deep_merge(DEFAULT_CONFIG, data),
            (source,),
            source_label=str(path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        project_root: Path | None = None,
        include_env: bool = True,
    ) -> Self:
        """Load merged configuration from all sources.

        Merges in precedence order defaults -> user -> project -> explicit
        file -> environment.

        Args:
            config_path: Explicit config file; must exist when given.
            project_root: Directory searched for ``speckeep.toml``. Defaults
                to the working directory.
            include_env: Include ``SPECKEEP_`` environment variables.

        Returns:
            Merged configuration object.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist.
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        # Deferred import to avoid circular dependency
        from speckeep.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            config_path=config_path,
            project_root=project_root,
            include_env=include_env,
        )

        merged: dict[str, Any] = {}
        loaded: list[ConfigSource] = []
        # Sources are discovered highest-to-lowest, so reverse for merging
        for source in reversed(sources):
            values: dict[str, Any] = source.values
            if source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path is not None and source.exists:
                values = read_toml_file(source.path)

            loaded.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        return _validated(cls, merged, tuple(reversed(loaded)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration.

        Returns:
            List of ConfigSource objects, highest precedence first.
        """
        return list(self._sources)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config.get("search.default_limit")
            20
            >>> config.get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self.model_dump(mode="json")
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current
