"""Store, search, context and sync configuration models."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from speckeep.config._models._common import StoreKind


class StoreConfig(BaseModel):
    """Spec store configuration section.

    Attributes:
        kind: Which store backend to use.
        path: Spec directory for the filesystem store, relative paths are
            resolved against the working directory.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    kind: StoreKind = StoreKind.FILESYSTEM
    path: str = "specs"


class SearchConfig(BaseModel):
    """Search configuration section."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    default_limit: int = Field(
        default=20, gt=0, description="Result limit when a query gives none."
    )
    snippet_window: int = Field(
        default=160, gt=0, description="Maximum snippet length in characters."
    )


class ContextConfig(BaseModel):
    """Project context configuration section."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    recent_limit: int = Field(
        default=10, ge=0, description="Length of the recently updated list."
    )


class SyncConfig(BaseModel):
    """Index synchronization configuration section.

    ``interval_seconds`` bounds how stale search results may be relative to
    the spec store.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    interval_seconds: float = Field(
        default=2.0, gt=0, description="Polling interval for store re-sync."
    )
    watch: bool = Field(
        default=False,
        description="Also re-sync on filesystem change notifications.",
    )


class ServerConfig(BaseModel):
    """HTTP server configuration section."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=6277, ge=0, le=65535)
