"""SpecKeep exceptions."""

from pathlib import Path
from typing import Any


class SpecKeepError(Exception):
    """Base exception for SpecKeep errors."""


# =============================================================================
# Store Exceptions
# =============================================================================


class StoreError(SpecKeepError):
    """Base exception for spec store operations."""


class StoreUnavailableError(StoreError):
    """Raised when the underlying spec store cannot be reached.

    Attributes:
        store: Human-readable description of the store (path, kind).
        cause: The exception that made the store unavailable, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        store: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and store context.

        Args:
            message: Human-readable error message.
            store: Description of the unreachable store.
            cause: The underlying exception.
        """
        super().__init__(message)
        self.store: str | None = store
        self.cause: Exception | None = cause


class SpecNotFoundError(StoreError, KeyError):
    """Raised when a single spec lookup misses.

    Attributes:
        spec_id: The ID of the spec that was not found.
    """

    def __init__(self, message: str, *, spec_id: str | None = None) -> None:
        """Initialize with error message and spec context.

        Args:
            message: Human-readable error message.
            spec_id: The ID of the spec that was not found.
        """
        super().__init__(message)
        self.spec_id: str | None = spec_id

    def __str__(self) -> str:
        # KeyError.__str__ wraps the message in quotes
        return str(self.args[0]) if self.args else ""


# =============================================================================
# Search Exceptions
# =============================================================================


class SearchError(SpecKeepError):
    """Base exception for search operations."""


class InvalidQueryError(SearchError, ValueError):
    """Raised when search options are invalid.

    Free-text queries are never rejected; they are normalized instead. This
    is only raised for structurally invalid options such as a non-positive
    result limit.

    Attributes:
        field: The option that failed validation.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        """Initialize with error message and option context."""
        super().__init__(message)
        self.field: str | None = field


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(SpecKeepError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
