"""Compatibility adapter for the deprecated ``speckeep_core`` package.

The legacy package is a one-way view over ``speckeep``: the adapter copies
the canonical public names into the legacy module's namespace and reports the
deprecation once per process. Nothing flows back from the legacy package.
"""

import threading
import warnings
from collections.abc import MutableMapping
from types import ModuleType
from typing import Final

import structlog
from structlog.typing import FilteringBoundLogger


class ProcessScope:
    """Process-wide set of one-time events.

    ``first_time`` is an atomic check-and-set, so concurrent imports still
    see exactly one ``True`` per key.
    """

    __slots__: Final = ("_lock", "_seen")

    def __init__(self) -> None:
        self._lock: threading.Lock = threading.Lock()
        self._seen: set[str] = set()

    def first_time(self, key: str) -> bool:
        """Record ``key`` and report whether this is its first occurrence."""
        with self._lock:
            if key in self._seen:
                return False
            self._seen.add(key)
            return True

    def clear(self) -> None:
        """Forget every recorded key."""
        with self._lock:
            self._seen.clear()


PROCESS_SCOPE: Final = ProcessScope()


class CompatibilityAdapter:
    """Exposes a canonical module's public API under a legacy name."""

    __slots__: Final = ("_canonical", "_legacy_name", "_logger", "_scope")

    def __init__(
        self,
        canonical: ModuleType,
        legacy_name: str,
        *,
        scope: ProcessScope = PROCESS_SCOPE,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            canonical: Module whose ``__all__`` is re-exported.
            legacy_name: Import name of the deprecated package.
            scope: Where the one-time warning is recorded.
            logger: Optional structured logger.
        """
        self._canonical: ModuleType = canonical
        self._legacy_name: str = legacy_name
        self._scope: ProcessScope = scope
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else structlog.get_logger(legacy_name)
        )

    @property
    def public_names(self) -> tuple[str, ...]:
        names: list[str] = list(getattr(self._canonical, "__all__", ()))
        return tuple(names)

    def install(self, namespace: MutableMapping[str, object]) -> None:
        """Populate a legacy module namespace and warn on first use.

        Args:
            namespace: The legacy module's ``globals()``.
        """
        for name in self.public_names:
            namespace[name] = getattr(self._canonical, name)
        namespace["__all__"] = list(self.public_names)
        self.warn_once()

    def warn_once(self) -> bool:
        """Emit the deprecation warning unless it was already emitted.

        Returns:
            True if the warning was emitted by this call.
        """
        if not self._scope.first_time(f"deprecated:{self._legacy_name}"):
            return False
        message = (
            f"{self._legacy_name} is deprecated; "
            f"import {self._canonical.__name__} instead"
        )
        try:
            self._logger.warning(
                "deprecated_import",
                module=self._legacy_name,
                replacement=self._canonical.__name__,
            )
            warnings.warn(message, DeprecationWarning, stacklevel=3)
        except Exception:  # noqa: BLE001
            # Warnings escalated to errors must not break the import
            return False
        return True
