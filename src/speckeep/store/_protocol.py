"""Spec store protocol for type-safe dependency injection.

The search index, synchronizer and context aggregator depend only on this
protocol, so any persistence layer that can list and fetch specs plugs in.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from speckeep.spec._models import Spec


@runtime_checkable
class SpecStore(Protocol):
    """Read interface over the persistence layer holding specs.

    Example:
        >>> def titles(store: SpecStore) -> list[str]:
        ...     return [spec.title for spec in store.list_all()]
    """

    def list_all(self) -> Sequence[Spec]:
        """Return every spec in the store.

        Returns:
            All specs, in no particular order.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
        """
        ...

    def get(self, spec_id: str) -> Spec:
        """Return a single spec by ID.

        Args:
            spec_id: The spec ID to look up.

        Returns:
            The spec.

        Raises:
            SpecNotFoundError: If no spec has this ID.
            StoreUnavailableError: If the store cannot be reached.
        """
        ...
