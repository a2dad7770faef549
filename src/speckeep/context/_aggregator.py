"""Project context aggregation.

This module provides the ContextAggregator class, which reduces the current
spec set into a ``ProjectContext``: status counts, most recently updated
specs, and the declared relationships between specs.
"""

from collections import Counter
from collections.abc import Sequence
from typing import Final

import structlog
from structlog.typing import FilteringBoundLogger

from speckeep.exceptions import StoreUnavailableError
from speckeep.spec._models import ProjectContext, Relationship, Spec, SpecStatus
from speckeep.store._protocol import SpecStore

__all__ = ["DEFAULT_RECENT_LIMIT", "ContextAggregator", "aggregate_context"]

DEFAULT_RECENT_LIMIT: Final = 10


def _count_by_status(specs: Sequence[Spec]) -> dict[SpecStatus, int]:
    counts = Counter(spec.status for spec in specs)
    return {status: counts.get(status, 0) for status in SpecStatus}


def _recently_updated(specs: Sequence[Spec], limit: int) -> tuple[str, ...]:
    ordered = sorted(specs, key=lambda spec: (-spec.updated_at.timestamp(), spec.id))
    return tuple(spec.id for spec in ordered[:limit])


def _collect_relationships(specs: Sequence[Spec]) -> frozenset[Relationship]:
    """Collect declared relationships between existing specs.

    Each declaration yields one directed relationship; two specs declaring
    each other yield one relationship per direction. Self-references and
    references to unknown specs are dropped.
    """
    valid_spec_ids = {spec.id for spec in specs}
    return frozenset(
        Relationship(
            spec_id=spec.id,
            related_spec_id=target,
            relation_kind=kind,
        )
        for spec in specs
        for target, kind in spec.declared_relations
        if target in valid_spec_ids and target != spec.id
    )


def aggregate_context(
    specs: Sequence[Spec], *, recent_limit: int = DEFAULT_RECENT_LIMIT
) -> ProjectContext:
    """Reduce a spec set into a project context.

    Args:
        specs: The complete current spec set.
        recent_limit: Maximum length of ``recently_updated``.

    Returns:
        The aggregated context.
    """
    return ProjectContext(
        total_specs=len(specs),
        by_status=_count_by_status(specs),
        recently_updated=_recently_updated(specs, recent_limit),
        relationships=_collect_relationships(specs),
    )


class ContextAggregator:
    """Computes the project context from a spec store.

    Every call reads the store afresh. If the store cannot be reached the
    call fails; a partially aggregated context is never returned.
    """

    __slots__: Final = ("_logger", "_recent_limit", "_store")

    def __init__(
        self,
        store: SpecStore,
        *,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            store: The store holding the spec set.
            recent_limit: Maximum length of ``recently_updated``.
            logger: Optional structured logger.
        """
        self._store: SpecStore = store
        self._recent_limit: int = recent_limit
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else structlog.get_logger(__name__)
        )

    def compute_context(self) -> ProjectContext:
        """Compute the project context.

        Returns:
            The aggregated context for the current spec set.

        Raises:
            StoreUnavailableError: If the store cannot be reached.
        """
        try:
            specs = self._store.list_all()
        except StoreUnavailableError as e:
            self._logger.error("context_store_unavailable", error=str(e))
            raise
        return aggregate_context(specs, recent_limit=self._recent_limit)
