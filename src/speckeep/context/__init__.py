"""Project context aggregation."""

from speckeep.context._aggregator import (
    DEFAULT_RECENT_LIMIT,
    ContextAggregator,
    aggregate_context,
)

__all__ = ["DEFAULT_RECENT_LIMIT", "ContextAggregator", "aggregate_context"]
