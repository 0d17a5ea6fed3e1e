"""Filtering and aggregation package."""

from purchase_manager.queries.aggregator import aggregate, format_number
from purchase_manager.queries.filters import (
    filter_records,
    filter_with_indices,
    matches,
)

__all__ = [
    "aggregate",
    "filter_records",
    "filter_with_indices",
    "format_number",
    "matches",
]
