"""Derived views over the ledger: lot linking and statistics."""

from tradejournal.analytics.linking import (
    open_positions,
    resolve_ledger,
    resolve_links,
    weighted_cost_basis,
)
from tradejournal.analytics.stats import (
    EMPTY_SUMMARY,
    filter_trades,
    group_by_behavior_tag,
    group_by_sector,
    round_half_up,
    summarize,
)

__all__ = [
    "open_positions",
    "resolve_ledger",
    "resolve_links",
    "weighted_cost_basis",
    "EMPTY_SUMMARY",
    "filter_trades",
    "group_by_behavior_tag",
    "group_by_sector",
    "round_half_up",
    "summarize",
]
