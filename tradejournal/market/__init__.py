"""Market context capture."""

from tradejournal.market.snapshot import (
    MarketSnapshotProvider,
    PriceHistorySnapshotProvider,
    SimulatedSnapshotProvider,
    classify_sentiment,
)

__all__ = [
    "MarketSnapshotProvider",
    "PriceHistorySnapshotProvider",
    "SimulatedSnapshotProvider",
    "classify_sentiment",
]
