"""Data models for the trade journal."""

from tradejournal.models.trade import (
    BEHAVIOR_TAGS,
    BUY,
    SELL,
    SENTIMENTS,
    Sentiment,
    Action,
    MarketContext,
    Trade,
    TradeCandidate,
    tags_for,
)
from tradejournal.models.linkage import (
    LinkageReport,
    LinkResult,
    Lot,
    LotAllocation,
    LotShortfall,
    Position,
)
from tradejournal.models.stats import (
    BehaviorStats,
    SectorAllocation,
    TradeFilter,
    TradeSummary,
)

__all__ = [
    "Action",
    "BEHAVIOR_TAGS",
    "BUY",
    "SELL",
    "SENTIMENTS",
    "Sentiment",
    "MarketContext",
    "Trade",
    "TradeCandidate",
    "tags_for",
    "LinkageReport",
    "LinkResult",
    "Lot",
    "LotAllocation",
    "LotShortfall",
    "Position",
    "BehaviorStats",
    "SectorAllocation",
    "TradeFilter",
    "TradeSummary",
]
