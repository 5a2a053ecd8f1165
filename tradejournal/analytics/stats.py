"""Statistics over sets of journaled trades.

Intermediate values stay unrounded; rounding happens once, when the
result record is built. Percentages use half-up rounding.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Mapping, Optional

from tradejournal.models import (
    BehaviorStats,
    SectorAllocation,
    Trade,
    TradeFilter,
    TradeSummary,
)
from tradejournal.sectors import sector_for

EMPTY_SUMMARY = TradeSummary(
    count=0,
    win_rate=0,
    avg_confidence=0,
    best_pnl=0.0,
    worst_pnl=0.0,
    total_pnl_amount=0.0,
    insufficient_data=True,
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero, to ``digits`` decimal places.

    Infinite and NaN values are returned unchanged.
    """
    if not math.isfinite(value):
        return value

    exact = Decimal(str(value))
    exponent = Decimal(1).scaleb(-digits)
    with localcontext() as context:
        # Room for every integer digit plus the kept decimals
        context.prec = max(context.prec, exact.adjusted() + digits + 2)
        return float(exact.quantize(exponent, rounding=ROUND_HALF_UP))


def _win_rate(trades: list[Trade]) -> float:
    wins = sum(1 for t in trades if t.pnl > 0)
    return 100 * wins / len(trades)


def filter_trades(trades: Iterable[Trade], trade_filter: Optional[TradeFilter] = None) -> list[Trade]:
    """Trades matching the filter; all trades when no filter is given."""
    if trade_filter is None:
        return list(trades)
    return [t for t in trades if trade_filter.matches(t)]


def summarize(trades: Iterable[Trade]) -> TradeSummary:
    """Count, win rate, average confidence and best/worst P&L.

    An empty set yields the zero-value summary flagged as insufficient data.
    """
    trades = list(trades)
    if not trades:
        return EMPTY_SUMMARY

    count = len(trades)
    pnls = [t.pnl for t in trades]
    return TradeSummary(
        count=count,
        win_rate=int(round_half_up(_win_rate(trades))),
        avg_confidence=int(round_half_up(sum(t.confidence for t in trades) / count)),
        best_pnl=max(pnls),
        worst_pnl=min(pnls),
        total_pnl_amount=round_half_up(sum(t.pnl_amount for t in trades), 2),
    )


def group_by_behavior_tag(trades: Iterable[Trade]) -> dict[str, BehaviorStats]:
    """Performance per behavior tag, most used tags first.

    ``avg_pnl`` is the mean percentage; ``total_pnl_currency`` converts each
    trade's percentage to currency (price x quantity x pnl / 100) and sums.
    """
    groups: dict[str, list[Trade]] = {}
    for trade in trades:
        groups.setdefault(trade.behavior_tag, []).append(trade)

    ordered = sorted(groups.items(), key=lambda item: (-len(item[1]), item[0]))
    return {
        tag: BehaviorStats(
            count=len(members),
            win_rate=int(round_half_up(_win_rate(members))),
            avg_pnl=round_half_up(sum(t.pnl for t in members) / len(members), 1),
            total_pnl_currency=round_half_up(sum(t.pnl_amount for t in members), 2),
        )
        for tag, members in ordered
    }


def group_by_sector(
    trades: Iterable[Trade], ticker_to_sector: Mapping[str, str]
) -> dict[str, SectorAllocation]:
    """Trade count share and summed P&L per sector, largest first.

    Allocation is each sector's share of the trade count. Tickers missing
    from the lookup are reported under ``Unclassified``.
    """
    groups: dict[str, list[Trade]] = {}
    for trade in trades:
        groups.setdefault(sector_for(trade.ticker, ticker_to_sector), []).append(trade)

    total = sum(len(members) for members in groups.values())
    ordered = sorted(groups.items(), key=lambda item: (-len(item[1]), item[0]))
    return {
        sector: SectorAllocation(
            trade_count=len(members),
            total_pnl_percent=round_half_up(sum(t.pnl for t in members), 1),
            allocation_percent=round_half_up(100 * len(members) / total, 1),
        )
        for sector, members in ordered
    }
