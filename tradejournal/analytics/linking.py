"""FIFO lot linking between Sell trades and earlier Buy lots.

Sells consume the oldest open Buy lot of the same ticker first. Trades are
ordered by date; trades sharing a date keep their ledger insertion order.
Nothing here mutates the trades passed in: open lots are rebuilt from
scratch on every call.
"""

from collections import deque
from typing import Iterable, Optional

from tradejournal.models import (
    BUY,
    LinkageReport,
    LinkResult,
    Lot,
    LotAllocation,
    LotShortfall,
    Position,
    Trade,
)


class _OpenLot:
    """Mutable working state for one Buy lot during a resolution pass."""

    __slots__ = ("trade", "remaining")

    def __init__(self, trade: Trade):
        self.trade = trade
        self.remaining = trade.quantity

    def freeze(self) -> Lot:
        return Lot(
            trade_id=self.trade.id,
            date=self.trade.date,
            price=self.trade.price,
            remaining_quantity=self.remaining,
        )


def partition_by_ticker(trades: Iterable[Trade]) -> dict[str, list[Trade]]:
    """Group trades by ticker, keeping input order within each group."""
    groups: dict[str, list[Trade]] = {}
    for trade in trades:
        groups.setdefault(trade.ticker, []).append(trade)
    return groups


def chronological(trades: Iterable[Trade]) -> list[Trade]:
    """Sort trades by date; same-date trades keep their input order."""
    return sorted(trades, key=lambda t: t.date)


def weighted_cost_basis(allocations: list[LotAllocation]) -> Optional[float]:
    """Weighted average price over consumed lots.

    Returns:
        The cost basis, or None when no units were consumed.
    """
    consumed = sum(a.quantity for a in allocations)
    if consumed == 0:
        return None
    return sum(a.price * a.quantity for a in allocations) / consumed


def _consume(queue: deque, sell: Trade) -> LinkResult:
    """Consume open lots from the front of the queue for one Sell."""
    needed = sell.quantity
    allocations: list[LotAllocation] = []

    while needed > 0 and queue:
        lot = queue[0]
        taken = min(needed, lot.remaining)
        allocations.append(
            LotAllocation(
                buy_trade_id=lot.trade.id,
                buy_date=lot.trade.date,
                price=lot.trade.price,
                quantity=taken,
            )
        )
        lot.remaining -= taken
        needed -= taken
        if lot.remaining == 0:
            queue.popleft()

    shortfall = None
    if needed > 0:
        shortfall = LotShortfall(
            ticker=sell.ticker,
            sell_trade_id=sell.id,
            unmatched_quantity=needed,
        )

    return LinkResult(
        sell_trade_id=sell.id,
        ticker=sell.ticker,
        date=sell.date,
        sell_price=sell.price,
        sell_quantity=sell.quantity,
        allocations=allocations,
        cost_basis=weighted_cost_basis(allocations),
        remaining_shares=max(0, sum(lot.remaining for lot in queue)),
        shortfall=shortfall,
    )


def _resolve_ticker(ticker: str, trades: list[Trade]) -> tuple[list[LinkResult], Position]:
    queue: deque = deque()
    links: list[LinkResult] = []

    for trade in chronological(trades):
        if trade.action == BUY:
            queue.append(_OpenLot(trade))
        else:
            links.append(_consume(queue, trade))

    return links, Position(ticker=ticker, lots=[lot.freeze() for lot in queue])


def resolve_ledger(trades: Iterable[Trade]) -> LinkageReport:
    """Link every Sell in the ledger to the Buy lots it closes.

    Args:
        trades: Ledger trades in insertion order, oldest first.

    Returns:
        LinkageReport with one LinkResult per Sell (ordered by date, then
        ticker) and the open position left for every ticker that has one.
    """
    links: list[LinkResult] = []
    positions: dict[str, Position] = {}

    for ticker, ticker_trades in partition_by_ticker(trades).items():
        ticker_links, position = _resolve_ticker(ticker, ticker_trades)
        links.extend(ticker_links)
        if position.lots:
            positions[ticker] = position

    # Stable: same date and ticker keeps the per-ticker FIFO order
    links.sort(key=lambda link: (link.date, link.ticker))
    return LinkageReport(links=links, positions=dict(sorted(positions.items())))


def resolve_links(trades: Iterable[Trade], ticker: Optional[str] = None) -> list[LinkResult]:
    """Link results for all Sells, optionally restricted to one ticker."""
    report = resolve_ledger(trades)
    if ticker is None:
        return report.links
    return report.for_ticker(ticker)


def open_positions(trades: Iterable[Trade]) -> dict[str, Position]:
    """Open Buy lots remaining per ticker after all Sells are applied."""
    return resolve_ledger(trades).positions
