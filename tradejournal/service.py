"""Trade journal service.

The service is the only component that talks to the ledger store. Every
query reads one snapshot of the ledger and recomputes its derived view
from scratch; nothing derived is cached between calls.
"""

import logging
import math
import uuid
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from tradejournal.analytics import (
    filter_trades,
    group_by_behavior_tag,
    group_by_sector,
    resolve_ledger,
    round_half_up,
    summarize,
)
from tradejournal.db.base import LedgerStore
from tradejournal.errors import FieldError, StoreUnavailable, ValidationError
from tradejournal.market import MarketSnapshotProvider
from tradejournal.models import (
    BUY,
    BehaviorStats,
    LinkageReport,
    LinkResult,
    LotShortfall,
    MarketContext,
    Position,
    SectorAllocation,
    Trade,
    TradeCandidate,
    TradeFilter,
    TradeSummary,
)
from tradejournal.sectors import build_sector_map

logger = logging.getLogger(__name__)

# Stand-in context used only while checking the other fields of a candidate
_PLACEHOLDER_CONTEXT = MarketContext(
    current_price=1.0, rsi=50.0, sma20=1.0, sma50=1.0, volatility=0.0, sentiment="Neutral"
)


class LedgerSnapshot(BaseModel):
    """The ledger as read at one moment, flagged when the store was unavailable."""

    trades: list[Trade] = Field(default_factory=list, description="Trades, newest first")
    available: bool = Field(default=True, description="False when the store could not be read")
    error: Optional[str] = Field(default=None, description="Store error message")

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """True only for a readable ledger with no trades."""
        return self.available and not self.trades


def _field_errors(error: PydanticValidationError) -> list[FieldError]:
    errors = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"]) or "trade"
        errors.append(FieldError(field, detail["msg"]))
    return errors


def _percent_change(base: float, value: float) -> float:
    return round_half_up((value - base) / base * 100, 2)


class TradeJournalService:
    """Records trades and answers statistics and linkage queries."""

    def __init__(
        self,
        store: LedgerStore,
        snapshot_provider: Optional[MarketSnapshotProvider] = None,
        sector_map: Optional[Mapping[str, str]] = None,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        """Initialize the service.

        Args:
            store: Ledger store holding the trades.
            snapshot_provider: Captures market context for candidates that
                arrive without one.
            sector_map: Ticker to sector lookup; defaults to the built-in map.
            id_factory: Generates new trade ids.
        """
        self._store = store
        self._snapshot_provider = snapshot_provider
        self._sector_map = dict(sector_map) if sector_map is not None else build_sector_map()
        self._id_factory = id_factory

    # ==================== Ledger ====================

    def _read_ledger(self) -> tuple[Trade, ...]:
        return tuple(self._store.read_all())

    @staticmethod
    def _oldest_first(ledger: tuple[Trade, ...]) -> list[Trade]:
        return list(reversed(ledger))

    def list_trades(self) -> list[Trade]:
        """All trades, newest first.

        Raises:
            StoreUnavailable: If the ledger cannot be read.
        """
        return list(self._read_ledger())

    def snapshot(self) -> LedgerSnapshot:
        """All trades, newest first, without raising on store failure.

        An unreadable store yields an empty snapshot with ``available``
        set to False, so callers can tell it apart from an empty ledger.
        """
        try:
            return LedgerSnapshot(trades=list(self._read_ledger()))
        except StoreUnavailable as e:
            logger.warning("Ledger unavailable: %s", e)
            return LedgerSnapshot(trades=[], available=False, error=str(e))

    def get_trade(self, trade_id: str) -> Optional[Trade]:
        """Get a trade by id.

        Returns:
            Trade if found, None otherwise.
        """
        for trade in self._read_ledger():
            if trade.id == trade_id:
                return trade
        return None

    # ==================== Recording ====================

    def _coerce_candidate(self, candidate: Union[TradeCandidate, Mapping[str, Any]]) -> TradeCandidate:
        if isinstance(candidate, TradeCandidate):
            return candidate
        try:
            return TradeCandidate.model_validate(dict(candidate))
        except PydanticValidationError as e:
            raise ValidationError(_field_errors(e)) from e

    def _build_trade(self, candidate: TradeCandidate, **overrides: Any) -> Trade:
        fields = candidate.model_dump(exclude={"pnl", "context"})
        fields.update(overrides)
        try:
            return Trade.model_validate(fields)
        except PydanticValidationError as e:
            raise ValidationError(_field_errors(e)) from e

    def _capture_context(self, candidate: TradeCandidate) -> MarketContext:
        if candidate.context is not None:
            return candidate.context
        if self._snapshot_provider is None:
            raise ValidationError([FieldError("context", "market context is required")])
        return self._snapshot_provider.capture(candidate.ticker, candidate.price)

    def _derive_pnl(self, trade: Trade, ledger: tuple[Trade, ...]) -> float:
        """P&L percent for a trade entered without one.

        A Buy is measured against the captured current price; a Sell against
        its FIFO cost basis. A Sell with no matching Buy lots gets 0.
        """
        if trade.action == BUY:
            pnl = _percent_change(trade.price, trade.context.current_price)
        else:
            report = resolve_ledger(self._oldest_first(ledger) + [trade])
            link = report.for_sell(trade.id)
            if link is None or link.cost_basis is None:
                logger.warning("No cost basis for sell %s of %s, recording 0%% P&L", trade.id, trade.ticker)
                return 0.0
            pnl = _percent_change(link.cost_basis, trade.price)

        if not math.isfinite(pnl):
            logger.warning("P&L for %s %s overflows, recording 0%%", trade.action, trade.ticker)
            return 0.0
        return pnl

    def record_trade(self, candidate: Union[TradeCandidate, Mapping[str, Any]]) -> Trade:
        """Validate a candidate and append it to the ledger.

        Args:
            candidate: TradeCandidate, or a mapping with the same fields.

        Returns:
            The stored Trade with its newly assigned id.

        Raises:
            ValidationError: If the candidate violates a trade invariant.
                Nothing is appended in that case.
            StoreUnavailable: If the ledger cannot be read or written.
        """
        candidate = self._coerce_candidate(candidate)
        trade_id = self._id_factory()

        # Check every invariant before the snapshot provider is consulted
        self._build_trade(
            candidate,
            id=trade_id,
            pnl=candidate.pnl if candidate.pnl is not None else 0.0,
            context=candidate.context or _PLACEHOLDER_CONTEXT,
        )

        context = self._capture_context(candidate)
        trade = self._build_trade(
            candidate,
            id=trade_id,
            pnl=candidate.pnl if candidate.pnl is not None else 0.0,
            context=context,
        )
        if candidate.pnl is None:
            trade = trade.model_copy(update={"pnl": self._derive_pnl(trade, self._read_ledger())})

        return self._store.append(trade)

    # ==================== Statistics ====================

    def get_summary(self, trade_filter: Optional[TradeFilter] = None) -> TradeSummary:
        """Summary statistics, optionally over a filtered subset."""
        return summarize(filter_trades(self._read_ledger(), trade_filter))

    def get_behavior_breakdown(
        self, trade_filter: Optional[TradeFilter] = None
    ) -> dict[str, BehaviorStats]:
        """Per behavior tag performance."""
        return group_by_behavior_tag(filter_trades(self._read_ledger(), trade_filter))

    def get_sector_allocation(
        self, trade_filter: Optional[TradeFilter] = None
    ) -> dict[str, SectorAllocation]:
        """Per sector trade share and P&L."""
        return group_by_sector(filter_trades(self._read_ledger(), trade_filter), self._sector_map)

    # ==================== Linkage ====================

    def get_linkage_report(self) -> LinkageReport:
        """FIFO linkage for the whole ledger."""
        return resolve_ledger(self._oldest_first(self._read_ledger()))

    def get_linkage(self, ticker: str) -> list[LinkResult]:
        """Link results for every Sell of a ticker, in date order."""
        return self.get_linkage_report().for_ticker(ticker.strip().upper())

    def get_linked_buys(self, trade_id: str) -> Optional[LinkResult]:
        """Buy lots closed by one Sell; None if the id is not a Sell."""
        return self.get_linkage_report().for_sell(trade_id)

    def get_open_positions(self) -> dict[str, Position]:
        """Open Buy lots per ticker."""
        return self.get_linkage_report().positions

    def get_shortfalls(self) -> list[LotShortfall]:
        """Sells that earlier Buys do not fully cover."""
        return self.get_linkage_report().shortfalls
