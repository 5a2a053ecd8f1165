"""Lot, position and sell-linkage data models."""

from datetime import date as date_type
from typing import Optional

from pydantic import BaseModel, Field


class Lot(BaseModel):
    """An open (not fully consumed) Buy lot."""

    trade_id: str = Field(..., description="Originating Buy trade ID")
    date: date_type = Field(..., description="Buy date")
    price: float = Field(..., gt=0, description="Original buy price")
    remaining_quantity: int = Field(..., gt=0, description="Units not yet sold")

    model_config = {"frozen": True}


class Position(BaseModel):
    """Open lots for one ticker, oldest first."""

    ticker: str = Field(..., min_length=1, description="Trading symbol")
    lots: list[Lot] = Field(default_factory=list, description="Open lots in FIFO order")

    model_config = {"frozen": True}

    @property
    def quantity(self) -> int:
        return sum(lot.remaining_quantity for lot in self.lots)

    @property
    def average_cost(self) -> Optional[float]:
        """Average price of the remaining units, None when flat."""
        quantity = self.quantity
        if quantity == 0:
            return None
        return sum(lot.price * lot.remaining_quantity for lot in self.lots) / quantity


class LotAllocation(BaseModel):
    """Units of one Buy lot consumed by a Sell."""

    buy_trade_id: str = Field(..., description="Consumed Buy trade ID")
    buy_date: date_type = Field(..., description="Buy date")
    price: float = Field(..., gt=0, description="Buy price of the lot")
    quantity: int = Field(..., gt=0, description="Units consumed")

    model_config = {"frozen": True}


class LotShortfall(BaseModel):
    """A Sell that prior Buys could not fully cover."""

    ticker: str = Field(..., description="Trading symbol")
    sell_trade_id: str = Field(..., description="Over-selling trade ID")
    unmatched_quantity: int = Field(..., gt=0, description="Units without a Buy lot")

    model_config = {"frozen": True}


class LinkResult(BaseModel):
    """How one Sell is covered by earlier Buy lots."""

    sell_trade_id: str = Field(..., description="Sell trade ID")
    ticker: str = Field(..., description="Trading symbol")
    date: date_type = Field(..., description="Sell date")
    sell_price: float = Field(..., gt=0, description="Sell price")
    sell_quantity: int = Field(..., gt=0, description="Units sold")
    allocations: list[LotAllocation] = Field(
        default_factory=list, description="Consumed lots, oldest first"
    )
    cost_basis: Optional[float] = Field(
        default=None, description="Weighted average cost, None if nothing matched"
    )
    remaining_shares: int = Field(..., ge=0, description="Units left open after the sell")
    shortfall: Optional[LotShortfall] = Field(default=None, description="Uncovered units")

    model_config = {"frozen": True}

    @property
    def matched_quantity(self) -> int:
        return sum(a.quantity for a in self.allocations)

    @property
    def is_partial(self) -> bool:
        return self.shortfall is not None and self.matched_quantity > 0

    @property
    def insufficient_data(self) -> bool:
        return self.cost_basis is None

    @property
    def realized_pnl_percent(self) -> Optional[float]:
        """Sell price change against the cost basis."""
        if self.cost_basis is None:
            return None
        return (self.sell_price - self.cost_basis) / self.cost_basis * 100


class LinkageReport(BaseModel):
    """Linkage for a whole ledger: every Sell plus the resulting open positions."""

    links: list[LinkResult] = Field(default_factory=list, description="Sell links")
    positions: dict[str, Position] = Field(
        default_factory=dict, description="Open positions by ticker"
    )

    model_config = {"frozen": True}

    @property
    def shortfalls(self) -> list[LotShortfall]:
        return [link.shortfall for link in self.links if link.shortfall is not None]

    def for_ticker(self, ticker: str) -> list[LinkResult]:
        return [link for link in self.links if link.ticker == ticker]

    def for_sell(self, trade_id: str) -> Optional[LinkResult]:
        for link in self.links:
            if link.sell_trade_id == trade_id:
                return link
        return None
