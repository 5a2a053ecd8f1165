"""Aggregated statistics data models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from tradejournal.models.trade import Action, Trade


class TradeSummary(BaseModel):
    """Headline statistics over a set of trades."""

    count: int = Field(..., ge=0, description="Number of trades")
    win_rate: int = Field(..., ge=0, le=100, description="Winning trade percentage")
    avg_confidence: int = Field(..., ge=0, le=100, description="Mean confidence")
    best_pnl: float = Field(..., description="Best P&L percentage")
    worst_pnl: float = Field(default=0.0, description="Worst P&L percentage")
    total_pnl_amount: float = Field(default=0.0, description="Summed P&L in currency")
    insufficient_data: bool = Field(default=False, description="True for an empty set")

    model_config = {"frozen": True}


class BehaviorStats(BaseModel):
    """Performance of trades sharing one behavior tag."""

    count: int = Field(..., gt=0, description="Trades with this tag")
    win_rate: int = Field(..., ge=0, le=100, description="Winning trade percentage")
    avg_pnl: float = Field(..., description="Mean P&L percentage")
    total_pnl_currency: float = Field(..., description="Summed P&L in currency")

    model_config = {"frozen": True}


class SectorAllocation(BaseModel):
    """Trade share and performance of one sector."""

    trade_count: int = Field(..., gt=0, description="Trades in the sector")
    total_pnl_percent: float = Field(..., description="Summed P&L percentage")
    allocation_percent: float = Field(..., ge=0, le=100, description="Share of trade count")

    model_config = {"frozen": True}


class TradeFilter(BaseModel):
    """Restricts a statistics query to a ticker, behavior tag or action."""

    ticker: Optional[str] = Field(default=None, description="Trading symbol")
    behavior_tag: Optional[str] = Field(default=None, description="Behavior label")
    action: Optional[Action] = Field(default=None, description="Buy or Sell only")

    model_config = {"frozen": True}

    @field_validator("ticker", mode="before")
    @classmethod
    def _normalize_ticker(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

    def matches(self, trade: Trade) -> bool:
        if self.ticker is not None and trade.ticker != self.ticker:
            return False
        if self.behavior_tag is not None and trade.behavior_tag != self.behavior_tag:
            return False
        if self.action is not None and trade.action != self.action:
            return False
        return True
