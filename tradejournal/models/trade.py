"""Trade, market context and trade candidate data models."""

from datetime import date as date_type
from typing import Literal, Optional, get_args

from pydantic import BaseModel, Field, ValidationInfo, field_validator

Action = Literal["Buy", "Sell"]

BUY: Action = "Buy"
SELL: Action = "Sell"

BEHAVIOR_TAGS: dict[str, tuple[str, ...]] = {
    BUY: (
        "Momentum Chaser",
        "Trend Continuation",
        "Dip Buyer",
        "Recovery Hope",
        "News Reaction",
        "Policy/Filing Reaction",
        "Fundamental Believer",
        "Report-Based",
        "Revenge Trader",
        "Averaging Down",
        "Crowd Follower",
        "Earnings Play",
    ),
    SELL: (
        "Target Achiever",
        "Quick Profit Taker",
        "Panic Seller",
        "Delayed Stop-Loss",
        "Trend Break Detected",
        "Momentum Fader",
        "Anxiety Exit",
        "Regret Avoidance",
    ),
}

Sentiment = Literal["Very Positive", "Positive", "Neutral", "Negative", "Very Negative"]

SENTIMENTS: tuple[str, ...] = get_args(Sentiment)


def tags_for(action: str) -> tuple[str, ...]:
    """Return the behavior tag vocabulary for an action."""
    return BEHAVIOR_TAGS.get(action, ())


class MarketContext(BaseModel):
    """Market snapshot captured once when a trade is recorded."""

    current_price: float = Field(..., gt=0, allow_inf_nan=False, description="Price at capture")
    rsi: float = Field(..., ge=0, le=100, description="Relative Strength Index")
    sma20: float = Field(..., ge=0, allow_inf_nan=False, description="20-period SMA")
    sma50: float = Field(..., ge=0, allow_inf_nan=False, description="50-period SMA")
    volatility: float = Field(..., ge=0, allow_inf_nan=False, description="Fractional volatility")
    sentiment: Sentiment = Field(..., description="Sentiment label")

    model_config = {"frozen": True}


class Trade(BaseModel):
    """Represents a journaled Buy or Sell."""

    id: str = Field(..., min_length=1, description="Opaque unique trade ID")
    date: date_type = Field(..., description="Execution date")
    ticker: str = Field(
        ..., min_length=1, pattern=r"^[A-Z0-9][A-Z0-9.\-]*$", description="Uppercase symbol"
    )
    action: Action = Field(..., description="Trade action (Buy/Sell)")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Execution price per unit")
    quantity: int = Field(..., gt=0, description="Units traded")
    pnl: float = Field(..., allow_inf_nan=False, description="P&L percentage")
    confidence: int = Field(..., ge=0, le=100, description="Self-reported conviction")
    behavior_tag: str = Field(..., description="Behavior label for the action")
    note: str = Field(..., min_length=1, description="Trade rationale")
    intention: Optional[str] = Field(default=None, description="Planned intention")
    context: MarketContext = Field(..., description="Market snapshot at entry")

    model_config = {"frozen": True}

    @field_validator("behavior_tag")
    @classmethod
    def _tag_matches_action(cls, value: str, info: ValidationInfo) -> str:
        action = info.data.get("action")
        if action is not None and value not in tags_for(action):
            raise ValueError(f"'{value}' is not a {action} behavior tag")
        return value

    @field_validator("note")
    @classmethod
    def _note_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("note must not be blank")
        return value

    @property
    def notional(self) -> float:
        """Traded value (price x quantity)."""
        return self.price * self.quantity

    @property
    def pnl_amount(self) -> float:
        """P&L converted from percent to a currency amount."""
        return self.notional * self.pnl / 100


class TradeCandidate(BaseModel):
    """A trade as submitted by the user, before invariants are checked."""

    date: date_type
    ticker: str
    action: Action
    price: float
    quantity: int
    confidence: int
    behavior_tag: str
    note: str
    intention: Optional[str] = None
    pnl: Optional[float] = None
    context: Optional[MarketContext] = None

    model_config = {"frozen": True}

    @field_validator("ticker", mode="before")
    @classmethod
    def _normalize_ticker(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("action", mode="before")
    @classmethod
    def _normalize_action(cls, value):
        if isinstance(value, str):
            return value.strip().capitalize()
        return value
