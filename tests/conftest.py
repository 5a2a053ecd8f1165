"""Shared fixtures for the trade journal tests."""

import itertools
from datetime import date

import pytest

from tradejournal.models import MarketContext, Trade, tags_for


@pytest.fixture
def make_trade():
    """Factory for valid trades with sequential ids."""
    counter = itertools.count(1)

    def _make(
        action: str = "Buy",
        ticker: str = "AAPL",
        quantity: int = 10,
        price: float = 100.0,
        day: int = 1,
        pnl: float = 0.0,
        confidence: int = 50,
        behavior_tag: str | None = None,
        trade_id: str | None = None,
    ) -> Trade:
        return Trade(
            id=trade_id or f"t{next(counter)}",
            date=date(2024, 1, day),
            ticker=ticker,
            action=action,
            price=price,
            quantity=quantity,
            pnl=pnl,
            confidence=confidence,
            behavior_tag=behavior_tag or tags_for(action)[0],
            note="test trade",
            context=MarketContext(
                current_price=price,
                rsi=50.0,
                sma20=price,
                sma50=price,
                volatility=0.2,
                sentiment="Neutral",
            ),
        )

    return _make
