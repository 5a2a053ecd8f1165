"""Market snapshot providers.

A provider is invoked once, when a trade is recorded, to capture the
market context stored with it. The stored snapshot is never recomputed.
"""

import random
from abc import ABC, abstractmethod
from typing import Callable, Optional

from tradejournal.indicators import (
    calculate_rsi,
    calculate_sma,
    calculate_volatility,
    latest,
)
from tradejournal.models import MarketContext


class MarketSnapshotProvider(ABC):
    """Abstract base class for market context capture."""

    @abstractmethod
    def capture(self, ticker: str, price: float) -> MarketContext:
        """Capture the market context for a trade being recorded.

        Args:
            ticker: Trading symbol.
            price: Execution price entered for the trade.

        Returns:
            MarketContext snapshot.
        """
        pass


class SimulatedSnapshotProvider(MarketSnapshotProvider):
    """Randomized snapshot around the entered price.

    Used when no market data source is configured. The current price
    drifts up to ``DRIFT`` either side of the entered price, so Buys
    recorded without a P&L get a small non-zero one. Pass a seed for
    reproducible snapshots.
    """

    SENTIMENTS = ("Positive", "Negative", "Neutral")
    DRIFT = 0.05

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def capture(self, ticker: str, price: float) -> MarketContext:
        rng = self._random
        return MarketContext(
            current_price=price * (1 + rng.uniform(-self.DRIFT, self.DRIFT)),
            rsi=rng.uniform(0, 100),
            sma20=price * (0.95 + rng.random() * 0.1),
            sma50=price * (0.90 + rng.random() * 0.2),
            volatility=rng.random() * 0.5,
            sentiment=rng.choice(self.SENTIMENTS),
        )


def classify_sentiment(price: float, sma20: float, sma50: float, rsi: float) -> str:
    """Map trend and momentum to a sentiment label."""
    if price > sma20 > sma50:
        return "Very Positive" if rsi >= 60 else "Positive"
    if price < sma20 < sma50:
        return "Very Negative" if rsi <= 40 else "Negative"
    if price > sma20:
        return "Positive"
    if price < sma20:
        return "Negative"
    return "Neutral"


class PriceHistorySnapshotProvider(MarketSnapshotProvider):
    """Snapshot computed from a close-price history.

    Indicators without enough history fall back to neutral values:
    RSI 50, moving averages at the current price, zero volatility.
    """

    def __init__(self, history: Callable[[str], list[float]]):
        """Initialize the provider.

        Args:
            history: Returns close prices for a ticker, oldest first.
        """
        self._history = history

    def capture(self, ticker: str, price: float) -> MarketContext:
        closes = [c for c in self._history(ticker) if c > 0]
        current = closes[-1] if closes else price

        rsi = latest(calculate_rsi(closes, 14))
        sma20 = latest(calculate_sma(closes, 20))
        sma50 = latest(calculate_sma(closes, 50))
        volatility = latest(calculate_volatility(closes, 20))

        rsi = 50.0 if rsi is None else rsi
        sma20 = current if sma20 is None else sma20
        sma50 = current if sma50 is None else sma50

        return MarketContext(
            current_price=current,
            rsi=rsi,
            sma20=sma20,
            sma50=sma50,
            volatility=0.0 if volatility is None else volatility,
            sentiment=classify_sentiment(current, sma20, sma50, rsi),
        )
