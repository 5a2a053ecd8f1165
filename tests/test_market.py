"""Tests for market snapshot providers."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError as PydanticValidationError

from tradejournal.market import (
    PriceHistorySnapshotProvider,
    SimulatedSnapshotProvider,
    classify_sentiment,
)
from tradejournal.models import SENTIMENTS, MarketContext


class TestSimulatedSnapshotProvider:
    """Randomized snapshots around the entered price."""

    def test_same_seed_same_snapshots(self):
        first = SimulatedSnapshotProvider(seed=7)
        second = SimulatedSnapshotProvider(seed=7)

        assert [first.capture("AAPL", 100.0) for _ in range(3)] == [
            second.capture("AAPL", 100.0) for _ in range(3)
        ]

    @given(
        seed=st.integers(min_value=0, max_value=2**32),
        price=st.floats(min_value=0.01, max_value=100000.0, allow_nan=False),
    )
    @settings(max_examples=100)
    def test_values_in_range(self, seed: int, price: float):
        """
        *For any* seed and price, the snapshot is a valid market context
        anchored at the entered price.
        """
        context = SimulatedSnapshotProvider(seed=seed).capture("AAPL", price)

        assert price * 0.95 - 1e-9 <= context.current_price <= price * 1.05 + 1e-9
        assert 0 <= context.rsi <= 100
        assert price * 0.95 <= context.sma20 <= price * 1.05 + 1e-9
        assert price * 0.90 <= context.sma50 <= price * 1.10 + 1e-9
        assert 0 <= context.volatility <= 0.5
        assert context.sentiment in SENTIMENTS

    def test_current_price_drifts_from_entered_price(self):
        provider = SimulatedSnapshotProvider(seed=11)

        prices = {provider.capture("AAPL", 100.0).current_price for _ in range(20)}

        assert len(prices) > 1
        assert prices != {100.0}


class TestMarketContext:
    def test_sentiment_vocabulary(self):
        with pytest.raises(PydanticValidationError):
            MarketContext(
                current_price=10.0, rsi=50.0, sma20=10.0, sma50=10.0,
                volatility=0.1, sentiment="Bullish",
            )

    @pytest.mark.parametrize("sentiment", SENTIMENTS)
    def test_every_label_accepted(self, sentiment):
        context = MarketContext(
            current_price=10.0, rsi=50.0, sma20=10.0, sma50=10.0,
            volatility=0.1, sentiment=sentiment,
        )

        assert context.sentiment == sentiment


class TestPriceHistorySnapshotProvider:
    """Snapshots computed from close prices."""

    def test_rising_series(self):
        closes = [100.0 + i for i in range(60)]
        provider = PriceHistorySnapshotProvider(lambda ticker: closes)

        context = provider.capture("AAPL", 150.0)

        assert context.current_price == 159.0
        assert context.rsi == 100.0
        assert context.sma20 == pytest.approx(sum(closes[-20:]) / 20)
        assert context.sma50 == pytest.approx(sum(closes[-50:]) / 50)
        assert context.volatility > 0
        assert context.sentiment == "Very Positive"

    def test_falling_series(self):
        closes = [200.0 - i for i in range(60)]
        context = PriceHistorySnapshotProvider(lambda ticker: closes).capture("TSLA", 140.0)

        assert context.sentiment == "Very Negative"

    def test_short_history_falls_back(self):
        context = PriceHistorySnapshotProvider(lambda ticker: [101.0, 102.0]).capture("AMD", 99.0)

        assert context.current_price == 102.0
        assert context.rsi == 50.0
        assert context.sma20 == 102.0
        assert context.sma50 == 102.0
        assert context.volatility == 0.0
        assert context.sentiment == "Neutral"

    def test_no_history_uses_entered_price(self):
        context = PriceHistorySnapshotProvider(lambda ticker: []).capture("ZZZ", 42.0)

        assert context.current_price == 42.0
        assert context.sentiment == "Neutral"

    def test_history_looked_up_by_ticker(self):
        requested = []

        def history(ticker: str) -> list[float]:
            requested.append(ticker)
            return [10.0]

        PriceHistorySnapshotProvider(history).capture("NVDA", 10.0)

        assert requested == ["NVDA"]


class TestClassifySentiment:
    @pytest.mark.parametrize(
        "price,sma20,sma50,rsi,expected",
        [
            (110, 105, 100, 65, "Very Positive"),
            (110, 105, 100, 55, "Positive"),
            (90, 95, 100, 35, "Very Negative"),
            (90, 95, 100, 45, "Negative"),
            (101, 100, 105, 50, "Positive"),
            (99, 100, 95, 50, "Negative"),
            (100, 100, 100, 50, "Neutral"),
        ],
    )
    def test_labels(self, price, sma20, sma50, rsi, expected):
        assert classify_sentiment(price, sma20, sma50, rsi) == expected
