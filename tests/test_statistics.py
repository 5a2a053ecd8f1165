"""Property-based tests for trade statistics.

**Feature: trade-journal**
"""

import math
from datetime import date

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import (
    EMPTY_SUMMARY,
    filter_trades,
    group_by_behavior_tag,
    group_by_sector,
    round_half_up,
    summarize,
)
from tradejournal.models import MarketContext, Trade, TradeFilter, tags_for
from tradejournal.sectors import DEFAULT_SECTORS, UNCLASSIFIED


@st.composite
def trade_strategy(draw):
    """Generate valid Trade objects for testing."""
    action = draw(st.sampled_from(["Buy", "Sell"]))
    price = draw(st.floats(min_value=0.01, max_value=10000.0, allow_nan=False, allow_infinity=False))
    return Trade(
        id=draw(st.uuids()).hex,
        date=draw(st.dates(min_value=date(2020, 1, 1), max_value=date(2025, 12, 31))),
        ticker=draw(st.sampled_from(["AAPL", "TSLA", "NVDA", "XYZ", "ABC"])),
        action=action,
        price=price,
        quantity=draw(st.integers(min_value=1, max_value=10000)),
        pnl=draw(st.floats(min_value=-100.0, max_value=500.0, allow_nan=False, allow_infinity=False)),
        confidence=draw(st.integers(min_value=0, max_value=100)),
        behavior_tag=draw(st.sampled_from(tags_for(action))),
        note="generated",
        context=MarketContext(
            current_price=price, rsi=50.0, sma20=price, sma50=price,
            volatility=0.1, sentiment="Neutral",
        ),
    )


class TestSummaryScenarios:
    """Worked examples for the headline summary."""

    def test_empty_set_gives_zero_summary(self):
        result = summarize([])

        assert (result.count, result.win_rate, result.avg_confidence, result.best_pnl) == (0, 0, 0, 0)
        assert result.insufficient_data
        assert summarize([]) == result == EMPTY_SUMMARY

    def test_one_win_one_loss(self, make_trade):
        trades = [
            make_trade("Buy", pnl=10.0, confidence=80),
            make_trade("Buy", pnl=-5.0, confidence=60),
        ]

        result = summarize(trades)

        assert result.count == 2
        assert result.win_rate == 50
        assert result.best_pnl == 10.0
        assert result.worst_pnl == -5.0
        assert result.avg_confidence == 70
        assert not result.insufficient_data

    def test_zero_pnl_is_not_a_win(self, make_trade):
        result = summarize([make_trade(pnl=0.0), make_trade(pnl=0.0)])

        assert result.win_rate == 0
        assert result.best_pnl == 0.0

    def test_rounds_half_up(self, make_trade):
        trades = [make_trade(pnl=1.0, confidence=50)] + [
            make_trade(pnl=-1.0, confidence=51) for _ in range(7)
        ]

        result = summarize(trades)

        # 1/8 wins = 12.5%, mean confidence = 50.875
        assert result.win_rate == 13
        assert result.avg_confidence == 51

    def test_total_pnl_amount_is_currency(self, make_trade):
        trades = [
            make_trade(price=100.0, quantity=10, pnl=10.0),
            make_trade(price=50.0, quantity=4, pnl=-50.0),
        ]

        assert summarize(trades).total_pnl_amount == pytest.approx(100.0 - 100.0)


class TestSummaryBounds:
    """
    *For any* non-empty set of trades, win rate and average confidence stay
    within 0-100 and the best P&L is the maximum P&L.
    """

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_percentages_within_bounds(self, trades: list[Trade]):
        result = summarize(trades)

        assert result.count == len(trades)
        assert 0 <= result.win_rate <= 100
        assert 0 <= result.avg_confidence <= 100
        assert result.best_pnl == max(t.pnl for t in trades)
        assert result.worst_pnl == min(t.pnl for t in trades)

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=50)
    def test_summary_is_repeatable(self, trades: list[Trade]):
        assert summarize(trades) == summarize(list(trades))


class TestBehaviorBreakdown:
    """Per behavior tag statistics."""

    def test_shared_tag_percent_and_currency(self, make_trade):
        trades = [
            make_trade("Buy", price=100.0, quantity=10, pnl=10.0, behavior_tag="Dip Buyer"),
            make_trade("Buy", price=100.0, quantity=10, pnl=-5.0, behavior_tag="Dip Buyer"),
        ]

        stats = group_by_behavior_tag(trades)["Dip Buyer"]

        assert stats.count == 2
        assert stats.win_rate == 50
        assert stats.avg_pnl == 2.5
        assert stats.total_pnl_currency == pytest.approx(50.0)

    def test_ordered_by_count_then_tag(self, make_trade):
        trades = [
            make_trade("Sell", behavior_tag="Panic Seller"),
            make_trade("Buy", behavior_tag="Earnings Play"),
            make_trade("Buy", behavior_tag="Dip Buyer"),
            make_trade("Buy", behavior_tag="Earnings Play"),
        ]

        assert list(group_by_behavior_tag(trades)) == ["Earnings Play", "Dip Buyer", "Panic Seller"]

    def test_empty_set(self):
        assert group_by_behavior_tag([]) == {}

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=40))
    @settings(max_examples=50)
    def test_counts_cover_every_trade(self, trades: list[Trade]):
        groups = group_by_behavior_tag(trades)

        assert sum(g.count for g in groups.values()) == len(trades)
        for stats in groups.values():
            assert 0 <= stats.win_rate <= 100


class TestSectorAllocation:
    """Sector allocation by trade count."""

    def test_allocation_shares(self, make_trade):
        trades = [make_trade(ticker="AAPL") for _ in range(5)] + [make_trade(ticker="TSLA")]

        allocation = group_by_sector(trades, DEFAULT_SECTORS)

        assert list(allocation) == ["Technology", "Automotive"]
        assert allocation["Technology"].trade_count == 5
        assert allocation["Technology"].allocation_percent == 83.3
        assert allocation["Automotive"].allocation_percent == 16.7

    def test_unmapped_ticker_is_unclassified(self, make_trade):
        trades = [make_trade(ticker="ZZZ", pnl=4.0), make_trade(ticker="AAPL", pnl=-1.5)]

        allocation = group_by_sector(trades, DEFAULT_SECTORS)

        assert allocation[UNCLASSIFIED].trade_count == 1
        assert allocation[UNCLASSIFIED].total_pnl_percent == 4.0
        assert allocation["Technology"].total_pnl_percent == -1.5

    def test_empty_set(self):
        assert group_by_sector([], DEFAULT_SECTORS) == {}

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=60))
    @settings(max_examples=100)
    def test_allocations_sum_to_100(self, trades: list[Trade]):
        allocation = group_by_sector(trades, DEFAULT_SECTORS)

        total = sum(s.allocation_percent for s in allocation.values())
        # Each sector is rounded to 0.1, so at most 0.05 drift per sector
        assert abs(total - 100) <= 0.05 * len(allocation) + 1e-9
        assert sum(s.trade_count for s in allocation.values()) == len(trades)


class TestFilterAndRounding:
    """Trade filters and half-up rounding."""

    def test_filter_by_ticker_tag_and_action(self, make_trade):
        trades = [
            make_trade("Buy", ticker="AAPL", behavior_tag="Dip Buyer"),
            make_trade("Sell", ticker="AAPL", behavior_tag="Panic Seller"),
            make_trade("Buy", ticker="MSFT", behavior_tag="Dip Buyer"),
        ]

        assert len(filter_trades(trades, TradeFilter(ticker="aapl"))) == 2
        assert len(filter_trades(trades, TradeFilter(behavior_tag="Dip Buyer"))) == 2
        assert len(filter_trades(trades, TradeFilter(ticker="AAPL", action="Sell"))) == 1
        assert filter_trades(trades, None) == trades

    @pytest.mark.parametrize(
        "value,digits,expected",
        [(2.5, 0, 3.0), (12.5, 0, 13.0), (-2.5, 0, -3.0), (2.25, 1, 2.3), (101.666, 2, 101.67), (2.675, 2, 2.68)],
    )
    def test_round_half_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected

    def test_round_half_up_beyond_default_precision(self):
        assert round_half_up(1.2345e27, 2) == 1.2345e27
        assert round_half_up(-9.87654321e30, 1) == -9.87654321e30

    def test_round_half_up_passes_non_finite_through(self):
        assert round_half_up(float("inf"), 2) == float("inf")
        assert round_half_up(float("-inf")) == float("-inf")
        assert math.isnan(round_half_up(float("nan"), 1))


class TestLargeAmounts:
    """
    *For any* valid trade, however large its notional, the statistics
    still compute.
    """

    def test_large_notional(self, make_trade):
        trades = [make_trade(price=1e25, quantity=1000, pnl=10.0)]

        summary = summarize(trades)
        groups = group_by_behavior_tag(trades)
        sectors = group_by_sector(trades, DEFAULT_SECTORS)

        assert summary.total_pnl_amount == pytest.approx(1e27)
        assert groups["Momentum Chaser"].total_pnl_currency == pytest.approx(1e27)
        assert sectors["Technology"].trade_count == 1

    def test_overflowing_notional(self, make_trade):
        trades = [make_trade(price=1e308, quantity=10, pnl=10.0)]

        summary = summarize(trades)

        assert math.isinf(summary.total_pnl_amount)
        assert summary.win_rate == 100
        assert math.isinf(group_by_behavior_tag(trades)["Momentum Chaser"].total_pnl_currency)

    @given(
        price=st.floats(min_value=1e20, max_value=1e300, allow_nan=False, allow_infinity=False),
        quantity=st.integers(min_value=1, max_value=10**6),
        pnl=st.floats(min_value=-100.0, max_value=500.0, allow_nan=False),
    )
    @settings(max_examples=50)
    def test_any_magnitude(self, price: float, quantity: int, pnl: float):
        trade = Trade(
            id="big",
            date=date(2024, 1, 1),
            ticker="AAPL",
            action="Buy",
            price=price,
            quantity=quantity,
            pnl=pnl,
            confidence=50,
            behavior_tag="Dip Buyer",
            note="generated",
            context=MarketContext(
                current_price=price, rsi=50.0, sma20=price, sma50=price,
                volatility=0.1, sentiment="Neutral",
            ),
        )

        assert summarize([trade]).count == 1
        assert group_by_behavior_tag([trade])["Dip Buyer"].count == 1
