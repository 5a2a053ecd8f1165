"""Sample trades for a fresh journal."""

from datetime import date

from tradejournal.models import MarketContext, TradeCandidate

DEMO_TRADES: list[TradeCandidate] = [
    TradeCandidate(
        date=date(2024, 1, 15),
        ticker="AAPL",
        action="Buy",
        price=185.50,
        quantity=10,
        pnl=8.2,
        confidence=85,
        behavior_tag="Momentum Chaser",
        note="Bought after a strong earnings report and analyst upgrades",
        context=MarketContext(
            current_price=200.71, rsi=72.5, sma20=182.30, sma50=178.90,
            volatility=0.28, sentiment="Positive",
        ),
    ),
    TradeCandidate(
        date=date(2024, 1, 20),
        ticker="TSLA",
        action="Sell",
        price=210.00,
        quantity=5,
        pnl=-3.5,
        confidence=60,
        behavior_tag="Panic Seller",
        note="Sold on market volatility and EV competition worries",
        context=MarketContext(
            current_price=202.65, rsi=45.2, sma20=215.80, sma50=220.15,
            volatility=0.42, sentiment="Negative",
        ),
    ),
    TradeCandidate(
        date=date(2024, 1, 25),
        ticker="MSFT",
        action="Buy",
        price=405.20,
        quantity=3,
        pnl=12.1,
        confidence=90,
        behavior_tag="Fundamental Believer",
        note="Strong conviction in AI growth and cloud expansion",
        context=MarketContext(
            current_price=454.23, rsi=68.8, sma20=398.50, sma50=385.20,
            volatility=0.22, sentiment="Very Positive",
        ),
    ),
    TradeCandidate(
        date=date(2024, 2, 1),
        ticker="NVDA",
        action="Buy",
        price=615.75,
        quantity=2,
        pnl=15.8,
        confidence=95,
        behavior_tag="Earnings Play",
        note="Bought ahead of earnings on surging AI chip demand",
        context=MarketContext(
            current_price=712.89, rsi=78.3, sma20=605.40, sma50=580.25,
            volatility=0.35, sentiment="Very Positive",
        ),
    ),
    TradeCandidate(
        date=date(2024, 2, 5),
        ticker="GOOGL",
        action="Sell",
        price=142.80,
        quantity=8,
        pnl=5.7,
        confidence=70,
        behavior_tag="Target Achiever",
        note="Took profit once the target price was reached",
        context=MarketContext(
            current_price=150.95, rsi=65.1, sma20=140.25, sma50=135.80,
            volatility=0.25, sentiment="Positive",
        ),
    ),
    TradeCandidate(
        date=date(2024, 2, 10),
        ticker="AMD",
        action="Buy",
        price=185.30,
        quantity=6,
        pnl=-2.8,
        confidence=65,
        behavior_tag="Dip Buyer",
        note="Bought after the recent drop expecting a rebound",
        context=MarketContext(
            current_price=180.12, rsi=42.7, sma20=188.90, sma50=195.40,
            volatility=0.38, sentiment="Neutral",
        ),
    ),
]
