"""Technical indicators module."""

from tradejournal.indicators.technical import (
    calculate_rsi,
    calculate_sma,
    calculate_volatility,
    latest,
)

__all__ = [
    "calculate_rsi",
    "calculate_sma",
    "calculate_volatility",
    "latest",
]
