"""Technical indicators used to capture a trade's market context.

Each function takes a list of close prices, oldest first, and returns a
series aligned with the input; positions without enough history are NaN.
"""

import math
from typing import Optional

TRADING_DAYS_PER_YEAR = 252


def calculate_sma(prices: list[float], period: int) -> list[float]:
    """Calculate Simple Moving Average.

    Args:
        prices: List of close prices
        period: Number of periods for the moving average

    Returns:
        List of SMA values. First (period-1) values will be NaN.
    """
    if len(prices) < period or period < 1:
        return [float('nan')] * len(prices)

    result = [float('nan')] * (period - 1)
    window_sum = sum(prices[:period])
    result.append(window_sum / period)

    for i in range(period, len(prices)):
        window_sum += prices[i] - prices[i - period]
        result.append(window_sum / period)

    return result


def calculate_rsi(prices: list[float], period: int = 14) -> list[float]:
    """Calculate Relative Strength Index.

    Gains and losses are smoothed with an exponential weighted mean
    (alpha = 1/period).

    Args:
        prices: List of close prices
        period: RSI period (default 14)

    Returns:
        List of RSI values (0-100). First `period` values will be NaN.
    """
    if len(prices) < period + 1 or period < 1:
        return [float('nan')] * len(prices)

    changes = [prices[i] - prices[i - 1] for i in range(1, len(prices))]
    alpha = 1.0 / period

    avg_gain = max(0.0, changes[0])
    avg_loss = abs(min(0.0, changes[0]))
    result = [float('nan')] * period

    for i, change in enumerate(changes):
        if i > 0:
            avg_gain = alpha * max(0.0, change) + (1 - alpha) * avg_gain
            avg_loss = alpha * abs(min(0.0, change)) + (1 - alpha) * avg_loss
        if i < period - 1:
            continue
        if avg_loss == 0:
            result.append(100.0 if avg_gain > 0 else 0.0)
        else:
            rs = avg_gain / avg_loss
            result.append(100 - (100 / (1 + rs)))

    return result


def calculate_volatility(prices: list[float], period: int = 20) -> list[float]:
    """Calculate annualized volatility of daily log returns.

    Args:
        prices: List of close prices (all > 0)
        period: Number of returns in each window

    Returns:
        List of fractional volatility values (0.25 == 25%).
        First `period` values will be NaN.
    """
    if len(prices) < period + 1 or period < 2:
        return [float('nan')] * len(prices)

    returns = [math.log(prices[i] / prices[i - 1]) for i in range(1, len(prices))]
    result = [float('nan')] * period

    for i in range(period - 1, len(returns)):
        window = returns[i - period + 1:i + 1]
        mean = sum(window) / period
        variance = sum((r - mean) ** 2 for r in window) / (period - 1)
        result.append(math.sqrt(variance) * math.sqrt(TRADING_DAYS_PER_YEAR))

    return result


def latest(values: list[float]) -> Optional[float]:
    """Last non-NaN value of an indicator series."""
    for value in reversed(values):
        if not math.isnan(value):
            return value
    return None
