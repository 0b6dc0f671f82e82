"""Volatility indicators: Bollinger Bands, True Range, ATR and realized volatility"""

import math
from collections.abc import Sequence
from typing import Optional

from ..data.models import PriceBar
from ..models.indicators import BollingerBands
from .smoothing import mean, require_length, wilder_series


def bollinger_bands(closes: Sequence[float], period: int = 20, std_mult: float = 2.0) -> BollingerBands:
    """
    Bollinger Bands around the simple moving average

    Bands are middle +/- std_mult * population standard deviation.
    %B is reported on a 0-100 scale and is 50 when the bands have zero width.

    Args:
        closes: Close prices, oldest first (at least `period`)
        period: SMA period (default 20)
        std_mult: Band width in standard deviations (default 2.0)

    Returns:
        BollingerBands for the last close
    """
    require_length(closes, period, "Bollinger Bands")

    recent = closes[-period:]
    middle = mean(recent)
    variance = mean([(value - middle) ** 2 for value in recent])
    deviation = math.sqrt(variance)

    upper = middle + std_mult * deviation
    lower = middle - std_mult * deviation
    band_range = upper - lower

    width = band_range / middle if middle != 0 else 0.0
    if band_range == 0:
        percent_b = 50.0
    else:
        percent_b = 100.0 * (closes[-1] - lower) / band_range

    return BollingerBands(
        upper=upper,
        middle=middle,
        lower=lower,
        width=width,
        percent_b=percent_b,
    )


def bar_true_range(current: PriceBar, previous: Optional[PriceBar] = None) -> float:
    """
    True Range for a single bar

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))
    """
    if previous is None:
        # First bar has no previous close
        return current.high - current.low

    return max(
        current.high - current.low,
        abs(current.high - previous.close),
        abs(current.low - previous.close),
    )


def true_range(bars: Sequence[PriceBar]) -> list[float]:
    """True Range for every bar in the window"""
    require_length(bars, 1, "True Range")
    return [
        bar_true_range(bar, bars[i - 1] if i > 0 else None)
        for i, bar in enumerate(bars)
    ]


def atr(bars: Sequence[PriceBar], period: int = 14) -> float:
    """
    Average True Range with Wilder smoothing

    Args:
        bars: Price bars, oldest first (at least `period`)
        period: ATR period (default 14)

    Returns:
        ATR value, >= 0
    """
    require_length(bars, period, "ATR")
    return wilder_series(true_range(bars), period)[-1]


def realized_volatility(closes: Sequence[float], period: int = 20, annualization: float = 1.0) -> float:
    """
    Sample standard deviation of the last `period` log returns

    The result is per bar unless `annualization` scales it.

    Args:
        closes: Close prices, oldest first (at least period + 1)
        period: Number of returns (default 20)
        annualization: Multiplier applied to the per-bar deviation

    Returns:
        Volatility as a fraction, >= 0
    """
    require_length(closes, period + 1, "Realized volatility")

    recent = closes[-(period + 1):]
    returns = [math.log(current / previous) for previous, current in zip(recent[:-1], recent[1:])]

    if len(returns) < 2:
        return 0.0

    avg = mean(returns)
    variance = sum((r - avg) ** 2 for r in returns) / (len(returns) - 1)
    return math.sqrt(variance) * annualization
