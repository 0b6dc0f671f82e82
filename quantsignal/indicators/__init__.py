"""
Technical indicator library.

Pure functions over price windows plus the IndicatorCalculator that
assembles them into an IndicatorSet.
"""

from .cache import CacheStats, IndicatorCache, window_fingerprint
from .calculator import IndicatorCalculator
from .momentum import rsi, stochastic
from .smoothing import ema, ema_series, sma, wilder_series
from .trend import adx, directional_movement, macd
from .volatility import atr, bar_true_range, bollinger_bands, realized_volatility, true_range

__all__ = [
    "IndicatorCache",
    "CacheStats",
    "window_fingerprint",
    "IndicatorCalculator",
    "rsi",
    "stochastic",
    "sma",
    "ema",
    "ema_series",
    "wilder_series",
    "macd",
    "adx",
    "directional_movement",
    "atr",
    "true_range",
    "bar_true_range",
    "bollinger_bands",
    "realized_volatility",
]
