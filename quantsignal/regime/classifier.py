"""Market regime classification from volatility, trend strength and momentum."""

from enum import Enum
from typing import Optional

from ..config.defaults import RegimeParams


class MarketRegime(str, Enum):
    """Coarse market state used to label signals."""
    TRENDING_UP = "TRENDING_UP"
    TRENDING_DOWN = "TRENDING_DOWN"
    RANGING = "RANGING"
    HIGH_VOLATILITY = "HIGH_VOLATILITY"
    LOW_VOLATILITY = "LOW_VOLATILITY"


def classify_regime(
    volatility: float,
    adx: float,
    rsi: float,
    params: Optional[RegimeParams] = None
) -> MarketRegime:
    """
    Classify the market regime. Rules are evaluated in order, first match wins.

    1. volatility above high_volatility      -> HIGH_VOLATILITY
    2. volatility below low_volatility       -> LOW_VOLATILITY
    3. ADX above trend_adx and RSI above trend_up_rsi   -> TRENDING_UP
    4. ADX above trend_adx and RSI below trend_down_rsi -> TRENDING_DOWN
    5. otherwise                             -> RANGING
    """
    params = params or RegimeParams()

    if volatility > params.high_volatility:
        return MarketRegime.HIGH_VOLATILITY
    if volatility < params.low_volatility:
        return MarketRegime.LOW_VOLATILITY
    if adx > params.trend_adx and rsi > params.trend_up_rsi:
        return MarketRegime.TRENDING_UP
    if adx > params.trend_adx and rsi < params.trend_down_rsi:
        return MarketRegime.TRENDING_DOWN
    return MarketRegime.RANGING
