"""Market regime classification."""

from .classifier import MarketRegime, classify_regime

__all__ = ["MarketRegime", "classify_regime"]
