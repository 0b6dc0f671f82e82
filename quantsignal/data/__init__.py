"""
Price window data models, validation and normalization.
"""

from .models import PriceBar, PriceWindow, Timeframe
from .normalizer import normalize_bars
from .validators import validate_symbol, validate_window

__all__ = [
    "PriceBar",
    "PriceWindow",
    "Timeframe",
    "normalize_bars",
    "validate_symbol",
    "validate_window",
]
