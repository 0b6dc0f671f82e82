"""
Data models module.

Immutable result types for indicators, signals and risk reports.
"""

from .indicators import (
    ADXResult,
    BollingerBands,
    EMATriple,
    IndicatorSet,
    MACDResult,
    StochasticResult,
)
from .risk import PathOutcome, PathState, RiskLevel, RiskReport
from .signal import Direction, Signal

__all__ = [
    "ADXResult",
    "BollingerBands",
    "EMATriple",
    "IndicatorSet",
    "MACDResult",
    "StochasticResult",
    "Direction",
    "Signal",
    "PathOutcome",
    "PathState",
    "RiskLevel",
    "RiskReport",
]
