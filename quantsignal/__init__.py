"""
quantsignal - technical-analysis signal engine with Monte Carlo risk simulation.

Computes indicators over OHLCV windows, classifies the market regime, fuses
indicators into a directional signal with ATR-based levels, and simulates
the signal's risk profile.
"""

__version__ = "0.1.0"
__author__ = "quantsignal Team"

from .engine import BatchResult, SignalEngine

__all__ = ["SignalEngine", "BatchResult", "__version__"]
