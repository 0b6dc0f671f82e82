"""
Signal composition and position sizing.
"""

from .composer import Composition, ScoreBreakdown, SignalComposer
from .sizing import PositionLevels, PositionSizer

__all__ = [
    "SignalComposer",
    "ScoreBreakdown",
    "Composition",
    "PositionSizer",
    "PositionLevels",
]
