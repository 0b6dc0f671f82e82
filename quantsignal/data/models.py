"""
Canonical data models for price windows.

A price window is an ordered sequence of immutable bars for one
(symbol, timeframe) pair, oldest first.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from ..errors import InvalidTimeframeError


@dataclass(frozen=True)
class PriceBar:
    """OHLCV bar with a UTC market timestamp."""
    ts: datetime        # UTC market timestamp (bar open)
    open: float
    high: float
    low: float
    close: float
    volume: float       # Base volume


class Timeframe(str, Enum):
    """Supported bar intervals."""
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    D3 = "3d"
    W1 = "1w"
    MN1 = "1M"

    @classmethod
    def parse(cls, value: Union["Timeframe", str]) -> "Timeframe":
        """Resolve a timeframe from its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidTimeframeError(
                f"Unsupported timeframe: {value!r}",
                value=value,
                context={"supported": [tf.value for tf in cls]}
            ) from None


PriceWindow = Sequence[PriceBar]
