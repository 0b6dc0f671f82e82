"""
Signal model emitted by the engine.

A Signal is immutable once built. Level ordering is enforced on
construction so that a malformed signal can never leave the engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..errors import InvalidSignalError
from ..utils.time import format_market_time
from .indicators import IndicatorSet


class Direction(str, Enum):
    """Trade direction of a signal."""
    LONG = "LONG"
    SHORT = "SHORT"
    NEUTRAL = "NEUTRAL"

    @property
    def sign(self) -> int:
        """+1 for LONG, -1 for SHORT, 0 for NEUTRAL."""
        if self is Direction.LONG:
            return 1
        if self is Direction.SHORT:
            return -1
        return 0


@dataclass(frozen=True)
class Signal:
    """Directional trading signal with confidence, rationale and levels."""
    symbol: str
    timeframe: str
    direction: Direction
    confidence: float                        # 0-100
    entry_price: float                       # Last close of the window
    stop_loss: Optional[float]               # None for NEUTRAL
    take_profit: Optional[float]             # None for NEUTRAL
    indicators: IndicatorSet
    timestamp: datetime                      # Market time of the last bar
    rationale: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not 0 <= self.confidence <= 100:
            raise InvalidSignalError(
                f"Confidence out of range: {self.confidence}",
                value=self.confidence,
                reason="confidence_range"
            )

        if self.direction is Direction.NEUTRAL:
            return

        if self.stop_loss is None or self.take_profit is None:
            raise InvalidSignalError(
                f"{self.direction.value} signal requires stop loss and take profit",
                reason="missing_levels"
            )

        # Zero-distance levels are allowed only as the degenerate flat-ATR case
        if self.stop_loss == self.entry_price == self.take_profit:
            return

        if self.direction is Direction.LONG:
            ordered = self.stop_loss < self.entry_price < self.take_profit
        else:
            ordered = self.take_profit < self.entry_price < self.stop_loss

        if not ordered:
            raise InvalidSignalError(
                f"Levels out of order for {self.direction.value}: "
                f"stop={self.stop_loss}, entry={self.entry_price}, target={self.take_profit}",
                reason="level_ordering"
            )

    @property
    def is_actionable(self) -> bool:
        """True for a directional signal with non-degenerate levels."""
        return (
            self.direction is not Direction.NEUTRAL
            and self.stop_loss is not None
            and self.take_profit is not None
            and self.stop_loss != self.entry_price
        )

    @property
    def risk_reward_ratio(self) -> Optional[float]:
        """Target distance over stop distance, None when not actionable."""
        if not self.is_actionable:
            return None
        risk = abs(self.entry_price - self.stop_loss)
        reward = abs(self.take_profit - self.entry_price)
        return reward / risk

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible payload."""
        return {
            "symbol": self.symbol,
            "timeframe": self.timeframe,
            "direction": self.direction.value,
            "confidence": self.confidence,
            "entry_price": self.entry_price,
            "stop_loss": self.stop_loss,
            "take_profit": self.take_profit,
            "timestamp": format_market_time(self.timestamp),
            "rationale": list(self.rationale),
            "indicators": self.indicators.to_dict(),
        }
