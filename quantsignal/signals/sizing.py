"""ATR-based stop-loss and take-profit placement."""

import math
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import SizingParams
from ..errors import DegenerateInputError
from ..models.signal import Direction


@dataclass(frozen=True)
class PositionLevels:
    """Stop-loss and take-profit for one signal."""
    stop_loss: Optional[float]
    take_profit: Optional[float]
    stop_distance: float
    take_profit_distance: float
    multiplier: float

    @property
    def is_degenerate(self) -> bool:
        """True when ATR was zero and both levels collapsed onto the entry."""
        return self.stop_loss is not None and self.stop_distance == 0


class PositionSizer:
    """Places levels at timeframe-scaled multiples of ATR."""

    def __init__(self, params: Optional[SizingParams] = None):
        self.params = params or SizingParams()

    def multiplier_for(self, timeframe: str) -> float:
        """ATR multiplier for a timeframe, falling back to the default multiplier"""
        return self.params.atr_multipliers.get(str(timeframe), self.params.default_multiplier)

    @property
    def risk_reward_ratio(self) -> float:
        return self.params.take_profit_factor / self.params.stop_factor

    def levels(self, direction: Direction, entry: float, atr: float, timeframe: str) -> PositionLevels:
        """
        Compute stop-loss and take-profit levels

        stop distance = ATR * multiplier * stop_factor
        target distance = ATR * multiplier * take_profit_factor

        Args:
            direction: Signal direction
            entry: Entry price (last close)
            atr: Average True Range of the window
            timeframe: Bar interval used for the multiplier lookup

        Returns:
            PositionLevels; both levels are None for NEUTRAL and equal to the
            entry when ATR is zero

        Raises:
            DegenerateInputError: If entry is not positive or ATR is negative
        """
        if not math.isfinite(entry) or entry <= 0:
            raise DegenerateInputError(
                f"Entry price must be positive, got {entry}",
                indicator="entry_price",
                sentinel=entry
            )
        if not math.isfinite(atr) or atr < 0:
            raise DegenerateInputError(
                f"ATR must be non-negative, got {atr}",
                indicator="atr",
                sentinel=atr
            )

        multiplier = self.multiplier_for(timeframe)
        stop_distance = atr * multiplier * self.params.stop_factor
        take_profit_distance = atr * multiplier * self.params.take_profit_factor

        if direction is Direction.LONG:
            stop_loss = entry - stop_distance
            take_profit = entry + take_profit_distance
        elif direction is Direction.SHORT:
            stop_loss = entry + stop_distance
            take_profit = entry - take_profit_distance
        else:
            stop_loss = take_profit = None

        return PositionLevels(
            stop_loss=stop_loss,
            take_profit=take_profit,
            stop_distance=stop_distance,
            take_profit_distance=take_profit_distance,
            multiplier=multiplier,
        )
