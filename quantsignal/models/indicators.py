"""Result types for the indicator library."""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from ..regime.classifier import MarketRegime


@dataclass(frozen=True)
class MACDResult:
    """Latest MACD values."""
    macd_line: float
    signal_line: float
    histogram: float                 # macd_line - signal_line


@dataclass(frozen=True)
class BollingerBands:
    """Latest Bollinger Band values."""
    upper: float
    middle: float
    lower: float
    width: float                     # (upper - lower) / middle
    percent_b: float                 # 0-100 scale, 50 when bands are flat


@dataclass(frozen=True)
class ADXResult:
    """Latest ADX and directional indicators."""
    adx: float
    plus_di: float
    minus_di: float


@dataclass(frozen=True)
class StochasticResult:
    """Latest stochastic oscillator values."""
    k: float
    d: float


@dataclass(frozen=True)
class EMATriple:
    """Short, medium and long EMAs of the close."""
    short: float
    medium: float
    long: float


@dataclass(frozen=True)
class IndicatorSet:
    """Snapshot of every indicator computed from one price window."""
    rsi: float
    macd: MACDResult
    ema: EMATriple
    stochastic: StochasticResult
    bollinger: BollingerBands
    adx: ADXResult
    atr: float
    volatility: float
    close: float                     # Last close of the window
    bar_count: int
    market_regime: Optional[MarketRegime] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain types."""
        data = asdict(self)
        data["market_regime"] = self.market_regime.value if self.market_regime else None
        return data
