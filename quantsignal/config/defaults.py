"""Default configuration parameters for signal generation and risk simulation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WindowParams:
    """Price window requirements."""
    min_bars: int = 50                               # EMA-50 / ADX-14 stability


@dataclass(frozen=True)
class RSIParams:
    """RSI calculation parameters."""
    period: int = 14


@dataclass(frozen=True)
class MACDParams:
    """MACD calculation parameters."""
    fast: int = 12
    slow: int = 26
    signal: int = 9


@dataclass(frozen=True)
class EMAParams:
    """EMA triple periods."""
    short: int = 12
    medium: int = 26
    long: int = 50


@dataclass(frozen=True)
class BollingerParams:
    """Bollinger Bands parameters."""
    period: int = 20
    std_mult: float = 2.0


@dataclass(frozen=True)
class ADXParams:
    """ADX/DI parameters."""
    period: int = 14


@dataclass(frozen=True)
class ATRParams:
    """ATR calculation parameters."""
    period: int = 14


@dataclass(frozen=True)
class StochasticParams:
    """Stochastic oscillator parameters."""
    k_period: int = 14
    d_period: int = 3


@dataclass(frozen=True)
class VolatilityParams:
    """Realized volatility parameters."""
    period: int = 20                                 # Trailing log returns
    annualization: float = 1.0                       # Multiplier on per-bar stddev


@dataclass(frozen=True)
class RegimeParams:
    """Market regime thresholds, evaluated in order."""
    high_volatility: float = 0.04
    low_volatility: float = 0.015
    trend_adx: float = 25.0
    trend_up_rsi: float = 60.0
    trend_down_rsi: float = 40.0


@dataclass(frozen=True)
class ScoringParams:
    """
    Signal scoring weights and decision rule.

    The default flat_tolerance is deliberately non-strict: MACD histograms and
    EMA spreads within 1 bp of price score nothing, so a choppy window does not
    collect trend points from rounding-sized readings. Set it to 0 for the
    plain sign comparison.
    """
    version: str = "symmetric-v1"

    # RSI zones
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    rsi_midline: float = 50.0
    rsi_extreme_points: int = 20
    rsi_lean_points: int = 10

    # Trend and momentum
    macd_points: int = 25
    ema_points: int = 15
    di_points: int = 10

    # Bollinger %B zones
    percent_b_low: float = 20.0
    percent_b_high: float = 80.0
    bollinger_points: int = 15

    # Histogram / EMA spread at or below tolerance * close counts as flat
    flat_tolerance: float = 1e-4

    # Decision rule
    decision_margin: int = 20
    confidence_floor: float = 50.0
    confidence_cap: float = 95.0


def _default_multipliers() -> dict[str, float]:
    return {
        "1m": 1.0,
        "5m": 1.2,
        "15m": 1.5,
        "30m": 1.8,
        "1h": 2.0,
        "4h": 2.5,
        "1d": 3.0,
        "3d": 3.5,
        "1w": 4.0,
        "1M": 5.0,
    }


@dataclass(frozen=True)
class SizingParams:
    """ATR-based stop-loss / take-profit parameters."""
    atr_multipliers: dict[str, float] = field(default_factory=_default_multipliers)
    default_multiplier: float = 2.0
    stop_factor: float = 0.8
    take_profit_factor: float = 1.6                  # 2:1 reward:risk


@dataclass(frozen=True)
class MonteCarloParams:
    """Monte Carlo risk simulation parameters."""
    iterations: int = 1000
    min_iterations: int = 100
    steps: int = 24                                  # Sub-steps per horizon
    drift_rate: float = 0.001                        # Confidence-weighted drift per horizon
    var_percentile: float = 0.05
    min_estimated_volatility: float = 0.01
    max_estimated_volatility: float = 0.05


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    window: WindowParams
    rsi: RSIParams
    macd: MACDParams
    ema: EMAParams
    bollinger: BollingerParams
    adx: ADXParams
    atr: ATRParams
    stochastic: StochasticParams
    volatility: VolatilityParams
    regime: RegimeParams
    scoring: ScoringParams
    sizing: SizingParams
    monte_carlo: MonteCarloParams


SECTION_TYPES = {
    "window": WindowParams,
    "rsi": RSIParams,
    "macd": MACDParams,
    "ema": EMAParams,
    "bollinger": BollingerParams,
    "adx": ADXParams,
    "atr": ATRParams,
    "stochastic": StochasticParams,
    "volatility": VolatilityParams,
    "regime": RegimeParams,
    "scoring": ScoringParams,
    "sizing": SizingParams,
    "monte_carlo": MonteCarloParams,
}


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(**{name: section() for name, section in SECTION_TYPES.items()})
