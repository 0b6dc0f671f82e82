"""Monte Carlo risk report models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class PathState(str, Enum):
    """Lifecycle of one simulated price path.

    A path starts RUNNING and moves to exactly one terminal state.
    """
    RUNNING = "running"
    STOPPED_OUT = "stopped_out"
    TOOK_PROFIT = "took_profit"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not PathState.RUNNING


class RiskLevel(str, Enum):
    """Qualitative bucket of the 0-100 risk score."""
    VERY_LOW = "VERY_LOW"
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"

    @classmethod
    def from_score(cls, score: float) -> "RiskLevel":
        if score >= 80:
            return cls.VERY_LOW
        if score >= 60:
            return cls.LOW
        if score >= 40:
            return cls.MODERATE
        if score >= 20:
            return cls.HIGH
        return cls.VERY_HIGH


@dataclass(frozen=True)
class PathOutcome:
    """Terminal result of a single simulated path."""
    state: PathState
    return_pct: float                # Direction-aware return at exit
    drawdown_pct: float              # Worst adverse excursion, >= 0
    exit_step: int


@dataclass(frozen=True)
class RiskReport:
    """Aggregate statistics over all simulated paths of one signal."""
    var95: float                                     # 5th percentile return, %
    sharpe_ratio: float
    max_drawdown_pct: float
    win_probability_pct: float                       # 0-100
    expected_return_pct: float
    iterations: int
    confidence_interval: tuple[float, float]         # 95% CI of the mean return
    risk_score: float                                # 0-100, higher is safer
    risk_level: RiskLevel
    volatility: float                                # Per-horizon sigma used
    outcomes: dict[str, int] = field(default_factory=dict)
    seed: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible payload."""
        return {
            "var95": self.var95,
            "sharpe_ratio": self.sharpe_ratio,
            "max_drawdown_pct": self.max_drawdown_pct,
            "win_probability_pct": self.win_probability_pct,
            "expected_return_pct": self.expected_return_pct,
            "iterations": self.iterations,
            "confidence_interval": list(self.confidence_interval),
            "risk_score": self.risk_score,
            "risk_level": self.risk_level.value,
            "volatility": self.volatility,
            "outcomes": dict(self.outcomes),
            "seed": self.seed,
        }
