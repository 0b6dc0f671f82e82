"""
Signal composer fusing indicator readings into a directional decision.

Each indicator contributes fixed points to a bullish or a bearish total.
A direction is only taken when one side leads the other by more than the
decision margin; otherwise the signal is NEUTRAL.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from ..config.defaults import ScoringParams
from ..models.indicators import IndicatorSet
from ..models.signal import Direction

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Bullish and bearish totals with the evidence behind them."""
    bullish: float
    bearish: float
    bullish_evidence: tuple[str, ...]
    bearish_evidence: tuple[str, ...]


@dataclass(frozen=True)
class Composition:
    """Outcome of composing one IndicatorSet."""
    direction: Direction
    confidence: float
    bullish: float
    bearish: float
    rationale: tuple[str, ...]
    scoring_version: str


class SignalComposer:
    """Weighted confluence scoring over an IndicatorSet."""

    def __init__(self, params: Optional[ScoringParams] = None):
        self.params = params or ScoringParams()

    def score(self, indicators: IndicatorSet) -> ScoreBreakdown:
        """
        Score every indicator in fixed order: RSI, MACD, EMA, Bollinger, DI.

        Args:
            indicators: Indicator snapshot for one window

        Returns:
            ScoreBreakdown with totals and one evidence line per contribution
        """
        p = self.params
        bullish: list[tuple[float, str]] = []
        bearish: list[tuple[float, str]] = []

        # MACD histogram and EMA spread within this band count as flat
        flat_band = p.flat_tolerance * indicators.close

        rsi = indicators.rsi
        if rsi < p.rsi_oversold:
            bullish.append((p.rsi_extreme_points, f"RSI {rsi:.1f} below {p.rsi_oversold:g} (oversold)"))
        elif rsi < p.rsi_midline:
            bullish.append((p.rsi_lean_points, f"RSI {rsi:.1f} below midline {p.rsi_midline:g}"))
        if rsi > p.rsi_overbought:
            bearish.append((p.rsi_extreme_points, f"RSI {rsi:.1f} above {p.rsi_overbought:g} (overbought)"))
        elif rsi > p.rsi_midline:
            bearish.append((p.rsi_lean_points, f"RSI {rsi:.1f} above midline {p.rsi_midline:g}"))

        histogram = indicators.macd.histogram
        if histogram > flat_band:
            bullish.append((p.macd_points, f"MACD histogram positive ({histogram:.4g})"))
        elif histogram < -flat_band:
            bearish.append((p.macd_points, f"MACD histogram negative ({histogram:.4g})"))

        ema = indicators.ema
        spread = ema.short - ema.medium
        if spread > flat_band:
            bullish.append((p.ema_points, f"EMA short {ema.short:.4g} above EMA medium {ema.medium:.4g}"))
        elif spread < -flat_band:
            bearish.append((p.ema_points, f"EMA short {ema.short:.4g} below EMA medium {ema.medium:.4g}"))

        percent_b = indicators.bollinger.percent_b
        if percent_b < p.percent_b_low:
            bullish.append((p.bollinger_points, f"Bollinger %B {percent_b:.1f} near lower band"))
        elif percent_b > p.percent_b_high:
            bearish.append((p.bollinger_points, f"Bollinger %B {percent_b:.1f} near upper band"))

        adx = indicators.adx
        if adx.plus_di > adx.minus_di:
            bullish.append((p.di_points, f"+DI {adx.plus_di:.1f} above -DI {adx.minus_di:.1f}"))
        elif adx.minus_di > adx.plus_di:
            bearish.append((p.di_points, f"-DI {adx.minus_di:.1f} above +DI {adx.plus_di:.1f}"))

        return ScoreBreakdown(
            bullish=sum(points for points, _ in bullish),
            bearish=sum(points for points, _ in bearish),
            bullish_evidence=tuple(f"Bullish: {line}" for _, line in bullish),
            bearish_evidence=tuple(f"Bearish: {line}" for _, line in bearish),
        )

    def decide(self, bullish: float, bearish: float) -> tuple[Direction, float]:
        """Apply the margin rule and confidence formula to a pair of totals."""
        p = self.params

        if bullish > bearish + p.decision_margin:
            return Direction.LONG, min(p.confidence_floor + bullish, p.confidence_cap)
        if bearish > bullish + p.decision_margin:
            return Direction.SHORT, min(p.confidence_floor + bearish, p.confidence_cap)
        return Direction.NEUTRAL, p.confidence_floor

    def compose(self, indicators: IndicatorSet) -> Composition:
        """Score the indicators and decide direction, confidence and rationale."""
        breakdown = self.score(indicators)
        direction, confidence = self.decide(breakdown.bullish, breakdown.bearish)

        regime = indicators.market_regime.value if indicators.market_regime else "UNCLASSIFIED"
        summary = (
            f"Regime {regime}: bullish {breakdown.bullish:g} vs bearish {breakdown.bearish:g}, "
            f"{direction.value} at {confidence:g}% confidence"
        )
        rationale = breakdown.bullish_evidence + breakdown.bearish_evidence + (summary,)

        logger.debug(
            "signal_composed",
            direction=direction.value,
            bullish=breakdown.bullish,
            bearish=breakdown.bearish,
            scoring_version=self.params.version
        )

        return Composition(
            direction=direction,
            confidence=confidence,
            bullish=breakdown.bullish,
            bearish=breakdown.bearish,
            rationale=rationale,
            scoring_version=self.params.version,
        )
