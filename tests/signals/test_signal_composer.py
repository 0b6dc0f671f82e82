"""Tests for signal composition."""

from dataclasses import replace

import pytest

from quantsignal.config.defaults import ScoringParams
from quantsignal.models.indicators import (
    ADXResult,
    BollingerBands,
    EMATriple,
    IndicatorSet,
    MACDResult,
    StochasticResult,
)
from quantsignal.models.signal import Direction
from quantsignal.regime.classifier import MarketRegime
from quantsignal.signals import SignalComposer


def make_indicators(rsi=50.0, histogram=0.0, ema_short=100.0, ema_medium=100.0,
                    percent_b=50.0, plus_di=0.0, minus_di=0.0, close=100.0,
                    regime=MarketRegime.RANGING):
    """IndicatorSet with neutral readings unless overridden."""
    return IndicatorSet(
        rsi=rsi,
        macd=MACDResult(macd_line=histogram, signal_line=0.0, histogram=histogram),
        ema=EMATriple(short=ema_short, medium=ema_medium, long=100.0),
        stochastic=StochasticResult(k=50.0, d=50.0),
        bollinger=BollingerBands(upper=102.0, middle=100.0, lower=98.0, width=0.04, percent_b=percent_b),
        adx=ADXResult(adx=20.0, plus_di=plus_di, minus_di=minus_di),
        atr=1.0,
        volatility=0.02,
        close=close,
        bar_count=60,
        market_regime=regime,
    )


ALL_BULLISH = dict(rsi=25.0, histogram=1.0, ema_short=101.0, percent_b=10.0, plus_di=30.0, minus_di=10.0)
ALL_BEARISH = dict(rsi=75.0, histogram=-1.0, ema_short=99.0, percent_b=90.0, plus_di=10.0, minus_di=30.0)


class TestScoring:
    """Test point allocation."""

    def test_all_bullish(self):
        breakdown = SignalComposer().score(make_indicators(**ALL_BULLISH))
        assert breakdown.bullish == 20 + 25 + 15 + 15 + 10
        assert breakdown.bearish == 0

    def test_all_bearish(self):
        breakdown = SignalComposer().score(make_indicators(**ALL_BEARISH))
        assert breakdown.bearish == 85
        assert breakdown.bullish == 0

    def test_neutral_readings_score_nothing(self):
        breakdown = SignalComposer().score(make_indicators())
        assert breakdown.bullish == 0
        assert breakdown.bearish == 0

    @pytest.mark.parametrize("rsi,bullish,bearish", [
        (29.9, 20, 0),
        (30.0, 10, 0),
        (49.9, 10, 0),
        (50.0, 0, 0),
        (50.1, 0, 10),
        (70.0, 0, 10),
        (70.1, 0, 20),
    ])
    def test_rsi_zones(self, rsi, bullish, bearish):
        breakdown = SignalComposer().score(make_indicators(rsi=rsi))
        assert (breakdown.bullish, breakdown.bearish) == (bullish, bearish)

    def test_flat_tolerance(self):
        """A histogram within 1 bp of price counts as flat."""
        indicators = make_indicators(histogram=0.005, ema_short=100.005)
        assert SignalComposer().score(indicators).bullish == 0

        strict = SignalComposer(ScoringParams(flat_tolerance=0.0))
        assert strict.score(indicators).bullish == 25 + 15

    def test_percent_b_thresholds_are_exclusive(self):
        assert SignalComposer().score(make_indicators(percent_b=20.0)).bullish == 0
        assert SignalComposer().score(make_indicators(percent_b=80.0)).bearish == 0


class TestComposition:
    """Test direction, confidence and rationale."""

    def test_long_confidence_capped(self):
        composition = SignalComposer().compose(make_indicators(**ALL_BULLISH))
        assert composition.direction is Direction.LONG
        assert composition.confidence == 95

    def test_short_confidence_capped(self):
        composition = SignalComposer().compose(make_indicators(**ALL_BEARISH))
        assert composition.direction is Direction.SHORT
        assert composition.confidence == 95

    def test_confidence_formula(self):
        # RSI lean (10) + MACD (25) = 35 bullish, 0 bearish
        composition = SignalComposer().compose(make_indicators(rsi=40.0, histogram=1.0))
        assert composition.direction is Direction.LONG
        assert composition.confidence == 85

    def test_margin_is_strict(self):
        # 35 bullish vs 15 bearish: 35 > 15 + 20 is false
        indicators = make_indicators(rsi=25.0, percent_b=10.0, ema_short=99.0)
        composition = SignalComposer().compose(indicators)
        assert (composition.bullish, composition.bearish) == (35, 15)
        assert composition.direction is Direction.NEUTRAL
        assert composition.confidence == 50

    def test_confidence_bounds(self):
        composer = SignalComposer()
        for overrides in (ALL_BULLISH, ALL_BEARISH, {}, {"rsi": 40.0, "histogram": 1.0},
                          {"rsi": 60.0, "histogram": -1.0, "minus_di": 5.0}):
            composition = composer.compose(make_indicators(**overrides))
            assert 50 <= composition.confidence <= 95

    def test_rationale_order(self):
        composition = SignalComposer().compose(make_indicators(**ALL_BULLISH))
        prefixes = [line.split(" ")[1] for line in composition.rationale[:-1]]
        assert prefixes == ["RSI", "MACD", "EMA", "Bollinger", "+DI"]
        assert "RANGING" in composition.rationale[-1]

    def test_bullish_evidence_precedes_bearish(self):
        indicators = make_indicators(rsi=75.0, histogram=1.0, plus_di=30.0)
        rationale = SignalComposer().compose(indicators).rationale
        assert rationale[0].startswith("Bullish: MACD")
        assert rationale[1].startswith("Bullish: +DI")
        assert rationale[2].startswith("Bearish: RSI")
        assert len(rationale) == 4

    def test_uptrend_with_oversold_rsi_goes_long(self, uptrend_indicators):
        indicators = replace(uptrend_indicators, rsi=25.0)
        composition = SignalComposer().compose(indicators)

        assert composition.direction is Direction.LONG
        assert composition.bullish == 70
        assert composition.bearish <= 15
        assert composition.confidence == 95

    def test_sideways_is_neutral(self, sideways_bars):
        from quantsignal.indicators.calculator import IndicatorCalculator

        composition = SignalComposer().compose(IndicatorCalculator().calculate(sideways_bars))
        assert composition.direction is Direction.NEUTRAL
        assert composition.confidence == 50

    def test_sideways_needs_flat_tolerance(self, sideways_bars):
        """Rounding-sized MACD and EMA readings score once the tolerance is removed."""
        from quantsignal.indicators.calculator import IndicatorCalculator

        indicators = IndicatorCalculator().calculate(sideways_bars)
        strict = SignalComposer(ScoringParams(flat_tolerance=0.0)).compose(indicators)

        assert abs(indicators.macd.histogram) <= 1e-4 * indicators.close
        assert strict.direction is not Direction.NEUTRAL
