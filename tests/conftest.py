"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from quantsignal.config.defaults import get_default_config
from quantsignal.data.models import PriceBar
from quantsignal.indicators.calculator import IndicatorCalculator
from quantsignal.models.signal import Direction, Signal

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def build_bars(closes, highs=None, lows=None, step=timedelta(hours=1)):
    """Build PriceBar objects with open == close and hourly timestamps."""
    highs = highs if highs is not None else closes
    lows = lows if lows is not None else closes
    return [
        PriceBar(ts=START + i * step, open=c, high=h, low=l, close=c, volume=1000.0)
        for i, (c, h, l) in enumerate(zip(closes, highs, lows))
    ]


@pytest.fixture
def make_bars():
    """Factory for price windows from close/high/low lists."""
    return build_bars


@pytest.fixture
def uptrend_bars():
    """60 bars rising 1% per bar with a narrow high/low range."""
    closes = [100.0 * 1.01 ** t for t in range(60)]
    return build_bars(closes, [c * 1.002 for c in closes], [c * 0.998 for c in closes])


@pytest.fixture
def downtrend_bars():
    """60 bars falling ever faster, the uptrend mirrored around 250.

    Linear indicators (EMA, MACD, Bollinger) come out as the exact mirror of
    the uptrend, and +DM and -DM swap places.
    """
    rising = [100.0 * 1.01 ** t for t in range(60)]
    closes = [250.0 - c for c in rising]
    highs = [250.0 - c * 0.998 for c in rising]
    lows = [250.0 - c * 1.002 for c in rising]
    return build_bars(closes, highs, lows)


@pytest.fixture
def sideways_bars():
    """60 bars alternating around 100 inside a constant high/low range."""
    closes = [99.9 if t % 2 == 0 else 100.1 for t in range(60)]
    return build_bars(closes, [100.2] * 60, [99.8] * 60)


@pytest.fixture
def flat_bars():
    """60 identical bars: zero volatility, zero ATR, zero-width bands."""
    return build_bars([100.0] * 60)


@pytest.fixture
def default_config():
    return get_default_config()


@pytest.fixture
def uptrend_indicators(uptrend_bars):
    return IndicatorCalculator().calculate(uptrend_bars)


@pytest.fixture
def long_signal(uptrend_indicators):
    """LONG signal with entry 100, stop 97 and target 106."""
    return Signal(
        symbol="BTC/USDT",
        timeframe="1h",
        direction=Direction.LONG,
        confidence=80.0,
        entry_price=100.0,
        stop_loss=97.0,
        take_profit=106.0,
        indicators=uptrend_indicators,
        timestamp=START,
        rationale=("Bullish: test fixture",),
    )


@pytest.fixture
def short_signal(uptrend_indicators):
    """SHORT signal with entry 100, stop 103 and target 94."""
    return Signal(
        symbol="ETH/USDT",
        timeframe="4h",
        direction=Direction.SHORT,
        confidence=80.0,
        entry_price=100.0,
        stop_loss=103.0,
        take_profit=94.0,
        indicators=uptrend_indicators,
        timestamp=START,
        rationale=("Bearish: test fixture",),
    )


@pytest.fixture
def neutral_signal(uptrend_indicators):
    return Signal(
        symbol="BTC/USDT",
        timeframe="1h",
        direction=Direction.NEUTRAL,
        confidence=50.0,
        entry_price=100.0,
        stop_loss=None,
        take_profit=None,
        indicators=uptrend_indicators,
        timestamp=START,
        rationale=("Regime RANGING",),
    )
