"""Trend indicators: MACD and ADX with directional indicators"""

from collections.abc import Sequence

from ..data.models import PriceBar
from ..models.indicators import ADXResult, MACDResult
from .smoothing import ema_series, require_length, wilder_series
from .volatility import bar_true_range


def macd(closes: Sequence[float], fast: int = 12, slow: int = 26, signal: int = 9) -> MACDResult:
    """
    Moving Average Convergence Divergence

    macd_line = EMA(fast) - EMA(slow); signal_line = EMA(macd_line, signal);
    histogram = macd_line - signal_line.

    Args:
        closes: Close prices, oldest first (at least slow + signal - 1)
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal: Signal EMA period (default 9)

    Returns:
        MACDResult for the last close
    """
    require_length(closes, slow + signal - 1, "MACD")

    fast_series = ema_series(closes, fast)
    slow_series = ema_series(closes, slow)

    # Align the fast series with the shorter slow series
    offset = len(fast_series) - len(slow_series)
    macd_series = [f - s for f, s in zip(fast_series[offset:], slow_series)]
    signal_series = ema_series(macd_series, signal)

    macd_line = macd_series[-1]
    signal_line = signal_series[-1]
    return MACDResult(
        macd_line=macd_line,
        signal_line=signal_line,
        histogram=macd_line - signal_line,
    )


def directional_movement(current: PriceBar, previous: PriceBar) -> tuple[float, float]:
    """
    +DM and -DM for one bar

    The larger positive move wins; equal moves give zero on both sides.
    """
    up_move = current.high - previous.high
    down_move = previous.low - current.low

    plus_dm = up_move if up_move > down_move and up_move > 0 else 0.0
    minus_dm = down_move if down_move > up_move and down_move > 0 else 0.0
    return plus_dm, minus_dm


def adx(bars: Sequence[PriceBar], period: int = 14) -> ADXResult:
    """
    Average Directional Index with +DI and -DI

    TR, +DM and -DM are Wilder-smoothed; DX = 100 * |+DI - -DI| / (+DI + -DI)
    and ADX is the Wilder-smoothed DX series.

    Args:
        bars: Price bars, oldest first (at least 2 * period)
        period: Smoothing period (default 14)

    Returns:
        ADXResult with all values >= 0
    """
    require_length(bars, 2 * period, "ADX")

    ranges = []
    plus_moves = []
    minus_moves = []
    for previous, current in zip(bars[:-1], bars[1:]):
        ranges.append(bar_true_range(current, previous))
        plus_dm, minus_dm = directional_movement(current, previous)
        plus_moves.append(plus_dm)
        minus_moves.append(minus_dm)

    smoothed_tr = wilder_series(ranges, period)
    smoothed_plus = wilder_series(plus_moves, period)
    smoothed_minus = wilder_series(minus_moves, period)

    dx_series = []
    plus_di = minus_di = 0.0
    for tr, plus, minus in zip(smoothed_tr, smoothed_plus, smoothed_minus):
        if tr == 0:
            plus_di = minus_di = 0.0
        else:
            plus_di = 100.0 * plus / tr
            minus_di = 100.0 * minus / tr

        di_sum = plus_di + minus_di
        dx_series.append(0.0 if di_sum == 0 else 100.0 * abs(plus_di - minus_di) / di_sum)

    return ADXResult(
        adx=wilder_series(dx_series, period)[-1],
        plus_di=plus_di,
        minus_di=minus_di,
    )
