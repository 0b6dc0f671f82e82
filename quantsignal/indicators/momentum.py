"""Momentum oscillators: RSI and Stochastic"""

from collections.abc import Sequence

from ..data.models import PriceBar
from ..models.indicators import StochasticResult
from .smoothing import mean, require_length


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """
    Relative Strength Index with Wilder smoothing

    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    Args:
        closes: Close prices, oldest first (at least period + 1)
        period: Lookback period (default 14)

    Returns:
        RSI in [0, 100]. 100 whenever the smoothed loss is zero, flat windows included
    """
    require_length(closes, period + 1, "RSI")

    gains = []
    losses = []
    for previous, current in zip(closes[:-1], closes[1:]):
        change = current - previous
        gains.append(change if change > 0 else 0.0)
        losses.append(-change if change < 0 else 0.0)

    avg_gain = mean(gains[:period])
    avg_loss = mean(losses[:period])
    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain += (gain - avg_gain) / period
        avg_loss += (loss - avg_loss) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def _percent_k(bars: Sequence[PriceBar]) -> float:
    highest = max(bar.high for bar in bars)
    lowest = min(bar.low for bar in bars)
    if highest == lowest:
        return 50.0
    return 100.0 * (bars[-1].close - lowest) / (highest - lowest)


def stochastic(bars: Sequence[PriceBar], k_period: int = 14, d_period: int = 3) -> StochasticResult:
    """
    Stochastic oscillator

    %K = 100 * (close - lowest low) / (highest high - lowest low) over the
    trailing k_period bars; %D is the SMA of the last d_period %K values.

    Args:
        bars: Price bars, oldest first (at least k_period + d_period - 1)
        k_period: %K lookback (default 14)
        d_period: %D smoothing (default 3)

    Returns:
        StochasticResult with k and d in [0, 100]
    """
    require_length(bars, k_period + d_period - 1, "Stochastic")

    end = len(bars)
    k_values = [
        _percent_k(bars[stop - k_period:stop])
        for stop in range(end - d_period + 1, end + 1)
    ]

    return StochasticResult(k=k_values[-1], d=mean(k_values))
