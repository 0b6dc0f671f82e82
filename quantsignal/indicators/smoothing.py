"""
Moving averages and smoothing primitives shared by the indicators.

All averages are updated incrementally (avg += (x - avg) / n) so that a
constant input yields exactly that constant, with no rounding drift.
"""

from collections.abc import Sequence

from ..errors import InsufficientDataError


def require_length(values: Sequence, required: int, indicator: str) -> None:
    """
    Raise InsufficientDataError when fewer than `required` values are given

    Args:
        values: Input sequence
        required: Minimum number of elements
        indicator: Indicator name for the error message
    """
    if required < 1:
        raise ValueError(f"{indicator}: period must be positive, got {required}")

    available = len(values)
    if available < required:
        raise InsufficientDataError(
            f"{indicator} needs {required} values, got {available}",
            required_count=required,
            available_count=available,
            context={"indicator": indicator}
        )


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean using the incremental form"""
    avg = 0.0
    for n, value in enumerate(values, start=1):
        avg += (value - avg) / n
    return avg


def sma(values: Sequence[float], period: int) -> float:
    """Simple moving average of the last `period` values"""
    require_length(values, period, "SMA")
    return mean(values[-period:])


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """
    Exponential moving average series

    The first value is the SMA of the first `period` inputs; each later value
    applies the multiplier 2 / (period + 1).

    Returns:
        EMA values aligned with values[period - 1:]
    """
    require_length(values, period, "EMA")

    k = 2.0 / (period + 1)
    current = mean(values[:period])
    series = [current]
    for value in values[period:]:
        current += k * (value - current)
        series.append(current)
    return series


def ema(values: Sequence[float], period: int) -> float:
    """Latest EMA value"""
    return ema_series(values, period)[-1]


def wilder_series(values: Sequence[float], period: int) -> list[float]:
    """
    Wilder's smoothing: avg = (avg * (period - 1) + x) / period

    Seeded with the mean of the first `period` values.

    Returns:
        Smoothed values aligned with values[period - 1:]
    """
    require_length(values, period, "Wilder smoothing")

    current = mean(values[:period])
    series = [current]
    for value in values[period:]:
        current += (value - current) / period
        series.append(current)
    return series
