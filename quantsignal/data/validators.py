"""
Input validation for symbols and price windows.

Every check here runs before any indicator is computed, so a bad request
is rejected without partial work.
"""

import math
import re
from typing import Any

from ..errors import (
    InsufficientDataError,
    InvalidSymbolError,
    MalformedDataError,
    TemporalDataError,
)
from .models import PriceBar

_SYMBOL_PATTERN = re.compile(r"^[A-Za-z0-9]+(?:[/\-_.][A-Za-z0-9]+)*$")


def validate_symbol(symbol: Any) -> str:
    """
    Validate an instrument symbol such as ``BTC/USDT`` or ``ETH-USD-SWAP``.

    Returns:
        The symbol unchanged

    Raises:
        InvalidSymbolError: If the symbol is empty or malformed
    """
    if not isinstance(symbol, str) or not symbol:
        raise InvalidSymbolError("Symbol must be a non-empty string", value=symbol)

    if not _SYMBOL_PATTERN.match(symbol):
        raise InvalidSymbolError(f"Malformed symbol: {symbol!r}", value=symbol)

    return symbol


def validate_window(window: Any, required_count: int) -> None:
    """
    Validate a price window before indicator computation.

    Args:
        window: Sequence of PriceBar, oldest first
        required_count: Minimum number of bars needed

    Raises:
        InsufficientDataError: If the window is empty or too short
        MalformedDataError: If a bar is not a PriceBar or has invalid prices
        TemporalDataError: If timestamps are not strictly increasing
    """
    available = len(window) if window is not None else 0
    if available == 0 or available < required_count:
        raise InsufficientDataError(
            f"Need at least {required_count} bars, got {available}",
            required_count=required_count,
            available_count=available
        )

    previous = None
    for index, bar in enumerate(window):
        _validate_bar(bar, index)

        if previous is not None and bar.ts <= previous.ts:
            raise TemporalDataError(
                f"Bar timestamps must be strictly increasing (index {index})",
                timestamp=bar.ts,
                expected_timestamp=previous.ts,
                context={"index": index}
            )
        previous = bar


def _validate_bar(bar: Any, index: int) -> None:
    """Check a single bar for type, finiteness and OHLC consistency."""
    if not isinstance(bar, PriceBar):
        raise MalformedDataError(
            f"Element {index} is not a PriceBar",
            raw_data=repr(bar),
            expected_format="PriceBar"
        )

    prices = (bar.open, bar.high, bar.low, bar.close)
    if not all(isinstance(v, (int, float)) for v in prices + (bar.volume,)):
        raise MalformedDataError(
            f"Prices and volume must be numeric at index {index}",
            raw_data=repr(bar),
            context={"index": index}
        )

    if any(not math.isfinite(p) or p <= 0 for p in prices):
        raise MalformedDataError(
            f"Prices must be finite and positive at index {index}",
            raw_data=repr(bar),
            context={"index": index}
        )

    if not math.isfinite(bar.volume) or bar.volume < 0:
        raise MalformedDataError(
            f"Volume must be finite and non-negative at index {index}",
            raw_data=repr(bar),
            context={"index": index}
        )

    if bar.high < max(bar.open, bar.close) or bar.low > min(bar.open, bar.close):
        raise MalformedDataError(
            f"High/low inconsistent with open/close at index {index}",
            raw_data=repr(bar),
            context={"index": index}
        )
