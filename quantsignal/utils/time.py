"""
Time semantics utilities for market vs wall-clock time handling.

Bar timestamps coming from a data feed are authoritative. Wall-clock time
is only a fallback for operational purposes.
"""

from datetime import datetime, timezone
from typing import Optional, Union

# Epoch values above this are taken to be milliseconds (year 2286 in seconds)
_EPOCH_MS_THRESHOLD = 10_000_000_000

TimeLike = Union[datetime, int, float, str]


def to_utc(value: TimeLike) -> datetime:
    """
    Convert a timestamp to an aware UTC datetime.

    Args:
        value: Epoch seconds or milliseconds, ISO-8601 string, or datetime.
            Naive datetimes and strings without offset are treated as UTC.

    Returns:
        Timezone-aware UTC datetime

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, (int, float)):
        seconds = value / 1000.0 if abs(value) >= _EPOCH_MS_THRESHOLD else float(value)
        return datetime.fromtimestamp(seconds, tz=timezone.utc)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return to_utc(datetime.fromisoformat(text))

    raise ValueError(f"Not a timestamp: {value!r}")


def get_market_time(market_ts: Optional[datetime] = None) -> datetime:
    """
    Get the current market time, preferring market timestamp over wall-clock time.

    Args:
        market_ts: Optional market timestamp from data feed

    Returns:
        Market time as UTC datetime, falling back to wall-clock time if unavailable
    """
    if market_ts is not None:
        return to_utc(market_ts)

    return datetime.now(timezone.utc)


def format_market_time(market_ts: datetime) -> str:
    """Format market timestamp as ISO-8601 for signal payloads and logging."""
    return to_utc(market_ts).isoformat()
