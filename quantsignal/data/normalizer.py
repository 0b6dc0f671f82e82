"""
Normalization of raw OHLCV payloads into PriceBar windows.

Accepts the shapes typically returned by market data collaborators: a JSON
document (str/bytes) or an already decoded list whose rows are either
``[ts, open, high, low, close, volume]`` arrays or mappings with those keys.
"""

from typing import Any, Union

import orjson
import structlog

from ..errors import MalformedDataError
from ..utils.time import to_utc
from .models import PriceBar

logger = structlog.get_logger(__name__)

_FIELDS = ("open", "high", "low", "close", "volume")

Payload = Union[str, bytes, list]


def normalize_bars(payload: Payload) -> list[PriceBar]:
    """
    Convert a raw payload into PriceBar objects sorted oldest to newest.

    Args:
        payload: JSON text/bytes or decoded list of rows

    Returns:
        List of PriceBar objects with UTC timestamps

    Raises:
        MalformedDataError: If the payload or any row cannot be parsed
    """
    rows = _decode(payload)

    bars = []
    for index, row in enumerate(rows):
        try:
            bars.append(_parse_row(row))
        except (ValueError, TypeError, KeyError, IndexError, OverflowError) as e:
            raise MalformedDataError(
                f"Invalid bar data at index {index}: {e}",
                raw_data=repr(row),
                expected_format="[ts, open, high, low, close, volume]",
                context={"index": index}
            ) from e

    bars.sort(key=lambda bar: bar.ts)

    logger.debug("bars_normalized", count=len(bars))
    return bars


def _decode(payload: Payload) -> list:
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = orjson.loads(payload)
        except orjson.JSONDecodeError as e:
            raise MalformedDataError(
                f"Payload is not valid JSON: {e}",
                raw_data=str(payload[:200]),
                expected_format="JSON array"
            ) from e

    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        payload = payload["data"]

    if not isinstance(payload, list):
        raise MalformedDataError(
            "Payload must be a list of bars",
            raw_data=repr(payload)[:200],
            expected_format="JSON array"
        )

    return payload


def _parse_row(row: Any) -> PriceBar:
    if isinstance(row, dict):
        ts_value = row["ts"] if "ts" in row else row["timestamp"]
        values = [row[name] for name in _FIELDS]
    elif isinstance(row, (list, tuple)):
        if len(row) < 6:
            raise ValueError(f"expected 6 elements, got {len(row)}")
        ts_value = row[0]
        values = list(row[1:6])
    else:
        raise TypeError(f"unsupported row type {type(row).__name__}")

    if isinstance(ts_value, str) and ts_value.isdigit():
        ts_value = int(ts_value)

    open_price, high, low, close, volume = (float(v) for v in values)

    return PriceBar(
        ts=to_utc(ts_value),
        open=open_price,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )
