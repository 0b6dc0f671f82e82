"""
Explicit indicator cache keyed by (symbol, timeframe).

One entry is kept per key together with a fingerprint of the window it was
computed from. A lookup only hits when the supplied window has the same
fingerprint, so a stale entry can never be returned for newer data.
"""

import hashlib
import struct
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import structlog

from ..data.models import PriceBar
from ..models.indicators import IndicatorSet

logger = structlog.get_logger(__name__)


def window_fingerprint(window: Sequence[PriceBar]) -> str:
    """SHA-256 digest over every bar's timestamp and OHLCV values."""
    digest = hashlib.sha256()
    for bar in window:
        digest.update(bar.ts.isoformat().encode())
        digest.update(struct.pack("<5d", bar.open, bar.high, bar.low, bar.close, bar.volume))
    return digest.hexdigest()


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    entries: int


class IndicatorCache:
    """Thread-safe single-entry-per-key cache of IndicatorSet results."""

    def __init__(self):
        self._entries: dict[tuple[str, str], tuple[str, IndicatorSet]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, symbol: str, timeframe: str, window: Sequence[PriceBar]) -> Optional[IndicatorSet]:
        """Return the cached set when the window fingerprint matches, else None."""
        fingerprint = window_fingerprint(window)
        with self._lock:
            entry = self._entries.get((symbol, timeframe))
            if entry is not None and entry[0] == fingerprint:
                self._hits += 1
                return entry[1]
            self._misses += 1
            return None

    def put(self, symbol: str, timeframe: str, window: Sequence[PriceBar], indicators: IndicatorSet) -> None:
        """Store indicators for the window, superseding any previous entry for the key."""
        fingerprint = window_fingerprint(window)
        with self._lock:
            self._entries[(symbol, timeframe)] = (fingerprint, indicators)
        logger.debug("indicator_cache_put", symbol=symbol, timeframe=timeframe)

    def invalidate(self, symbol: str, timeframe: str) -> bool:
        """Drop the entry for a key. Returns True if one existed."""
        with self._lock:
            return self._entries.pop((symbol, timeframe), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, entries=len(self._entries))
