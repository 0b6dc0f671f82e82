"""
Utility functions module.

Time Semantics:
- Market timestamps from data feeds are ALWAYS authoritative
- Wall-clock time is only used as a fallback
- Signal timestamps are the market time of the last bar in the window
"""

from .time import format_market_time, get_market_time, to_utc

__all__ = ["to_utc", "get_market_time", "format_market_time"]
