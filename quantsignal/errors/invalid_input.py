"""
Input rejection errors.

Raised before any computation begins when a request names an unknown
timeframe, a malformed symbol, or a signal that cannot be simulated.
"""

from typing import Any, Optional


class InvalidInputError(Exception):
    """Base class for malformed or unrecognized requests."""

    def __init__(self, message: str, value: Optional[Any] = None,
                 context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.value = value
        self.context = context or {}
        self.recoverable = True


class InvalidTimeframeError(InvalidInputError):
    """Timeframe is not one of the supported bar intervals."""


class InvalidSymbolError(InvalidInputError):
    """Symbol is empty or not a recognizable instrument name."""


class InvalidSignalError(InvalidInputError):
    """Signal or simulation request cannot produce a meaningful risk report."""

    def __init__(self, message: str, reason: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reason = reason
