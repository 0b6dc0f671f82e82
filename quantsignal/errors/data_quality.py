"""
Data quality error classifications for price window processing.

These exceptions describe problems with the price history handed to the
engine. They are recoverable: the caller can supply more or cleaner data.
"""

from typing import Any, Optional


class DataQualityError(Exception):
    """Base class for data quality issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class TemporalDataError(DataQualityError):
    """Timestamp or sequencing issues in a price window."""

    def __init__(self, message: str, timestamp: Optional[Any] = None,
                 expected_timestamp: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.timestamp = timestamp
        self.expected_timestamp = expected_timestamp


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InsufficientDataError(DataQualityError):
    """Not enough historical data for calculations."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class DegenerateInputError(DataQualityError):
    """Input would produce a zero denominator (flat bands, zero ATR)."""

    def __init__(self, message: str, indicator: Optional[str] = None,
                 sentinel: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.indicator = indicator
        self.sentinel = sentinel
