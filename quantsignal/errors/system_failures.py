"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures of the engine itself rather than of the
data handed to it, and usually point at a bug or a broken configuration.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class IndicatorCalculationError(SystemFailureError):
    """Critical error in indicator calculation that prevents evaluation."""

    def __init__(self, message: str, indicator_name: Optional[str] = None,
                 calculation_input: Optional[dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.indicator_name = indicator_name
        self.calculation_input = calculation_input


class SimulationError(SystemFailureError):
    """Monte Carlo simulation produced unusable output."""

    def __init__(self, message: str, iterations: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.iterations = iterations


class ConfigurationError(SystemFailureError):
    """Merged configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
