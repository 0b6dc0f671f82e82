"""
Error classification system for signal generation and risk simulation.

This module provides a structured exception hierarchy separating recoverable
input and data quality problems from unrecoverable system failures.
"""

from .data_quality import (
    DataQualityError,
    DegenerateInputError,
    InsufficientDataError,
    MalformedDataError,
    TemporalDataError,
)
from .invalid_input import (
    InvalidInputError,
    InvalidSignalError,
    InvalidSymbolError,
    InvalidTimeframeError,
)
from .system_failures import (
    ConfigurationError,
    IndicatorCalculationError,
    SimulationError,
    SystemFailureError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "InsufficientDataError",
    "MalformedDataError",
    "TemporalDataError",
    "DegenerateInputError",
    # Input Errors
    "InvalidInputError",
    "InvalidTimeframeError",
    "InvalidSymbolError",
    "InvalidSignalError",
    # System Failures
    "SystemFailureError",
    "IndicatorCalculationError",
    "SimulationError",
    "ConfigurationError",
]
