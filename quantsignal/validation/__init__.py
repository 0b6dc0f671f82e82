"""
Signal payload validation.
"""

from .signal_schema import SIGNAL_SCHEMA, SignalValidationError, SignalValidator

__all__ = ["SIGNAL_SCHEMA", "SignalValidationError", "SignalValidator"]
