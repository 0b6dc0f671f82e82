"""
Configuration module.

Single source of truth for indicator periods, regime thresholds, scoring
weights, position sizing multipliers and simulation parameters.
"""

from .defaults import DefaultConfig, get_default_config
from .loader import ConfigLoader, config_from_dict
from .validation import ConfigValidator, ValidationError

__all__ = [
    "DefaultConfig",
    "get_default_config",
    "ConfigLoader",
    "config_from_dict",
    "ConfigValidator",
    "ValidationError",
]
