"""
Logging module.

Provides centralized structured logging for the signal engine.
"""

from .config import (
    configure_logging,
    get_logger,
    get_risk_logger,
    get_signal_logger,
    log_signal_decision,
    log_simulation_summary,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_signal_logger",
    "get_risk_logger",
    "log_signal_decision",
    "log_simulation_summary",
]
