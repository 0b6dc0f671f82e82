"""
Centralized logging configuration for quantsignal.

This module provides standardized logging configuration using structlog
for all components. Signal decisions and simulation summaries are logged
through the helpers below so that the audit trail keeps a stable shape.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structlog logger instance (name is typically __name__)."""
    return structlog.get_logger(name)


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for signal composition decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the signal composer subsystem
    """
    return get_logger(name).bind(
        subsystem="signal_composer",
        audit_trail=True
    )


def get_risk_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for Monte Carlo risk simulation.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the risk simulator subsystem
    """
    return get_logger(name).bind(
        subsystem="risk_simulator",
        audit_trail=True
    )


def log_signal_decision(
    logger: FilteringBoundLogger,
    symbol: str,
    timeframe: str,
    direction: str,
    confidence: float,
    bullish_score: float,
    bearish_score: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a signal decision with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Instrument the signal was computed for
        timeframe: Bar interval of the price window
        direction: LONG, SHORT or NEUTRAL
        confidence: Confidence of the emitted signal
        bullish_score: Total bullish points
        bearish_score: Total bearish points
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        timeframe=timeframe,
        direction=direction,
        confidence=confidence,
        bullish_score=bullish_score,
        bearish_score=bearish_score,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("signal_decision")


def log_simulation_summary(
    logger: FilteringBoundLogger,
    symbol: str,
    timeframe: str,
    iterations: int,
    expected_return_pct: float,
    var95: float,
    win_probability_pct: float,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the aggregate outcome of a Monte Carlo run.

    Args:
        logger: Structlog logger instance
        symbol: Instrument of the simulated signal
        timeframe: Bar interval of the simulated signal
        iterations: Number of simulated paths
        expected_return_pct: Mean path return in percent
        var95: 5th percentile path return in percent
        win_probability_pct: Share of paths ending in profit
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        timeframe=timeframe,
        iterations=iterations,
        expected_return_pct=expected_return_pct,
        var95=var95,
        win_probability_pct=win_probability_pct,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("simulation_summary")
