"""
Main signal engine coordinator.

Orchestrates the evaluation pipeline for one (symbol, timeframe) window:
Validation -> Configuration -> Indicators -> Composition -> Sizing -> Signal,
with optional Monte Carlo risk simulation of the resulting signal.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .data.models import PriceBar, Timeframe
from .data.validators import validate_symbol, validate_window
from .errors import DataQualityError, InvalidInputError
from .indicators.cache import IndicatorCache
from .indicators.calculator import IndicatorCalculator
from .logging.config import get_signal_logger, log_signal_decision
from .models.indicators import IndicatorSet
from .models.risk import RiskReport
from .models.signal import Direction, Signal
from .risk.monte_carlo import MonteCarloSimulator
from .signals.composer import SignalComposer
from .signals.sizing import PositionSizer
from .utils.time import to_utc
from .validation.signal_schema import SignalValidator

logger = structlog.get_logger(__name__)

SignalRequest = tuple[str, Union[Timeframe, str], Sequence[PriceBar]]


@dataclass
class BatchResult:
    """Signals and per-item failures of a batch evaluation."""
    signals: dict[tuple[str, str], Signal] = field(default_factory=dict)
    errors: dict[tuple[str, str], Exception] = field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return len(self.signals)

    @property
    def failed(self) -> int:
        return len(self.errors)


class SignalEngine:
    """
    External interface for signal generation and risk simulation.

    The engine holds no mutable state besides the optional IndicatorCache
    handed to it, so one instance may serve concurrent callers.
    """

    def __init__(self, config: Optional[DefaultConfig] = None,
                 cache: Optional[IndicatorCache] = None,
                 config_dir: Optional[Union[str, Path]] = None,
                 rng: Optional[np.random.Generator] = None) -> None:
        """
        Args:
            config: Global defaults (lowest precedence tier)
            cache: Optional shared indicator cache
            config_dir: Directory holding symbols.yaml overrides
            rng: Random source for simulations without an explicit seed
        """
        self.config_loader = ConfigLoader.create(
            Path(config_dir) if config_dir is not None else None,
            defaults=config
        )
        self.cache = cache
        self.rng = rng
        self.validator = SignalValidator()
        self.signal_logger = get_signal_logger(__name__)

        logger.info("Signal engine initialized", cache_enabled=cache is not None)

    def compute_signal(self, symbol: str, timeframe: Union[Timeframe, str],
                       window: Sequence[PriceBar],
                       overrides: Optional[dict[str, Any]] = None) -> Signal:
        """
        Compute a trading signal from a price window.

        Args:
            symbol: Instrument symbol, e.g. "BTC/USDT"
            timeframe: Bar interval of the window
            window: Price bars, oldest first
            overrides: Per-call configuration overrides (highest precedence)

        Returns:
            Validated Signal

        Raises:
            InvalidSymbolError, InvalidTimeframeError: Malformed request
            InsufficientDataError, MalformedDataError, TemporalDataError: Bad window
            ConfigurationError: Merged configuration is invalid
            IndicatorCalculationError: Unexpected indicator failure
        """
        symbol = validate_symbol(symbol)
        tf = Timeframe.parse(timeframe)
        config = self.config_loader.build_config(symbol, overrides)

        calculator = IndicatorCalculator(config)
        validate_window(window, calculator.required_bars())

        indicators = self._indicators(symbol, tf, window, calculator, use_cache=not overrides)

        composition = SignalComposer(config.scoring).compose(indicators)
        sizer = PositionSizer(config.sizing)

        direction = composition.direction
        confidence = composition.confidence
        rationale = composition.rationale
        levels = sizer.levels(direction, indicators.close, indicators.atr, tf.value)

        if levels.is_degenerate:
            logger.warning(
                "Zero ATR, downgrading signal to NEUTRAL",
                symbol=symbol,
                timeframe=tf.value,
                composed_direction=direction.value
            )
            rationale = rationale + (
                f"Downgraded {direction.value} to NEUTRAL: ATR is zero, no stop distance available",
            )
            direction = Direction.NEUTRAL
            confidence = config.scoring.confidence_floor
            levels = sizer.levels(direction, indicators.close, indicators.atr, tf.value)

        signal = Signal(
            symbol=symbol,
            timeframe=tf.value,
            direction=direction,
            confidence=confidence,
            entry_price=indicators.close,
            stop_loss=levels.stop_loss,
            take_profit=levels.take_profit,
            indicators=indicators,
            timestamp=to_utc(window[-1].ts),
            rationale=rationale,
        )

        self.validator.validate_signal(signal.to_dict())

        log_signal_decision(
            self.signal_logger,
            symbol=symbol,
            timeframe=tf.value,
            direction=direction.value,
            confidence=confidence,
            bullish_score=composition.bullish,
            bearish_score=composition.bearish,
            context={
                "regime": indicators.market_regime.value if indicators.market_regime else None,
                "scoring_version": composition.scoring_version,
            }
        )
        return signal

    def simulate_risk(self, signal: Signal, volatility: Optional[float] = None,
                      iterations: Optional[int] = None, seed: Optional[int] = None) -> RiskReport:
        """
        Run the Monte Carlo risk simulation for a directional signal.

        Simulation parameters come from the signal symbol's configuration.

        Raises:
            InvalidSignalError: If the signal is NEUTRAL, lacks levels, or
                iterations / volatility are unusable
        """
        config = self.config_loader.build_config(signal.symbol)
        simulator = MonteCarloSimulator(config.monte_carlo, rng=self.rng)
        return simulator.simulate(signal, volatility=volatility, iterations=iterations, seed=seed)

    def compute_signals(self, requests: Iterable[SignalRequest]) -> BatchResult:
        """
        Evaluate many (symbol, timeframe, window) requests independently.

        Recoverable failures are collected per item; system failures propagate.
        """
        result = BatchResult()

        for symbol, timeframe, window in requests:
            key = (symbol, timeframe.value if isinstance(timeframe, Timeframe) else str(timeframe))
            try:
                result.signals[key] = self.compute_signal(symbol, timeframe, window)
            except (DataQualityError, InvalidInputError) as e:
                logger.warning(
                    "Signal computation failed, skipping",
                    symbol=symbol,
                    timeframe=key[1],
                    error_type=type(e).__name__,
                    error=str(e)
                )
                result.errors[key] = e

        logger.info("Batch evaluation complete", succeeded=result.succeeded, failed=result.failed)
        return result

    def _indicators(self, symbol: str, timeframe: Timeframe, window: Sequence[PriceBar],
                    calculator: IndicatorCalculator, use_cache: bool) -> IndicatorSet:
        """Compute indicators, going through the cache when one is configured."""
        # Per-call overrides may change periods, so those results are never cached
        if self.cache is None or not use_cache:
            return calculator.compute(window)

        cached = self.cache.get(symbol, timeframe.value, window)
        if cached is not None:
            logger.debug("Indicator cache hit", symbol=symbol, timeframe=timeframe.value)
            return cached

        indicators = calculator.compute(window)
        self.cache.put(symbol, timeframe.value, window, indicators)
        return indicators
