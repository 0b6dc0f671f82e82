"""Main indicator calculator coordinating every indicator for a price window"""

import math
from collections.abc import Callable, Sequence
from typing import Any, Optional

import structlog

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import PriceBar
from ..data.validators import validate_window
from ..errors import DataQualityError, IndicatorCalculationError
from ..models.indicators import EMATriple, IndicatorSet
from ..regime.classifier import classify_regime
from .momentum import rsi, stochastic
from .smoothing import ema
from .trend import adx, macd
from .volatility import atr, bollinger_bands, realized_volatility

logger = structlog.get_logger(__name__)


class IndicatorCalculator:
    """
    Computes the full IndicatorSet for a window of bars

    Stateless apart from its configuration, so one instance may be shared
    across threads.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def required_bars(self) -> int:
        """Minimum number of bars needed for the full indicator set"""
        cfg = self.config
        return max(
            cfg.window.min_bars,
            cfg.rsi.period + 1,
            cfg.macd.slow + cfg.macd.signal - 1,
            cfg.ema.long,
            cfg.bollinger.period,
            2 * cfg.adx.period,
            cfg.atr.period,
            cfg.stochastic.k_period + cfg.stochastic.d_period - 1,
            cfg.volatility.period + 1,
        )

    def calculate(self, window: Sequence[PriceBar]) -> IndicatorSet:
        """
        Validate the window, then calculate all indicators

        Args:
            window: Price bars, oldest first

        Returns:
            IndicatorSet tagged with the market regime

        Raises:
            InsufficientDataError: If the window is shorter than required_bars()
            MalformedDataError: If any bar is invalid
            TemporalDataError: If timestamps are out of order
            IndicatorCalculationError: If an indicator fails unexpectedly
        """
        validate_window(window, self.required_bars())
        return self.compute(window)

    def compute(self, window: Sequence[PriceBar]) -> IndicatorSet:
        """Calculate all indicators for a window already checked by validate_window"""
        cfg = self.config

        closes = [bar.close for bar in window]

        rsi_value = self._compute("rsi", rsi, closes, cfg.rsi.period)
        macd_result = self._compute("macd", macd, closes, cfg.macd.fast, cfg.macd.slow, cfg.macd.signal)
        ema_triple = EMATriple(
            short=self._compute("ema_short", ema, closes, cfg.ema.short),
            medium=self._compute("ema_medium", ema, closes, cfg.ema.medium),
            long=self._compute("ema_long", ema, closes, cfg.ema.long),
        )
        stoch = self._compute("stochastic", stochastic, window, cfg.stochastic.k_period, cfg.stochastic.d_period)
        bands = self._compute("bollinger", bollinger_bands, closes, cfg.bollinger.period, cfg.bollinger.std_mult)
        adx_result = self._compute("adx", adx, window, cfg.adx.period)
        atr_value = self._compute("atr", atr, window, cfg.atr.period)
        volatility = self._compute(
            "volatility", realized_volatility, closes, cfg.volatility.period, cfg.volatility.annualization
        )

        self._validate_outputs({
            "rsi": rsi_value,
            "macd_histogram": macd_result.histogram,
            "ema_long": ema_triple.long,
            "stochastic_k": stoch.k,
            "percent_b": bands.percent_b,
            "adx": adx_result.adx,
            "atr": atr_value,
            "volatility": volatility,
        })

        regime = classify_regime(volatility, adx_result.adx, rsi_value, cfg.regime)

        logger.debug(
            "indicators_calculated",
            bar_count=len(window),
            rsi=rsi_value,
            adx=adx_result.adx,
            atr=atr_value,
            volatility=volatility,
            regime=regime.value
        )

        return IndicatorSet(
            rsi=rsi_value,
            macd=macd_result,
            ema=ema_triple,
            stochastic=stoch,
            bollinger=bands,
            adx=adx_result,
            atr=atr_value,
            volatility=volatility,
            close=closes[-1],
            bar_count=len(window),
            market_regime=regime,
        )

    def _compute(self, name: str, func: Callable[..., Any], source: Sequence, *args: Any) -> Any:
        """Run one indicator, wrapping unexpected failures"""
        try:
            return func(source, *args)
        except DataQualityError:
            raise
        except Exception as e:
            logger.error("indicator_failed", indicator=name, error=str(e))
            raise IndicatorCalculationError(
                f"{name} calculation failed: {e}",
                indicator_name=name,
                calculation_input={"length": len(source), "args": list(args)}
            ) from e

    def _validate_outputs(self, values: dict[str, float]) -> None:
        """Reject NaN or infinite results before they reach the composer"""
        for name, value in values.items():
            if not math.isfinite(value):
                raise IndicatorCalculationError(
                    f"{name} produced a non-finite value: {value}",
                    indicator_name=name,
                    calculation_input={"value": value}
                )
