"""
Monte Carlo risk simulation for directional signals.

Every path is a small state machine: it starts RUNNING and is absorbed the
first time it crosses the stop (STOPPED_OUT) or the target (TOOK_PROFIT).
Paths that reach the horizon without touching either barrier end TIMED_OUT.
The full matrix of shocks is drawn before any path runs, one row per path,
so results do not depend on the order in which paths are evaluated.
"""

import math
from collections.abc import Iterable
from typing import Optional

import numpy as np
import structlog

from ..config.defaults import MonteCarloParams
from ..errors import DataQualityError, InvalidInputError, InvalidSignalError, SimulationError
from ..logging.config import get_risk_logger, log_simulation_summary
from ..models.risk import PathOutcome, PathState, RiskLevel, RiskReport
from ..models.signal import Direction, Signal

logger = structlog.get_logger(__name__)

# Two-sided 95% normal quantile for the confidence interval of the mean
Z_95 = 1.96


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source. Without a seed numpy draws OS entropy."""
    return np.random.default_rng(seed)


def estimate_volatility(signal: Signal, params: Optional[MonteCarloParams] = None) -> float:
    """
    Estimate per-horizon volatility from a signal's levels

    The average relative distance to stop and target is scaled up for low
    confidence signals and clamped to the configured bounds.
    """
    params = params or MonteCarloParams()
    entry = signal.entry_price

    stop_distance = abs(entry - signal.stop_loss) / entry
    target_distance = abs(signal.take_profit - entry) / entry
    base = (stop_distance + target_distance) / 2
    adjusted = base * (1 + (100 - signal.confidence) / 100)

    return min(max(adjusted, params.min_estimated_volatility), params.max_estimated_volatility)


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def risk_score(expected_return: float, var95: float, max_drawdown: float,
               win_probability: float, sharpe: float) -> float:
    """Multi-factor 0-100 score, higher means a more favourable risk profile"""
    score = 50.0
    score += _clamp(expected_return * 5, -25, 25)
    score += _clamp((var95 + 2) * 7.5, -15, 15)
    score -= min(20.0, max_drawdown * 2)
    score += _clamp((win_probability - 50) * 0.3, -15, 15)
    score += _clamp(sharpe * 10, -15, 15)
    return _clamp(score, 0.0, 100.0)


class MonteCarloSimulator:
    """Simulates price paths around a signal's stop and target levels."""

    def __init__(self, params: Optional[MonteCarloParams] = None,
                 rng: Optional[np.random.Generator] = None):
        self.params = params or MonteCarloParams()
        self.rng = rng
        self.risk_logger = get_risk_logger(__name__)

    def simulate(self, signal: Signal, volatility: Optional[float] = None,
                 iterations: Optional[int] = None, seed: Optional[int] = None) -> RiskReport:
        """
        Run the simulation for one signal.

        Args:
            signal: Directional signal with stop loss and take profit
            volatility: Per-horizon sigma; estimated from the levels when omitted
            iterations: Number of paths (default from params)
            seed: Seed for a fresh generator; overrides the injected rng

        Returns:
            RiskReport aggregated over all paths

        Raises:
            InvalidSignalError: If the signal is not actionable or the
                iteration count / volatility is unusable
            SimulationError: If aggregation produces non-finite statistics
        """
        if seed is not None:
            rng = make_rng(seed)
        elif self.rng is not None:
            rng = self.rng
        else:
            rng = make_rng()

        return self._run(signal, volatility, iterations, rng, seed)

    def simulate_batch(self, signals: Iterable[Signal], volatility: Optional[float] = None,
                       iterations: Optional[int] = None,
                       seed: Optional[int] = None) -> dict[tuple[str, str], RiskReport]:
        """
        Simulate every actionable signal with its own child generator

        Child generators are spawned from one parent seed, or from the
        injected generator when no seed is given, so each report is
        reproducible and independent of the others. Non-actionable signals
        are skipped.

        Returns:
            Reports keyed by (symbol, timeframe)
        """
        actionable = []
        for signal in signals:
            if signal.is_actionable:
                actionable.append(signal)
            else:
                logger.info("batch_signal_skipped", symbol=signal.symbol,
                            timeframe=signal.timeframe, direction=signal.direction.value)

        if seed is None and self.rng is not None:
            generators = self.rng.spawn(len(actionable))
        else:
            generators = [np.random.default_rng(child)
                          for child in np.random.SeedSequence(seed).spawn(len(actionable))]

        reports = {}
        for signal, generator in zip(actionable, generators):
            reports[(signal.symbol, signal.timeframe)] = self._run(
                signal, volatility, iterations, generator, seed
            )
        return reports

    def _run(self, signal: Signal, volatility: Optional[float], iterations: Optional[int],
             rng: np.random.Generator, seed: Optional[int]) -> RiskReport:
        iterations = self.params.iterations if iterations is None else iterations
        self._validate_request(signal, iterations)

        if volatility is None:
            volatility = estimate_volatility(signal, self.params)
        if not isinstance(volatility, (int, float)) or not math.isfinite(volatility) or volatility <= 0:
            raise InvalidSignalError(
                f"Volatility must be a positive finite number, got {volatility}",
                value=volatility,
                reason="invalid_volatility"
            )

        try:
            shocks = rng.standard_normal((iterations, self.params.steps))
            outcomes = [self._run_path(signal, volatility, row) for row in shocks]
            report = self._aggregate(outcomes, volatility, seed)
        except (DataQualityError, InvalidInputError, SimulationError):
            raise
        except Exception as e:
            logger.error("simulation_failed", symbol=signal.symbol, error=str(e))
            raise SimulationError(
                f"Monte Carlo simulation failed: {e}",
                iterations=iterations,
                context={"symbol": signal.symbol, "timeframe": signal.timeframe}
            ) from e

        log_simulation_summary(
            self.risk_logger,
            symbol=signal.symbol,
            timeframe=signal.timeframe,
            iterations=iterations,
            expected_return_pct=report.expected_return_pct,
            var95=report.var95,
            win_probability_pct=report.win_probability_pct,
            context={"risk_level": report.risk_level.value, "outcomes": report.outcomes}
        )
        return report

    def _validate_request(self, signal: Signal, iterations: int) -> None:
        if signal.direction is Direction.NEUTRAL:
            raise InvalidSignalError(
                "Cannot simulate a NEUTRAL signal",
                value=signal.direction.value,
                reason="neutral_signal"
            )
        if not signal.is_actionable:
            raise InvalidSignalError(
                "Signal has no usable stop loss and take profit",
                value=(signal.stop_loss, signal.take_profit),
                reason="missing_levels"
            )
        if not isinstance(iterations, int) or iterations < self.params.min_iterations:
            raise InvalidSignalError(
                f"At least {self.params.min_iterations} iterations are required, got {iterations}",
                value=iterations,
                reason="too_few_iterations"
            )

    def _run_path(self, signal: Signal, volatility: float, shocks: np.ndarray) -> PathOutcome:
        """Advance one path until it is absorbed or the horizon ends."""
        entry = signal.entry_price
        sign = signal.direction.sign
        steps = self.params.steps

        drift_step = self.params.drift_rate * (signal.confidence / 100) * sign / steps
        sigma_step = volatility / math.sqrt(steps)

        price = entry
        worst = 0.0
        state = PathState.RUNNING

        for step, shock in enumerate(shocks, start=1):
            price *= 1 + drift_step + sigma_step * float(shock)

            if sign > 0:
                hit_stop = price <= signal.stop_loss
                hit_target = price >= signal.take_profit
            else:
                hit_stop = price >= signal.stop_loss
                hit_target = price <= signal.take_profit

            if hit_stop:
                state = PathState.STOPPED_OUT
                price = signal.stop_loss
            elif hit_target:
                state = PathState.TOOK_PROFIT
                price = signal.take_profit

            path_return = sign * (price - entry) / entry * 100
            worst = min(worst, path_return)

            if state.is_terminal:
                return PathOutcome(state=state, return_pct=path_return,
                                   drawdown_pct=-worst, exit_step=step)

        return PathOutcome(
            state=PathState.TIMED_OUT,
            return_pct=sign * (price - entry) / entry * 100,
            drawdown_pct=-worst,
            exit_step=steps,
        )

    def _aggregate(self, outcomes: list[PathOutcome], volatility: float,
                   seed: Optional[int]) -> RiskReport:
        n = len(outcomes)
        returns = np.array([o.return_pct for o in outcomes], dtype=float)
        drawdowns = np.array([o.drawdown_pct for o in outcomes], dtype=float)

        sorted_returns = np.sort(returns)
        var95 = float(sorted_returns[int(math.floor(n * self.params.var_percentile))])

        mean = float(returns.mean())
        std = float(returns.std())
        sharpe = mean / std if std > 0 else 0.0
        half_width = Z_95 * std / math.sqrt(n)

        win_probability = float(np.count_nonzero(returns > 0)) / n * 100
        max_drawdown = float(drawdowns.max())

        if not all(math.isfinite(v) for v in (mean, std, var95, max_drawdown)):
            raise SimulationError(
                "Simulation produced non-finite statistics",
                iterations=n,
                context={"mean": mean, "std": std, "var95": var95}
            )

        counts = {state.value: 0 for state in PathState if state.is_terminal}
        for outcome in outcomes:
            counts[outcome.state.value] += 1

        score = risk_score(mean, var95, max_drawdown, win_probability, sharpe)

        return RiskReport(
            var95=var95,
            sharpe_ratio=sharpe,
            max_drawdown_pct=max_drawdown,
            win_probability_pct=win_probability,
            expected_return_pct=mean,
            iterations=n,
            confidence_interval=(mean - half_width, mean + half_width),
            risk_score=score,
            risk_level=RiskLevel.from_score(score),
            volatility=float(volatility),
            outcomes=counts,
            seed=seed,
        )
