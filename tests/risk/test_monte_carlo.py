"""Tests for the Monte Carlo risk simulator."""

import math
from dataclasses import replace

import numpy as np
import pytest

from quantsignal.config.defaults import MonteCarloParams
from quantsignal.errors import InvalidSignalError
from quantsignal.models.risk import PathState, RiskLevel
from quantsignal.risk import MonteCarloSimulator, estimate_volatility, make_rng, risk_score

TERMINAL_STATES = {"stopped_out", "took_profit", "timed_out"}


class TestSimulate:
    """Test single-signal simulation."""

    def test_deterministic_with_seed(self, long_signal):
        simulator = MonteCarloSimulator()
        first = simulator.simulate(long_signal, volatility=0.02, seed=42)
        second = simulator.simulate(long_signal, volatility=0.02, seed=42)
        assert first == second
        assert first.seed == 42

    def test_different_seeds_differ(self, long_signal):
        simulator = MonteCarloSimulator()
        first = simulator.simulate(long_signal, volatility=0.02, seed=1)
        second = simulator.simulate(long_signal, volatility=0.02, seed=2)
        assert first.expected_return_pct != second.expected_return_pct

    def test_injected_generator(self, long_signal):
        injected = MonteCarloSimulator(rng=make_rng(7)).simulate(long_signal, volatility=0.02)
        seeded = MonteCarloSimulator().simulate(long_signal, volatility=0.02, seed=7)
        assert injected.expected_return_pct == seeded.expected_return_pct
        assert injected.var95 == seeded.var95

    def test_report_ranges(self, long_signal):
        report = MonteCarloSimulator().simulate(long_signal, volatility=0.02, seed=3)

        assert report.iterations == 1000
        assert 0 <= report.win_probability_pct <= 100
        assert 0 <= report.risk_score <= 100
        assert report.risk_level is RiskLevel.from_score(report.risk_score)
        assert report.max_drawdown_pct >= 0
        assert report.var95 <= report.expected_return_pct
        low, high = report.confidence_interval
        assert low <= report.expected_return_pct <= high

    def test_returns_bounded_by_barriers(self, long_signal):
        """Absorbed paths exit exactly at the stop (-3%) or target (+6%)."""
        report = MonteCarloSimulator().simulate(long_signal, volatility=0.05, seed=11)

        assert report.var95 >= -3.0 - 1e-9
        assert report.max_drawdown_pct <= 3.0 + 1e-9

    def test_outcome_counts(self, long_signal):
        report = MonteCarloSimulator().simulate(long_signal, volatility=0.02, iterations=500, seed=5)
        assert set(report.outcomes) == TERMINAL_STATES
        assert sum(report.outcomes.values()) == 500

    def test_high_volatility_hits_barriers(self, long_signal):
        report = MonteCarloSimulator().simulate(long_signal, volatility=0.5, seed=9)
        absorbed = report.outcomes["stopped_out"] + report.outcomes["took_profit"]
        assert absorbed > report.outcomes["timed_out"]

    def test_short_returns_are_direction_aware(self, short_signal):
        """A falling drift with negligible noise is a win for a SHORT."""
        report = MonteCarloSimulator().simulate(short_signal, volatility=0.0001, seed=4)

        assert report.outcomes["timed_out"] == report.iterations
        assert report.expected_return_pct > 0
        assert report.win_probability_pct == 100.0

    def test_expected_return_spread_shrinks_with_iterations(self, long_signal):
        """Repeated estimates of the mean return tighten as paths are added."""
        simulator = MonteCarloSimulator(MonteCarloParams(steps=4))

        def estimates(iterations):
            return [
                simulator.simulate(long_signal, volatility=0.02, iterations=iterations,
                                   seed=seed).expected_return_pct
                for seed in range(12)
            ]

        assert np.var(estimates(10_000)) < np.var(estimates(100))

    def test_estimated_volatility_used_when_omitted(self, long_signal):
        report = MonteCarloSimulator().simulate(long_signal, seed=1)
        assert report.volatility == estimate_volatility(long_signal)

    def test_neutral_rejected(self, neutral_signal):
        with pytest.raises(InvalidSignalError) as exc_info:
            MonteCarloSimulator().simulate(neutral_signal, seed=1)
        assert exc_info.value.reason == "neutral_signal"

    def test_too_few_iterations(self, long_signal):
        with pytest.raises(InvalidSignalError) as exc_info:
            MonteCarloSimulator().simulate(long_signal, iterations=99, seed=1)
        assert exc_info.value.reason == "too_few_iterations"

    @pytest.mark.parametrize("volatility", [0.0, -0.1, math.nan, math.inf])
    def test_invalid_volatility(self, long_signal, volatility):
        with pytest.raises(InvalidSignalError):
            MonteCarloSimulator().simulate(long_signal, volatility=volatility, seed=1)

    def test_custom_steps(self, long_signal):
        simulator = MonteCarloSimulator(MonteCarloParams(steps=4))
        report = simulator.simulate(long_signal, volatility=0.02, seed=1)
        assert sum(report.outcomes.values()) == report.iterations


class TestSimulateBatch:
    """Test batch simulation with spawned generators."""

    def test_skips_non_actionable(self, long_signal, short_signal, neutral_signal):
        reports = MonteCarloSimulator().simulate_batch(
            [long_signal, short_signal, neutral_signal], volatility=0.02, seed=10
        )
        assert set(reports) == {("BTC/USDT", "1h"), ("ETH/USDT", "4h")}

    def test_reproducible(self, long_signal, short_signal):
        simulator = MonteCarloSimulator()
        first = simulator.simulate_batch([long_signal, short_signal], volatility=0.02, seed=10)
        second = simulator.simulate_batch([long_signal, short_signal], volatility=0.02, seed=10)
        assert first == second

    def test_each_signal_gets_its_own_stream(self, long_signal):
        twin = replace(long_signal, symbol="SOL/USDT")
        reports = MonteCarloSimulator().simulate_batch([long_signal, twin], volatility=0.02, seed=10)
        assert (reports[("BTC/USDT", "1h")].expected_return_pct
                != reports[("SOL/USDT", "1h")].expected_return_pct)

    def test_injected_generator_drives_unseeded_batch(self, long_signal, short_signal):
        def run():
            simulator = MonteCarloSimulator(rng=make_rng(77))
            return simulator.simulate_batch([long_signal, short_signal], volatility=0.02)

        assert run() == run()


class TestEstimateVolatility:
    """Test volatility estimation from levels."""

    def test_clamped_to_maximum(self, long_signal):
        # (3% + 6%) / 2 scaled by 1.2 exceeds the 5% cap
        assert estimate_volatility(long_signal) == 0.05

    def test_full_confidence_is_unscaled(self, long_signal):
        signal = replace(long_signal, confidence=100.0, stop_loss=99.0, take_profit=102.0)
        assert estimate_volatility(signal) == pytest.approx(0.015)

    def test_clamped_to_minimum(self, long_signal):
        signal = replace(long_signal, stop_loss=99.9, take_profit=100.2)
        assert estimate_volatility(signal) == 0.01


class TestRiskScore:
    """Test the multi-factor risk score."""

    def test_neutral_inputs(self):
        assert risk_score(0.0, -2.0, 0.0, 50.0, 0.0) == 50.0

    def test_clamped_high(self):
        assert risk_score(100.0, 100.0, 0.0, 100.0, 100.0) == 100.0

    def test_clamped_low(self):
        assert risk_score(-100.0, -100.0, 50.0, 0.0, -100.0) == 0.0

    def test_drawdown_penalty(self):
        assert risk_score(0.0, -2.0, 5.0, 50.0, 0.0) == 40.0


def test_path_states_cover_report_keys():
    assert {s.value for s in PathState if s.is_terminal} == TERMINAL_STATES
