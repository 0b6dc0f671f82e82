"""
Monte Carlo risk simulation.
"""

from .monte_carlo import MonteCarloSimulator, estimate_volatility, make_rng, risk_score

__all__ = ["MonteCarloSimulator", "estimate_volatility", "make_rng", "risk_score"]
