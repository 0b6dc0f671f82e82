#!/usr/bin/env python3
"""
Basic Usage Example - quantsignal

This script demonstrates the basic usage of the signal engine with simulated
market data. It shows how to:
- Normalize a raw OHLCV payload into a price window
- Compute a signal, with and without per-call overrides
- Run the Monte Carlo risk simulation for a directional signal
- Evaluate several symbols in one batch

Run: python examples/basic_usage.py
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from quantsignal import SignalEngine
from quantsignal.data import normalize_bars
from quantsignal.indicators import IndicatorCache
from quantsignal.logging import configure_logging


def create_candle_payload(start_price: float, drift: float, bars: int = 80) -> Dict[str, Any]:
    """Create an exchange-style candle payload with string fields."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    rows = []
    price = start_price
    for i in range(bars):
        close = price * (1 + drift) + math.sin(i / 3) * price * 0.002
        high = max(price, close) * 1.003
        low = min(price, close) * 0.997
        ts_ms = int((start + timedelta(hours=i)).timestamp() * 1000)
        rows.append([str(ts_ms), f"{price:.4f}", f"{high:.4f}", f"{low:.4f}",
                     f"{close:.4f}", "1250.5"])
        price = close
    return {"code": "0", "msg": "", "data": rows}


def print_signal(signal) -> None:
    """Print signal details."""
    print(f"  {signal.symbol} {signal.timeframe}: {signal.direction.value} "
          f"({signal.confidence:g}% confidence)")
    print(f"  Entry: {signal.entry_price:.4f}  Stop: {signal.stop_loss}  Target: {signal.take_profit}")
    print(f"  Regime: {signal.indicators.market_regime.value}")
    for line in signal.rationale:
        print(f"    - {line}")


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("quantsignal - Basic Usage Demo")
    print("=" * 60)

    cache = IndicatorCache()
    engine = SignalEngine(cache=cache)

    print("1. Normalizing a raw candle payload...")
    window = normalize_bars(create_candle_payload(45000.0, 0.004))
    print(f"   {len(window)} bars from {window[0].ts} to {window[-1].ts}")
    print()

    print("2. Computing a signal with default parameters...")
    signal = engine.compute_signal("BTC/USDT", "1h", window)
    print_signal(signal)
    print()

    print("3. Computing with a per-call override (decision margin 10)...")
    signal = engine.compute_signal("BTC/USDT", "1h", window,
                                   overrides={"scoring": {"decision_margin": 10}})
    print_signal(signal)
    print()

    if signal.is_actionable:
        print("4. Simulating risk for the directional signal...")
        report = engine.simulate_risk(signal, seed=42)
        print(f"   VaR 95%: {report.var95:.2f}%")
        print(f"   Expected return: {report.expected_return_pct:.2f}%  "
              f"CI: ({report.confidence_interval[0]:.2f}, {report.confidence_interval[1]:.2f})")
        print(f"   Win probability: {report.win_probability_pct:.1f}%")
        print(f"   Risk score: {report.risk_score:.1f} ({report.risk_level.value})")
        print(f"   Outcomes: {report.outcomes}")
    else:
        print("4. Signal is NEUTRAL, skipping risk simulation")
    print()

    print("5. Batch evaluation...")
    requests: List = [
        ("BTC/USDT", "1h", window),
        ("ETH/USDT", "4h", normalize_bars(create_candle_payload(2300.0, -0.004))),
        ("SOL/USDT", "1h", window[:20]),
    ]
    result = engine.compute_signals(requests)
    for key, batch_signal in result.signals.items():
        print(f"   {key}: {batch_signal.direction.value} ({batch_signal.confidence:g}%)")
    for key, error in result.errors.items():
        print(f"   {key}: {type(error).__name__}: {error}")

    stats = cache.stats()
    print(f"\n   Cache: {stats.hits} hits, {stats.misses} misses, {stats.entries} entries")
    print("\nDemo completed")


if __name__ == "__main__":
    main()
