"""JSON schema validation for the Signal payload produced by Signal.to_dict()."""

from datetime import datetime
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

DIRECTIONS = ["LONG", "SHORT", "NEUTRAL"]
REGIMES = ["TRENDING_UP", "TRENDING_DOWN", "RANGING", "HIGH_VOLATILITY", "LOW_VOLATILITY", None]


SIGNAL_SCHEMA = {
    "type": "object",
    "required": ["symbol", "timeframe", "direction", "confidence", "entry_price",
                 "stop_loss", "take_profit", "timestamp", "rationale", "indicators"],
    "properties": {
        "symbol": {
            "type": "string",
            "minLength": 1,
            "description": "Instrument symbol, e.g. BTC/USDT"
        },
        "timeframe": {
            "type": "string",
            "enum": ["1m", "5m", "15m", "30m", "1h", "4h", "1d", "3d", "1w", "1M"],
            "description": "Bar interval of the source window"
        },
        "direction": {
            "type": "string",
            "enum": DIRECTIONS,
            "description": "Signal direction"
        },
        "confidence": {
            "type": "number",
            "minimum": 0,
            "maximum": 100,
            "description": "Confidence 0-100"
        },
        "entry_price": {
            "type": "number",
            "exclusiveMinimum": 0,
            "description": "Last close of the window"
        },
        "stop_loss": {
            "type": ["number", "null"],
            "description": "Stop loss level, null for NEUTRAL"
        },
        "take_profit": {
            "type": ["number", "null"],
            "description": "Take profit level, null for NEUTRAL"
        },
        "timestamp": {
            "type": "string",
            "format": "date-time",
            "description": "Market time of the last bar"
        },
        "rationale": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "description": "One line per contributing indicator plus a regime summary"
        },
        "indicators": {
            "type": "object",
            "required": ["rsi", "macd", "ema", "stochastic", "bollinger", "adx", "atr", "volatility"],
            "properties": {
                "rsi": {"type": "number", "minimum": 0, "maximum": 100},
                "atr": {"type": "number", "minimum": 0},
                "volatility": {"type": "number", "minimum": 0},
                "market_regime": {"type": ["string", "null"], "enum": REGIMES},
            },
            "additionalProperties": True
        }
    },
    "additionalProperties": False
}


class SignalValidationError(Exception):
    """Signal validation error."""
    pass


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class SignalValidator:
    """Validates signal payloads against SIGNAL_SCHEMA."""

    def __init__(self):
        self.logger = logger
        self.schema = SIGNAL_SCHEMA

    def validate_signal(self, signal: dict[str, Any]) -> bool:
        """
        Validate a signal payload against the schema.

        Args:
            signal: Signal dictionary to validate

        Returns:
            True if valid

        Raises:
            SignalValidationError: If validation fails
        """
        try:
            self._validate_required_fields(signal)
            self._validate_field_types(signal)
            self._validate_indicators(signal["indicators"])
            self._validate_timestamp(signal["timestamp"])
            self._validate_levels(signal)
            return True

        except (ValueError, TypeError, KeyError) as e:
            error_msg = f"Signal validation failed: {e}"
            symbol = signal.get("symbol") if isinstance(signal, dict) else None
            self.logger.error("signal_validation_failed", error=str(e), symbol=symbol)
            raise SignalValidationError(error_msg) from e

    def _validate_required_fields(self, signal: dict[str, Any]) -> None:
        """Validate required fields are present and no unknown fields exist."""
        if not isinstance(signal, dict):
            raise TypeError("Signal payload must be an object")

        required_fields = self.schema["required"]
        missing_fields = [field for field in required_fields if field not in signal]
        if missing_fields:
            raise ValueError(f"Missing required fields: {missing_fields}")

        unknown_fields = [field for field in signal if field not in self.schema["properties"]]
        if unknown_fields:
            raise ValueError(f"Unknown fields: {unknown_fields}")

    def _validate_field_types(self, signal: dict[str, Any]) -> None:
        """Validate field types and enumerations."""
        props = self.schema["properties"]

        if not isinstance(signal["symbol"], str) or not signal["symbol"]:
            raise ValueError("symbol must be a non-empty string")

        if signal["timeframe"] not in props["timeframe"]["enum"]:
            raise ValueError(f"Invalid timeframe: {signal['timeframe']}")

        if signal["direction"] not in DIRECTIONS:
            raise ValueError(f"Invalid direction: {signal['direction']}")

        confidence = signal["confidence"]
        if not _is_number(confidence) or not 0 <= confidence <= 100:
            raise ValueError(f"confidence must be a number between 0-100, got: {confidence}")

        entry = signal["entry_price"]
        if not _is_number(entry) or entry <= 0:
            raise ValueError(f"entry_price must be a positive number, got: {entry}")

        for field in ("stop_loss", "take_profit"):
            value = signal[field]
            if value is not None and not _is_number(value):
                raise ValueError(f"{field} must be a number or null, got: {value}")

        rationale = signal["rationale"]
        if not isinstance(rationale, list) or not rationale:
            raise ValueError("rationale must be a non-empty list")
        if not all(isinstance(line, str) for line in rationale):
            raise ValueError("rationale entries must be strings")

    def _validate_indicators(self, indicators: Any) -> None:
        """Validate the embedded indicator snapshot."""
        if not isinstance(indicators, dict):
            raise ValueError("indicators must be an object")

        required = self.schema["properties"]["indicators"]["required"]
        missing = [field for field in required if field not in indicators]
        if missing:
            raise ValueError(f"Missing indicator fields: {missing}")

        rsi = indicators["rsi"]
        if not _is_number(rsi) or not 0 <= rsi <= 100:
            raise ValueError(f"rsi must be between 0-100, got: {rsi}")

        for field in ("atr", "volatility"):
            value = indicators[field]
            if not _is_number(value) or value < 0:
                raise ValueError(f"{field} must be non-negative, got: {value}")

        if indicators.get("market_regime") not in REGIMES:
            raise ValueError(f"Invalid market_regime: {indicators.get('market_regime')}")

    def _validate_timestamp(self, timestamp: Any) -> None:
        """Validate ISO-8601 market timestamp."""
        if not isinstance(timestamp, str):
            raise ValueError("timestamp must be an ISO-8601 string")
        datetime.fromisoformat(timestamp.replace("Z", "+00:00"))

    def _validate_levels(self, signal: dict[str, Any]) -> None:
        """Validate level presence and ordering against direction."""
        direction = signal["direction"]
        entry = signal["entry_price"]
        stop = signal["stop_loss"]
        target = signal["take_profit"]

        if direction == "NEUTRAL":
            if stop is not None or target is not None:
                raise ValueError("NEUTRAL signals must not carry levels")
            return

        if stop is None or target is None:
            raise ValueError(f"{direction} signal requires stop_loss and take_profit")

        if direction == "LONG" and not stop < entry < target:
            raise ValueError(f"LONG levels out of order: stop={stop}, entry={entry}, target={target}")

        if direction == "SHORT" and not target < entry < stop:
            raise ValueError(f"SHORT levels out of order: stop={stop}, entry={entry}, target={target}")
