"""Tests for signal payload schema validation."""

import pytest

from quantsignal.validation import SIGNAL_SCHEMA, SignalValidationError, SignalValidator


@pytest.fixture
def validator():
    return SignalValidator()


@pytest.fixture
def long_payload(long_signal):
    return long_signal.to_dict()


class TestSignalValidator:
    """Test signal validation against SIGNAL_SCHEMA."""

    def test_schema_lists_every_payload_field(self, long_payload):
        assert set(SIGNAL_SCHEMA["required"]) == set(long_payload)

    def test_valid_long(self, validator, long_payload):
        assert validator.validate_signal(long_payload) is True

    def test_valid_neutral(self, validator, neutral_signal):
        assert validator.validate_signal(neutral_signal.to_dict()) is True

    def test_missing_field(self, validator, long_payload):
        del long_payload["confidence"]
        with pytest.raises(SignalValidationError, match="Missing required fields"):
            validator.validate_signal(long_payload)

    def test_unknown_field(self, validator, long_payload):
        long_payload["strength"] = 10
        with pytest.raises(SignalValidationError, match="Unknown fields"):
            validator.validate_signal(long_payload)

    @pytest.mark.parametrize("field,value", [
        ("direction", "BUY"),
        ("timeframe", "2h"),
        ("confidence", 120),
        ("confidence", True),
        ("entry_price", 0),
        ("symbol", ""),
        ("rationale", []),
        ("timestamp", "yesterday"),
    ])
    def test_invalid_values(self, validator, long_payload, field, value):
        long_payload[field] = value
        with pytest.raises(SignalValidationError):
            validator.validate_signal(long_payload)

    def test_long_level_ordering(self, validator, long_payload):
        long_payload["stop_loss"] = 101.0
        with pytest.raises(SignalValidationError, match="out of order"):
            validator.validate_signal(long_payload)

    def test_short_level_ordering(self, validator, short_signal):
        payload = short_signal.to_dict()
        payload["take_profit"] = 105.0
        with pytest.raises(SignalValidationError, match="out of order"):
            validator.validate_signal(payload)

    def test_neutral_must_not_carry_levels(self, validator, neutral_signal):
        payload = neutral_signal.to_dict()
        payload["stop_loss"] = 95.0
        with pytest.raises(SignalValidationError):
            validator.validate_signal(payload)

    def test_indicator_ranges(self, validator, long_payload):
        long_payload["indicators"]["rsi"] = 140.0
        with pytest.raises(SignalValidationError, match="rsi"):
            validator.validate_signal(long_payload)

    def test_not_a_mapping(self, validator):
        with pytest.raises(SignalValidationError):
            validator.validate_signal(["not", "a", "signal"])
