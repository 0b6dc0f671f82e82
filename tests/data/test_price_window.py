"""Tests for price window models, validation and normalization."""

import dataclasses
import math
from datetime import datetime, timedelta, timezone

import orjson
import pytest

from quantsignal.data import (
    PriceBar,
    Timeframe,
    normalize_bars,
    validate_symbol,
    validate_window,
)
from quantsignal.errors import (
    InsufficientDataError,
    InvalidSymbolError,
    InvalidTimeframeError,
    MalformedDataError,
    TemporalDataError,
)

TS = datetime(2024, 1, 1, tzinfo=timezone.utc)


def bar(offset=0, open=100.0, high=101.0, low=99.0, close=100.5, volume=10.0):
    return PriceBar(ts=TS + timedelta(minutes=offset), open=open, high=high,
                    low=low, close=close, volume=volume)


class TestPriceBar:
    """Test the PriceBar model."""

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            bar().close = 1.0


class TestTimeframe:
    """Test timeframe parsing."""

    def test_parse_string(self):
        assert Timeframe.parse("1h") is Timeframe.H1
        assert Timeframe.parse("1M") is Timeframe.MN1
        assert Timeframe.parse("1m") is Timeframe.M1

    def test_parse_enum(self):
        assert Timeframe.parse(Timeframe.D1) is Timeframe.D1

    @pytest.mark.parametrize("value", ["2h", "", "1H", None])
    def test_unsupported(self, value):
        with pytest.raises(InvalidTimeframeError):
            Timeframe.parse(value)


class TestValidateSymbol:
    """Test symbol validation."""

    @pytest.mark.parametrize("symbol", ["BTC/USDT", "ETH-USD-SWAP", "AAPL", "BRK.B", "sol_usdc"])
    def test_valid(self, symbol):
        assert validate_symbol(symbol) == symbol

    @pytest.mark.parametrize("symbol", ["", " ", "BTC//USDT", "/BTC", "BTC/", "BTC USDT", None, 123])
    def test_invalid(self, symbol):
        with pytest.raises(InvalidSymbolError):
            validate_symbol(symbol)


class TestValidateWindow:
    """Test window validation before computation."""

    def test_empty_window(self):
        with pytest.raises(InsufficientDataError) as exc_info:
            validate_window([], 50)
        assert exc_info.value.required_count == 50
        assert exc_info.value.available_count == 0

    def test_short_window(self):
        with pytest.raises(InsufficientDataError) as exc_info:
            validate_window([bar(i) for i in range(10)], 50)
        assert exc_info.value.available_count == 10

    def test_valid_window(self):
        validate_window([bar(i) for i in range(5)], 5)

    def test_non_bar_element(self):
        with pytest.raises(MalformedDataError):
            validate_window([bar(0), {"close": 1.0}], 2)

    @pytest.mark.parametrize("kwargs", [
        {"close": -1.0, "low": -2.0},
        {"open": math.nan},
        {"high": math.inf},
        {"volume": -5.0},
        {"high": 100.0, "close": 100.5},
        {"low": 100.6},
        {"close": "100.5"},
    ])
    def test_malformed_bar(self, kwargs):
        with pytest.raises(MalformedDataError):
            validate_window([bar(0), bar(1, **kwargs)], 2)

    def test_duplicate_timestamp(self):
        with pytest.raises(TemporalDataError) as exc_info:
            validate_window([bar(0), bar(1), bar(1)], 3)
        assert exc_info.value.context["index"] == 2

    def test_decreasing_timestamps(self):
        with pytest.raises(TemporalDataError):
            validate_window([bar(5), bar(1)], 2)


class TestNormalizeBars:
    """Test raw payload normalization."""

    def test_array_rows_from_json(self):
        payload = orjson.dumps([
            ["1700000060000", "101", "102", "100", "101.5", "12"],
            ["1700000000000", "100", "101", "99", "100.5", "10"],
        ])

        bars = normalize_bars(payload)

        assert [b.close for b in bars] == [100.5, 101.5]
        assert bars[0].ts == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert bars[1].volume == 12.0

    def test_mapping_rows_with_timestamp_alias(self):
        bars = normalize_bars([
            {"timestamp": "2024-01-01T00:00:00Z", "open": 1, "high": 2, "low": 0.5, "close": 1.5, "volume": 3},
        ])
        assert bars[0].ts == TS
        assert bars[0].high == 2.0

    def test_data_envelope(self):
        text = '{"data": [[1700000000000, 1, 2, 0.5, 1.5, 3]]}'
        assert len(normalize_bars(text)) == 1

    def test_invalid_json(self):
        with pytest.raises(MalformedDataError):
            normalize_bars("[not json")

    def test_not_a_list(self):
        with pytest.raises(MalformedDataError):
            normalize_bars('{"close": 1}')

    def test_short_row(self):
        with pytest.raises(MalformedDataError) as exc_info:
            normalize_bars([[1700000000000, 1, 2, 0.5]])
        assert exc_info.value.context["index"] == 0

    def test_unparseable_price(self):
        with pytest.raises(MalformedDataError):
            normalize_bars([[1700000000000, "abc", 2, 0.5, 1.5, 3]])
