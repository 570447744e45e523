"""Tests for candle construction and price parsing"""

import math

import pytest

from lib.types import Candle, candle_from_fields, parse_price


class TestParsePrice:
    def test_numeric_string(self):
        assert parse_price("87012.5") == 87012.5

    def test_number_passthrough(self):
        assert parse_price(3) == 3.0

    @pytest.mark.parametrize("value", ["abc", "", None, [1]])
    def test_unparseable_is_nan(self, value):
        assert math.isnan(parse_price(value))


class TestCandle:
    def test_from_fields_converts_ms_to_seconds(self):
        candle = candle_from_fields("1731232860000", "1", "2", "0.5", "1.5")
        assert candle == Candle(time=1731232860, open=1.0, high=2.0, low=0.5, close=1.5)

    def test_finite(self, candle):
        assert candle.is_finite()

    @pytest.mark.parametrize("field", ["open", "high", "low", "close"])
    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_field(self, field, bad):
        values = dict(time=60, open=1.0, high=2.0, low=0.5, close=1.5)
        values[field] = bad
        assert not Candle(**values).is_finite()

    def test_bad_start_raises(self):
        with pytest.raises(ValueError):
            candle_from_fields("not-a-time", "1", "2", "0.5", "1.5")

    @pytest.mark.parametrize("start", [float("inf"), float("-inf"), float("nan"), "1e400"])
    def test_non_finite_start_raises_value_error(self, start):
        with pytest.raises(ValueError):
            candle_from_fields(start, "1", "2", "0.5", "1.5")
