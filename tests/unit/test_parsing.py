"""Tests for lenient value parsing (dues_kernel/utils/parsing.py)."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from dues_kernel.utils.parsing import (
    first_amount,
    first_present,
    is_blank,
    parse_date,
    parse_decimal,
    parse_int,
    shop_numbers_match,
)


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t"])
    def test_blank(self, value):
        assert is_blank(value)

    @pytest.mark.parametrize("value", [0, "0", False, [], "x"])
    def test_not_blank(self, value):
        assert not is_blank(value)


class TestFirstPresent:
    def test_order(self):
        assert first_present({"b": 2, "a": 1}, ("a", "b")) == 1

    def test_zero_is_present(self):
        assert first_present({"a": 0, "b": 5}, ("a", "b")) == 0

    def test_none_when_absent(self):
        assert first_present({"c": 1}, ("a", "b")) is None


class TestFirstAmount:
    def test_zero_falls_through(self):
        assert first_amount({"a": "0", "b": 0, "c": "800"}, ("a", "b", "c")) == Decimal("800")

    def test_unparseable_falls_through(self):
        assert first_amount({"a": "n/a", "b": "950"}, ("a", "b")) == Decimal("950")

    def test_order(self):
        assert first_amount({"a": "900", "b": "950"}, ("a", "b")) == Decimal("900")

    def test_none_when_only_zeros(self):
        assert first_amount({"a": "0.00", "b": None}, ("a", "b")) is None


class TestParseDate:
    @pytest.mark.parametrize("value,expected", [
        ("2024-07-01", date(2024, 7, 1)),
        ("2024-07-01T10:00:00Z", date(2024, 7, 1)),
        ("2024-07", date(2024, 7, 1)),
        (" 2024-07-15 ", date(2024, 7, 15)),
        (date(2024, 7, 1), date(2024, 7, 1)),
        (datetime(2024, 7, 1, 23, 59), date(2024, 7, 1)),
    ])
    def test_accepted(self, value, expected):
        assert parse_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "garbage", "2024-13-01", "2024-02-30", 20240701])
    def test_rejected(self, value):
        assert parse_date(value) is None


class TestParseDecimal:
    @pytest.mark.parametrize("value,expected", [
        ("1000", Decimal("1000")),
        ("1,180.50", Decimal("1180.50")),
        ("₹ 900", Decimal("900")),
        (180, Decimal("180")),
        (0.1, Decimal("0.1")),
        (Decimal("12.5"), Decimal("12.5")),
        ("-5", Decimal("-5")),
        ("Rs. 1,000", Decimal("1000")),
        ("€12.50", Decimal("12.50")),
    ])
    def test_accepted(self, value, expected):
        assert parse_decimal(value) == expected

    @pytest.mark.parametrize("value", [
        None, "", "abc", "1.2.3", True, float("nan"), "Infinity", [1],
        "1e3", "12abc", "1-2",
    ])
    def test_rejected(self, value):
        assert parse_decimal(value) is None


class TestParseInt:
    @pytest.mark.parametrize("value,expected", [("5", 5), ("5th", 5), (7, 7), (7.9, 7), (" 12 ", 12)])
    def test_accepted(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "fifth", False, float("inf")])
    def test_rejected(self, value):
        assert parse_int(value) is None


class TestShopNumbersMatch:
    @pytest.mark.parametrize("a,b", [("04", "04"), ("04", "4"), ("4", 4), (" 04 ", "4"), ("A-1", "A-1")])
    def test_match(self, a, b):
        assert shop_numbers_match(a, b)

    @pytest.mark.parametrize("a,b", [("04", "05"), ("A-1", "A-2"), (None, None), ("", ""), ("04", None)])
    def test_no_match(self, a, b):
        assert not shop_numbers_match(a, b)
