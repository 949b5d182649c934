import math

import pytest

from stock_dashboard.ui.formatters import (
    format_currency,
    format_large_number,
    format_percentage,
    format_ratio,
    format_signed_currency,
)


@pytest.mark.parametrize("value,expected", [
    (2.5e12, "2.50T"),
    (1e12, "1.00T"),
    (3.1e9, "3.10B"),
    (52_000_000, "52.00M"),
    (1e3, "1.00K"),
    (999, "999.00"),
    (0, "0.00"),
    (-2.5e9, "-2.50B"),
    (-999, "-999.00"),
])
def test_format_large_number(value, expected):
    assert format_large_number(value) == expected


def test_trillions_divide_by_1e12():
    for value in (1e12, 7.777e12, 4.2e15):
        result = format_large_number(value)
        assert result.endswith("T")
        assert result == f"{value / 1e12:.2f}T"


@pytest.mark.parametrize("value,expected", [
    (0, "+0.00%"),
    (-3.456, "-3.46%"),
    (2.5, "+2.50%"),
    (12.345678, "+12.35%"),
])
def test_format_percentage(value, expected):
    assert format_percentage(value) == expected


@pytest.mark.parametrize("value,currency,expected", [
    (1234.5, "USD", "$1,234.50"),
    (0.5, "USD", "$0.50"),
    (-1234.5, "USD", "-$1,234.50"),
    (99.999, "EUR", "€100.00"),
    (1500.4, "JPY", "¥1,500"),
    (42, "GBP", "£42.00"),
    (10, "CHF", "CHF\u00a010.00"),
    (-0.001, "USD", "-$0.00"),
    (1234.5, "HUF", "HUF\u00a01,234.50"),
])
def test_format_currency(value, currency, expected):
    assert format_currency(value, currency) == expected


def test_format_currency_defaults_to_usd():
    assert format_currency(3) == "$3.00"


def test_signed_currency():
    assert format_signed_currency(2.5) == "+$2.50"
    assert format_signed_currency(-2.5) == "-$2.50"


@pytest.mark.parametrize("formatter", [
    format_large_number,
    format_currency,
    format_percentage,
    format_signed_currency,
    format_ratio,
])
def test_missing_values_are_na(formatter):
    assert formatter(None) == "N/A"
    assert formatter(math.nan) == "N/A"
