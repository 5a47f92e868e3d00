"""Tests for locale currency parsing and formatting."""

import pytest

from costtrack.utils.amount_parser import (
    format_currency,
    format_currency_for_export,
    parse_currency,
)


def test_parse_thousands_and_decimal_comma():
    """Test parsing "." thousands and "," decimals."""
    assert parse_currency("100.589,56") == pytest.approx(100589.56)
    assert parse_currency("1.500,00") == 1500.0
    assert parse_currency("25,5") == 25.5


def test_parse_multiple_thousands_groups():
    """Test parsing amounts in the millions."""
    assert parse_currency("1.234.567,89") == pytest.approx(1234567.89)


def test_parse_without_decimals():
    """Test parsing whole amounts."""
    assert parse_currency("750") == 750.0


def test_parse_empty_and_invalid_default_to_zero():
    """Test empty or unparseable input yields 0."""
    assert parse_currency("") == 0.0
    assert parse_currency("   ") == 0.0
    assert parse_currency(None) == 0.0
    assert parse_currency("N/A") == 0.0


def test_parse_numeric_cell_passthrough():
    """Test numbers from spreadsheet cells are used as-is."""
    assert parse_currency(1500) == 1500.0
    assert parse_currency(250.5) == 250.5
    assert parse_currency(float("nan")) == 0.0


@pytest.mark.parametrize("text", ["NaN", "nan", "inf", "-Infinity", "1e400"])
def test_parse_non_finite_text_defaults_to_zero(text):
    """Test text that float() reads as NaN or infinity yields 0."""
    assert parse_currency(text) == 0.0


def test_parse_non_finite_numeric_cell_defaults_to_zero():
    """Test infinite spreadsheet cells yield 0."""
    assert parse_currency(float("inf")) == 0.0
    assert parse_currency(float("-inf")) == 0.0


def test_format_currency_for_display():
    """Test display format uses Q prefix and "," thousands."""
    assert format_currency(1234.5) == "Q 1,234.50"
    assert format_currency(0) == "Q 0.00"
    assert format_currency(100589.56) == "Q 100,589.56"


def test_format_currency_for_export():
    """Test export format mirrors the source ledger format."""
    assert format_currency_for_export(1234.5) == "1.234,50"
    assert format_currency_for_export(100589.56) == "100.589,56"
    assert format_currency_for_export(0) == "0,00"
    assert format_currency_for_export(1234567.891) == "1.234.567,89"


@pytest.mark.parametrize("value", [0.0, 0.01, 9.99, 1500.0, 2345.67, 100589.56, 98765432.1])
def test_export_format_reimports_to_the_cent(value):
    """Test exported amounts parse back to the same value."""
    assert parse_currency(format_currency_for_export(value)) == pytest.approx(round(value, 2))
