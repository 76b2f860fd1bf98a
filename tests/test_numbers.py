"""Tests for espacescan/formatters/numbers.py."""

from __future__ import annotations

from decimal import Decimal

import pytest

from espacescan.formatters.numbers import (
    format_cfx,
    format_gas,
    format_number,
    format_percentage,
    format_token_amount,
)

# ── format_number ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1000000", "1,000,000"),
        ("123", "123"),
        ("1234567890123456789012", "1,234,567,890,123,456,789,012"),
        (1234.56789, "1,234.5678"),
        ("1234.5", "1,234.5"),
        ("1.234e3", "1,234"),
        ("-9876543.21", "-9,876,543.21"),
        (Decimal("0.00009"), "0.0000"),
        ("1.00001", "1.0000"),
        ("2.50", "2.5"),
        (0, "0"),
    ],
)
def test_format_number(value, expected) -> None:
    assert format_number(value) == expected


def test_format_number_truncates_fraction() -> None:
    """Digits past the fourth decimal are cut, not rounded."""
    assert format_number("0.99999") == "0.9999"
    assert format_number("1.23456") == "1.2345"


@pytest.mark.parametrize("value", [None, "", "abc", "12abc", float("nan"), {"a": 1}])
def test_format_number_fallback(value) -> None:
    assert format_number(value) == "0"


# ── format_percentage ─────────────────────────────────────────────────────────


def test_format_percentage() -> None:
    assert format_percentage(50.5678) == "50.57%"
    assert format_percentage("12.3") == "12.30%"
    assert format_percentage(100) == "100.00%"


def test_format_percentage_zero_spellings() -> None:
    """A computed zero and the fallback are spelled differently."""
    assert format_percentage(0) == "0.00%"
    assert format_percentage("") == "0%"
    assert format_percentage(None) == "0%"
    assert format_percentage("abc") == "0%"


# ── format_gas ────────────────────────────────────────────────────────────────


def test_format_gas() -> None:
    assert format_gas("1500000000") == "1.5 Gwei"
    assert format_gas("20000000000") == "20 Gwei"
    assert format_gas(1_000_000_000_000_000) == "1,000,000 Gwei"


@pytest.mark.parametrize("value", [None, "", "12abc", "1.5"])
def test_format_gas_fallback(value) -> None:
    assert format_gas(value) == "0 Gwei"


# ── format_cfx ────────────────────────────────────────────────────────────────


def test_format_cfx_precision() -> None:
    """18-decimal amounts above 2**53 keep full precision."""
    assert format_cfx("1500000000000000000") == "1.5 CFX"
    assert format_cfx("1000000000000000000000") == "1,000 CFX"
    assert format_cfx("123456789012345678901234") == "123,456.7890 CFX"


def test_format_cfx_numeric_input_in_scientific_range() -> None:
    assert format_cfx(1.5e18) == "1.5 CFX"
    assert format_cfx(10**21) == "1,000 CFX"


@pytest.mark.parametrize("value", [None, "", "not-a-number", "0xZZ"])
def test_format_cfx_fallback(value) -> None:
    assert format_cfx(value) == "0 CFX"


# ── format_token_amount ───────────────────────────────────────────────────────


def test_format_token_amount_decimals() -> None:
    assert format_token_amount("1234500000", 6) == "1,234.5"
    assert format_token_amount("1500000000000000000") == "1.5"
    assert format_token_amount("100", 0) == "100"


def test_format_token_amount_native_ignores_decimals() -> None:
    assert format_token_amount("1500000000000000000", 6, is_native=True) == "1.5 CFX"


def test_format_token_amount_fallbacks() -> None:
    assert format_token_amount(None, 6) == "0"
    assert format_token_amount("abc", 6) == "0"
    assert format_token_amount(None, 6, is_native=True) == "0 CFX"
    assert format_token_amount("100", -1) == "0"


# ── Out-of-range exponents / signed zero ──────────────────────────────────────


@pytest.mark.parametrize("value", ["1e999999999", "-1e999999999", "1e-999999999", "1e1001"])
def test_huge_exponents_fall_back(value) -> None:
    """Exponents too large to render collapse to each formatter's literal."""
    assert format_number(value) == "0"
    assert format_percentage(value) == "0%"
    assert format_gas(value) == "0 Gwei"
    assert format_cfx(value) == "0 CFX"


def test_large_float_still_renders() -> None:
    assert format_number(1e308).startswith("100,000,000,000,000,00")
    assert format_number("1e400") == "10" + ",000" * 133


def test_truncated_negative_zero_drops_sign() -> None:
    assert format_number("-0.00001") == "0.0000"
    assert format_cfx(-1) == "0.0000 CFX"
    assert format_percentage("-0.001") == "0.00%"
    assert format_number("-0.00012") == "-0.0001"
    assert format_percentage("-0.006") == "-0.01%"
