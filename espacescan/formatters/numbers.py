"""
Number formatting for explorer values.

Grouped integers, percentages, gas prices in Gwei, CFX amounts and token
amounts with arbitrary decimals. Every function returns a string for every
input; absent or unparseable values collapse to a fixed fallback literal:

  format_number        → "0"
  format_percentage    → "0%"   (a real zero renders "0.00%")
  format_gas           → "0 Gwei"
  format_cfx           → "0 CFX"
  format_token_amount  → "0", or "0 CFX" when is_native
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from espacescan.formatters.units import to_decimal, to_unit, with_fallback

NATIVE_SYMBOL = "CFX"
NATIVE_DECIMALS = 18
GAS_UNIT = "Gwei"
GAS_DECIMALS = 9
MAX_FRACTION_DIGITS = 4


def _group(num: Decimal) -> str:
    """'1234567.891234' → '1,234,567.8912' (fraction truncated, not rounded)."""
    sign = "-" if num < 0 else ""
    whole, _, fraction = format(abs(num), "f").partition(".")
    fraction = fraction.rstrip("0")[:MAX_FRACTION_DIGITS]
    if not whole.strip("0") and not fraction.strip("0"):
        # -0.00001 truncates to zero; no "-0.0000"
        sign = ""
    grouped = f"{int(whole):,}"
    if fraction:
        return f"{sign}{grouped}.{fraction}"
    return f"{sign}{grouped}"


@with_fallback("0")
def format_number(value: Any) -> str:
    """
    Format a number with comma separators and at most 4 decimals.

    1234.56789   → "1,234.5678"
    "1000000"    → "1,000,000"
    "1.234e3"    → "1,234"
    None / "" / "abc" → "0"
    """
    return _group(to_decimal(value))


@with_fallback("0%")
def format_percentage(value: Any) -> str:
    """Value is already a percentage: 50.5678 → "50.57%", 0 → "0.00%"."""
    num = to_decimal(value)
    with localcontext() as ctx:
        ctx.rounding = ROUND_HALF_UP
        text = format(num, ".2f")
    if text.startswith("-") and not text.strip("-0."):
        text = text[1:]
    return f"{text}%"


@with_fallback(f"0 {GAS_UNIT}")
def format_gas(value: Any) -> str:
    """Gas price in drip → Gwei: "1500000000" → "1.5 Gwei"."""
    return f"{format_number(to_unit(value, GAS_DECIMALS))} {GAS_UNIT}"


@with_fallback(f"0 {NATIVE_SYMBOL}")
def format_cfx(value: Any) -> str:
    """
    Native amount in drip → CFX.

    "1500000000000000000"    → "1.5 CFX"
    "1000000000000000000000" → "1,000 CFX"
    1.5e18                   → "1.5 CFX"
    """
    return f"{format_number(to_unit(value, NATIVE_DECIMALS))} {NATIVE_SYMBOL}"


@with_fallback("0")
def format_token_units(amount: Any, decimals: int) -> str:
    return format_number(to_unit(amount, decimals))


def format_token_amount(amount: Any, decimals: int = NATIVE_DECIMALS, is_native: bool = False) -> str:
    """
    Format a token amount given its decimals (6 for USDT, 18 for most).

    With is_native the decimals argument is ignored and the CFX suffix added.
    """
    if is_native:
        return format_cfx(amount)
    return format_token_units(amount, decimals)
