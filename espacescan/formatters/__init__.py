"""
Formatting layer for espacescan.

Turns raw explorer values (drip amounts, integer strings, Unix timestamps)
into display strings. Nothing in here raises on bad input.

Usage:
    from espacescan.formatters import format_cfx, format_timestamp
    format_cfx("1500000000000000000")   # "1.5 CFX"
    format_timestamp(1707307200)        # "2024-02-07 12:00:00"
"""

from espacescan.formatters.dates import (
    NOT_AVAILABLE,
    format_date,
    format_timestamp,
    get_24_hours_ago,
    get_current_timestamp,
    get_time_ago,
)
from espacescan.formatters.numbers import (
    format_cfx,
    format_gas,
    format_number,
    format_percentage,
    format_token_amount,
)
from espacescan.formatters.responses import ResponseFormatter
from espacescan.formatters.units import format_unit, to_integer, to_unit

__all__ = [
    "NOT_AVAILABLE",
    "ResponseFormatter",
    "format_cfx",
    "format_date",
    "format_gas",
    "format_number",
    "format_percentage",
    "format_timestamp",
    "format_token_amount",
    "format_unit",
    "get_24_hours_ago",
    "get_current_timestamp",
    "get_time_ago",
    "to_integer",
    "to_unit",
]
