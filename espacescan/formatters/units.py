"""
Exact numeric coercion for raw explorer values.

The explorer returns amounts as integer strings in the smallest unit (drip),
sometimes as JSON numbers, and occasionally in scientific notation. Everything
here works on Python ints and Decimals so 18-decimal amounts never pass
through a binary float.

Failures are signalled with ConversionError (MissingValueError for absent
input). `with_fallback` is the one place that turns those into a formatter's
fallback literal.
"""

from __future__ import annotations

import functools
import logging
import math
import re
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Any, Callable, TypeVar

from espacescan.exceptions import ConversionError, MissingValueError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., str])

HEX_RE = re.compile(r"^[+-]?0[xX][0-9a-fA-F]+$")

# Refuse to expand exponents past this many digits ("1e999999999" would hang)
MAX_INTEGER_DIGITS = 256

# Largest decimal exponent accepted for display; bigger values would overflow
# or build megabyte strings in format()
MAX_EXPONENT = 1000


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a numeric-like wire value to a finite Decimal.

    Accepts ints, floats, Decimals and numeric strings (including scientific
    notation such as "1.234e3"). Floats go through their shortest repr, so
    0.1 becomes Decimal("0.1") rather than its binary expansion.

    Raises:
        MissingValueError: value is None or an empty/blank string.
        ConversionError: value is not a finite number.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingValueError("No value", details={"value": value})
    if isinstance(value, bool):
        raise ConversionError(f"Not a number: {value!r}", details={"value": value})

    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ConversionError(f"Not a finite number: {value!r}", details={"value": value})
        return Decimal(repr(value))
    if isinstance(value, Decimal):
        num = value
    elif isinstance(value, str):
        try:
            num = Decimal(value.strip())
        except InvalidOperation as e:
            raise ConversionError(f"Not a number: {value!r}", details={"value": value}) from e
    else:
        raise ConversionError(
            f"Unsupported type {type(value).__name__}", details={"value": repr(value)}
        )

    if not num.is_finite():
        raise ConversionError(f"Not a finite number: {value!r}", details={"value": str(value)})
    if num.is_zero():
        return Decimal(0)
    if abs(num.adjusted()) > MAX_EXPONENT:
        raise ConversionError(f"Exponent out of range: {value!r}", details={"value": str(value)})
    return num


def to_integer(value: Any) -> int:
    """
    Coerce a raw amount to an exact int in the smallest unit.

    Accepts ints, integral floats (1.5e18), decimal digit strings, 0x-prefixed
    hex strings and scientific-notation strings that denote an integer.
    Fractional values are rejected, never rounded.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and HEX_RE.match(value.strip()):
        return int(value.strip(), 16)

    num = to_decimal(value)
    if num.adjusted() >= MAX_INTEGER_DIGITS:
        raise ConversionError(f"Value too large: {value!r}", details={"value": str(value)})
    if num != num.to_integral_value():
        raise ConversionError(f"Not an integer amount: {value!r}", details={"value": str(value)})
    return int(num)


def to_unit(value: Any, decimals: int) -> str:
    """
    Divide a smallest-unit amount by 10**decimals, exactly.

    "1500000000000000000", 18 → "1.5"
    "1000000000000000000000", 18 → "1000"
    -25, 2 → "-0.25"

    Trailing fractional zeros are trimmed; the result never uses exponent
    notation.
    """
    raw = to_integer(value)
    try:
        places = int(decimals)
    except (TypeError, ValueError) as e:
        raise ConversionError(
            f"Invalid decimals: {decimals!r}", details={"decimals": repr(decimals)}
        ) from e
    if places < 0:
        raise ConversionError(f"Invalid decimals: {decimals!r}", details={"decimals": places})

    sign = "-" if raw < 0 else ""
    digits = str(abs(raw))
    if places == 0:
        return sign + digits

    digits = digits.rjust(places + 1, "0")
    whole, fraction = digits[:-places], digits[-places:].rstrip("0")
    if fraction:
        return f"{sign}{whole}.{fraction}"
    return f"{sign}{whole}"


def _render(
    func: Callable[..., str],
    default: str,
    log: logging.Logger,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> str:
    try:
        return func(*args, **kwargs)
    except MissingValueError:
        return default
    except ConversionError as e:
        log.warning(
            "%s: %s (details=%s), returning %r",
            func.__name__,
            e.message,
            e.details,
            default,
        )
        return default
    except DecimalException as e:
        log.warning(
            "%s: decimal arithmetic failed (%s), returning %r",
            func.__name__,
            type(e).__name__,
            default,
        )
        return default


def with_fallback(default: str) -> Callable[[F], F]:
    """
    Make a formatter total: ConversionError becomes `default`.

    Absent input returns the fallback silently; any other conversion failure
    (including decimal arithmetic errors) is logged at WARNING with the
    offending value. The literal is kept on the wrapper as `fallback`.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> str:
            return _render(func, default, logger, args, kwargs)

        wrapper.fallback = default  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator


def call_with_logger(
    formatter: Callable[..., str], log: logging.Logger, *args: Any, **kwargs: Any
) -> str:
    """Run a `with_fallback` formatter, reporting parse failures to `log`."""
    return _render(formatter.__wrapped__, formatter.fallback, log, args, kwargs)  # type: ignore[attr-defined]


@with_fallback("0")
def format_unit(value: Any, decimals: int) -> str:
    """Bare decimal string for value / 10**decimals, "0" when absent or invalid."""
    return to_unit(value, decimals)
