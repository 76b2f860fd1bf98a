"""
UTC timestamp formatting and relative time helpers.

Output never depends on the host timezone. Unparseable input renders as
"N/A". The wall clock is read in exactly one place, `_clock`, which tests
replace to freeze time.
"""

from __future__ import annotations

import logging
import math
import re
import time
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
SECONDS_PER_DAY = 24 * 60 * 60
STYLES = ("full", "date", "unix")

NUMERIC_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)

_clock: Callable[[], float] = time.time


def _parse_iso(text: str) -> datetime:
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        # Naive strings are read as UTC, not host-local time
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _to_instant(value: Any, log: logging.Logger) -> datetime | None:
    """Unix seconds (number or numeric string) or ISO-8601 string → aware UTC datetime."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if NUMERIC_RE.match(text):
                return _EPOCH + timedelta(seconds=float(text))
            return _parse_iso(text)
        if isinstance(value, (int, float, Decimal)):
            seconds = float(value)
            if not math.isfinite(seconds):
                return None
            return _EPOCH + timedelta(seconds=seconds)
    except (ValueError, OverflowError) as e:
        log.warning("Invalid timestamp %r: %s", value, e)
        return None
    return None


def format_date(value: Any, style: str = "full", log: logging.Logger | None = None) -> str:
    """
    Render a timestamp in UTC.

    style "full" → "2024-02-07 12:00:00"
    style "date" → "2024-02-07"
    style "unix" → "1707307200" (whole seconds, floored)

    Returns "N/A" for absent or unparseable input. Warnings go to `log`
    when given, otherwise to this module's logger.
    """
    log = log or logger
    if style not in STYLES:
        log.warning("Unknown timestamp style %r", style)
        return NOT_AVAILABLE

    dt = _to_instant(value, log)
    if dt is None:
        return NOT_AVAILABLE

    if style == "unix":
        return str((dt - _EPOCH) // _ONE_SECOND)

    date_part = f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
    if style == "date":
        return date_part
    return f"{date_part} {dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"


def format_timestamp(value: Any, style: str = "full", log: logging.Logger | None = None) -> str:
    """Same as format_date; "full" ("YYYY-MM-DD HH:mm:ss") unless told otherwise."""
    return format_date(value, style, log)


def get_current_timestamp() -> int:
    """Current Unix time in whole seconds."""
    return math.floor(_clock())


def get_24_hours_ago() -> int:
    return get_current_timestamp() - SECONDS_PER_DAY


def get_time_ago(days: float) -> int:
    """
    Unix time `days` ago. Fractional days are fine (0.5 → 12 hours).

    Negative days give a future timestamp; no validation is done.
    """
    return get_current_timestamp() - int(days * SECONDS_PER_DAY)
