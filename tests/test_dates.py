"""Tests for espacescan/formatters/dates.py — UTC rendering and the clock seam."""

from __future__ import annotations

import logging
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from espacescan.formatters import dates
from espacescan.formatters.dates import (
    format_date,
    format_timestamp,
    get_24_hours_ago,
    get_current_timestamp,
    get_time_ago,
)

NOW = 1707307200

# ── format_date / format_timestamp ────────────────────────────────────────────


def test_format_timestamp_styles() -> None:
    assert format_timestamp(1707307200) == "2024-02-07 12:00:00"
    assert format_timestamp(1707307200, "full") == "2024-02-07 12:00:00"
    assert format_timestamp(1707307200, "date") == "2024-02-07"
    assert format_timestamp(1707307200, "unix") == "1707307200"


def test_iso_and_numeric_inputs_agree() -> None:
    """The same instant renders identically whatever its input form."""
    expected = "2024-02-07 12:00:00"
    assert format_timestamp("2024-02-07T12:00:00Z") == expected
    assert format_timestamp("2024-02-07T14:00:00+02:00") == expected
    assert format_timestamp("1707307200") == expected
    assert format_timestamp(Decimal("1707307200")) == expected


def test_naive_iso_string_is_utc() -> None:
    assert format_timestamp("2024-02-07T12:00:00") == "2024-02-07 12:00:00"


def test_fields_are_zero_padded() -> None:
    # 2001-02-03 04:05:06 UTC
    assert format_date(981173106) == "2001-02-03 04:05:06"
    assert format_date(0) == "1970-01-01 00:00:00"


def test_unix_style_floors_to_whole_seconds() -> None:
    assert format_date(1707307200.9, "unix") == "1707307200"
    assert format_date("2024-02-07T12:00:00.750Z", "unix") == "1707307200"
    assert format_date(-1.5, "unix") == "-2"


@pytest.mark.parametrize(
    "value",
    [None, "", "not a date", "2024-13-45", float("nan"), float("inf"), 1e20, True, [1707307200]],
)
def test_format_date_not_available(value) -> None:
    assert format_date(value) == "N/A"


def test_format_date_unknown_style() -> None:
    assert format_date(NOW, "iso") == "N/A"


def test_millisecond_timestamps_are_out_of_range() -> None:
    """Values past year 9999 (e.g. milliseconds) render N/A rather than raising."""
    assert format_date(1707307200000) == "N/A"
    assert format_timestamp("1707307200000", "date") == "N/A"


def test_format_date_warns_on_given_logger() -> None:
    log = MagicMock(spec=logging.Logger)
    assert format_date("not a date", log=log) == "N/A"
    assert format_timestamp(NOW, "iso", log=log) == "N/A"
    assert log.warning.call_count == 2


# ── Clock helpers ─────────────────────────────────────────────────────────────


def test_get_current_timestamp_floors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dates, "_clock", lambda: NOW + 0.999)
    assert get_current_timestamp() == NOW


def test_get_24_hours_ago(frozen_now: int) -> None:
    assert get_24_hours_ago() == frozen_now - 86400


@pytest.mark.parametrize(
    "days, expected",
    [
        (7, NOW - 604800),
        (0.5, NOW - 43200),
        (0, NOW),
        (-1, NOW + 86400),
    ],
)
def test_get_time_ago(frozen_now: int, days: float, expected: int) -> None:
    assert get_time_ago(days) == expected


def test_clock_is_read_at_call_time(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dates, "_clock", lambda: 100.0)
    first = get_current_timestamp()
    monkeypatch.setattr(dates, "_clock", lambda: 200.0)
    assert (first, get_current_timestamp()) == (100, 200)
