"""Tests for espacescan/output.py — format routing."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from espacescan.output import (
    DecimalEncoder,
    format_json,
    format_output,
    format_table,
    format_text,
    mask_api_key,
)

ADDR = "0x1234567890abcdef1234567890abcdef12345678"


# ── format_output routing ─────────────────────────────────────────────────────


def test_format_output_json() -> None:
    data = {"address": ADDR, "balance": "1.5 CFX"}
    assert json.loads(format_output(data, "json")) == data


def test_format_output_is_case_insensitive() -> None:
    assert json.loads(format_output({"a": 1}, "JSON")) == {"a": 1}


def test_format_output_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        format_output({}, "csv")


# ── JSON ──────────────────────────────────────────────────────────────────────


def test_decimal_encoder_keeps_exact_digits() -> None:
    out = json.dumps({"v": Decimal("1234567890.123456789012345678")}, cls=DecimalEncoder)
    assert json.loads(out) == {"v": "1234567890.123456789012345678"}


def test_format_json_indent_and_unicode() -> None:
    out = format_json({"name": "Ω"})
    assert out == '{\n  "name": "Ω"\n}'


# ── Table ─────────────────────────────────────────────────────────────────────


def test_format_table_series(sample_series: dict) -> None:
    out = format_table(sample_series, title="transactions")
    assert "transactions" in out
    assert "statTime" in out
    assert "123456" in out
    assert "total: 2" in out


def test_format_table_ranking_has_rank_column(sample_top_gas: dict) -> None:
    out = format_table(sample_top_gas)
    assert "#" in out
    assert ADDR in out
    assert "gasTotal" in out


def test_format_table_nested_cells() -> None:
    out = format_table({"list": [{"statTime": "x", "txsInType": {"legacy": "1"}}]})
    assert "legacy: 1" in out


def test_format_table_generic_fallback() -> None:
    out = format_table({"address": ADDR, "balance": "1.5 CFX"})
    assert "1.5 CFX" in out


def test_format_table_plain_list() -> None:
    out = format_table([{"account": ADDR, "balance": "2 CFX"}])
    assert "2 CFX" in out


# ── Text ──────────────────────────────────────────────────────────────────────


def test_format_text_series(sample_series: dict) -> None:
    blocks = format_text(sample_series).split("\n\n")
    assert blocks[0].splitlines() == ["Time: 2024-02-07 00:00:00", "count: 123,456"]
    assert blocks[1].splitlines()[0] == "Time: 2024-02-06 00:00:00"


def test_format_text_ranking(sample_top_gas: dict) -> None:
    out = format_text(sample_top_gas)
    assert out.startswith("Total Gas Used: 1,500 Gwei")
    assert f"#1 {ADDR}" in out


def test_format_text_empty_list() -> None:
    assert format_text({"total": 0, "list": []}) == "No data available"


def test_format_text_scalars_and_other_shapes() -> None:
    assert format_text("1500000000000000000") == "1500000000000000000"
    assert json.loads(format_text({"balance": "1"})) == {"balance": "1"}


# ── mask_api_key ──────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "key, expected",
    [("abcdefg123", "abcd****"), ("", "****"), ("abcd", "****"), ("abcde", "abcd****")],
)
def test_mask_api_key(key: str, expected: str) -> None:
    assert mask_api_key(key) == expected
