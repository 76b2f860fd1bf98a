"""Output format routing for espacescan.

Converts command results to the requested format: json, table, text.

Design rules:
- JSON: 2-space indent, Decimals as exact strings, utf-8
- Table: Rich-formatted; one row per stats entry, ranked rows for top-N
- Text: the multi-line report rendered by ResponseFormatter

All functions return strings. The caller writes to stdout.
"""

from __future__ import annotations

import io
import json
from decimal import Decimal
from typing import Any

from rich.console import Console
from rich.table import Table

from espacescan.formatters.responses import NO_DATA, ResponseFormatter

VALID_FORMATS = {"json", "table", "text"}


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that writes Decimal values as plain strings."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return format(obj, "f")
        return super().default(obj)


def format_output(data: Any, fmt: str, title: str = "") -> str:
    """
    Format data for stdout output.

    Args:
        data: Result dict, list, or any JSON-serialisable value.
        fmt: "json" | "table" | "text"
        title: Table title, ignored by the other formats.

    Raises:
        ValueError: If fmt is not a recognised format.
    """
    fmt = fmt.lower()
    if fmt not in VALID_FORMATS:
        raise ValueError(f"Unknown format {fmt!r}. Valid: {sorted(VALID_FORMATS)}")

    if fmt == "table":
        return format_table(data, title)
    if fmt == "text":
        return format_text(data)
    return format_json(data)


# ── JSON ─────────────────────────────────────────────────────────────────────


def format_json(data: Any) -> str:
    """Pretty-print data as JSON (2-space indent)."""
    return json.dumps(data, indent=2, cls=DecimalEncoder, ensure_ascii=False)


# ── Table ────────────────────────────────────────────────────────────────────


def format_table(data: Any, title: str = "") -> str:
    """
    Format as a Rich terminal table.

    Handles:
    - Stats responses (dict with a 'list' of rows); ranked when the rows carry
      an address
    - Plain lists of dicts
    - Generic fallback: pretty JSON
    """
    buf = io.StringIO()
    console = Console(file=buf, highlight=False, markup=True, width=120)

    rows = _rows_of(data)
    if rows:
        _render_rows(console, rows, title, ranked="address" in rows[0])
        if isinstance(data, dict):
            _render_totals(console, data)
    else:
        console.print_json(json.dumps(data, cls=DecimalEncoder))

    return buf.getvalue()


def _rows_of(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get("list")
    if isinstance(data, list) and data and all(isinstance(r, dict) for r in data):
        return data
    return []


def _cell(value: Any) -> str:
    if isinstance(value, dict):
        return ", ".join(f"{k}: {v}" for k, v in value.items())
    if value is None:
        return "—"
    return str(value)


def _render_rows(console: Console, rows: list[dict[str, Any]], title: str, ranked: bool) -> None:
    table = Table(title=title or None, show_header=True, header_style="bold blue")
    headers: list[str] = []
    for row in rows:
        headers.extend(k for k in row if k not in headers)

    if ranked:
        table.add_column("#", justify="right")
    for h in headers:
        if h == "address":
            table.add_column(h, style="cyan", no_wrap=True)
        else:
            table.add_column(h, justify="right" if h != "statTime" else "left")

    for rank, row in enumerate(rows, 1):
        cells = [_cell(row.get(h)) for h in headers]
        table.add_row(*([str(rank)] if ranked else []), *cells)

    console.print(table)


def _render_totals(console: Console, data: dict[str, Any]) -> None:
    totals = {k: v for k, v in data.items() if k != "list" and v is not None}
    if totals:
        console.print("  ".join(f"{k}: [bold]{_cell(v)}[/bold]" for k, v in totals.items()))


# ── Text ─────────────────────────────────────────────────────────────────────


def format_text(data: Any, formatter: ResponseFormatter | None = None) -> str:
    """
    Human-readable report for raw stats responses.

    Top-N responses (rows keyed by address) go through format_top_stats,
    time-series responses through format_stat_item, one block per row.
    Scalars are printed as-is; anything else falls back to JSON.
    """
    formatter = formatter or ResponseFormatter()
    if isinstance(data, (str, int, Decimal)):
        return str(data)
    if not isinstance(data, dict) or "list" not in data:
        return format_json(data)

    rows = data.get("list") or []
    if not rows:
        return NO_DATA
    if isinstance(rows[0], dict) and "address" in rows[0]:
        return formatter.format_top_stats(data)
    return "\n\n".join(formatter.format_stat_item(row) for row in rows)


# ── Utility ──────────────────────────────────────────────────────────────────


def mask_api_key(key: str) -> str:
    """
    Mask an API key for safe display.

    'abcdefg123' → 'abcd****'
    '' → '****'
    """
    if not key or len(key) <= 4:
        return "****"
    return key[:4] + "****"
