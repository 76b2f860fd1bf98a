"""
Response formatter used by the wrapper layer.

Delegates to the number and date formatters. The one rule it adds: absent
timestamps and dates render as "N/A" without reaching the date formatter,
while every numeric, gas and currency field keeps its "0 …" fallback.

It also knows how to render whole records: stat items and top-N rankings
dispatch per field to the right formatter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from espacescan.exceptions import ConversionError
from espacescan.formatters import dates, numbers, units
from espacescan.formatters.units import call_with_logger, to_decimal
from espacescan.models import TokenData

# Per-field dispatch for stat items and top-N rows
TIME_FIELDS = frozenset({"statTime", "timestamp"})
GAS_FIELDS = frozenset({"gas", "gasTotal", "gasPrice", "baseFee", "avgPriorityFee"})
CURRENCY_FIELDS = frozenset({"fee", "txFee", "txFeeSum", "rewardSum"})
PASSTHROUGH_FIELDS = frozenset({"address", "contract", "blockNumber", "maxTime", "total"})

NO_DATA = "No data available"


class ResponseFormatter:
    """
    Formats explorer records for display. Stateless apart from its logger.

    Parse-failure warnings from every scalar formatter go to the injected
    logger (default: this module's logger).
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or logging.getLogger(__name__)

    # ── Scalar formatters ────────────────────────────────────────────────────

    def format_unit(self, value: Any, decimals: int) -> str:
        return call_with_logger(units.format_unit, self._log, value, decimals)

    def format_number(self, value: Any) -> str:
        return call_with_logger(numbers.format_number, self._log, value)

    def format_percentage(self, value: Any) -> str:
        return call_with_logger(numbers.format_percentage, self._log, value)

    def format_gas(self, value: Any) -> str:
        return call_with_logger(numbers.format_gas, self._log, value)

    def format_cfx(self, value: Any) -> str:
        return call_with_logger(numbers.format_cfx, self._log, value)

    def format_token_amount(
        self, amount: Any, decimals: int = numbers.NATIVE_DECIMALS, is_native: bool = False
    ) -> str:
        if is_native:
            return self.format_cfx(amount)
        return call_with_logger(numbers.format_token_units, self._log, amount, decimals)

    def format_timestamp(self, value: Any) -> str:
        if value is None:
            return dates.NOT_AVAILABLE
        return dates.format_timestamp(value, log=self._log)

    def format_date(self, value: Any, style: str = "full") -> str:
        if value is None:
            return dates.NOT_AVAILABLE
        return dates.format_date(value, style, log=self._log)

    def format_field(self, key: str, value: Any) -> Any:
        """Pick the formatter for one stat/ranking field by its name."""
        if key in PASSTHROUGH_FIELDS:
            return value
        if key in TIME_FIELDS:
            return self.format_timestamp(value)
        if key in GAS_FIELDS:
            return self.format_gas(value)
        if key in CURRENCY_FIELDS:
            return self.format_cfx(value)
        if isinstance(value, Mapping):
            return {k: self.format_number(v) for k, v in value.items()}
        return self.format_number(value)

    # ── Record renderers ─────────────────────────────────────────────────────

    def format_token_data(self, token: TokenData | Mapping[str, Any]) -> str:
        """
        Multi-line token summary:

            Token: Tether USD (USDT)
            Type: ERC20
            Amount: 1,234.5 USDT
            Contract: 0x...
            Price: $1.0001
        """
        if isinstance(token, Mapping):
            token = TokenData.from_dict(dict(token))

        decimals = token.decimals if token.decimals is not None else numbers.NATIVE_DECIMALS
        amount = self.format_token_amount(token.amount or "0", decimals)
        lines = [
            f"Token: {token.name or 'Unknown'} ({token.symbol or 'Unknown'})",
            f"Type: {token.type or 'Unknown'}",
            f"Amount: {amount} {token.symbol or ''}".rstrip(),
            f"Contract: {token.contract or 'Unknown'}",
        ]
        if token.price_in_usdt:
            try:
                lines.append(f"Price: ${format(to_decimal(token.price_in_usdt), '.4f')}")
            except ConversionError:
                self._log.warning("Unparseable token price %r", token.price_in_usdt)
        return "\n".join(lines)

    def format_stat_item(self, item: Mapping[str, Any]) -> str:
        """One stats row as "Time: ..." followed by one "key: value" line per measure."""
        lines = [f"Time: {self.format_timestamp(item.get('statTime'))}"]
        for key, value in item.items():
            if key == "statTime":
                continue
            if key == "txsInType" and isinstance(value, Mapping):
                counts = ", ".join(f"{k}: {self.format_number(v)}" for k, v in value.items())
                lines.append(f"txsInType: {{ {counts} }}")
            else:
                lines.append(f"{key}: {self.format_field(key, value)}")
        return "\n".join(lines)

    def format_top_stats(self, data: Mapping[str, Any] | None) -> str:
        """Ranked report for a top-N statistics response."""
        if not data or not data.get("list"):
            return NO_DATA

        lines: list[str] = []
        if data.get("gasTotal"):
            lines.append(f"Total Gas Used: {self.format_gas(data['gasTotal'])}")
        if data.get("valueTotal"):
            lines.append(f"Total Value: {self.format_number(data['valueTotal'])}")

        for rank, entry in enumerate(data["list"], start=1):
            lines.append(f"#{rank} {entry.get('address', 'Unknown')}")
            if entry.get("gas"):
                lines.append(f"Gas Used: {self.format_gas(entry['gas'])}")
            if entry.get("value"):
                lines.append(f"Value: {self.format_number(entry['value'])}")
            if entry.get("transferCntr"):
                lines.append(f"Transfers: {self.format_number(entry['transferCntr'])}")
            if entry.get("txFeeSum"):
                lines.append(f"Fees: {self.format_cfx(entry['txFeeSum'])}")

        return "\n".join(lines)
