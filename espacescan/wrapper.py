"""
Wrapper layer: raw accessors plus display formatting.

Every method takes `return_raw`. With return_raw=True the accessor result is
returned as-is; otherwise a formatted copy is built and the raw object is
left untouched.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from espacescan.config import ESpaceScanConfig
from espacescan.formatters.numbers import NATIVE_DECIMALS
from espacescan.formatters.responses import ResponseFormatter
from espacescan.scanner import ESpaceScanner


class BaseWrapper:
    def __init__(self, scanner: ESpaceScanner, formatter: ResponseFormatter | None = None) -> None:
        self._scanner = scanner
        self._fmt = formatter or ResponseFormatter()

    def _format_tx(self, tx: Mapping[str, Any]) -> dict[str, Any]:
        """Copy of a transaction record with display values for the known fields."""
        out = dict(tx)
        for key in ("timeStamp", "timestamp"):
            if tx.get(key):
                out[key] = self._fmt.format_timestamp(tx[key])
        if tx.get("value"):
            if "tokenDecimal" in tx:
                out["value"] = self._fmt.format_token_amount(tx["value"], tx["tokenDecimal"])
            else:
                out["value"] = self._fmt.format_cfx(tx["value"])
        if tx.get("gasPrice"):
            out["gasPrice"] = self._fmt.format_gas(tx["gasPrice"])
        for key in ("gas", "gasUsed", "cumulativeGasUsed"):
            if tx.get(key):
                out[key] = self._fmt.format_number(tx[key])
        return out


class AccountWrapper(BaseWrapper):
    async def get_balance(
        self, address: str, tag: str = "latest_state", return_raw: bool = False
    ) -> str:
        """CFX balance, e.g. "123.45 CFX" (raw: drip string)."""
        data = await self._scanner.account.get_balance(address, tag)
        if return_raw:
            return data
        return self._fmt.format_cfx(data)

    async def get_balance_multi(
        self, addresses: list[str], tag: str = "latest_state", return_raw: bool = False
    ) -> list[Any]:
        data = await self._scanner.account.get_balance_multi(addresses, tag)
        if return_raw:
            return data
        formatted: list[Any] = []
        for item in data:
            if isinstance(item, Mapping):
                formatted.append({**item, "balance": self._fmt.format_cfx(item.get("balance"))})
            elif isinstance(item, Sequence) and len(item) == 2:
                formatted.append([item[0], self._fmt.format_cfx(item[1])])
            else:
                formatted.append(item)
        return formatted

    async def get_transaction_list(
        self, address: str, return_raw: bool = False, **params: Any
    ) -> list[dict[str, Any]]:
        data = await self._scanner.account.get_transaction_list(address, **params)
        if return_raw:
            return data
        return [self._format_tx(tx) for tx in data]

    async def get_token_transfers(self, return_raw: bool = False, **params: Any) -> list[dict[str, Any]]:
        data = await self._scanner.account.get_token_transfers(**params)
        if return_raw:
            return data
        return [self._format_tx(tx) for tx in data]


class TokenWrapper(BaseWrapper):
    async def get_token_balance(
        self,
        address: str,
        contract_address: str,
        decimals: int = NATIVE_DECIMALS,
        return_raw: bool = False,
    ) -> str:
        data = await self._scanner.token.get_token_balance(address, contract_address)
        if return_raw:
            return data
        return self._fmt.format_number(self._fmt.format_unit(data, decimals))

    async def get_token_supply(
        self, contract_address: str, decimals: int = NATIVE_DECIMALS, return_raw: bool = False
    ) -> str:
        data = await self._scanner.token.get_token_supply(contract_address)
        if return_raw:
            return data
        return self._fmt.format_number(self._fmt.format_unit(data, decimals))


class ContractWrapper(BaseWrapper):
    async def get_abi(self, address: str) -> list[dict[str, Any]]:
        # Nothing to format in an ABI
        return await self._scanner.contract.get_abi(address)

    async def get_source_code(self, address: str, return_raw: bool = False) -> dict[str, Any]:
        data = await self._scanner.contract.get_source_code(address)
        if return_raw:
            return data
        return {**data, "Runs": self._fmt.format_number(data.get("Runs"))}


class StatsWrapper(BaseWrapper):
    def format_series(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Format every row of a time-series response field by field."""
        return {
            "total": data.get("total"),
            "list": [
                {k: self._fmt.format_field(k, v) for k, v in item.items()}
                for item in data.get("list", [])
            ],
        }

    def format_ranking(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Format totals and every entry of a top-N response."""
        formatted = {k: self._fmt.format_field(k, v) for k, v in data.items() if k != "list"}
        formatted["list"] = [
            {k: self._fmt.format_field(k, v) for k, v in entry.items()}
            for entry in data.get("list", [])
        ]
        return formatted

    async def get_series(
        self, name: str, params: Mapping[str, Any] | None = None, return_raw: bool = False
    ) -> dict[str, Any]:
        data = await self._scanner.stats.get_series(name, params)
        if return_raw:
            return data
        return self.format_series(data)

    async def get_ranking(
        self, name: str, span_type: str = "24h", return_raw: bool = False
    ) -> dict[str, Any]:
        data = await self._scanner.stats.get_ranking(name, span_type)
        if return_raw:
            return data
        return self.format_ranking(data)


class ESpaceScannerWrapper:
    """
    Formatted access to the eSpace explorer API.

    Usage:
        async with ESpaceScannerWrapper.from_config(load_config()) as wrapper:
            print(await wrapper.account.get_balance(address))   # "1.5 CFX"
    """

    def __init__(
        self, scanner: ESpaceScanner | None = None, formatter: ResponseFormatter | None = None
    ) -> None:
        self.scanner = scanner or ESpaceScanner()
        self.formatter = formatter or ResponseFormatter()
        self.account = AccountWrapper(self.scanner, self.formatter)
        self.contract = ContractWrapper(self.scanner, self.formatter)
        self.stats = StatsWrapper(self.scanner, self.formatter)
        self.token = TokenWrapper(self.scanner, self.formatter)

    @classmethod
    def from_config(cls, config: ESpaceScanConfig) -> ESpaceScannerWrapper:
        return cls(ESpaceScanner.from_config(config))

    async def close(self) -> None:
        await self.scanner.close()

    async def __aenter__(self) -> ESpaceScannerWrapper:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
