"""Account endpoints: balances, transaction lists, token transfers."""

from __future__ import annotations

from typing import Any

from espacescan.exceptions import InvalidAddressError
from espacescan.modules.base import BaseModule
from espacescan.validation import validate_addresses

DEFAULT_TAG = "latest_state"


class AccountModule(BaseModule):
    """Raw account accessors. Amounts come back in drip, as strings."""

    async def get_balance(self, address: str, tag: str = DEFAULT_TAG) -> str:
        """CFX balance of one address, in drip."""
        self._require_address(address)
        return await self._fetch_result(
            "/api",
            {"module": "account", "action": "balance", "address": address, "tag": tag},
        )

    async def get_balance_multi(self, addresses: list[str], tag: str = DEFAULT_TAG) -> list[Any]:
        """Balances of several addresses in one call."""
        if not validate_addresses(addresses):
            raise InvalidAddressError(
                "Invalid addresses provided", details={"addresses": list(addresses)}
            )
        return await self._fetch_result(
            "/api",
            {
                "module": "account",
                "action": "balancemulti",
                "address": ",".join(addresses),
                "tag": tag,
            },
        ) or []

    async def get_transaction_list(
        self,
        address: str,
        startblock: int | None = None,
        endblock: int | None = None,
        page: int | None = None,
        offset: int | None = None,
        sort: str | None = None,
    ) -> list[dict[str, Any]]:
        """Normal transactions sent from or to `address`."""
        self._require_address(address)
        return await self._fetch_result(
            "/api",
            {
                "module": "account",
                "action": "txlist",
                "address": address,
                "startblock": startblock,
                "endblock": endblock,
                "page": page,
                "offset": offset,
                "sort": sort,
            },
        ) or []

    async def get_token_transfers(
        self,
        address: str | None = None,
        contract_address: str | None = None,
        startblock: int | None = None,
        endblock: int | None = None,
        page: int | None = None,
        offset: int | None = None,
        sort: str | None = None,
    ) -> list[dict[str, Any]]:
        """ERC-20 transfer events filtered by holder and/or token contract."""
        if address is None and contract_address is None:
            raise InvalidAddressError("Either address or contract_address is required")
        if address is not None:
            self._require_address(address)
        if contract_address is not None:
            self._require_address(contract_address, "contract address")
        return await self._fetch_result(
            "/api",
            {
                "module": "account",
                "action": "tokentx",
                "address": address,
                "contractaddress": contract_address,
                "startblock": startblock,
                "endblock": endblock,
                "page": page,
                "offset": offset,
                "sort": sort,
            },
        ) or []
