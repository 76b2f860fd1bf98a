"""ERC-20 token endpoints."""

from __future__ import annotations

from espacescan.modules.base import BaseModule


class TokenModule(BaseModule):
    async def get_token_balance(self, address: str, contract_address: str) -> str:
        """Token balance of `address`, in the token's smallest unit."""
        self._require_address(address)
        self._require_address(contract_address, "contract address")
        return await self._fetch_result(
            "/api",
            {
                "module": "account",
                "action": "tokenbalance",
                "contractaddress": contract_address,
                "address": address,
            },
        )

    async def get_token_supply(self, contract_address: str) -> str:
        """Total supply in the token's smallest unit."""
        self._require_address(contract_address, "contract address")
        return await self._fetch_result(
            "/api",
            {"module": "stats", "action": "tokensupply", "contractaddress": contract_address},
        )
