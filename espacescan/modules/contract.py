"""Verified contract metadata: ABI and source code."""

from __future__ import annotations

import json
from typing import Any

from espacescan.exceptions import APIError
from espacescan.modules.base import BaseModule


class ContractModule(BaseModule):
    async def get_abi(self, address: str) -> list[dict[str, Any]]:
        """Decoded ABI of a verified contract."""
        self._require_address(address)
        result = await self._fetch_required(
            "/api", {"module": "contract", "action": "getabi", "address": address}
        )
        try:
            return json.loads(result)
        except (TypeError, ValueError) as e:
            raise APIError(
                f"Contract {address} ABI is not valid JSON", details={"address": address}
            ) from e

    async def get_source_code(self, address: str) -> dict[str, Any]:
        """Source record (SourceCode, ContractName, CompilerVersion, Runs, ...)."""
        self._require_address(address)
        result = await self._fetch_required(
            "/api", {"module": "contract", "action": "getsourcecode", "address": address}
        )
        if isinstance(result, list):
            return result[0]
        return result
