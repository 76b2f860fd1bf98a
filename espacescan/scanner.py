"""Scanner aggregate: one transport, every raw accessor module."""

from __future__ import annotations

from espacescan.api import ESpaceApi
from espacescan.config import ESpaceScanConfig
from espacescan.modules import AccountModule, ContractModule, StatsModule, TokenModule


class ESpaceScanner:
    """
    Raw access to the eSpace explorer API.

    Usage:
        async with ESpaceScanner(ESpaceApi(target="testnet")) as scanner:
            balance = await scanner.account.get_balance(address)
    """

    def __init__(self, api: ESpaceApi | None = None) -> None:
        self.api = api or ESpaceApi()
        self.account = AccountModule(self.api)
        self.contract = ContractModule(self.api)
        self.stats = StatsModule(self.api)
        self.token = TokenModule(self.api)

    @classmethod
    def from_config(cls, config: ESpaceScanConfig) -> ESpaceScanner:
        return cls(ESpaceApi.from_config(config))

    async def close(self) -> None:
        await self.api.close()

    async def __aenter__(self) -> ESpaceScanner:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
