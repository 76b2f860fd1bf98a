"""
Shared data models for espacescan.

Plain dataclasses: the stats layer produces StatsQueryWindow, the response
formatter consumes TokenData. Both are created per call and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_SORT = "DESC"
DEFAULT_SKIP = 0
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class StatsQueryWindow:
    """
    Fully populated query for a time-series statistics endpoint.

    Caller-supplied values are stored as given (no clamping); `extra` holds
    any other query keys such as `contract` or `intervalType`.
    """

    min_timestamp: Any
    max_timestamp: Any
    sort: Any = DEFAULT_SORT
    skip: Any = DEFAULT_SKIP
    limit: Any = DEFAULT_LIMIT
    extra: dict[str, Any] = field(default_factory=dict)

    def to_params(self) -> dict[str, Any]:
        """Serialize to the camelCase query keys the explorer expects."""
        return {
            "minTimestamp": self.min_timestamp,
            "maxTimestamp": self.max_timestamp,
            "sort": self.sort,
            "skip": self.skip,
            "limit": self.limit,
            **self.extra,
        }


@dataclass(frozen=True)
class TokenData:
    """A token holding as returned by the explorer's token endpoints."""

    name: str | None = None
    symbol: str | None = None
    type: str | None = None         # "ERC20" | "ERC721" | "ERC1155"
    amount: str | None = None       # smallest unit
    decimals: int | None = None
    contract: str | None = None
    price_in_usdt: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> TokenData:
        """Build from a decoded API record (camelCase keys)."""
        decimals = raw.get("decimals")
        try:
            decimals = int(decimals) if decimals is not None else None
        except (TypeError, ValueError):
            decimals = None
        return cls(
            name=raw.get("name"),
            symbol=raw.get("symbol"),
            type=raw.get("type"),
            amount=raw.get("amount"),
            decimals=decimals,
            contract=raw.get("contract") or raw.get("address"),
            price_in_usdt=raw.get("priceInUSDT"),
        )
