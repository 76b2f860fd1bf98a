"""
Statistics endpoints and their query normalization.

Time-series endpoints take a window (minTimestamp/maxTimestamp), a sort
order and skip/limit paging. `normalize_stats_params` fills whatever the
caller left out: the last 24 hours, newest first, first 10 rows. Values the
caller did supply are passed through as-is; range and whitelist checks are
the server's job.

Top-N ranking endpoints only take a span ("24h", "3d", "7d").
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from espacescan.formatters.dates import SECONDS_PER_DAY, get_current_timestamp
from espacescan.models import DEFAULT_LIMIT, DEFAULT_SKIP, DEFAULT_SORT, StatsQueryWindow
from espacescan.modules.base import BaseModule

logger = logging.getLogger(__name__)

DEFAULT_SPAN = "24h"
STATS_SPANS = ("24h", "3d", "7d")

# Series name → endpoint, for time-series stats
BASIC_SERIES: dict[str, str] = {
    "active-accounts": "/statistics/account/active",
    "active-accounts-overall": "/statistics/account/active/overall",
    "account-growth": "/statistics/account/growth",
    "cfx-holders": "/statistics/account/cfx/holder",
    "contracts": "/statistics/contract",
    "transactions": "/statistics/transaction",
    "cfx-transfers": "/statistics/cfx/transfer",
    "token-transfers": "/statistics/token/transfer",
    "tps": "/statistics/tps",
    "supply": "/statistics/supply",
    "mining": "/statistics/mining",
    "block-base-fee": "/statistics/block/base-fee",
    "block-gas-used": "/statistics/block/gas-used",
    "block-avg-priority-fee": "/statistics/block/avg-priority-fee",
    "block-txs-by-type": "/statistics/block/txs-by-type",
}

# Series that are scoped to one token contract
TOKEN_SERIES: dict[str, str] = {
    "token-holders": "/statistics/token/holder",
    "token-unique-senders": "/statistics/token/unique/sender",
    "token-unique-receivers": "/statistics/token/unique/receiver",
    "token-unique-participants": "/statistics/token/unique/participant",
}

# Ranking name → endpoint, for top-N stats
TOP_RANKINGS: dict[str, str] = {
    "gas-used": "/statistics/top/gas/used",
    "miners": "/statistics/top/miner",
    "tx-senders": "/statistics/top/transaction/sender",
    "tx-receivers": "/statistics/top/transaction/receiver",
    "cfx-senders": "/statistics/top/cfx/sender",
    "cfx-receivers": "/statistics/top/cfx/receiver",
    "token-transfers": "/statistics/top/token/transfer",
    "token-senders": "/statistics/top/token/sender",
    "token-receivers": "/statistics/top/token/receiver",
    "token-participants": "/statistics/top/token/participant",
}

# (attribute, wire key) for the window fields
_WINDOW_FIELDS = (
    ("min_timestamp", "minTimestamp"),
    ("max_timestamp", "maxTimestamp"),
    ("sort", "sort"),
    ("skip", "skip"),
    ("limit", "limit"),
)


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def normalize_stats_params(params: Mapping[str, Any] | None = None) -> StatsQueryWindow:
    """
    Fill in defaults for a time-series stats query.

    Missing (or None) fields default to: max_timestamp = now,
    min_timestamp = now - 24h, sort "DESC", skip 0, limit 10. Keys may be
    snake_case or the wire's camelCase. Anything else (contract,
    interval_type, ...) is carried in `extra` under its camelCase name.
    Never raises.
    """
    given = dict(params or {})
    window: dict[str, Any] = {}
    for attr, wire in _WINDOW_FIELDS:
        value = given.pop(attr, None)
        wire_value = given.pop(wire, None)
        window[attr] = value if value is not None else wire_value

    now = get_current_timestamp()
    defaults = {
        "min_timestamp": now - SECONDS_PER_DAY,
        "max_timestamp": now,
        "sort": DEFAULT_SORT,
        "skip": DEFAULT_SKIP,
        "limit": DEFAULT_LIMIT,
    }
    for attr, default in defaults.items():
        if window[attr] is None:
            window[attr] = default

    extra = {_camel(k): v for k, v in given.items() if v is not None}
    return StatsQueryWindow(extra=extra, **window)


class StatsModule(BaseModule):
    """Raw statistics accessors. Results are returned as decoded JSON."""

    async def get_basic_stats(
        self, endpoint: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Fetch a time-series endpoint with a normalized query window."""
        window = normalize_stats_params(params)
        logger.debug("Getting basic stats endpoint=%s window=%s", endpoint, window)
        return await self._fetch_required(endpoint, window.to_params())

    async def get_top_stats(self, endpoint: str, span_type: str = DEFAULT_SPAN) -> dict[str, Any]:
        """Fetch a top-N ranking endpoint for one span."""
        logger.debug("Getting top stats endpoint=%s span=%s", endpoint, span_type)
        return await self._fetch_required(endpoint, {"spanType": span_type})

    async def get_series(self, name: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Time-series stats by series name (see BASIC_SERIES and TOKEN_SERIES)."""
        if name in TOKEN_SERIES:
            contract = (params or {}).get("contract")
            return await self.get_token_stats(TOKEN_SERIES[name], contract, params)
        if name not in BASIC_SERIES:
            valid = sorted([*BASIC_SERIES, *TOKEN_SERIES])
            raise ValueError(f"Unknown series {name!r}. Valid: {valid}")
        return await self.get_basic_stats(BASIC_SERIES[name], params)

    async def get_ranking(self, name: str, span_type: str = DEFAULT_SPAN) -> dict[str, Any]:
        """Top-N stats by ranking name (see TOP_RANKINGS)."""
        if name not in TOP_RANKINGS:
            raise ValueError(f"Unknown ranking {name!r}. Valid: {sorted(TOP_RANKINGS)}")
        return await self.get_top_stats(TOP_RANKINGS[name], span_type)

    async def get_token_stats(
        self, endpoint: str, contract: str | None, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        self._require_address(contract or "", "contract address")
        return await self.get_basic_stats(endpoint, {**(params or {}), "contract": contract})

    # ── Named accessors ──────────────────────────────────────────────────────

    async def get_active_account_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("active-accounts", params)

    async def get_cfx_holder_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("cfx-holders", params)

    async def get_account_growth_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("account-growth", params)

    async def get_contract_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("contracts", params)

    async def get_transaction_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("transactions", params)

    async def get_cfx_transfer_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("cfx-transfers", params)

    async def get_tps_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("tps", params)

    async def get_block_base_fee_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("block-base-fee", params)

    async def get_block_gas_used_stats(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.get_series("block-gas-used", params)

    async def get_token_holder_stats(
        self, contract: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        return await self.get_token_stats(TOKEN_SERIES["token-holders"], contract, params)

    async def get_top_gas_used(self, span_type: str = DEFAULT_SPAN) -> dict[str, Any]:
        return await self.get_ranking("gas-used", span_type)

    async def get_top_cfx_senders(self, span_type: str = DEFAULT_SPAN) -> dict[str, Any]:
        return await self.get_ranking("cfx-senders", span_type)

    async def get_top_token_transfers(self, span_type: str = DEFAULT_SPAN) -> dict[str, Any]:
        return await self.get_ranking("token-transfers", span_type)
