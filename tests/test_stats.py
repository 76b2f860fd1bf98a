"""Tests for espacescan/modules/stats.py — query normalization and stats endpoints.

Uses respx to mock httpx calls (no real network I/O).
"""

from __future__ import annotations

import httpx
import pytest
import respx

from espacescan.api import MAINNET_HOST, ESpaceApi
from espacescan.exceptions import InvalidAddressError, NoResultError
from espacescan.models import StatsQueryWindow
from espacescan.modules.stats import (
    BASIC_SERIES,
    TOP_RANKINGS,
    StatsModule,
    normalize_stats_params,
)

CONTRACT = "0xfe97e85d13abd9c1c33384e796f10b73905637ce"


def series_resp(rows: list) -> dict:
    return {"status": "1", "message": "OK", "result": {"total": len(rows), "list": rows}}


# ── normalize_stats_params ────────────────────────────────────────────────────


def test_normalize_empty_defaults(frozen_now: int) -> None:
    window = normalize_stats_params({})
    assert isinstance(window, StatsQueryWindow)
    assert window.max_timestamp == frozen_now
    assert window.max_timestamp - window.min_timestamp == 86400
    assert (window.sort, window.skip, window.limit) == ("DESC", 0, 10)
    assert window.extra == {}


def test_normalize_none(frozen_now: int) -> None:
    assert normalize_stats_params(None) == normalize_stats_params({})


def test_normalize_passes_caller_values_through(frozen_now: int) -> None:
    window = normalize_stats_params({"limit": 500, "contract": "0xabc"})
    assert window.limit == 500
    assert window.extra == {"contract": "0xabc"}
    assert window.min_timestamp == frozen_now - 86400
    assert window.max_timestamp == frozen_now
    assert (window.sort, window.skip) == ("DESC", 0)


def test_normalize_does_not_validate(frozen_now: int) -> None:
    """Out-of-range values are the server's problem."""
    window = normalize_stats_params(
        {"limit": -5, "sort": "sideways", "min_timestamp": 10**12, "max_timestamp": 0}
    )
    assert window.limit == -5
    assert window.sort == "sideways"
    assert window.min_timestamp == 10**12
    assert window.max_timestamp == 0


def test_normalize_keeps_zero_skip(frozen_now: int) -> None:
    window = normalize_stats_params({"skip": 0, "limit": 0})
    assert (window.skip, window.limit) == (0, 0)


def test_normalize_accepts_camel_case(frozen_now: int) -> None:
    window = normalize_stats_params(
        {"minTimestamp": 1700000000, "maxTimestamp": 1700086400, "intervalType": "day"}
    )
    assert window.min_timestamp == 1700000000
    assert window.max_timestamp == 1700086400
    assert window.extra == {"intervalType": "day"}


def test_normalize_camel_cases_extra_keys(frozen_now: int) -> None:
    window = normalize_stats_params({"interval_type": "hour", "contract": None})
    assert window.extra == {"intervalType": "hour"}


def test_window_to_params(frozen_now: int) -> None:
    params = normalize_stats_params({"contract": CONTRACT}).to_params()
    assert params == {
        "minTimestamp": frozen_now - 86400,
        "maxTimestamp": frozen_now,
        "sort": "DESC",
        "skip": 0,
        "limit": 10,
        "contract": CONTRACT,
    }


# ── StatsModule ───────────────────────────────────────────────────────────────


@pytest.mark.asyncio
@respx.mock
async def test_get_series_sends_normalized_window(frozen_now: int) -> None:
    route = respx.get(f"{MAINNET_HOST}{BASIC_SERIES['transactions']}").mock(
        return_value=httpx.Response(200, json=series_resp([{"statTime": frozen_now, "count": "5"}]))
    )
    async with ESpaceApi() as api:
        data = await StatsModule(api).get_transaction_stats({"limit": 3})

    assert data["list"][0]["count"] == "5"
    params = route.calls.last.request.url.params
    assert params["limit"] == "3"
    assert params["sort"] == "DESC"
    assert params["skip"] == "0"
    assert params["minTimestamp"] == str(frozen_now - 86400)
    assert params["maxTimestamp"] == str(frozen_now)


@pytest.mark.asyncio
@respx.mock
async def test_get_token_holder_stats_sends_contract(frozen_now: int) -> None:
    route = respx.get(f"{MAINNET_HOST}/statistics/token/holder").mock(
        return_value=httpx.Response(200, json=series_resp([{"statTime": frozen_now, "count": "9"}]))
    )
    async with ESpaceApi() as api:
        await StatsModule(api).get_token_holder_stats(CONTRACT)

    assert route.calls.last.request.url.params["contract"] == CONTRACT


@pytest.mark.asyncio
async def test_token_series_requires_contract() -> None:
    async with ESpaceApi() as api:
        with pytest.raises(InvalidAddressError):
            await StatsModule(api).get_series("token-holders", {})


@pytest.mark.asyncio
async def test_unknown_series_and_ranking() -> None:
    async with ESpaceApi() as api:
        stats = StatsModule(api)
        with pytest.raises(ValueError):
            await stats.get_series("nope")
        with pytest.raises(ValueError):
            await stats.get_ranking("nope")


@pytest.mark.asyncio
@respx.mock
async def test_get_top_gas_used_sends_span() -> None:
    route = respx.get(f"{MAINNET_HOST}{TOP_RANKINGS['gas-used']}").mock(
        return_value=httpx.Response(
            200, json={"status": "1", "message": "OK", "result": {"list": [{"gas": "1"}]}}
        )
    )
    async with ESpaceApi() as api:
        data = await StatsModule(api).get_top_gas_used("7d")

    assert data == {"list": [{"gas": "1"}]}
    assert route.calls.last.request.url.params["spanType"] == "7d"


@pytest.mark.asyncio
@respx.mock
async def test_empty_result_raises_no_result() -> None:
    respx.get(f"{MAINNET_HOST}{TOP_RANKINGS['cfx-senders']}").mock(
        return_value=httpx.Response(200, json={"status": "0", "message": "NOTOK", "result": None})
    )
    async with ESpaceApi() as api:
        with pytest.raises(NoResultError):
            await StatsModule(api).get_top_cfx_senders()
