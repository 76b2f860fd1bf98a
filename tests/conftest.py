"""Pytest fixtures shared across all espacescan tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import pytest

from espacescan import logging_config
from espacescan.api import MAINNET_HOST, ESpaceApi
from espacescan.config import APIConfig, ESpaceScanConfig, LoggingConfig, OutputConfig
from espacescan.formatters import dates

# 2024-02-07 12:00:00 UTC
FROZEN_NOW = 1707307200

ADDR = "0x1234567890abcdef1234567890abcdef12345678"
ADDR_2 = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
TOKEN_CONTRACT = "0xfe97e85d13abd9c1c33384e796f10b73905637ce"

API_URL = f"{MAINNET_HOST}/api"
TEST_API_KEY = "test_api_key_12345"


def ok(result: Any) -> dict[str, Any]:
    """Explorer success envelope."""
    return {"status": "1", "message": "OK", "result": result}


# ── Clock ─────────────────────────────────────────────────────────────────────


@pytest.fixture
def frozen_now(monkeypatch: pytest.MonkeyPatch) -> int:
    """Freeze the formatter clock at FROZEN_NOW."""
    monkeypatch.setattr(dates, "_clock", lambda: FROZEN_NOW)
    return FROZEN_NOW


# ── Config fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def sample_config() -> ESpaceScanConfig:
    """Minimal valid ESpaceScanConfig for tests."""
    return ESpaceScanConfig(
        api=APIConfig(target="mainnet", api_key=TEST_API_KEY, host="", timeout=5.0),
        output=OutputConfig(default_format="json", color=False),
        logging=LoggingConfig(level="WARNING"),
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own ESPACESCAN_* settings out of the tests."""
    for var in (
        "ESPACESCAN_CONFIG",
        "ESPACESCAN_CONFIG_PATH",
        "ESPACESCAN_TARGET",
        "ESPACESCAN_API_KEY",
        "ESPACESCAN_HOST",
        "ESPACESCAN_TIMEOUT",
        "ESPACESCAN_OUTPUT_FORMAT",
        "ESPACESCAN_LOG_LEVEL",
        "ESPACESCAN_NO_COLOR",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def api() -> ESpaceApi:
    """Mainnet client with a test key; requests are mocked with respx."""
    return ESpaceApi(target="mainnet", api_key=TEST_API_KEY)


# ── Sample payloads ───────────────────────────────────────────────────────────


@pytest.fixture
def sample_tx() -> dict[str, Any]:
    return {
        "hash": "0xabc",
        "blockNumber": "90000001",
        "timeStamp": "1707307200",
        "from": ADDR,
        "to": ADDR_2,
        "value": "1500000000000000000",
        "gas": "21000",
        "gasPrice": "20000000000",
        "gasUsed": "21000",
        "cumulativeGasUsed": "1234567",
        "isError": "0",
    }


@pytest.fixture
def sample_series() -> dict[str, Any]:
    return {
        "total": 2,
        "list": [
            {"statTime": "2024-02-07T00:00:00Z", "count": "123456"},
            {"statTime": "2024-02-06T00:00:00Z", "count": "98765"},
        ],
    }


@pytest.fixture
def sample_top_gas() -> dict[str, Any]:
    return {
        "gasTotal": "1500000000000",
        "maxTime": "2024-02-07T12:00:00Z",
        "list": [
            {"address": ADDR, "gas": "1000000000000"},
            {"address": ADDR_2, "gas": "500000000000"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Detach the CLI's stderr handler so it never outlives a CliRunner stream."""
    yield
    handler = logging_config._HANDLER
    if handler is not None:
        logging.getLogger("espacescan").removeHandler(handler)
        logging_config._HANDLER = None
    logging.getLogger("espacescan").setLevel(logging.NOTSET)
