"""
Conflux eSpace explorer API client — HTTP transport.

Every accessor module goes through ESpaceApi.fetch_api, which returns the
decoded `{"status", "message", "result"}` envelope untouched.

API docs: https://evmapi.confluxscan.io/doc

Design decisions:
- Uses async httpx for all HTTP calls; one AsyncClient shared by all modules.
- None-valued query params are dropped; the API key rides as `apiKey`.
- HTTP and transport failures raise; a non-"1" status is only logged,
  callers decide whether an empty result is an error.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from espacescan.exceptions import (
    APIError,
    ConnectionFailedError,
    InvalidAPIKeyError,
    NetworkTimeoutError,
    RateLimitError,
)

logger = logging.getLogger(__name__)

MAINNET_HOST = "https://evmapi.confluxscan.io"
TESTNET_HOST = "https://evmapi-testnet.confluxscan.io"
HOSTS = {"mainnet": MAINNET_HOST, "testnet": TESTNET_HOST}

DEFAULT_TIMEOUT = 30.0


class ESpaceApi:
    """
    Async client for the eSpace explorer REST API.

    Usage:
        async with ESpaceApi(target="testnet") as api:
            data = await api.fetch_api("/api", {"module": "account", ...})
    """

    def __init__(
        self,
        target: str = "mainnet",
        api_key: str = "",
        host: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not host and target not in HOSTS:
            raise ValueError(f"Unknown target {target!r}. Valid: {sorted(HOSTS)}")
        self.target = target
        self.base_url = (host or HOSTS[target]).rstrip("/")
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout)
        logger.debug("API client initialized target=%s host=%s", target, self.base_url)

    @classmethod
    def from_config(cls, config: Any) -> ESpaceApi:
        """Build from an ESpaceScanConfig."""
        return cls(
            target=config.api.target,
            api_key=config.api.api_key,
            host=config.api.host or None,
            timeout=config.api.timeout,
        )

    async def fetch_api(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        GET `endpoint` with `params` and return the decoded JSON envelope.

        Raises:
            NetworkTimeoutError / ConnectionFailedError: transport failure
            RateLimitError: HTTP 429 or "Max rate limit reached"
            InvalidAPIKeyError: the explorer rejected the API key
            APIError: any other HTTP error or a non-JSON body
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if self._api_key:
            query["apiKey"] = self._api_key

        url = f"{self.base_url}{endpoint}"
        logger.debug("GET %s params=%s", url, _redact(query))
        try:
            resp = await self._client.get(url, params=query)
        except httpx.TimeoutException as e:
            raise NetworkTimeoutError(f"Explorer timeout on {endpoint}: {e}") from e
        except httpx.ConnectError as e:
            raise ConnectionFailedError(f"Cannot connect to {self.base_url}: {e}") from e

        if resp.status_code == 429:
            raise RateLimitError("Explorer rate limit exceeded", retry_after=60)
        if resp.status_code >= 400:
            logger.error("API request failed endpoint=%s status=%s", endpoint, resp.status_code)
            raise APIError(
                f"HTTP error! status: {resp.status_code}",
                details={"endpoint": endpoint, "status": resp.status_code},
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON from {endpoint}", details={"endpoint": endpoint}) from e
        if not isinstance(data, dict):
            raise APIError(f"Unexpected response shape from {endpoint}", details={"endpoint": endpoint})

        if str(data.get("status")) != "1":
            result = data.get("result", "")
            if "Invalid API Key" in str(result):
                raise InvalidAPIKeyError("Explorer API key is invalid")
            if result == "Max rate limit reached":
                raise RateLimitError("Explorer rate limit exceeded", retry_after=60)
            logger.warning(
                "API returned error endpoint=%s message=%s", endpoint, data.get("message")
            )

        return data

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ESpaceApi:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()


def _redact(query: dict[str, Any]) -> dict[str, Any]:
    if "apiKey" in query:
        return {**query, "apiKey": "****"}
    return query
