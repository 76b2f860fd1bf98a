"""Base class shared by the raw accessor modules."""

from __future__ import annotations

import logging
from typing import Any

from espacescan.api import ESpaceApi
from espacescan.exceptions import InvalidAddressError, NoResultError
from espacescan.validation import validate_address

logger = logging.getLogger(__name__)


class BaseModule:
    """
    Raw accessor over one group of explorer endpoints.

    Modules are responsible for:
    - Validating addresses before any request is made
    - Building query params and calling ESpaceApi.fetch_api
    - Returning the decoded `result` payload untouched

    Modules are NOT responsible for:
    - Display formatting (that's the wrapper layer)
    - Transport errors (that's api.py)
    """

    def __init__(self, api: ESpaceApi) -> None:
        self._api = api

    def _require_address(self, address: str, what: str = "address") -> None:
        if not validate_address(address):
            raise InvalidAddressError(
                f"Invalid {what}: {address!r}. Must be 0x + 40 hex chars.",
                details={what: address},
            )

    async def _fetch_result(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        data = await self._api.fetch_api(endpoint, params)
        return data.get("result")

    async def _fetch_required(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        result = await self._fetch_result(endpoint, params)
        if not result:
            logger.error("No result returned for %s", endpoint)
            raise NoResultError(f"No result returned for {endpoint}", details={"endpoint": endpoint})
        return result
