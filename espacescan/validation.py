"""Address format checks. No checksum validation, no network calls."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

# eSpace address regex (0x + 40 hex chars)
ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_address(address: str) -> bool:
    """True if address is 0x followed by 40 hex characters."""
    valid = isinstance(address, str) and bool(ADDRESS_RE.match(address))
    if not valid:
        logger.debug("Invalid eSpace address: %r", address)
    return valid


def validate_addresses(addresses: Iterable[str]) -> bool:
    """True only if every address is valid. An empty list is invalid."""
    addresses = list(addresses)
    return bool(addresses) and all(validate_address(a) for a in addresses)
