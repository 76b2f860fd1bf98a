"""Library usage example.

Uses ESpaceScannerWrapper directly: formatted values by default, raw wire
values with return_raw=True.
"""

import asyncio
import sys

from espacescan import ESpaceScannerWrapper
from espacescan.config import load_config
from espacescan.output import format_text


async def main(address: str) -> None:
    async with ESpaceScannerWrapper.from_config(load_config()) as wrapper:
        print("Balance:", await wrapper.account.get_balance(address))
        print("Raw balance (drip):", await wrapper.account.get_balance(address, return_raw=True))

        top = await wrapper.stats.get_ranking("cfx-senders", "24h", return_raw=True)
        print("\nTop CFX senders (24h):")
        print(format_text(top))


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit("usage: library_usage.py ADDRESS")
    asyncio.run(main(sys.argv[1]))
