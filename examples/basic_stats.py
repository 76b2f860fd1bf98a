"""Basic statistics example.

This script demonstrates how to drive the espacescan CLI from another
program and read its JSON output.
"""

import json
import subprocess


def main():
    """Print daily transaction counts for the last week."""
    print("Fetching eSpace transaction stats for the last 7 days...")

    result = subprocess.run(
        ["espacescan", "stats", "transactions", "--interval", "day", "--limit", "7"],
        capture_output=True,
        text=True,
    )

    if result.returncode != 0:
        error = json.loads(result.stderr.strip().splitlines()[-1])
        print(f"Error ({result.returncode}): {error['message']}")
        return

    data = json.loads(result.stdout)
    for row in data["list"]:
        print(f"  {row['statTime']}  {row.get('count', '0'):>12} txs")


if __name__ == "__main__":
    main()
