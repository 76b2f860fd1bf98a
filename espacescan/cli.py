"""Click CLI entry point for espacescan.

All commands are thin orchestration wrappers: business logic lives in
api, modules, wrapper, formatters and output.

Exit codes:
  0 — success
  1 — no results / unexpected error
  2 — API error, rate limit, invalid key
  3 — network error
  4 — data error (invalid address, unparseable value)
  5 — config error
"""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click

from espacescan import __version__
from espacescan.config import (
    ESpaceScanConfig,
    load_config,
    resolve_config_path,
    save_config,
)
from espacescan.exceptions import ConfigMissingError, ESpaceScanError
from espacescan.logging_config import setup_logging
from espacescan.modules.account import DEFAULT_TAG
from espacescan.modules.stats import BASIC_SERIES, STATS_SPANS, TOKEN_SERIES, TOP_RANKINGS
from espacescan.output import VALID_FORMATS, format_output, mask_api_key
from espacescan.wrapper import ESpaceScannerWrapper

logger = logging.getLogger(__name__)


# ── Error handler ─────────────────────────────────────────────────────────────


def _output_error(err: ESpaceScanError | Exception) -> None:
    """Write error JSON to stderr and exit with the error's code."""
    if isinstance(err, ESpaceScanError):
        payload = err.to_dict()
        exit_code = err.exit_code
    else:
        payload = {"error": "unknown_error", "message": str(err), "details": {}}
        exit_code = 1
    sys.stderr.write(json.dumps(payload) + "\n")
    sys.stderr.flush()
    sys.exit(exit_code)


def _run(
    ctx: click.Context,
    call: Callable[[ESpaceScannerWrapper], Awaitable[Any]],
    title: str = "",
) -> None:
    """Run one wrapper call against a fresh client and echo the result."""
    config: ESpaceScanConfig = ctx.obj["config"]

    async def _go() -> Any:
        async with ESpaceScannerWrapper.from_config(config) as wrapper:
            return await call(wrapper)

    try:
        result = asyncio.run(_go())
    except ESpaceScanError as e:
        _output_error(e)
        return
    click.echo(format_output(result, ctx.obj["format"], title=title))


def _wants_raw(ctx: click.Context, raw: bool) -> bool:
    # The text report renders raw values itself
    return raw or ctx.obj["format"] == "text"


# ── Root group ────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    envvar="ESPACESCAN_CONFIG",
    default=None,
    help="Config file path (default: ~/.espacescan/config.toml)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(sorted(VALID_FORMATS)),
    default=None,
    help="Output format (overrides config default)",
)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging to stderr")
@click.pass_context
def cli(
    ctx: click.Context, config_path: str | None, output_format: str | None, verbose: bool
) -> None:
    """espacescan — Conflux eSpace explorer from the command line."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ESpaceScanError as e:
        # Fall back to defaults so `config init` can repair a broken file
        config = ESpaceScanConfig()
        ctx.obj["config_error"] = e

    setup_logging(config.logging.level, verbose=verbose)
    if "config_error" in ctx.obj:
        logger.warning("Ignoring invalid config: %s", ctx.obj["config_error"].message)

    ctx.obj["config"] = config
    ctx.obj["format"] = output_format or config.output.default_format
    ctx.obj["config_path"] = config_path


# ── Account commands ──────────────────────────────────────────────────────────


@cli.command("balance")
@click.argument("addresses", nargs=-1, required=True)
@click.option("--tag", default=DEFAULT_TAG, show_default=True, help="Epoch tag")
@click.option("--raw", is_flag=True, help="Balance in drip instead of CFX")
@click.pass_context
def balance_command(ctx: click.Context, addresses: tuple[str, ...], tag: str, raw: bool) -> None:
    """CFX balance of one or more addresses."""

    async def call(wrapper: ESpaceScannerWrapper) -> Any:
        if len(addresses) == 1:
            balance = await wrapper.account.get_balance(addresses[0], tag, return_raw=raw)
            return {"address": addresses[0], "balance": balance}
        return await wrapper.account.get_balance_multi(list(addresses), tag, return_raw=raw)

    _run(ctx, call, title="Balances")


@cli.command("txlist")
@click.argument("address")
@click.option("--page", type=click.IntRange(1), default=None)
@click.option("--offset", type=click.IntRange(1), default=None, help="Rows per page")
@click.option("--sort", type=click.Choice(["asc", "desc"]), default=None)
@click.option("--raw", is_flag=True, help="Unformatted values")
@click.pass_context
def txlist_command(
    ctx: click.Context, address: str, page: int | None, offset: int | None, sort: str | None, raw: bool
) -> None:
    """Transactions sent from or to an address."""
    _run(
        ctx,
        lambda w: w.account.get_transaction_list(
            address, return_raw=raw, page=page, offset=offset, sort=sort
        ),
        title=f"Transactions of {address}",
    )


@cli.command("transfers")
@click.option("--address", default=None, help="Holder address")
@click.option("--contract", default=None, help="Token contract address")
@click.option("--page", type=click.IntRange(1), default=None)
@click.option("--offset", type=click.IntRange(1), default=None, help="Rows per page")
@click.option("--raw", is_flag=True, help="Unformatted values")
@click.pass_context
def transfers_command(
    ctx: click.Context,
    address: str | None,
    contract: str | None,
    page: int | None,
    offset: int | None,
    raw: bool,
) -> None:
    """ERC-20 transfers of a holder and/or a token contract."""
    _run(
        ctx,
        lambda w: w.account.get_token_transfers(
            return_raw=raw, address=address, contract_address=contract, page=page, offset=offset
        ),
        title="Token transfers",
    )


# ── Token and contract commands ───────────────────────────────────────────────


@cli.group("token")
def token_group() -> None:
    """ERC-20 token balances and supply."""


@token_group.command("balance")
@click.argument("address")
@click.argument("contract")
@click.option("--decimals", type=click.IntRange(0), default=18, show_default=True)
@click.option("--raw", is_flag=True, help="Balance in the token's smallest unit")
@click.pass_context
def token_balance(ctx: click.Context, address: str, contract: str, decimals: int, raw: bool) -> None:
    """Token balance of ADDRESS for the token at CONTRACT."""

    async def call(wrapper: ESpaceScannerWrapper) -> Any:
        balance = await wrapper.token.get_token_balance(address, contract, decimals, return_raw=raw)
        return {"address": address, "contract": contract, "balance": balance}

    _run(ctx, call)


@token_group.command("supply")
@click.argument("contract")
@click.option("--decimals", type=click.IntRange(0), default=18, show_default=True)
@click.option("--raw", is_flag=True, help="Supply in the token's smallest unit")
@click.pass_context
def token_supply(ctx: click.Context, contract: str, decimals: int, raw: bool) -> None:
    """Total supply of the token at CONTRACT."""

    async def call(wrapper: ESpaceScannerWrapper) -> Any:
        supply = await wrapper.token.get_token_supply(contract, decimals, return_raw=raw)
        return {"contract": contract, "supply": supply}

    _run(ctx, call)


@cli.group("contract")
def contract_group() -> None:
    """Verified contract metadata."""


@contract_group.command("abi")
@click.argument("address")
@click.pass_context
def contract_abi(ctx: click.Context, address: str) -> None:
    """Decoded ABI of a verified contract."""
    _run(ctx, lambda w: w.contract.get_abi(address))


@contract_group.command("source")
@click.argument("address")
@click.option("--raw", is_flag=True)
@click.pass_context
def contract_source(ctx: click.Context, address: str, raw: bool) -> None:
    """Source code record of a verified contract."""
    _run(ctx, lambda w: w.contract.get_source_code(address, return_raw=raw))


# ── Statistics commands ───────────────────────────────────────────────────────


@cli.command("stats")
@click.argument("series", type=click.Choice(sorted([*BASIC_SERIES, *TOKEN_SERIES])))
@click.option("--min-ts", "min_timestamp", type=int, default=None, help="Window start (unix s)")
@click.option("--max-ts", "max_timestamp", type=int, default=None, help="Window end (unix s)")
@click.option("--limit", type=int, default=None, help="Rows (default 10)")
@click.option("--skip", type=int, default=None, help="Rows to skip (default 0)")
@click.option("--sort", type=click.Choice(["ASC", "DESC"], case_sensitive=False), default=None)
@click.option("--interval", "interval_type", default=None, help="Bucket size: min, hour, day, month")
@click.option("--contract", default=None, help="Token contract (token-* series)")
@click.option("--raw", is_flag=True, help="Unformatted values")
@click.pass_context
def stats_command(
    ctx: click.Context,
    series: str,
    min_timestamp: int | None,
    max_timestamp: int | None,
    limit: int | None,
    skip: int | None,
    sort: str | None,
    interval_type: str | None,
    contract: str | None,
    raw: bool,
) -> None:
    """Time-series statistics. The window defaults to the last 24 hours."""
    params = {
        "min_timestamp": min_timestamp,
        "max_timestamp": max_timestamp,
        "limit": limit,
        "skip": skip,
        "sort": sort,
        "interval_type": interval_type,
        "contract": contract,
    }
    _run(
        ctx,
        lambda w: w.stats.get_series(series, params, return_raw=_wants_raw(ctx, raw)),
        title=series,
    )


@cli.command("top")
@click.argument("ranking", type=click.Choice(sorted(TOP_RANKINGS)))
@click.option("--span", type=click.Choice(STATS_SPANS), default="24h", show_default=True)
@click.option("--raw", is_flag=True, help="Unformatted values")
@click.pass_context
def top_command(ctx: click.Context, ranking: str, span: str, raw: bool) -> None:
    """Top-N rankings over the last 24h, 3d or 7d."""
    _run(
        ctx,
        lambda w: w.stats.get_ranking(ranking, span, return_raw=_wants_raw(ctx, raw)),
        title=f"Top {ranking} ({span})",
    )


# ── Config commands ───────────────────────────────────────────────────────────


@cli.group("config")
def config_group() -> None:
    """Manage espacescan configuration."""


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite existing config")
@click.option("--target", type=click.Choice(["mainnet", "testnet"]), default="mainnet")
@click.option("--api-key", default="", help="Explorer API key")
@click.pass_context
def config_init(ctx: click.Context, force: bool, target: str, api_key: str) -> None:
    """Initialize default config at ~/.espacescan/config.toml."""
    config_path = resolve_config_path(ctx.obj.get("config_path"))

    if config_path.exists() and not force:
        click.echo(
            json.dumps(
                {
                    "status": "already_exists",
                    "config_path": str(config_path),
                    "hint": "Use --force to reinitialize",
                }
            )
        )
        return

    status = "initialized"
    backup = None
    if config_path.exists():
        backup = str(config_path) + ".bak"
        shutil.copy2(config_path, backup)
        status = "reinitialized"

    config = ESpaceScanConfig()
    config.api.target = target
    config.api.api_key = api_key
    save_config(config, str(config_path))

    result: dict[str, Any] = {"status": status, "config_path": str(config_path)}
    if backup:
        result["backup"] = backup
    click.echo(json.dumps(result))


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration (API key masked)."""
    config_path: Path = resolve_config_path(ctx.obj.get("config_path"))
    if "config_error" in ctx.obj:
        _output_error(ctx.obj["config_error"])
    if not config_path.exists():
        _output_error(
            ConfigMissingError(
                f"No config file at {config_path}. Run `espacescan config init`.",
                details={"config_path": str(config_path)},
            )
        )

    config: ESpaceScanConfig = ctx.obj["config"]
    result = {
        "config_path": str(config_path),
        "api": {
            "target": config.api.target,
            "api_key": mask_api_key(config.api.api_key),
            "host": config.api.host,
            "timeout": config.api.timeout,
        },
        "output": {
            "default_format": config.output.default_format,
            "color": config.output.color,
        },
        "logging": {"level": config.logging.level},
    }
    click.echo(format_output(result, "json"))


if __name__ == "__main__":
    cli()
