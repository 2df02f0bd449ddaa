"""`probe` command: RPC connectivity check."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from mintkit.adapters.solana_rpc import SolanaStatusReader, build_async_client
from mintkit.cli.log import configure_logging
from mintkit.cli.ui_components import format_probe_value
from mintkit.core.config import ProbeConfig, load_settings
from mintkit.core.domain.models import ChainStatus
from mintkit.core.errors import TokenCreationError
from mintkit.core.services.connectivity import ProbeHooks, probe_chain

logger = logging.getLogger(__name__)

_console = Console()


def _print_result(label: str, value: object) -> None:
    _console.print(f"[bright_green]{label}:[/bright_green] {format_probe_value(value)}")


async def _run_probe(config: ProbeConfig) -> ChainStatus:
    async with build_async_client(
        config.rpc_url,
        commitment=config.commitment,
        timeout_seconds=config.timeout_seconds,
    ) as client:
        reader = SolanaStatusReader(client, commitment=config.commitment)
        return await probe_chain(reader, ProbeHooks(result=_print_result))


def probe() -> None:
    """Query slot, block height, epoch, version, supply and latest blockhash."""

    configure_logging()
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        config = ProbeConfig.from_settings(settings)
        _console.print("Testing RPC connection...")
        asyncio.run(_run_probe(config))
    except TokenCreationError as exc:
        logger.error("Configuration error: %s", exc)
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.exception("Error testing RPC connection: %s", exc)
        raise typer.Exit(code=1) from exc

    _console.print("\n[bold green]RPC Connection Test Successful![/bold green]")
