"""`issue` command: create the token, mint the supply, attach metadata.

Single top-level handler:
- `TokenCreationError` (configuration/descriptor problems) -> short message.
- anything else (RPC, SDK, transport) -> full traceback.
Both exit with status 1.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from mintkit.adapters.solana_rpc import SolanaTokenLedger, build_async_client
from mintkit.adapters.token_metadata import MetaplexMetadataBuilder
from mintkit.cli.log import configure_logging
from mintkit.cli.ui_components import build_summary_table, print_banner
from mintkit.core.config import IssuanceConfig, load_settings
from mintkit.core.domain.models import IssuanceResult
from mintkit.core.domain.stages import IssuanceStage
from mintkit.core.errors import TokenCreationError
from mintkit.core.services.issuance import IssuanceHooks, issue_token

logger = logging.getLogger(__name__)

_console = Console()

_COMPLETED_LABELS: dict[IssuanceStage, str] = {
    IssuanceStage.CREATE_MINT: "Token Mint Address",
    IssuanceStage.TOKEN_ACCOUNT: "Token Account",
    IssuanceStage.MINT_SUPPLY: "Tokens minted successfully",
    IssuanceStage.LOAD_METADATA: "Metadata loaded",
    IssuanceStage.CREATE_METADATA: "Metadata Transaction",
}


def _stage_started(stage: IssuanceStage) -> None:
    _console.print(stage.label())


def _stage_completed(stage: IssuanceStage, detail: str) -> None:
    _console.print(f"[green]✅ {_COMPLETED_LABELS[stage]}:[/green] {detail}")


async def _run_issue(config: IssuanceConfig) -> IssuanceResult:
    async with build_async_client(
        config.rpc_url,
        commitment=config.commitment,
        timeout_seconds=config.timeout_seconds,
    ) as client:
        return await issue_token(
            config=config,
            ledger=SolanaTokenLedger(client, commitment=config.commitment),
            metadata_builder=MetaplexMetadataBuilder(),
            hooks=IssuanceHooks(stage_started=_stage_started, stage_completed=_stage_completed),
        )


def issue() -> None:
    """Mint a new fungible token and attach on-chain metadata."""

    configure_logging()
    print_banner(_console, "Solana token issuance")
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        config = IssuanceConfig.from_settings(settings)
        logger.info("issuing %s tokens as %s", f"{config.token_supply:,}", config.owner)
        result = asyncio.run(_run_issue(config))
    except TokenCreationError as exc:
        logger.error("Token Creation Error: %s", exc)
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.exception("Unexpected Error: %s", exc)
        raise typer.Exit(code=1) from exc

    _console.print("\n[bold green]Token Creation Complete![/bold green]")
    _console.print(build_summary_table(result))
