"""Token issuance workflow.

The CLI validates configuration and owns the RPC client; this module only
sequences the remote stages and reports progress through hooks, which keeps
printing out of the workflow and lets tests drive it with in-memory
collaborators.

Stages run strictly in order and any failure aborts the rest. Nothing is
rolled back: a mint created before a later failure stays on chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from solders.keypair import Keypair

from mintkit.adapters.descriptor_loader import load_metadata_descriptor
from mintkit.core.config import IssuanceConfig
from mintkit.core.domain.models import IssuanceResult, TokenMetadataDescriptor
from mintkit.core.domain.stages import IssuanceStage
from mintkit.core.interfaces.chain import TokenLedger
from mintkit.core.interfaces.metadata import MetadataBuilder

logger = logging.getLogger(__name__)


@dataclass
class IssuanceHooks:
    """Optional callbacks for UI layers."""

    stage_started: Callable[[IssuanceStage], None] | None = None
    stage_completed: Callable[[IssuanceStage, str], None] | None = None


def _started(hooks: IssuanceHooks, stage: IssuanceStage) -> None:
    logger.debug("stage %s started", stage.value)
    if hooks.stage_started:
        hooks.stage_started(stage)


def _completed(hooks: IssuanceHooks, stage: IssuanceStage, detail: str) -> None:
    logger.info("stage %s completed: %s", stage.value, detail)
    if hooks.stage_completed:
        hooks.stage_completed(stage, detail)


async def issue_token(
    *,
    config: IssuanceConfig,
    ledger: TokenLedger,
    metadata_builder: MetadataBuilder,
    hooks: IssuanceHooks | None = None,
    mint_keypair: Keypair | None = None,
    load_descriptor: Callable[[Path], TokenMetadataDescriptor] = load_metadata_descriptor,
) -> IssuanceResult:
    """Create a fungible token, mint its supply and attach metadata.

    `mint_keypair` exists for tests; production runs always get a freshly
    generated keypair, so every run yields a new mint address.
    """

    hooks = hooks or IssuanceHooks()
    signer = config.signer
    owner = config.owner
    mint = mint_keypair or Keypair()
    mint_address = mint.pubkey()

    _started(hooks, IssuanceStage.CREATE_MINT)
    mint_signature = await ledger.create_mint(
        payer=signer,
        mint=mint,
        mint_authority=owner,
        decimals=config.decimals,
        freeze_authority=None,
    )
    _completed(hooks, IssuanceStage.CREATE_MINT, str(mint_address))

    _started(hooks, IssuanceStage.TOKEN_ACCOUNT)
    token_account = await ledger.get_or_create_associated_token_account(
        payer=signer,
        mint=mint_address,
        owner=owner,
    )
    if not token_account.created:
        logger.info("reusing existing token account %s", token_account.address)
    _completed(hooks, IssuanceStage.TOKEN_ACCOUNT, str(token_account.address))

    _started(hooks, IssuanceStage.MINT_SUPPLY)
    mint_to_signature = await ledger.mint_to(
        payer=signer,
        mint=mint_address,
        destination=token_account.address,
        authority=signer,
        amount=config.raw_amount,
    )
    _completed(hooks, IssuanceStage.MINT_SUPPLY, mint_to_signature)

    _started(hooks, IssuanceStage.LOAD_METADATA)
    descriptor = load_descriptor(config.metadata_path)
    _completed(hooks, IssuanceStage.LOAD_METADATA, f"{descriptor.name} ({descriptor.symbol})")

    _started(hooks, IssuanceStage.CREATE_METADATA)
    metadata_address = metadata_builder.find_metadata_address(mint_address)
    instruction = metadata_builder.build_create_instruction(
        mint=mint_address,
        authority=owner,
        payer=owner,
        update_authority=owner,
        descriptor=descriptor,
    )
    metadata_signature = await ledger.send_instructions([instruction], [signer])
    _completed(hooks, IssuanceStage.CREATE_METADATA, metadata_signature)

    return IssuanceResult(
        mint_address=str(mint_address),
        token_account=str(token_account.address),
        token_account_created=token_account.created,
        owner=str(owner),
        supply=config.token_supply,
        raw_amount=config.raw_amount,
        decimals=config.decimals,
        mint_signature=mint_signature,
        token_account_signature=token_account.signature,
        mint_to_signature=mint_to_signature,
        metadata_address=str(metadata_address),
        metadata_signature=metadata_signature,
        descriptor=descriptor,
    )
