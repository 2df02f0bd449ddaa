"""Solana RPC adapter (solana-py + solders).

Responsibility:
- Build the async RPC client with the configured commitment/timeout.
- Implement `ChainStatusReader` and `TokenLedger` on top of it, returning
  domain models and base58 signatures.

Transactions are signed locally with `Transaction.new_signed_with_payer`
and submitted raw; `TxOpts(skip_confirmation=False)` makes solana-py wait
for the configured commitment before returning.
"""

from __future__ import annotations

import logging
from typing import Sequence

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.types import TxOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountParams, create_account
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    InitializeMintParams,
    MintToParams,
    create_associated_token_account,
    get_associated_token_address,
    initialize_mint,
    mint_to,
)

from mintkit.core.domain.models import ChainVersion, EpochSnapshot, SupplySnapshot
from mintkit.core.interfaces.chain import AssociatedTokenAccount

logger = logging.getLogger(__name__)

# Size of an SPL Token mint account.
MINT_ACCOUNT_SIZE = 82


def build_async_client(
    rpc_url: str,
    *,
    commitment: str = "confirmed",
    timeout_seconds: float = 30.0,
) -> AsyncClient:
    """Create an `AsyncClient`; use it as an async context manager."""

    return AsyncClient(rpc_url, commitment=Commitment(commitment), timeout=timeout_seconds)


class SolanaStatusReader:
    """`ChainStatusReader` backed by JSON-RPC."""

    def __init__(self, client: AsyncClient, *, commitment: str = "confirmed") -> None:
        self._client = client
        self._commitment = Commitment(commitment)

    async def get_slot(self) -> int:
        resp = await self._client.get_slot(commitment=self._commitment)
        return resp.value

    async def get_block_height(self) -> int:
        resp = await self._client.get_block_height(commitment=self._commitment)
        return resp.value

    async def get_epoch_info(self) -> EpochSnapshot:
        resp = await self._client.get_epoch_info(commitment=self._commitment)
        info = resp.value
        return EpochSnapshot(
            epoch=info.epoch,
            slot_index=info.slot_index,
            slots_in_epoch=info.slots_in_epoch,
            absolute_slot=info.absolute_slot,
        )

    async def get_version(self) -> ChainVersion:
        resp = await self._client.get_version()
        return ChainVersion(solana_core=resp.value.solana_core, feature_set=resp.value.feature_set)

    async def get_supply(self) -> SupplySnapshot:
        resp = await self._client.get_supply(commitment=self._commitment)
        supply = resp.value
        return SupplySnapshot(
            total=supply.total,
            circulating=supply.circulating,
            non_circulating=supply.non_circulating,
        )

    async def get_latest_blockhash(self) -> str:
        resp = await self._client.get_latest_blockhash(commitment=self._commitment)
        return str(resp.value.blockhash)


class SolanaTokenLedger:
    """`TokenLedger` for the classic SPL Token program."""

    def __init__(self, client: AsyncClient, *, commitment: str = "confirmed") -> None:
        self._client = client
        self._commitment = Commitment(commitment)

    async def send_instructions(
        self,
        instructions: Sequence[Instruction],
        signers: Sequence[Keypair],
    ) -> str:
        if not signers:
            raise ValueError("at least one signer (the fee payer) is required")
        latest = await self._client.get_latest_blockhash(commitment=self._commitment)
        tx = Transaction.new_signed_with_payer(
            list(instructions),
            signers[0].pubkey(),
            list(signers),
            latest.value.blockhash,
        )
        opts = TxOpts(
            skip_confirmation=False,
            preflight_commitment=self._commitment,
            last_valid_block_height=latest.value.last_valid_block_height,
        )
        resp = await self._client.send_raw_transaction(bytes(tx), opts=opts)
        signature = str(resp.value)
        logger.debug("transaction %s confirmed (%d instructions)", signature, len(instructions))
        return signature

    async def create_mint(
        self,
        *,
        payer: Keypair,
        mint: Keypair,
        mint_authority: Pubkey,
        decimals: int,
        freeze_authority: Pubkey | None = None,
    ) -> str:
        rent = await self._client.get_minimum_balance_for_rent_exemption(
            MINT_ACCOUNT_SIZE, commitment=self._commitment
        )
        create_ix = create_account(
            CreateAccountParams(
                from_pubkey=payer.pubkey(),
                to_pubkey=mint.pubkey(),
                lamports=rent.value,
                space=MINT_ACCOUNT_SIZE,
                owner=TOKEN_PROGRAM_ID,
            )
        )
        init_ix = initialize_mint(
            InitializeMintParams(
                decimals=decimals,
                program_id=TOKEN_PROGRAM_ID,
                mint=mint.pubkey(),
                mint_authority=mint_authority,
                freeze_authority=freeze_authority,
            )
        )
        return await self.send_instructions([create_ix, init_ix], [payer, mint])

    async def get_or_create_associated_token_account(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        owner: Pubkey,
    ) -> AssociatedTokenAccount:
        address = get_associated_token_address(owner, mint)
        existing = await self._client.get_account_info(address, commitment=self._commitment)
        if existing.value is not None:
            return AssociatedTokenAccount(address=address, created=False)

        ix = create_associated_token_account(payer.pubkey(), owner, mint)
        signature = await self.send_instructions([ix], [payer])
        return AssociatedTokenAccount(address=address, created=True, signature=signature)

    async def mint_to(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        destination: Pubkey,
        authority: Keypair,
        amount: int,
    ) -> str:
        ix = mint_to(
            MintToParams(
                program_id=TOKEN_PROGRAM_ID,
                mint=mint,
                dest=destination,
                mint_authority=authority.pubkey(),
                amount=amount,
            )
        )
        signers = [payer] if authority.pubkey() == payer.pubkey() else [payer, authority]
        return await self.send_instructions([ix], signers)
