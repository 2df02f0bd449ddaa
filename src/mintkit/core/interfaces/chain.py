"""Contracts for the chain RPC collaborator.

Why Protocol:
- Structural contracts (duck typing) without rigid inheritance.
- The Solana adapter and the in-memory test doubles are interchangeable
  without coupling the Core to solana-py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from mintkit.core.domain.models import ChainVersion, EpochSnapshot, SupplySnapshot


@dataclass(frozen=True)
class AssociatedTokenAccount:
    """Resolved associated token account for an (owner, mint) pair."""

    address: Pubkey
    created: bool
    signature: str | None = None


@runtime_checkable
class ChainStatusReader(Protocol):
    """Read-only queries used by the connectivity probe."""

    async def get_slot(self) -> int: ...

    async def get_block_height(self) -> int: ...

    async def get_epoch_info(self) -> EpochSnapshot: ...

    async def get_version(self) -> ChainVersion: ...

    async def get_supply(self) -> SupplySnapshot: ...

    async def get_latest_blockhash(self) -> str: ...


@runtime_checkable
class TokenLedger(Protocol):
    """Mutating token operations used by the issuance workflow.

    Design rules:
    - Every method submits (at most) one transaction and waits for it.
    - Methods return transaction signatures as base58 strings.
    """

    async def create_mint(
        self,
        *,
        payer: Keypair,
        mint: Keypair,
        mint_authority: Pubkey,
        decimals: int,
        freeze_authority: Pubkey | None = None,
    ) -> str:
        """Create and initialize `mint`; returns the transaction signature."""

        ...

    async def get_or_create_associated_token_account(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        owner: Pubkey,
    ) -> AssociatedTokenAccount:
        """Resolve the owner's associated account, creating it only if absent."""

        ...

    async def mint_to(
        self,
        *,
        payer: Keypair,
        mint: Pubkey,
        destination: Pubkey,
        authority: Keypair,
        amount: int,
    ) -> str: ...

    async def send_instructions(
        self,
        instructions: Sequence[Instruction],
        signers: Sequence[Keypair],
    ) -> str:
        """Sign with `signers` (the first one pays) and submit."""

        ...
