"""Contract for the token-metadata instruction builder."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from mintkit.core.domain.models import TokenMetadataDescriptor


@runtime_checkable
class MetadataBuilder(Protocol):
    """Builds (but does not submit) metadata-creation instructions."""

    def find_metadata_address(self, mint: Pubkey) -> Pubkey: ...

    def build_create_instruction(
        self,
        *,
        mint: Pubkey,
        authority: Pubkey,
        payer: Pubkey,
        update_authority: Pubkey,
        descriptor: TokenMetadataDescriptor,
    ) -> Instruction:
        """Instruction creating the metadata account of a fungible `mint`."""

        ...
