"""Metaplex token-metadata adapter.

Builds the `Create` (V1) instruction of the token-metadata program for an
already initialized mint. The instruction data is the program's borsh
layout, written with `struct`:

    u8  instruction discriminator (Create = 42)
    u8  CreateArgs variant (V1 = 0)
    AssetData {
        string name, string symbol, string uri,
        u16 seller_fee_basis_points,
        Option<Vec<Creator{pubkey, bool verified, u8 share}>>,
        bool primary_sale_happened, bool is_mutable,
        u8 token_standard,
        Option<Collection>, Option<Uses>, Option<CollectionDetails>,
        Option<Pubkey> rule_set,
    }
    Option<u8> decimals
    Option<PrintSupply> print_supply

Strings are a little-endian u32 byte length followed by UTF-8 bytes; an
`Option` is a 0/1 tag byte followed by the value when present.
"""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Sequence

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from spl.token.constants import TOKEN_PROGRAM_ID

from mintkit.core.domain.models import Creator, TokenMetadataDescriptor

TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")
SYSVAR_INSTRUCTIONS_ID = Pubkey.from_string("Sysvar1nstructions1111111111111111111111111")

CREATE_DISCRIMINATOR = 42
CREATE_V1_VARIANT = 0

_NONE = b"\x00"
_SOME = b"\x01"


class TokenStandard(IntEnum):
    NON_FUNGIBLE = 0
    FUNGIBLE_ASSET = 1
    FUNGIBLE = 2
    NON_FUNGIBLE_EDITION = 3
    PROGRAMMABLE_NON_FUNGIBLE = 4
    PROGRAMMABLE_NON_FUNGIBLE_EDITION = 5


def find_metadata_pda(mint: Pubkey, program_id: Pubkey = TOKEN_METADATA_PROGRAM_ID) -> Pubkey:
    address, _bump = Pubkey.find_program_address(
        [b"metadata", bytes(program_id), bytes(mint)],
        program_id,
    )
    return address


def _string(value: str) -> bytes:
    raw = value.encode("utf-8")
    return struct.pack("<I", len(raw)) + raw


def _creators(creators: Sequence[Creator]) -> bytes:
    if not creators:
        return _NONE
    out = bytearray(_SOME)
    out += struct.pack("<I", len(creators))
    for creator in creators:
        out += bytes(Pubkey.from_string(creator.address))
        # Creators are always submitted unverified; each one signs later.
        out += struct.pack("<?B", False, creator.share)
    return bytes(out)


def encode_create_v1(
    *,
    name: str,
    symbol: str,
    uri: str,
    seller_fee_basis_points: int,
    creators: Sequence[Creator] = (),
    token_standard: TokenStandard = TokenStandard.FUNGIBLE,
    is_mutable: bool = True,
    primary_sale_happened: bool = False,
) -> bytes:
    """Serialize `Create { V1 }` args with no collection, uses or print supply."""

    data = bytearray(struct.pack("<BB", CREATE_DISCRIMINATOR, CREATE_V1_VARIANT))
    data += _string(name)
    data += _string(symbol)
    data += _string(uri)
    data += struct.pack("<H", seller_fee_basis_points)
    data += _creators(creators)
    data += struct.pack("<??B", primary_sale_happened, is_mutable, int(token_standard))
    data += _NONE  # collection
    data += _NONE  # uses
    data += _NONE  # collection_details
    data += _NONE  # rule_set
    data += _NONE  # decimals
    data += _NONE  # print_supply
    return bytes(data)


class MetaplexMetadataBuilder:
    """`MetadataBuilder` for the Metaplex token-metadata program."""

    def __init__(self, program_id: Pubkey = TOKEN_METADATA_PROGRAM_ID) -> None:
        self._program_id = program_id

    @property
    def program_id(self) -> Pubkey:
        return self._program_id

    def find_metadata_address(self, mint: Pubkey) -> Pubkey:
        return find_metadata_pda(mint, self._program_id)

    def build_create_instruction(
        self,
        *,
        mint: Pubkey,
        authority: Pubkey,
        payer: Pubkey,
        update_authority: Pubkey,
        descriptor: TokenMetadataDescriptor,
    ) -> Instruction:
        data = encode_create_v1(
            name=descriptor.name,
            symbol=descriptor.symbol,
            uri=descriptor.uri,
            seller_fee_basis_points=descriptor.seller_fee_basis_points,
            creators=descriptor.creators,
        )
        # Unused optional accounts (master edition) are passed as the program id.
        accounts = [
            AccountMeta(self.find_metadata_address(mint), is_signer=False, is_writable=True),
            AccountMeta(self._program_id, is_signer=False, is_writable=False),
            AccountMeta(mint, is_signer=False, is_writable=True),
            AccountMeta(authority, is_signer=True, is_writable=False),
            AccountMeta(payer, is_signer=True, is_writable=True),
            AccountMeta(update_authority, is_signer=True, is_writable=False),
            AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            AccountMeta(SYSVAR_INSTRUCTIONS_ID, is_signer=False, is_writable=False),
            AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        ]
        return Instruction(self._program_id, data, accounts)
