import struct
import unittest

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from spl.token.constants import TOKEN_PROGRAM_ID

from mintkit.adapters.token_metadata import (
    SYSVAR_INSTRUCTIONS_ID,
    TOKEN_METADATA_PROGRAM_ID,
    MetaplexMetadataBuilder,
    TokenStandard,
    encode_create_v1,
    find_metadata_pda,
)
from mintkit.core.domain.models import Creator, TokenMetadataDescriptor


def _descriptor(**overrides: object) -> TokenMetadataDescriptor:
    data: dict = {
        "name": "Example Token",
        "symbol": "EXMPL",
        "description": "Example fungible token.",
        "image": "https://example.com/token.png",
        "external_url": "https://example.com",
    }
    data.update(overrides)
    return TokenMetadataDescriptor.from_mapping(data)


class EncodeCreateV1Tests(unittest.TestCase):
    def test_layout_without_creators(self) -> None:
        data = encode_create_v1(
            name="Example Token",
            symbol="EXMPL",
            uri="https://example.com",
            seller_fee_basis_points=500,
        )
        self.assertEqual(data[:2], bytes([42, 0]))

        offset = 2
        for text in ("Example Token", "EXMPL", "https://example.com"):
            (length,) = struct.unpack_from("<I", data, offset)
            offset += 4
            self.assertEqual(data[offset : offset + length].decode("utf-8"), text)
            offset += length

        (fee,) = struct.unpack_from("<H", data, offset)
        self.assertEqual(fee, 500)
        offset += 2

        self.assertEqual(data[offset], 0)  # no creators
        offset += 1
        primary_sale, is_mutable, standard = struct.unpack_from("<??B", data, offset)
        self.assertFalse(primary_sale)
        self.assertTrue(is_mutable)
        self.assertEqual(standard, TokenStandard.FUNGIBLE)
        offset += 3

        # collection, uses, collection_details, rule_set, decimals, print_supply
        self.assertEqual(data[offset:], bytes(6))

    def test_creators_are_unverified(self) -> None:
        first = Keypair().pubkey()
        second = Keypair().pubkey()
        creators = [Creator(address=str(first), share=70), Creator(address=str(second), share=30)]
        without = encode_create_v1(name="A", symbol="B", uri="C", seller_fee_basis_points=0)
        data = encode_create_v1(name="A", symbol="B", uri="C", seller_fee_basis_points=0, creators=creators)

        self.assertEqual(len(data) - len(without), 4 + 2 * 34)
        start = 2 + 5 + 5 + 5 + 2
        self.assertEqual(data[start], 1)
        (count,) = struct.unpack_from("<I", data, start + 1)
        self.assertEqual(count, 2)
        entry = start + 5
        self.assertEqual(data[entry : entry + 32], bytes(first))
        self.assertEqual(data[entry + 32], 0)
        self.assertEqual(data[entry + 33], 70)
        self.assertEqual(data[entry + 34 : entry + 66], bytes(second))
        self.assertEqual(data[entry + 67], 30)

    def test_utf8_lengths_are_in_bytes(self) -> None:
        data = encode_create_v1(name="Café", symbol="C", uri="u", seller_fee_basis_points=0)
        (length,) = struct.unpack_from("<I", data, 2)
        self.assertEqual(length, 5)


class MetaplexMetadataBuilderTests(unittest.TestCase):
    def test_metadata_pda_uses_program_seeds(self) -> None:
        mint = Keypair().pubkey()
        expected, _ = Pubkey.find_program_address(
            [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
            TOKEN_METADATA_PROGRAM_ID,
        )
        self.assertEqual(find_metadata_pda(mint), expected)
        self.assertEqual(MetaplexMetadataBuilder().find_metadata_address(mint), expected)

    def test_create_instruction_accounts(self) -> None:
        builder = MetaplexMetadataBuilder()
        mint = Keypair().pubkey()
        owner = Keypair().pubkey()
        ix = builder.build_create_instruction(
            mint=mint,
            authority=owner,
            payer=owner,
            update_authority=owner,
            descriptor=_descriptor(seller_fee_basis_points=100),
        )

        self.assertEqual(ix.program_id, TOKEN_METADATA_PROGRAM_ID)
        keys = [meta.pubkey for meta in ix.accounts]
        self.assertEqual(
            keys,
            [
                builder.find_metadata_address(mint),
                TOKEN_METADATA_PROGRAM_ID,
                mint,
                owner,
                owner,
                owner,
                SYSTEM_PROGRAM_ID,
                SYSVAR_INSTRUCTIONS_ID,
                TOKEN_PROGRAM_ID,
            ],
        )
        self.assertTrue(ix.accounts[0].is_writable)
        self.assertFalse(ix.accounts[2].is_signer)
        self.assertTrue(ix.accounts[4].is_signer and ix.accounts[4].is_writable)
        self.assertEqual(bytes(ix.data)[:2], bytes([42, 0]))

    def test_uri_comes_from_external_url(self) -> None:
        builder = MetaplexMetadataBuilder()
        owner = Keypair().pubkey()
        ix = builder.build_create_instruction(
            mint=Keypair().pubkey(),
            authority=owner,
            payer=owner,
            update_authority=owner,
            descriptor=_descriptor(external_url="https://token.example.org"),
        )
        self.assertIn(b"https://token.example.org", bytes(ix.data))
        self.assertNotIn(b"https://example.com/token.png", bytes(ix.data))


if __name__ == "__main__":
    unittest.main()
