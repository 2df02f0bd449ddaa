import struct
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from solders.hash import Hash
from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import get_associated_token_address

from mintkit.adapters.solana_rpc import MINT_ACCOUNT_SIZE, SolanaStatusReader, SolanaTokenLedger


def _mock_client(*, account_exists: bool = False) -> MagicMock:
    client = MagicMock()
    client.get_latest_blockhash = AsyncMock(
        return_value=SimpleNamespace(
            value=SimpleNamespace(blockhash=Hash.default(), last_valid_block_height=1_000)
        )
    )
    client.send_raw_transaction = AsyncMock(return_value=SimpleNamespace(value=Signature.default()))
    client.get_minimum_balance_for_rent_exemption = AsyncMock(return_value=SimpleNamespace(value=1_461_600))
    client.get_account_info = AsyncMock(
        return_value=SimpleNamespace(value=object() if account_exists else None)
    )
    return client


def _sent_transaction(client: MagicMock, index: int = 0) -> Transaction:
    raw = client.send_raw_transaction.await_args_list[index].args[0]
    return Transaction.from_bytes(raw)


class SolanaTokenLedgerTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.payer = Keypair()

    async def test_create_mint_signs_with_payer_and_mint(self) -> None:
        client = _mock_client()
        ledger = SolanaTokenLedger(client)
        mint = Keypair()

        signature = await ledger.create_mint(
            payer=self.payer,
            mint=mint,
            mint_authority=self.payer.pubkey(),
            decimals=9,
        )

        self.assertEqual(signature, str(Signature.default()))
        client.get_minimum_balance_for_rent_exemption.assert_awaited_once()
        self.assertEqual(client.get_minimum_balance_for_rent_exemption.await_args.args[0], MINT_ACCOUNT_SIZE)
        tx = _sent_transaction(client)
        self.assertEqual(len(tx.message.instructions), 2)
        self.assertEqual(len(tx.signatures), 2)
        self.assertEqual(tx.message.account_keys[0], self.payer.pubkey())
        self.assertIn(mint.pubkey(), tx.message.account_keys)
        self.assertIn(TOKEN_PROGRAM_ID, tx.message.account_keys)

        opts = client.send_raw_transaction.await_args.kwargs["opts"]
        self.assertFalse(opts.skip_confirmation)
        self.assertEqual(opts.last_valid_block_height, 1_000)

    async def test_existing_associated_account_is_reused(self) -> None:
        client = _mock_client(account_exists=True)
        ledger = SolanaTokenLedger(client)
        mint = Keypair().pubkey()

        account = await ledger.get_or_create_associated_token_account(
            payer=self.payer, mint=mint, owner=self.payer.pubkey()
        )

        self.assertFalse(account.created)
        self.assertEqual(account.address, get_associated_token_address(self.payer.pubkey(), mint))
        client.send_raw_transaction.assert_not_awaited()

    async def test_missing_associated_account_is_created(self) -> None:
        client = _mock_client(account_exists=False)
        ledger = SolanaTokenLedger(client)
        mint = Keypair().pubkey()

        account = await ledger.get_or_create_associated_token_account(
            payer=self.payer, mint=mint, owner=self.payer.pubkey()
        )

        self.assertTrue(account.created)
        self.assertIsNotNone(account.signature)
        tx = _sent_transaction(client)
        self.assertIn(account.address, tx.message.account_keys)

    async def test_mint_to_encodes_amount(self) -> None:
        client = _mock_client()
        ledger = SolanaTokenLedger(client)
        mint = Keypair().pubkey()
        destination = get_associated_token_address(self.payer.pubkey(), mint)

        await ledger.mint_to(
            payer=self.payer,
            mint=mint,
            destination=destination,
            authority=self.payer,
            amount=5 * 10**9,
        )

        tx = _sent_transaction(client)
        self.assertEqual(len(tx.signatures), 1)
        self.assertEqual(bytes(tx.message.instructions[0].data), bytes([7]) + struct.pack("<Q", 5 * 10**9))

    async def test_send_requires_a_signer(self) -> None:
        ledger = SolanaTokenLedger(_mock_client())
        with self.assertRaises(ValueError):
            await ledger.send_instructions([], [])


class SolanaStatusReaderTests(unittest.IsolatedAsyncioTestCase):
    async def test_maps_rpc_responses(self) -> None:
        client = MagicMock()
        client.get_slot = AsyncMock(return_value=SimpleNamespace(value=42))
        client.get_block_height = AsyncMock(return_value=SimpleNamespace(value=40))
        client.get_epoch_info = AsyncMock(
            return_value=SimpleNamespace(
                value=SimpleNamespace(epoch=3, slot_index=2, slots_in_epoch=432_000, absolute_slot=42)
            )
        )
        client.get_version = AsyncMock(
            return_value=SimpleNamespace(value=SimpleNamespace(solana_core="2.0.1", feature_set=123))
        )
        client.get_supply = AsyncMock(
            return_value=SimpleNamespace(
                value=SimpleNamespace(total=10, circulating=7, non_circulating=3)
            )
        )
        client.get_latest_blockhash = AsyncMock(
            return_value=SimpleNamespace(value=SimpleNamespace(blockhash=Hash.default()))
        )
        reader = SolanaStatusReader(client, commitment="finalized")

        self.assertEqual(await reader.get_slot(), 42)
        self.assertEqual(await reader.get_block_height(), 40)
        self.assertEqual((await reader.get_epoch_info()).slots_in_epoch, 432_000)
        self.assertEqual((await reader.get_version()).solana_core, "2.0.1")
        self.assertEqual((await reader.get_supply()).non_circulating, 3)
        self.assertEqual(await reader.get_latest_blockhash(), str(Hash.default()))
        self.assertEqual(client.get_slot.await_args.kwargs["commitment"], "finalized")


if __name__ == "__main__":
    unittest.main()
