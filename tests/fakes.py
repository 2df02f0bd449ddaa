"""In-memory collaborators used by the service and CLI tests."""

from __future__ import annotations

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from mintkit.core.domain.models import ChainVersion, EpochSnapshot, SupplySnapshot
from mintkit.core.interfaces.chain import AssociatedTokenAccount


class FakeLedger:
    """Records every call and returns canned signatures."""

    def __init__(self, *, existing_token_account: bool = False) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.sent: list[tuple[list[Instruction], list[Keypair]]] = []
        self._existing = existing_token_account
        self._counter = 0

    def _signature(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-sig-{self._counter}"

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def create_mint(self, *, payer, mint, mint_authority, decimals, freeze_authority=None) -> str:
        self.calls.append(
            (
                "create_mint",
                {
                    "payer": payer.pubkey(),
                    "mint": mint.pubkey(),
                    "mint_authority": mint_authority,
                    "decimals": decimals,
                    "freeze_authority": freeze_authority,
                },
            )
        )
        return self._signature("mint")

    async def get_or_create_associated_token_account(self, *, payer, mint, owner) -> AssociatedTokenAccount:
        self.calls.append(("token_account", {"mint": mint, "owner": owner}))
        address = Pubkey.find_program_address([bytes(owner), bytes(mint)], Pubkey.default())[0]
        if self._existing:
            return AssociatedTokenAccount(address=address, created=False)
        return AssociatedTokenAccount(address=address, created=True, signature=self._signature("ata"))

    async def mint_to(self, *, payer, mint, destination, authority, amount) -> str:
        self.calls.append(
            (
                "mint_to",
                {"mint": mint, "destination": destination, "authority": authority.pubkey(), "amount": amount},
            )
        )
        return self._signature("mint-to")

    async def send_instructions(self, instructions, signers) -> str:
        self.calls.append(("send_instructions", {"count": len(instructions)}))
        self.sent.append((list(instructions), list(signers)))
        return self._signature("metadata")


class FakeStatusReader:
    """Canned chain status; `fail_on` names the query that raises."""

    def __init__(self, *, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.queried: list[str] = []

    def _query(self, name: str) -> None:
        self.queried.append(name)
        if name == self.fail_on:
            raise ConnectionError(f"{name} failed: connection refused")

    async def get_slot(self) -> int:
        self._query("get_slot")
        return 250_000_000

    async def get_block_height(self) -> int:
        self._query("get_block_height")
        return 230_000_000

    async def get_epoch_info(self) -> EpochSnapshot:
        self._query("get_epoch_info")
        return EpochSnapshot(epoch=580, slot_index=1_234, slots_in_epoch=432_000, absolute_slot=250_000_000)

    async def get_version(self) -> ChainVersion:
        self._query("get_version")
        return ChainVersion(solana_core="1.18.22", feature_set=4215500110)

    async def get_supply(self) -> SupplySnapshot:
        self._query("get_supply")
        return SupplySnapshot(
            total=588_000_000_123_456_789,
            circulating=480_000_000_000_000_000,
            non_circulating=108_000_000_123_456_789,
        )

    async def get_latest_blockhash(self) -> str:
        self._query("get_latest_blockhash")
        return "EETubP5AKHgjPAhzPAFcb8BAY1hMH639CWCFTqi3hq1k"
