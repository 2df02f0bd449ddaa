"""Issuance stages.

Shared by the service (hooks) and the CLI (progress messages) so both use
the same names.
"""

from __future__ import annotations

from enum import Enum


class IssuanceStage(str, Enum):
    """Remote stages of the issuance workflow, in execution order."""

    CREATE_MINT = "create_mint"
    TOKEN_ACCOUNT = "token_account"
    MINT_SUPPLY = "mint_supply"
    LOAD_METADATA = "load_metadata"
    CREATE_METADATA = "create_metadata"

    def label(self) -> str:
        """Progress message shown when the stage starts."""

        return _LABELS[self]


_LABELS: dict[IssuanceStage, str] = {
    IssuanceStage.CREATE_MINT: "Creating token mint...",
    IssuanceStage.TOKEN_ACCOUNT: "Creating token account...",
    IssuanceStage.MINT_SUPPLY: "Minting tokens...",
    IssuanceStage.LOAD_METADATA: "Reading metadata...",
    IssuanceStage.CREATE_METADATA: "Creating metadata account...",
}
