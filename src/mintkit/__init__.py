"""mintkit: Solana fungible-token issuance helpers."""

__version__ = "0.1.0"
