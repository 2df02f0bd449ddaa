"""Error types shared by the Core and the CLI.

Two families exist:
- `TokenCreationError` and its subclasses: problems the operator can fix
  (environment, descriptor file). The CLI prints only the message.
- Everything else (RPC, SDK, transport) is treated as unexpected and is
  reported with its full traceback.
"""

from __future__ import annotations


class TokenCreationError(Exception):
    """Known, user-facing failure of a mintkit command."""


class ConfigurationError(TokenCreationError):
    """Missing or malformed configuration value."""


class MetadataValidationError(TokenCreationError):
    """The off-chain metadata descriptor is missing or invalid."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ImageReadError(Exception):
    """The token image could not be read or decoded."""
