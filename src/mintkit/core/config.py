"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking
  lookups into the services.
- `IssuanceConfig` / `ProbeConfig` are the explicit, already-validated
  structs that commands hand to the services.
"""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import Path
from typing import Literal

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from mintkit.core.errors import ConfigurationError

DEFAULT_TOKEN_SUPPLY = "1000000000"
TOKEN_DECIMALS = 9
KEYPAIR_LENGTH = 64
U64_MAX = 2**64 - 1

_SUPPLY_RE = re.compile(r"[0-9]+")
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

Commitment = Literal["processed", "confirmed", "finalized"]


class AppSettings(BaseSettings):
    """Raw settings read from the environment and an optional `.env` file.

    Every value is optional here; each command decides which ones it needs
    and validates them through its own config struct.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    rpc_url: str | None = Field(
        default=None,
        description="Solana JSON-RPC endpoint.",
    )
    wallet_private_key: str | None = Field(
        default=None,
        repr=False,
        description="Base64 encoded 64-byte ed25519 keypair of the signer.",
    )
    token_supply: str | None = Field(
        default=None,
        description="Whole tokens to mint (decimal string). Defaults to one billion.",
    )
    commitment: Commitment = Field(
        default="confirmed",
        description="Commitment level for queries and confirmations.",
    )
    metadata_path: Path = Field(
        default=Path("metadata.json"),
        description="Off-chain metadata descriptor (JSON).",
    )
    image_path: Path = Field(
        default=Path("assets") / "token.png",
        description="Token image checked by `validate-image`.",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per RPC request (seconds).",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(**overrides: object) -> AppSettings:
    """Build `AppSettings`, turning validation failures into `ConfigurationError`."""

    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


def require_rpc_url(value: str | None) -> str:
    url = (value or "").strip()
    if not url:
        raise ConfigurationError("RPC_URL is not defined in .env file")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"RPC_URL is not a valid URL: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError("RPC_URL must be an absolute http(s) URL")
    return url


def decode_signer(value: str | None) -> Keypair:
    """Decode the base64 signing key into a `Keypair`.

    The key material never appears in error messages.
    """

    encoded = (value or "").strip()
    if not encoded:
        raise ConfigurationError("WALLET_PRIVATE_KEY is not defined in .env file")
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError("WALLET_PRIVATE_KEY is not valid base64") from exc
    if len(raw) != KEYPAIR_LENGTH:
        raise ConfigurationError(
            f"WALLET_PRIVATE_KEY must decode to {KEYPAIR_LENGTH} bytes, got {len(raw)}"
        )
    try:
        return Keypair.from_bytes(raw)
    except ValueError as exc:
        raise ConfigurationError("WALLET_PRIVATE_KEY is not a valid ed25519 keypair") from exc


def parse_token_supply(value: str | None) -> int:
    text = (value or DEFAULT_TOKEN_SUPPLY).strip()
    if not _SUPPLY_RE.fullmatch(text):
        raise ConfigurationError(f"TOKEN_SUPPLY must be a positive whole number, got {value!r}")
    supply = int(text)
    if supply <= 0:
        raise ConfigurationError("TOKEN_SUPPLY must be greater than zero")
    if supply * 10**TOKEN_DECIMALS > U64_MAX:
        raise ConfigurationError("TOKEN_SUPPLY is too large for a u64 token amount")
    return supply


class ProbeConfig(BaseModel):
    """Validated configuration for the connectivity probe."""

    model_config = ConfigDict(frozen=True)

    rpc_url: str
    commitment: Commitment = "confirmed"
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ProbeConfig":
        return cls(
            rpc_url=require_rpc_url(settings.rpc_url),
            commitment=settings.commitment,
            timeout_seconds=settings.http_timeout_seconds,
        )


class IssuanceConfig(BaseModel):
    """Validated configuration for the token issuance workflow.

    Built once, before any network client exists, and passed to every stage.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    rpc_url: str
    signer: Keypair = Field(repr=False)
    token_supply: int = Field(gt=0)
    decimals: int = TOKEN_DECIMALS
    commitment: Commitment = "confirmed"
    metadata_path: Path = Path("metadata.json")
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "IssuanceConfig":
        rpc_url = require_rpc_url(settings.rpc_url)
        signer = decode_signer(settings.wallet_private_key)
        supply = parse_token_supply(settings.token_supply)
        return cls(
            rpc_url=rpc_url,
            signer=signer,
            token_supply=supply,
            commitment=settings.commitment,
            metadata_path=settings.metadata_path,
            timeout_seconds=settings.http_timeout_seconds,
        )

    @property
    def owner(self) -> Pubkey:
        return self.signer.pubkey()

    @property
    def raw_amount(self) -> int:
        """Supply in base units (`supply × 10^decimals`)."""

        return self.token_supply * 10**self.decimals
