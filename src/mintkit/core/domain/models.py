"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation of the metadata descriptor at the edge, with
  self-documenting fields.
- Plain string addresses keep these models free of SDK types.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from solders.pubkey import Pubkey

from mintkit.core.errors import MetadataValidationError

LAMPORTS_PER_SOL = 10**9

REQUIRED_METADATA_FIELDS: tuple[str, ...] = (
    "name",
    "symbol",
    "description",
    "image",
    "external_url",
)

# Limits enforced by the token-metadata program.
MAX_NAME_BYTES = 32
MAX_SYMBOL_BYTES = 10
MAX_URI_BYTES = 200
MAX_CREATORS = 5


def _byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


class Creator(BaseModel):
    """A royalty recipient listed in the descriptor."""

    model_config = ConfigDict(extra="ignore")

    address: str = Field(
        ...,
        min_length=32,
        max_length=44,
        description="Base58 public key of the creator.",
    )
    share: int = Field(
        ...,
        ge=0,
        le=100,
        description="Percentage of royalties paid to this creator.",
    )

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        try:
            Pubkey.from_string(value)
        except ValueError as exc:
            raise ValueError(f"not a valid public key: {value}") from exc
        return value


class TokenMetadataDescriptor(BaseModel):
    """Off-chain metadata descriptor read from `metadata.json`.

    Only the fields consumed by the issuance workflow are modelled; any extra
    keys (attributes, properties, ...) are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1, description="Token display name.")
    symbol: str = Field(..., min_length=1, description="Ticker symbol.")
    description: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1, description="Image URI.")
    external_url: str = Field(
        ...,
        min_length=1,
        description="Project website; also used as the on-chain metadata URI.",
    )
    seller_fee_basis_points: int = Field(default=0, ge=0, le=10_000)
    creators: list[Creator] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if _byte_length(value) > MAX_NAME_BYTES:
            raise ValueError(f"must be at most {MAX_NAME_BYTES} bytes")
        return value

    @field_validator("symbol")
    @classmethod
    def _check_symbol(cls, value: str) -> str:
        if _byte_length(value) > MAX_SYMBOL_BYTES:
            raise ValueError(f"must be at most {MAX_SYMBOL_BYTES} bytes")
        return value

    @field_validator("external_url")
    @classmethod
    def _check_uri(cls, value: str) -> str:
        if _byte_length(value) > MAX_URI_BYTES:
            raise ValueError(f"must be at most {MAX_URI_BYTES} bytes")
        return value

    @field_validator("seller_fee_basis_points", mode="before")
    @classmethod
    def _null_seller_fee(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("creators", mode="before")
    @classmethod
    def _null_creators(cls, value: object) -> object:
        return [] if value is None else value

    @model_validator(mode="after")
    def _check_creator_shares(self) -> "TokenMetadataDescriptor":
        if len(self.creators) > MAX_CREATORS:
            raise ValueError(f"creators: at most {MAX_CREATORS} creators are allowed")
        if self.creators:
            total = sum(c.share for c in self.creators)
            if total != 100:
                raise ValueError(f"creators: shares must add up to 100, got {total}")
        return self

    @property
    def uri(self) -> str:
        return self.external_url

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "TokenMetadataDescriptor":
        """Validate a decoded descriptor.

        Required fields are checked first, in a fixed order, so the error
        always names the first missing field.
        """

        for name in REQUIRED_METADATA_FIELDS:
            if not raw.get(name):
                raise MetadataValidationError(f"Missing required metadata field: {name}", field=name)
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as exc:
            first = exc.errors()[0]
            loc = ".".join(str(p) for p in first["loc"]) or None
            message = first["msg"]
            if loc:
                message = f"{loc}: {message}"
            raise MetadataValidationError(f"Invalid metadata: {message}", field=loc) from exc


class ImageInfo(BaseModel):
    """Raw facts read from an image file."""

    path: str
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    format: str | None = None
    byte_size: int = Field(..., ge=0)


class ImageCheck(BaseModel):
    """Outcome of a single image convention check."""

    name: str
    passed: bool
    observed: str
    expected: str
    message: str


class ImageDiagnostic(BaseModel):
    """Image facts plus the four pass/warn checks."""

    width: int
    height: int
    format: str | None
    byte_size: int
    aspect_ratio: float
    checks: list[ImageCheck] = Field(default_factory=list)

    @property
    def size_mb(self) -> float:
        return self.byte_size / (1024 * 1024)

    @property
    def passes(self) -> list[ImageCheck]:
        return [c for c in self.checks if c.passed]

    @property
    def warnings(self) -> list[ImageCheck]:
        return [c for c in self.checks if not c.passed]


class EpochSnapshot(BaseModel):
    epoch: int
    slot_index: int
    slots_in_epoch: int
    absolute_slot: int


class SupplySnapshot(BaseModel):
    """Native supply in lamports."""

    total: int
    circulating: int
    non_circulating: int

    def to_sol(self) -> dict[str, Decimal]:
        return {
            "total": lamports_to_sol(self.total),
            "circulating": lamports_to_sol(self.circulating),
            "non_circulating": lamports_to_sol(self.non_circulating),
        }


class ChainVersion(BaseModel):
    solana_core: str
    feature_set: int | None = None


class ChainStatus(BaseModel):
    """Everything the connectivity probe reads from the node."""

    slot: int
    block_height: int
    epoch: EpochSnapshot
    version: ChainVersion
    supply: SupplySnapshot
    recent_blockhash: str


class IssuanceResult(BaseModel):
    """Addresses and signatures produced by one issuance run."""

    mint_address: str
    token_account: str
    token_account_created: bool
    owner: str
    supply: int
    raw_amount: int
    decimals: int
    mint_signature: str
    token_account_signature: str | None = None
    mint_to_signature: str
    metadata_address: str
    metadata_signature: str
    descriptor: TokenMetadataDescriptor


def lamports_to_sol(lamports: int) -> Decimal:
    """Exact lamports -> SOL conversion."""

    return Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)
