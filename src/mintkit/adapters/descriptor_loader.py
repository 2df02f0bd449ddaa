"""Loads the off-chain metadata descriptor (JSON)."""

from __future__ import annotations

import json
from pathlib import Path

from mintkit.core.domain.models import TokenMetadataDescriptor
from mintkit.core.errors import MetadataValidationError


def load_metadata_descriptor(path: Path) -> TokenMetadataDescriptor:
    """Read and validate `path` (UTF-8 JSON object)."""

    if not path.is_file():
        raise MetadataValidationError(f"{path.name} file not found")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise MetadataValidationError(f"{path.name} is not valid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataValidationError(f"Cannot read {path.name}: {exc}") from exc

    if not isinstance(raw, dict):
        raise MetadataValidationError(f"{path.name} must contain a JSON object")
    return TokenMetadataDescriptor.from_mapping(raw)
