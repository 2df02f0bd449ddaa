"""Image metadata reader (Pillow).

Only the header is parsed: `Image.open` is lazy, so width, height and
format are available without decoding pixel data.
"""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from mintkit.core.domain.models import ImageInfo
from mintkit.core.errors import ImageReadError


def read_image_info(path: Path) -> ImageInfo:
    """Return dimensions, format and byte size of the image at `path`."""

    try:
        byte_size = path.stat().st_size
    except FileNotFoundError as exc:
        raise ImageReadError(f"Image not found: {path}") from exc
    except OSError as exc:
        raise ImageReadError(f"Cannot access {path}: {exc}") from exc

    try:
        with Image.open(path) as image:
            width, height = image.size
            image_format = image.format
    except UnidentifiedImageError as exc:
        raise ImageReadError(f"Not a recognised image file: {path}") from exc
    except Image.DecompressionBombError as exc:
        raise ImageReadError(f"Image too large to inspect: {path}: {exc}") from exc
    except OSError as exc:
        raise ImageReadError(f"Cannot read {path}: {exc}") from exc

    return ImageInfo(
        path=str(path),
        width=width,
        height=height,
        format=image_format,
        byte_size=byte_size,
    )
