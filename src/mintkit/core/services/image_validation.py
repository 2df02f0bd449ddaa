"""Image convention checks.

Marketplaces display token logos best as a square 1000x1000 PNG under
5 MB. Every check runs independently; a failed check is a warning, never an
error.
"""

from __future__ import annotations

from mintkit.core.domain.models import ImageCheck, ImageDiagnostic, ImageInfo

EXPECTED_WIDTH = 1000
EXPECTED_HEIGHT = 1000
EXPECTED_FORMAT = "PNG"
MAX_SIZE_MB = 5.0
EXPECTED_ASPECT_RATIO = 1.0


def _check_dimensions(info: ImageInfo) -> ImageCheck:
    observed = f"{info.width}x{info.height}"
    expected = f"{EXPECTED_WIDTH}x{EXPECTED_HEIGHT}"
    if info.width == EXPECTED_WIDTH and info.height == EXPECTED_HEIGHT:
        return ImageCheck(
            name="dimensions",
            passed=True,
            observed=observed,
            expected=expected,
            message=f"Dimensions are correct ({expected})",
        )
    return ImageCheck(
        name="dimensions",
        passed=False,
        observed=observed,
        expected=expected,
        message=f"Image dimensions should be {expected} pixels",
    )


def _check_format(info: ImageInfo) -> ImageCheck:
    observed = (info.format or "unknown").upper()
    if observed == EXPECTED_FORMAT:
        return ImageCheck(
            name="format",
            passed=True,
            observed=observed,
            expected=EXPECTED_FORMAT,
            message="Format is correct (PNG)",
        )
    return ImageCheck(
        name="format",
        passed=False,
        observed=observed,
        expected=EXPECTED_FORMAT,
        message="PNG format is recommended",
    )


def _check_size(info: ImageInfo) -> ImageCheck:
    size_mb = info.byte_size / (1024 * 1024)
    observed = f"{size_mb:.2f}MB"
    expected = f"<{MAX_SIZE_MB:g}MB"
    # Exactly 5 MB still passes.
    if size_mb > MAX_SIZE_MB:
        return ImageCheck(
            name="file_size",
            passed=False,
            observed=observed,
            expected=expected,
            message=f"File size should be less than {MAX_SIZE_MB:g}MB",
        )
    return ImageCheck(
        name="file_size",
        passed=True,
        observed=observed,
        expected=expected,
        message=f"File size is within recommended limit ({expected})",
    )


def _check_aspect_ratio(aspect_ratio: float) -> ImageCheck:
    observed = f"{aspect_ratio:.3f}"
    if aspect_ratio == EXPECTED_ASPECT_RATIO:
        return ImageCheck(
            name="aspect_ratio",
            passed=True,
            observed=observed,
            expected="1:1",
            message="Aspect ratio is correct (1:1)",
        )
    return ImageCheck(
        name="aspect_ratio",
        passed=False,
        observed=observed,
        expected="1:1",
        message="Aspect ratio should be 1:1",
    )


def evaluate_image(info: ImageInfo) -> ImageDiagnostic:
    aspect_ratio = info.width / info.height
    checks = [
        _check_dimensions(info),
        _check_format(info),
        _check_size(info),
        _check_aspect_ratio(aspect_ratio),
    ]
    return ImageDiagnostic(
        width=info.width,
        height=info.height,
        format=info.format,
        byte_size=info.byte_size,
        aspect_ratio=aspect_ratio,
        checks=checks,
    )
