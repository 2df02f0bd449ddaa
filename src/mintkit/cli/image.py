"""`validate-image` command.

Warnings are advisory and read failures are only logged: this command
always exits with status 0.
"""

from __future__ import annotations

import logging

from rich.console import Console

from mintkit.adapters.image_reader import read_image_info
from mintkit.cli.log import configure_logging
from mintkit.cli.ui_components import build_image_table
from mintkit.core.config import load_settings
from mintkit.core.errors import ConfigurationError, ImageReadError
from mintkit.core.services.image_validation import evaluate_image

logger = logging.getLogger(__name__)

_console = Console()


def validate_image() -> None:
    """Check the token image against marketplace display conventions."""

    configure_logging()
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        info = read_image_info(settings.image_path)
    except (ConfigurationError, ImageReadError) as exc:
        logger.error("Error validating image: %s", exc)
        return

    diagnostic = evaluate_image(info)
    _console.print(build_image_table(diagnostic))
    _console.print(
        f"Size: {diagnostic.size_mb:.2f}MB  Aspect ratio: {diagnostic.aspect_ratio:.3f}",
        style="dim",
    )
    for check in diagnostic.warnings:
        _console.print(f"[yellow]⚠️  Warning:[/yellow] {check.message}")
    if not diagnostic.warnings:
        _console.print("[green]✅ Image follows all display conventions[/green]")
