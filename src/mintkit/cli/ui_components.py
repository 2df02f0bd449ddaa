"""Rich UI components for the CLI.

Why separate components:
- Keeps command modules free of layout details.
- Tables and panels can be reused across commands.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mintkit.core.domain.models import (
    ChainVersion,
    EpochSnapshot,
    ImageDiagnostic,
    IssuanceResult,
    SupplySnapshot,
)


def print_banner(console: Console, subtitle: str) -> None:
    title = Text("mintkit", style="bold cyan")
    body = Align.center(Text.assemble(title, "\n", Text(subtitle, style="dim")), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


def format_probe_value(value: object) -> str:
    """Render one probe result as a single line."""

    if isinstance(value, EpochSnapshot):
        return (
            f"epoch={value.epoch} slotIndex={value.slot_index} "
            f"slotsInEpoch={value.slots_in_epoch} absoluteSlot={value.absolute_slot}"
        )
    if isinstance(value, ChainVersion):
        if value.feature_set is None:
            return value.solana_core
        return f"{value.solana_core} (feature-set {value.feature_set})"
    if isinstance(value, SupplySnapshot):
        sol = value.to_sol()
        return (
            f"total={sol['total']} SOL circulating={sol['circulating']} SOL "
            f"nonCirculating={sol['non_circulating']} SOL"
        )
    return str(value)


def build_summary_table(result: IssuanceResult) -> Table:
    """Final issuance report."""

    descriptor = result.descriptor
    table = Table(title="Token Details", show_header=False, title_justify="left")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Name", descriptor.name)
    table.add_row("Symbol", descriptor.symbol)
    table.add_row("Description", descriptor.description)
    table.add_row("Website", descriptor.external_url)
    table.add_row("Total Supply", f"{result.supply:,}")
    table.add_row("Decimals", str(result.decimals))
    table.add_row("Mint Address", result.mint_address)
    table.add_row("Token Account", result.token_account)
    table.add_row("Metadata Account", result.metadata_address)
    table.add_row("Mint Transaction", result.mint_signature)
    if result.token_account_signature:
        table.add_row("Token Account Transaction", result.token_account_signature)
    table.add_row("Mint-To Transaction", result.mint_to_signature)
    table.add_row("Metadata Transaction", result.metadata_signature)
    return table


def build_image_table(diagnostic: ImageDiagnostic) -> Table:
    table = Table(title="Image Validation Results")
    table.add_column("Check", style="cyan", no_wrap=True)
    table.add_column("Observed", style="white")
    table.add_column("Expected", style="dim")
    table.add_column("Status")
    table.add_column("Message", style="dim")
    for check in diagnostic.checks:
        status = Text("PASS", style="green") if check.passed else Text("WARN", style="yellow")
        table.add_row(check.name, check.observed, check.expected, status, check.message)
    return table
