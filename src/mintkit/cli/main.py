"""Typer application.

`mintkit` groups the three commands; each one is also exposed as its own
console script (`mintkit-probe`, `mintkit-issue`, `mintkit-validate-image`)
for the one-shot workflow.
"""

from __future__ import annotations

import typer
from rich.console import Console

from mintkit import __version__
from mintkit.cli.image import validate_image
from mintkit.cli.issue import issue
from mintkit.cli.probe import probe

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Solana token issuance helpers: RPC probe, token issuance, image checks.",
)

_console = Console()


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"mintkit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Configuration comes from the environment (or `.env`): RPC_URL,
    WALLET_PRIVATE_KEY, TOKEN_SUPPLY."""


app.command(name="probe")(probe)
app.command(name="issue")(issue)
app.command(name="validate-image")(validate_image)


def run() -> None:
    app()


def run_probe() -> None:
    typer.run(probe)


def run_issue() -> None:
    typer.run(issue)


def run_validate_image() -> None:
    typer.run(validate_image)
