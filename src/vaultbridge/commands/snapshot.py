"""Command: snapshot a vault directory into a batch file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from vaultbridge.commands._base import BridgeCommand

if TYPE_CHECKING:
    from vaultbridge.commands._context import AppContext


@click.command(
    cls=BridgeCommand,
    examples="""\
  vaultbridge snapshot ~/vaults/campaign -o batch.json""",
)
@click.argument("vault_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Batch file to write.",
)
@click.pass_obj
def snapshot(app: AppContext, vault_dir: Path, output: Path) -> None:
    """Collect every note under VAULT_DIR into a batch file."""
    app.emit(app.batches.snapshot(vault_dir, output))
