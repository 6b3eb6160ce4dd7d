"""Command: prepare and resolve a batch file offline."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from vaultbridge.commands._base import BridgeCommand
from vaultbridge.services.batch import DIRECTIONS

if TYPE_CHECKING:
    from vaultbridge.commands._context import AppContext


@click.command(
    cls=BridgeCommand,
    examples="""\
  vaultbridge resolve batch.json --direction import
  vaultbridge resolve pages.json --direction export -o vault-batch.json
  vaultbridge --json resolve batch.json""",
)
@click.argument("batch", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-d",
    "--direction",
    type=click.Choice(DIRECTIONS),
    default="import",
    show_default=True,
    help="Conversion direction.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Resolved batch file (default: BATCH.<direction>.json).",
)
@click.pass_obj
def resolve(app: AppContext, batch: Path, direction: str, output: Path | None) -> None:
    """Rewrite every link and asset of BATCH for the target format."""
    app.emit(app.batches.resolve(batch, direction, output))
