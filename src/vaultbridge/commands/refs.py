"""Command: list the references of a single note or store page."""

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
  vaultbridge refs "Campaign/NPCs/Villain.md"
  vaultbridge refs page.html --storage
  vaultbridge --json refs notes/session-01.md""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--storage", is_flag=True, help="Parse store syntax (@UUID, <img>, <a>).")
@click.pass_obj
def refs(app: AppContext, file: Path, storage: bool) -> None:
    """List the links and assets found in FILE."""
    content = file.read_text(encoding="utf-8")
    app.emit(app.bridge.extract_references(content, storage=storage, source=str(file)))
