"""Command: show the name fragments a note is indexed under."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultbridge.commands._base import BridgeCommand

if TYPE_CHECKING:
    from vaultbridge.commands._context import AppContext


@click.command(
    cls=BridgeCommand,
    examples="""\
  vaultbridge keys Campaign/NPCs/Villain.md
  vaultbridge -q keys Campaign/NPCs/Villain.md""",
)
@click.argument("path")
@click.pass_obj
def keys(app: AppContext, path: str) -> None:
    """Show the link names that resolve to the note at PATH."""
    app.emit(app.bridge.name_fragments(path))
