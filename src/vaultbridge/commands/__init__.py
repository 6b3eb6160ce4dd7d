"""Subcommand modules for vaultbridge.

Provides register_commands() which uses deferred imports to keep
``vaultbridge --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from vaultbridge.commands.keys import keys
    from vaultbridge.commands.refs import refs
    from vaultbridge.commands.resolve import resolve
    from vaultbridge.commands.snapshot import snapshot

    cli.add_command(refs)
    cli.add_command(keys)
    cli.add_command(snapshot)
    cli.add_command(resolve)
