"""vaultbridge command line: global options, settings, subcommands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from vaultbridge import __version__
from vaultbridge.commands import register_commands
from vaultbridge.commands._base import BridgeGroup
from vaultbridge.commands._context import AppContext
from vaultbridge.config.settings import BridgeSettings, ConfigError


def _load_settings(
    config_path: str | None, vault_root: Path | None, **flags: Any
) -> BridgeSettings:
    try:
        return BridgeSettings.from_cli(config_path=config_path, vault_root=vault_root, **flags)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group(
    cls=BridgeGroup,
    invoke_without_command=True,
    examples="""\
  vaultbridge snapshot ~/vaults/campaign -o batch.json
  vaultbridge resolve batch.json --direction import
  vaultbridge --json refs "Campaign/NPCs/Villain.md"
  vaultbridge --vault ~/vaults/campaign keys Campaign/NPCs/Villain.md""",
)
@click.version_option(version=__version__, prog_name="vaultbridge")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output, errors only in logs.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and detailed tables.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Use this config file.")
@click.option(
    "--vault",
    "vault_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Vault root (default: from the config file or the enclosing .obsidian vault).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    vault_root: Path | None,
) -> None:
    """vaultbridge: carry links and assets between a vault and a document store."""
    settings = _load_settings(
        config_path,
        vault_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
