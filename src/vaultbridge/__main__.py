from vaultbridge.cli import cli

cli()
