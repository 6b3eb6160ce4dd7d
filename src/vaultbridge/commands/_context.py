"""AppContext: what every subcommand receives through ``@click.pass_obj``.

Holds the merged settings, hands out services bound to them, and owns
the one place where a ServiceResult turns into terminal output and an
exit code.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from vaultbridge.config.logging import configure_logging
from vaultbridge.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from vaultbridge.config.settings import BridgeSettings
    from vaultbridge.services.batch import BatchService
    from vaultbridge.services.bridge import BridgeService
    from vaultbridge.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by all subcommands."""

    def __init__(self, settings: BridgeSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @cached_property
    def bridge(self) -> BridgeService:
        from vaultbridge.services.bridge import BridgeService

        return BridgeService(self.settings)

    @cached_property
    def batches(self) -> BatchService:
        from vaultbridge.services.batch import BatchService

        return BatchService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Failures go to stderr and exit 1. Successes go to stdout; their
        warnings (unresolved references) follow on stderr unless the
        JSON payload already carries them.
        """
        rendered = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(rendered, err=True)
            raise SystemExit(1)

        click.echo(rendered)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.secho(f"WARNING: {warning}", fg="yellow", err=True)
