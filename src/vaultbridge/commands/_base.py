"""Click base classes with ``--examples`` support.

``--help`` stays short; ``--examples`` prints ready-to-paste invocations
and exits.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesMixin:
    """Adds an eager ``--examples`` flag when *examples* text is given."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._show_examples,
                help="Show usage examples.",
            )
        )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class BridgeCommand(ExamplesMixin, click.Command):
    """Click Command that accepts an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class BridgeGroup(ExamplesMixin, click.Group):
    """Click Group whose subcommands default to :class:`BridgeCommand`."""

    command_class = BridgeCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
