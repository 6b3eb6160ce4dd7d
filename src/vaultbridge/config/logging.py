"""structlog setup for the vaultbridge CLI.

Everything goes to stderr so stdout stays parseable. Engine modules use
plain ``logging.getLogger(__name__)``; their records pass through
structlog's ``ProcessorFormatter`` and pick up whatever
:func:`batch_context` has bound, so an unresolved-link warning reads::

    [warning] Unresolved link 'Nowhere' in Note.md  direction=resolve_import documents=12

``-v`` lowers the vaultbridge threshold to DEBUG, ``-q`` raises it to
ERROR (the warnings are still part of the command result).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

PACKAGE_LOGGER = "vaultbridge"


def _level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(renderer: structlog.types.Processor) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        verbose: DEBUG output for vaultbridge loggers. Wins over *quiet*.
        quiet: Only errors from vaultbridge loggers.
        log_json: One JSON object per line instead of console output.
    """
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(renderer))
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(_level(verbose=verbose, quiet=quiet))


@contextmanager
def batch_context(direction: str, documents: int) -> Iterator[None]:
    """Bind the batch direction and size to every log line in the block."""
    with structlog.contextvars.bound_contextvars(direction=direction, documents=documents):
        yield
