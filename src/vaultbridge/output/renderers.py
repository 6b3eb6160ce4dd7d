"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from vaultbridge.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from vaultbridge.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    fragments = result.data.get("fragments")
    if isinstance(fragments, list):
        return "\n".join(str(f) for f in fragments)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="vb.ok")
    op = Text(f"  {result.op}", style="vb.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="vb.key")
    if key in ("id", "stable_id") or key.endswith("_id"):
        v = Text(str(value), style="vb.id")
    elif key in ("path", "file", "output"):
        v = Text(str(value), style="vb.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _reference_table(references: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Source", no_wrap=True)
    table.add_column("Address", style="vb.path")
    table.add_column("Label")
    if verbose:
        table.add_column("Attributes", style="dim")

    for index, ref in enumerate(references):
        kind = str(ref.get("kind", ""))
        address = ref.get("source_address") or ref.get("target_address") or ""
        row: list[Text] = [
            Text(str(index)),
            Text(kind, style=style_for_kind(kind)),
            Text(str(ref.get("source_text", ""))),
            Text(str(address)),
            Text(str(ref.get("label") or "")),
        ]
        if verbose:
            row.append(Text(str(ref.get("attributes") or "")))
        table.add_row(*row)
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, list):
            _field(console, key, f"{len(value)} item(s)")
        else:
            _field(console, key, value)


def _render_references(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "file", result.data.get("file", ""))
    references = [*result.data.get("links", []), *result.data.get("assets", [])]
    if not references:
        console.print(Text("  no references found", style="dim"))
        return
    console.print(_reference_table(references, verbose=verbose))


def _render_fragments(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    for fragment in result.data.get("fragments", []):
        console.print(Text(f"    {fragment}"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="vb.error")
    op = Text(f"  {result.op}", style="vb.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "extract_references": _render_references,
    "name_fragments": _render_fragments,
}
