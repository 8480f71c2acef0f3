"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from propbind.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from propbind.services.result import ServiceResult


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

    items = result.data.get("items")
    if items and isinstance(items, list) and "key" in items[0]:
        return "\n".join(f"{item['key']}={item['value']}" for item in items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="pb.ok")
    op = Text(f"  {result.op}", style="pb.op")
    console.print(label, op, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    for key, value in result.meta.items():
        shown = ", ".join(map(str, value)) if isinstance(value, list) else str(value)
        console.print(Text(f"  {key}: ", style="pb.key"), Text(shown), sep="")


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="pb.key"), Text(str(value)), sep="")
    if verbose:
        _render_meta(console, result)


def _render_properties(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """``keys`` and ``run``: one row per property."""
    _status_line(console, result)
    items: list[dict[str, Any]] = result.data.get("items", [])
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Key", style="pb.path")
    table.add_column("Value", style="pb.value")
    for item in items:
        table.add_row(Text(item["key"]), Text(item["value"]))
    console.print(table)
    console.print(Text(f"  {result.data.get('count', len(items))} properties", style="pb.key"))
    if verbose:
        _render_meta(console, result)


def _render_converters(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Type", style="pb.value")
    table.add_column("Source")
    table.add_column("Invertible")
    for item in result.data.get("items", []):
        table.add_row(Text(item["type"]), item["source"], "yes" if item["invertible"] else "no")
    console.print(table)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    label = Text("ERROR", style="pb.error")
    op = Text(f"  {result.op}", style="pb.op")
    console.print(label, op)
    if result.error is None:
        console.print("  Unknown error")
        return
    console.print(Text(f"  {result.error.message}"))
    issues = result.issues
    if issues:
        table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
        table.add_column("Code", style="pb.code")
        table.add_column("Property", style="pb.path")
        table.add_column("Problem")
        for issue in issues:
            table.add_row(issue["code"], Text(issue["path"] or "-"), Text(issue["message"]))
        console.print(table)
    elif verbose and result.error.detail:
        for key, value in result.error.detail.items():
            console.print(Text(f"  {key}: ", style="pb.key"), Text(str(value)), sep="")


_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    "keys": _render_properties,
    "run": _render_properties,
    "converters": _render_converters,
}
