"""Operation-specific renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.

The plain breakdown layout is built as a string rather than through Rich:
Rich expands tabs, and referrer lines must start with a literal tab.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from dealref.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from dealref.services.result import ServiceResult

type _Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, style: str = "plain") -> str:
    """Render a ServiceResult for humans.

    Args:
        result: The result to render.
        verbose: Include error detail and input statistics.
        style: ``"plain"`` for the tab-indented report, ``"table"`` for a
            Rich table. Only affects ``monthly_breakdown``.
    """
    if result.ok and result.op == "monthly_breakdown" and style == "plain":
        return render_breakdown_plain(result.data.get("breakdown", {}))

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

    if result.op == "monthly_breakdown":
        breakdown: dict[str, dict[str, int]] = result.data.get("breakdown", {})
        return "\n".join(
            f"{month} {sum(per_root.values())}" for month, per_root in breakdown.items()
        )
    if result.op == "resolve_root":
        return str(result.data.get("root", ""))
    return f"OK: {result.op}"


def render_breakdown_plain(breakdown: dict[str, dict[str, int]]) -> str:
    """Render the month-by-referrer report.

    Each month line ends with ``": "``, each referrer line starts with a
    tab, and every month block is followed by a blank line. The returned
    string omits the final newline (``click.echo`` adds it). An empty
    breakdown renders as an empty string.
    """
    blocks: list[str] = []
    for month, per_root in breakdown.items():
        lines = [f"{month}: "]
        lines.extend(f"\t{root}: {count}" for root, count in per_root.items())
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="dealref.ok")
    op = Text(f"  {result.op}", style="dealref.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="dealref.key")
    v = Text(str(value), style="dealref.root" if key == "root" else "")
    console.print(k, v, end="", soft_wrap=True)
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="dealref.error")
    op = Text(f"  {result.op}", style="dealref.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg), soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"), soft_wrap=True)


# ── Op renderers ──────────────────────────────────────────────────────


def _render_breakdown_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render monthly_breakdown as a month / referrer / count table."""
    breakdown: dict[str, dict[str, int]] = result.data.get("breakdown", {})
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Month", style="dealref.month", no_wrap=True)
    table.add_column("Initial referrer", style="dealref.root")
    table.add_column("Deals", style="dealref.count", justify="right")

    for month, per_root in breakdown.items():
        first = True
        for root, count in per_root.items():
            table.add_row(month if first else "", root, str(count))
            first = False

    console.print(table)
    console.print(Text(f"Total referred deals: {result.data.get('total', 0)}", style="dim"))
    if verbose:
        _render_meta(console, result)


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render resolve_root: the root plus the chain walked to reach it."""
    _status_line(console, result)
    d = result.data
    _field(console, "name", d.get("name", ""))
    _field(console, "root", d.get("root", ""))
    chain = d.get("chain", [])
    _field(console, "chain", " -> ".join(str(n) for n in chain))
    if verbose:
        _field(console, "hops", max(len(chain) - 1, 0))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, _Renderer] = {
    "monthly_breakdown": _render_breakdown_table,
    "resolve_root": _render_resolve,
}
