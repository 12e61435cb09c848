"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from leasectl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from leasectl.services.result import ServiceResult

_PARTY_KEYS = frozenset({"landlord", "tenant", "agent"})
_AMOUNT_KEYS = frozenset({"monthly_rent", "security_deposit", "commission"})


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
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
    if isinstance(items, list):
        return "\n".join(str(item.get("agreement_id", "")) for item in items)

    if "agreement_id" in result.data:
        return str(result.data["agreement_id"])
    if "count" in result.data:
        return str(result.data["count"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="lease.ok")
    op = Text(f"  {result.op}", style="lease.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="lease.key")
    text = "-" if value is None else str(value)
    if key.endswith("_id"):
        v = Text(text, style="lease.id")
    elif key in _PARTY_KEYS:
        v = Text(text, style="lease.party")
    elif key in _AMOUNT_KEYS:
        v = Text(text, style="lease.amount")
    elif key == "status":
        v = Text(text, style=style_for_status(text))
    else:
        v = Text(text)
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)
    for warning in result.warnings:
        console.print(Text(f"  warning: {warning}", style="lease.warning"))


def _render_agreement_list(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    meta = result.meta or {}
    _status_line(console, result)

    if not items:
        console.print("  No agreements found.")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="lease.id", no_wrap=True)
    table.add_column("Landlord", style="lease.party")
    table.add_column("Tenant", style="lease.party")
    table.add_column("Agent", style="lease.party")
    table.add_column("Rent", style="lease.amount", justify="right")
    table.add_column("Status")
    if verbose:
        table.add_column("Start", justify="right")
        table.add_column("End", justify="right")
        table.add_column("Commission %", justify="right")

    for item in items:
        status = str(item.get("status", ""))
        row = [
            str(item.get("agreement_id", "")),
            str(item.get("landlord", "")),
            str(item.get("tenant", "")),
            str(item.get("agent") or "-"),
            str(item.get("monthly_rent", "")),
            Text(status, style=style_for_status(status)),
        ]
        if verbose:
            row += [
                str(item.get("start_date", "")),
                str(item.get("end_date", "")),
                str(item.get("agent_commission_rate", "")),
            ]
        table.add_row(*row)

    console.print(table)
    console.print(
        f"  page {meta.get('page', 1)} · {len(items)} shown of {meta.get('total', len(items))}"
    )


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lease.error")
    op = Text(f"  {result.op}", style="lease.op")
    code = Text(f" [{err.code}]" if err else "", style="lease.key")
    console.print(label, op, code, Text(" — "), msg, sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "list_agreements": _render_agreement_list,
}
