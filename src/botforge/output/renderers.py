"""Human-readable rendering of ServiceResult, one function per ``op``.

Renderers register themselves with ``@_renders(op)``. Successful results
with an op nobody registered get a flat ``key: value`` listing; failures
all share one error layout.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from botforge.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from botforge.services.result import ServiceResult

    Renderer = Callable[[ServiceResult, Console, bool], None]

_RENDERERS: dict[str, Renderer] = {}


def _renders(op: str) -> Callable[[Renderer], Renderer]:
    def register(fn: Renderer) -> Renderer:
        _RENDERERS[op] = fn
        return fn

    return register


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as text; plain when the console is not a terminal."""
    console = create_console()
    if not result.ok:
        _error(result, console, verbose)
    else:
        _RENDERERS.get(result.op, _generic)(result, console, verbose)
    return get_output(console).rstrip("\n")


def _header(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "bot.ok"), (f"  {result.op}", "bot.op")))


def _kv(console: Console, key: str, value: Any) -> None:
    value_style = "bot.slot" if key.endswith("slot_id") else ""
    console.print(Text.assemble((f"  {key}: ", "bot.key"), (str(value), value_style)))


def _arrows(console: Console, lines: list[str]) -> None:
    for line in lines:
        console.print(Text(f"  -> {line}"))


def _tagged(console: Console, severity: str, messages: list[str]) -> None:
    style = style_for_severity(severity)
    for message in messages:
        console.print(Text.assemble((f"  {severity}: ", style), message))


def _table(*headers: str) -> Table:
    table = Table(pad_edge=False)
    for header in headers:
        table.add_column(header)
    return table


def _error(result: ServiceResult, console: Console, verbose: bool) -> None:
    error = result.error
    console.print(
        Text.assemble(
            ("ERROR", "bot.error"),
            (f"  {result.op}", "bot.op"),
            " - ",
            error.message if error else "Unknown error",
        )
    )
    if error is None:
        return
    _arrows(console, error.detail.get("recommendations", []))
    if verbose and error.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in error.detail.items():
            console.print(Text(f"    {key}: {value}"))


def _generic(result: ServiceResult, console: Console, verbose: bool) -> None:
    _header(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _kv(console, key, value)


@_renders("archetypes")
def _archetypes(result: ServiceResult, console: Console, verbose: bool) -> None:
    table = _table("Archetype", "Slots", "Required")
    for row in result.data.get("items", []):
        table.add_row(row["archetype"], str(row["total_slots"]), str(row["required_slots"]))
    console.print(table)


@_renders("layout")
def _layout(result: ServiceResult, console: Console, verbose: bool) -> None:
    _header(console, result)
    _kv(console, "archetype", result.data.get("archetype", ""))
    headers = ["Slot", "Category", "Position", "Required"]
    if verbose:
        headers.append("x, y, z")
    table = _table(*headers)
    for slot in result.data.get("items", []):
        cells: list[Any] = [
            Text(slot["slot_id"], style="bot.slot"),
            slot["category"],
            slot["position"],
            Text("yes", style="bot.required") if slot["required"] else "",
        ]
        if verbose:
            pos = slot.get("visual_position") or {}
            cells.append(", ".join(str(pos.get(axis, 0)) for axis in ("x", "y", "z")))
        table.add_row(*cells)
    console.print(table)


@_renders("constraints")
def _constraints(result: ServiceResult, console: Console, verbose: bool) -> None:
    _header(console, result)
    _kv(console, "archetype", result.data.get("archetype", ""))
    table = _table("Category", "Min", "Max", "Default")
    for row in result.data.get("items", []):
        maximum = "∞" if row["maximum"] is None else str(row["maximum"])
        table.add_row(row["category"], str(row["minimum"]), maximum, str(row["default"]))
    console.print(table)


@_renders("compatible_slots")
def _compatible_slots(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    _header(console, result)
    for key in ("category", "tier"):
        _kv(console, key, data.get(key, ""))
    _kv(console, "compatible_slots", ", ".join(data.get("compatible_slots", [])))
    _arrows(console, data.get("recommendations", []))
    if verbose:
        for reason in data.get("reasons", []):
            console.print(Text(f"    {reason}", style="dim"))


@_renders("rank_archetypes")
def _ranking(result: ServiceResult, console: Console, verbose: bool) -> None:
    _header(console, result)
    _kv(console, "categories", ", ".join(result.data.get("categories", [])))
    table = _table("#", "Archetype", "Score", "Avg %", "Compatible slots")
    for place, row in enumerate(result.data.get("items", []), start=1):
        table.add_row(
            str(place),
            row["archetype"],
            Text(f"{row['score']:.2f}", style="bot.score"),
            f"{row['overall_compatibility']:.2f}",
            str(row["total_compatible_slots"]),
        )
    console.print(table)


@_renders("validate_assembly")
def _assembly(result: ServiceResult, console: Console, verbose: bool) -> None:
    data = result.data
    _header(console, result)
    _kv(console, "archetype", data.get("archetype", ""))
    _kv(console, "can_assemble", data.get("can_assemble", False))

    usage: dict[str, int] = data.get("usage", {})
    if verbose and usage:
        budget: dict[str, int] = data.get("budget", {})
        table = _table("Category", "Used", "Budget")
        for category, used in usage.items():
            table.add_row(category, str(used), str(budget.get(category, 0)))
        console.print(table)

    _tagged(console, "warning", data.get("warnings", []))
    if verbose:
        _tagged(console, "info", data.get("info", []))
