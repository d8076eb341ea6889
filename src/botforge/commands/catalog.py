"""Commands: inspect archetypes, slot layouts, and category budgets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from botforge.commands._base import BotCommand, botforge_errors
from botforge.services.result import ServiceResult

if TYPE_CHECKING:
    from botforge.commands._context import AppContext


@click.command(
    cls=BotCommand,
    examples="""\
  botforge archetypes
  botforge --json archetypes""",
)
@click.pass_obj
def archetypes(app: AppContext) -> None:
    """List archetypes with their slot counts."""
    catalog = app.services.catalog
    items = []
    for archetype in catalog.supported_archetypes():
        summary = catalog.get_skeleton_configuration(archetype)
        items.append(
            {
                "archetype": str(archetype),
                "total_slots": summary.total_slots,
                "required_slots": sum(1 for s in summary.slots if s.required),
            }
        )
    app.emit(ServiceResult.success("archetypes", items=items, count=len(items)))


@click.command(
    cls=BotCommand,
    examples="""\
  botforge layout light
  botforge -v layout modular""",
)
@click.argument("archetype")
@click.pass_obj
def layout(app: AppContext, archetype: str) -> None:
    """Show the slot layout of ARCHETYPE."""
    with botforge_errors():
        slots = app.services.catalog.get_slot_layout(archetype)
    items = [
        {
            **s.model_dump(mode="json", exclude={"constraints"}),
            "visual_position": s.visual_position.model_dump(),
        }
        for s in slots
    ]
    app.emit(ServiceResult.success("layout", archetype=archetype, items=items))


@click.command(
    cls=BotCommand,
    examples="""\
  botforge constraints heavy
  botforge --json constraints flying""",
)
@click.argument("archetype")
@click.pass_obj
def constraints(app: AppContext, archetype: str) -> None:
    """Show min/max/default item counts per category for ARCHETYPE."""
    with botforge_errors():
        table = app.services.catalog.get_category_constraints(archetype)
    items = [{"category": str(c), **k.model_dump()} for c, k in table.items()]
    app.emit(ServiceResult.success("constraints", archetype=archetype, items=items))
