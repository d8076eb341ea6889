"""Command group: slot/category compatibility analyses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from botforge.commands._base import BotGroup
from botforge.domain.types import ALL_CATEGORIES, PartCategory
from botforge.services.result import ServiceResult

if TYPE_CHECKING:
    from botforge.commands._context import AppContext

_CATEGORY = click.Choice([str(c) for c in ALL_CATEGORIES], case_sensitive=False)


@click.group(
    cls=BotGroup,
    examples="""\
  botforge compat slots arm
  botforge compat rank arm leg accessory""",
)
def compat() -> None:
    """Analyze which slots and archetypes accept item categories."""


@compat.command(
    examples="""\
  botforge compat slots leg
  botforge -v compat slots soul-chip""",
)
@click.argument("category", type=_CATEGORY)
@click.pass_obj
def slots(app: AppContext, category: str) -> None:
    """List every slot that accepts CATEGORY."""
    analysis = app.services.compatibility.analyze_category_compatibility(PartCategory(category))
    app.emit(ServiceResult.success("compatible_slots", **analysis.model_dump(mode="json")))


@compat.command(
    examples="""\
  botforge compat rank arm arm leg
  botforge --json compat rank accessory expansion-chip""",
)
@click.argument("categories", nargs=-1, required=True, type=_CATEGORY)
@click.pass_obj
def rank(app: AppContext, categories: tuple[str, ...]) -> None:
    """Rank archetypes by how well they host CATEGORIES."""
    wanted = [PartCategory(c) for c in categories]
    rankings = app.services.compatibility.rank_archetypes_for_categories(wanted)
    items = [r.model_dump(mode="json", exclude={"per_category"}) for r in rankings]
    app.emit(
        ServiceResult.success("rank_archetypes", categories=[str(c) for c in wanted], items=items)
    )
