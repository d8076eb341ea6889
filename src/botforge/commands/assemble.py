"""Command: validate a bot assembly described in a JSON file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from botforge.commands._base import BotCommand, botforge_errors
from botforge.domain.assembly import AssemblyConfig
from botforge.services.result import ServiceResult

if TYPE_CHECKING:
    from botforge.commands._context import AppContext


@click.command(
    cls=BotCommand,
    examples="""\
  botforge assemble bot.json
  botforge --json assemble bot.json
  botforge -v assemble heavy-bot.json""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def assemble(app: AppContext, file: Path) -> None:
    """Check whether the assembly in FILE can be built.

    Exits with status 1 when the assembly is rejected.
    """
    try:
        assembly = AssemblyConfig.model_validate_json(file.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise click.ClickException(f"Invalid assembly file {file}: {exc}") from exc

    with botforge_errors():
        report = app.services.assembly.validate_assembly(assembly)

    data = {
        "archetype": str(report.assembly.archetype),
        "can_assemble": report.can_assemble,
        "errors": report.errors,
        "warnings": report.warnings,
        "info": report.info,
        "usage": report.usage.as_dict(),
        "budget": report.budget.as_dict(),
        "summary": report.summary.model_dump(),
    }
    if report.can_assemble:
        app.emit(ServiceResult.success("validate_assembly", **data))
        return

    app.emit(
        ServiceResult.failure(
            "validate_assembly",
            "ASSEMBLY_REJECTED",
            "; ".join(report.errors) or "Assembly rejected",
            recommendations=report.recommendations,
            **data,
        )
    )
