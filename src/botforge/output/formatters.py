"""Human/JSON output selection.

The CLI renders ServiceResult for humans (Rich tables and colors) or for
machines (``--json``). This module picks the mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from botforge.output.renderers import render_result

if TYPE_CHECKING:
    from botforge.services.result import ServiceResult


class OutputSettings(BaseModel):
    model_config = {"frozen": True}

    json_output: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    return render_result(result, verbose=settings.verbose)
