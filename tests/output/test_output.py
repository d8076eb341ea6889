"""Tests for the Rich console, formatters, and op-specific renderers."""

from __future__ import annotations

import json
from io import StringIO

from botforge.output.console import BOT_THEME, create_console, get_output, style_for_severity
from botforge.output.formatters import OutputSettings, format_result
from botforge.output.renderers import render_result
from botforge.services.result import ServiceError, ServiceResult


class TestConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)
        assert console.width == 120

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_theme_styles(self) -> None:
        assert "bot.ok" in BOT_THEME.styles
        assert style_for_severity("error") == "bot.error"
        assert style_for_severity("unknown") == ""


class TestFormatResult:
    def test_json_mode(self) -> None:
        result = ServiceResult(ok=True, op="archetypes", data={"count": 5})
        output = format_result(result, settings=OutputSettings(json_output=True))
        parsed = json.loads(output)
        assert parsed["ok"] is True
        assert parsed["data"]["count"] == 5
        assert parsed["error"] is None

    def test_human_mode_default(self) -> None:
        result = ServiceResult(ok=True, op="custom_op", data={"answer": 42})
        output = format_result(result)
        assert "OK" in output
        assert "custom_op" in output
        assert "answer:" in output
        assert "42" in output


class TestRenderers:
    def test_archetypes_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="archetypes",
            data={"items": [{"archetype": "light", "total_slots": 8, "required_slots": 5}]},
        )
        output = render_result(result)
        assert "light" in output
        assert "8" in output

    def test_constraints_unbounded_max(self) -> None:
        result = ServiceResult(
            ok=True,
            op="constraints",
            data={
                "archetype": "heavy",
                "items": [{"category": "arm", "minimum": 2, "maximum": None, "default": 2}],
            },
        )
        assert "∞" in render_result(result)

    def test_ranking(self) -> None:
        result = ServiceResult(
            ok=True,
            op="rank_archetypes",
            data={
                "categories": ["arm"],
                "items": [
                    {
                        "archetype": "heavy",
                        "score": 38.77,
                        "overall_compatibility": 30.77,
                        "total_compatible_slots": 4,
                    }
                ],
            },
        )
        output = render_result(result)
        assert "heavy" in output
        assert "38.77" in output

    def test_assembly_verbose_shows_usage(self) -> None:
        result = ServiceResult(
            ok=True,
            op="validate_assembly",
            data={
                "archetype": "light",
                "can_assemble": True,
                "warnings": ["arm: using 0 parts, below recommended default 2"],
                "info": [],
                "usage": {"arm": 0},
                "budget": {"arm": 2},
            },
        )
        output = render_result(result, verbose=True)
        assert "can_assemble:" in output
        assert "below recommended default" in output
        assert "Budget" in output

    def test_error_with_recommendations(self) -> None:
        result = ServiceResult(
            ok=False,
            op="validate_assembly",
            error=ServiceError(
                code="ASSEMBLY_REJECTED",
                message="head: trying to use 2 parts but only 1 slots available",
                detail={"recommendations": ["Remove 1 head part(s)"]},
            ),
        )
        output = render_result(result)
        assert "ERROR" in output
        assert "only 1 slots available" in output
        assert "-> Remove 1 head part(s)" in output

    def test_error_markup_is_literal(self) -> None:
        result = ServiceResult(
            ok=False,
            op="layout",
            error=ServiceError(code="X", message="bad [bold]input[/bold]"),
        )
        assert "bad [bold]input[/bold]" in render_result(result)
