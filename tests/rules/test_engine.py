"""Tests for RuleEngine: registry and execution harness."""

from __future__ import annotations

from typing import Any

import pytest

from botforge.domain.errors import DuplicateRuleError
from botforge.domain.validation import (
    RuleExecutionOptions,
    Severity,
    ValidationContext,
    ValidationResult,
    ValidationRule,
)
from botforge.rules.engine import RuleEngine


class _StaticRule(ValidationRule[Any]):
    def __init__(self, name: str, result: ValidationResult, *, required: bool = True) -> None:
        self._name = name
        self._result = result
        self._required = required
        self.calls = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return f"Always returns {self._result.severity}"

    @property
    def required(self) -> bool:
        return self._required

    def validate(self, entity: Any) -> ValidationResult:
        self.calls += 1
        return self._result


class _ExplodingRule(ValidationRule[Any]):
    @property
    def name(self) -> str:
        return "Exploding"

    @property
    def description(self) -> str:
        return "Raises on every entity"

    def validate(self, entity: Any) -> ValidationResult:
        raise ValueError("bad entity")


def _ok(name: str, **kwargs: Any) -> _StaticRule:
    return _StaticRule(name, ValidationResult.ok(name, f"{name} ok"), **kwargs)


def _err(name: str, **kwargs: Any) -> _StaticRule:
    return _StaticRule(name, ValidationResult.error(name, f"{name} failed"), **kwargs)


def _warn(name: str, **kwargs: Any) -> _StaticRule:
    return _StaticRule(name, ValidationResult.warning(name, f"{name} warned"), **kwargs)


class TestRegistry:
    def test_register_and_list(self) -> None:
        engine = RuleEngine()
        engine.register_rule("bot", _ok("A"))
        engine.register_rule("bot", _ok("B"))
        engine.register_rule("part", _ok("A"))
        assert [r.name for r in engine.rules_for("bot")] == ["A", "B"]
        assert engine.entity_types() == ["bot", "part"]
        assert engine.total_rule_count() == 3

    def test_duplicate_name_rejected(self) -> None:
        engine = RuleEngine()
        engine.register_rule("bot", _ok("A"))
        with pytest.raises(DuplicateRuleError, match="'A' already registered"):
            engine.register_rule("bot", _err("A"))

    def test_unregister(self) -> None:
        engine = RuleEngine()
        engine.register_rule("bot", _ok("A"))
        assert engine.unregister_rule("bot", "A")
        assert not engine.unregister_rule("bot", "A")
        assert engine.entity_types() == []

    def test_statistics(self) -> None:
        engine = RuleEngine()
        engine.register_rule("bot", _ok("A"))
        stats = engine.statistics()
        assert stats == {
            "entity_types": 1,
            "total_rules": 1,
            "rules_by_entity_type": {"bot": ["A"]},
        }

    def test_clear(self) -> None:
        engine = RuleEngine()
        engine.register_rule("bot", _ok("A"))
        engine.clear()
        assert engine.total_rule_count() == 0


class TestExecution:
    def test_no_rules_is_valid_with_warning(self) -> None:
        results = RuleEngine().validate_entity("ghost", object())
        assert results.valid
        assert results.warnings == ["No rules registered for entity type 'ghost'"]
        assert results.summary.warnings == 1
        assert results.summary.total == 0

    def test_aggregates_by_severity(self) -> None:
        engine = RuleEngine()
        for rule in (_ok("A"), _warn("B"), _err("C")):
            engine.register_rule("bot", rule)
        results = engine.validate_entity("bot", object())
        assert not results.valid
        assert results.errors == ["C failed"]
        assert results.warnings == ["B warned"]
        assert results.info == ["A ok"]
        assert results.summary.total == 3
        assert results.summary.passed == 2
        assert results.summary.failed == 1
        assert results.summary.warnings == 1

    def test_runs_in_registration_order(self) -> None:
        engine = RuleEngine()
        for name in ("Z", "A", "M"):
            engine.register_rule("bot", _ok(name))
        results = engine.validate_entity("bot", object())
        assert [r.rule_name for r in results.results] == ["Z", "A", "M"]

    def test_stop_on_first_error(self) -> None:
        engine = RuleEngine()
        later = _ok("Later")
        engine.register_rule("bot", _err("First"))
        engine.register_rule("bot", later)
        results = engine.validate_entity(
            "bot", object(), options=RuleExecutionOptions(stop_on_first_error=True)
        )
        assert results.summary.total == 1
        assert later.calls == 0

    def test_skip_optional_rules(self) -> None:
        engine = RuleEngine()
        optional = _err("Optional", required=False)
        engine.register_rule("bot", optional)
        engine.register_rule("bot", _ok("Required"))
        results = engine.validate_entity(
            "bot", object(), options=RuleExecutionOptions(skip_optional_rules=True)
        )
        assert results.valid
        assert optional.calls == 0

    def test_include_flags_filter_lists_only(self) -> None:
        engine = RuleEngine()
        engine.register_rule("bot", _ok("A"))
        engine.register_rule("bot", _warn("B"))
        results = engine.validate_entity(
            "bot",
            object(),
            options=RuleExecutionOptions(include_warnings=False, include_info=False),
        )
        assert results.warnings == []
        assert results.info == []
        assert len(results.results) == 2

    def test_invalid_warning_fails_entity(self) -> None:
        rule = _StaticRule("W", ValidationResult.warning("W", "meh", valid=False))
        results = RuleEngine().validate_with_rules([rule], object())
        assert not results.valid
        assert results.errors == []

    def test_error_result_warnings_are_flattened(self) -> None:
        failing = ValidationResult.error("E", "E failed", warnings=["leg: low", "arm: low"])
        results = RuleEngine().validate_with_rules(
            [_StaticRule("E", failing), _warn("B")], object()
        )
        assert results.errors == ["E failed"]
        assert results.warnings == ["leg: low", "arm: low", "B warned"]
        assert results.summary.warnings == 3

    def test_exception_becomes_error_result(self) -> None:
        engine = RuleEngine()
        engine.register_rule("bot", _ExplodingRule())
        engine.register_rule("bot", _ok("After"))
        context = ValidationContext(actor_id="u1", action="assemble")
        results = engine.validate_entity("bot", object(), context)
        assert not results.valid
        failure = results.results[0]
        assert failure.severity == Severity.ERROR
        assert failure.code == "RULE_EXECUTION_FAILED"
        assert failure.message == "Rule execution failed: bad entity"
        assert failure.detail["context"]["actor_id"] == "u1"
        assert results.results[1].valid

    def test_validate_with_rules_bypasses_registry(self) -> None:
        engine = RuleEngine()
        results = engine.validate_with_rules([_ok("Adhoc")], object())
        assert results.valid
        assert engine.total_rule_count() == 0
