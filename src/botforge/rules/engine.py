"""RuleEngine: entity-type-agnostic execution harness for validation rules.

Rules are registered per entity type and executed in registration order.
A rule that raises never aborts the batch; it is converted into a
synthetic ERROR result instead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from botforge.domain.errors import DuplicateRuleError
from botforge.domain.validation import (
    RuleExecutionOptions,
    Severity,
    ValidationContext,
    ValidationResult,
    ValidationResults,
    ValidationRule,
    ValidationSummary,
)

logger = logging.getLogger(__name__)


class RuleEngine:
    """Registry of :class:`ValidationRule` instances keyed by entity type."""

    def __init__(self) -> None:
        self._rules: dict[str, list[ValidationRule[Any]]] = {}

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register_rule(self, entity_type: str, rule: ValidationRule[Any]) -> None:
        """Add *rule* for *entity_type*.

        Raises:
            DuplicateRuleError: A rule with the same name is already registered.
        """
        rules = self._rules.setdefault(entity_type, [])
        if any(existing.name == rule.name for existing in rules):
            raise DuplicateRuleError(rule.name, entity_type)
        rules.append(rule)
        logger.debug("Registered rule %s for %s", rule.name, entity_type)

    def unregister_rule(self, entity_type: str, rule_name: str) -> bool:
        """Remove a rule by name. Returns False if it was not registered."""
        rules = self._rules.get(entity_type)
        if not rules:
            return False
        for i, rule in enumerate(rules):
            if rule.name == rule_name:
                del rules[i]
                if not rules:
                    del self._rules[entity_type]
                logger.debug("Unregistered rule %s for %s", rule_name, entity_type)
                return True
        return False

    def rules_for(self, entity_type: str) -> list[ValidationRule[Any]]:
        return list(self._rules.get(entity_type, []))

    def entity_types(self) -> list[str]:
        return list(self._rules)

    def total_rule_count(self) -> int:
        return sum(len(rules) for rules in self._rules.values())

    def clear(self) -> None:
        self._rules.clear()

    def statistics(self) -> dict[str, Any]:
        return {
            "entity_types": len(self._rules),
            "total_rules": self.total_rule_count(),
            "rules_by_entity_type": {
                entity_type: [r.name for r in rules] for entity_type, rules in self._rules.items()
            },
        }

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def validate_entity(
        self,
        entity_type: str,
        entity: Any,
        context: ValidationContext | None = None,
        options: RuleExecutionOptions | None = None,
    ) -> ValidationResults:
        """Run every rule registered for *entity_type* against *entity*."""
        rules = self._rules.get(entity_type)
        if not rules:
            message = f"No rules registered for entity type '{entity_type}'"
            logger.debug("No rules registered for %s", entity_type)
            return ValidationResults(
                valid=True,
                warnings=[message],
                summary=ValidationSummary(warnings=1),
            )
        return self._execute(list(rules), entity, context, options)

    def validate_with_rules(
        self,
        rules: Sequence[ValidationRule[Any]],
        entity: Any,
        context: ValidationContext | None = None,
        options: RuleExecutionOptions | None = None,
    ) -> ValidationResults:
        """Run an explicit rule list, bypassing the registry."""
        return self._execute(list(rules), entity, context, options)

    def _execute(
        self,
        rules: list[ValidationRule[Any]],
        entity: Any,
        context: ValidationContext | None,
        options: RuleExecutionOptions | None,
    ) -> ValidationResults:
        opts = options or RuleExecutionOptions()
        results: list[ValidationResult] = []

        for rule in rules:
            if opts.skip_optional_rules and not rule.required:
                logger.debug("Skipping optional rule %s", rule.name)
                continue
            result = self._run_rule(rule, entity, context)
            results.append(result)
            if opts.stop_on_first_error and not result.valid:
                logger.debug("Stopping after first failure in %s", rule.name)
                break

        errors = [r.message for r in results if r.severity == Severity.ERROR]
        warnings: list[str] = []
        for r in results:
            if r.severity == Severity.WARNING:
                warnings.append(r.message)
            elif r.severity == Severity.ERROR:
                # A failing rule can still carry warnings for its other checks.
                warnings.extend(r.detail.get("warnings", ()))
        info = [r.message for r in results if r.severity == Severity.INFO]
        passed = sum(1 for r in results if r.valid)

        return ValidationResults(
            valid=all(r.valid for r in results),
            results=results,
            errors=errors,
            warnings=warnings if opts.include_warnings else [],
            info=info if opts.include_info else [],
            summary=ValidationSummary(
                total=len(results),
                passed=passed,
                failed=len(results) - passed,
                warnings=len(warnings),
            ),
        )

    @staticmethod
    def _run_rule(
        rule: ValidationRule[Any], entity: Any, context: ValidationContext | None
    ) -> ValidationResult:
        try:
            return rule.validate(entity)
        except Exception as exc:
            logger.warning("Rule %s raised during validation", rule.name, exc_info=True)
            detail: dict[str, Any] = {"error_type": type(exc).__name__}
            if context is not None:
                detail["context"] = context.model_dump(exclude_none=True)
            return ValidationResult(
                valid=False,
                severity=Severity.ERROR,
                rule_name=rule.name,
                message=f"Rule execution failed: {exc}",
                detail=detail,
                code="RULE_EXECUTION_FAILED",
            )
