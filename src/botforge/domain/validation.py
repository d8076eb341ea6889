"""Validation result models and the rule contract.

Every rule implements :class:`ValidationRule`. The rule engine never
needs to change when a rule is added: authors subclass the ABC and
register an instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class Severity(StrEnum):
    """Severity of a single validation result."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationResult(BaseModel):
    """Outcome of one rule (or one command) against one entity."""

    model_config = {"frozen": True}

    valid: bool
    severity: Severity
    rule_name: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)
    field: str | None = None
    code: str | None = None

    @classmethod
    def ok(cls, rule_name: str, message: str, **detail: Any) -> ValidationResult:
        return cls(
            valid=True, severity=Severity.INFO, rule_name=rule_name, message=message, detail=detail
        )

    @classmethod
    def error(cls, rule_name: str, message: str, **detail: Any) -> ValidationResult:
        return cls(
            valid=False,
            severity=Severity.ERROR,
            rule_name=rule_name,
            message=message,
            detail=detail,
        )

    @classmethod
    def warning(
        cls, rule_name: str, message: str, *, valid: bool = True, **detail: Any
    ) -> ValidationResult:
        return cls(
            valid=valid,
            severity=Severity.WARNING,
            rule_name=rule_name,
            message=message,
            detail=detail,
        )


class ValidationSummary(BaseModel):
    model_config = {"frozen": True}

    total: int = 0
    passed: int = 0
    failed: int = 0
    warnings: int = 0


class ValidationResults(BaseModel):
    """Aggregate of every rule result produced for one entity.

    Attributes:
        valid: True iff every produced result is valid.
        results: Structured per-rule results, always retained.
        errors: Flattened ERROR messages.
        warnings: Flattened WARNING messages (subject to ``include_warnings``).
        info: Flattened INFO messages (subject to ``include_info``).
    """

    model_config = {"frozen": True}

    valid: bool
    results: list[ValidationResult] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    info: list[str] = Field(default_factory=list)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)


class ValidationContext(BaseModel):
    """Optional caller context threaded into rule failure details."""

    model_config = {"frozen": True}

    actor_id: str | None = None
    action: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class RuleExecutionOptions(BaseModel):
    model_config = {"frozen": True}

    stop_on_first_error: bool = False
    include_warnings: bool = True
    include_info: bool = True
    skip_optional_rules: bool = False


T = TypeVar("T")


class ValidationRule(ABC, Generic[T]):
    """Abstract base class for composable validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique rule identifier within an entity type."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary of what the rule enforces."""
        ...

    @property
    def required(self) -> bool:
        """Optional rules are skipped when ``skip_optional_rules`` is set."""
        return True

    @abstractmethod
    def validate(self, entity: T) -> ValidationResult:
        """Validate *entity* and return a single result."""
        ...
