"""Tests for service-layer helpers and the ServiceResult envelope."""

from __future__ import annotations

from datetime import UTC

import pytest
from pydantic import ValidationError

from botforge.services._helpers import new_id, percentage, utc_now
from botforge.services.result import ServiceError, ServiceResult


class TestHelpers:
    def test_utc_now_is_aware(self) -> None:
        assert utc_now().tzinfo is UTC

    def test_new_id_unique(self) -> None:
        assert len({new_id() for _ in range(50)}) == 50

    @pytest.mark.parametrize(
        ("part", "whole", "expected"),
        [(1, 4, 25.0), (1, 3, 33.33), (0, 0, 0.0), (5, -1, 0.0)],
    )
    def test_percentage(self, part: int, whole: int, expected: float) -> None:
        assert percentage(part, whole) == expected


class TestServiceResult:
    def test_error_envelope(self) -> None:
        result = ServiceResult(
            ok=False, op="layout", error=ServiceError(code="UNKNOWN", message="nope")
        )
        assert result.error is not None
        assert result.error.detail == {}
        assert result.data == {}

    def test_success_collects_data(self) -> None:
        result = ServiceResult.success("layout", archetype="light", count=8)
        assert result.ok
        assert result.data == {"archetype": "light", "count": 8}
        assert result.error is None

    def test_failure_collects_detail(self) -> None:
        result = ServiceResult.failure("assemble", "REJECTED", "too many heads", heads=2)
        assert not result.ok
        assert result.data == {}
        assert result.error == ServiceError(
            code="REJECTED", message="too many heads", detail={"heads": 2}
        )

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="layout")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
