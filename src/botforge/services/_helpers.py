"""Shared service-layer helper functions."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current UTC time (for assignment stamps and audit trails)."""
    return datetime.now(UTC)


def new_id() -> str:
    """Random hex identifier for history entries."""
    return uuid.uuid4().hex


def percentage(part: int, whole: int) -> float:
    """``part / whole`` as a percentage rounded to two places; 0 when empty."""
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)
