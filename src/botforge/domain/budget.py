"""Per-category slot budgets and part usage tallies."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Self

from pydantic import BaseModel, Field

from botforge.domain.types import ALL_CATEGORIES, PartCategory


def _field_name(category: PartCategory) -> str:
    return category.value.replace("-", "_")


class _CategoryCounts(BaseModel):
    """One non-negative count per item category."""

    model_config = {"frozen": True}

    head: int = Field(default=0, ge=0)
    torso: int = Field(default=0, ge=0)
    arm: int = Field(default=0, ge=0)
    leg: int = Field(default=0, ge=0)
    accessory: int = Field(default=0, ge=0)
    expansion_chip: int = Field(default=0, ge=0)
    soul_chip: int = Field(default=0, ge=0)

    def count(self, category: PartCategory) -> int:
        return int(getattr(self, _field_name(category)))

    def items(self) -> Iterator[tuple[PartCategory, int]]:
        for category in ALL_CATEGORIES:
            yield category, self.count(category)

    def as_dict(self) -> dict[str, int]:
        """Category-keyed plain dict (``"soul-chip"`` style keys)."""
        return {str(category): n for category, n in self.items()}

    @classmethod
    def from_counts(cls, counts: dict[PartCategory, int]) -> Self:
        return cls(**{_field_name(c): n for c, n in counts.items()})


class SlotBudget(_CategoryCounts):
    """How many slots of each category an assembly may fill."""


class PartUsage(_CategoryCounts):
    """How many items of each category are currently equipped."""

    @classmethod
    def tally(cls, categories: Iterable[PartCategory]) -> PartUsage:
        counts: dict[PartCategory, int] = dict.fromkeys(ALL_CATEGORIES, 0)
        for category in categories:
            counts[PartCategory(category)] += 1
        return cls.from_counts(counts)
