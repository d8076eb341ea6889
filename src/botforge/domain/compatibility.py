"""Read models produced by compatibility analyses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from botforge.domain.slots import SlotDefinition
from botforge.domain.types import Archetype, CompatibilityTier, PartCategory, SlotId


class CategoryCompatibility(BaseModel):
    """Which of a set of slots accept one category, and why the rest don't."""

    model_config = {"frozen": True}

    category: PartCategory
    compatible: bool
    tier: CompatibilityTier
    compatible_slots: list[SlotId] = Field(default_factory=list)
    # Unknown slot ids are kept verbatim.
    incompatible_slots: list[SlotId | str] = Field(default_factory=list)
    reasons: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ArchetypeCompatibility(BaseModel):
    model_config = {"frozen": True}

    archetype: Archetype
    category: PartCategory
    total_slots: int
    compatible_slots: int
    percentage: float
    compatible_slot_details: list[SlotDefinition] = Field(default_factory=list)


class ArchetypeRanking(BaseModel):
    """One archetype's fitness for a desired set of categories."""

    model_config = {"frozen": True}

    archetype: Archetype
    overall_compatibility: float
    total_compatible_slots: int
    score: float
    per_category: dict[PartCategory, ArchetypeCompatibility] = Field(default_factory=dict)


class SlotCategoryPair(BaseModel):
    model_config = {"frozen": True}

    slot_id: SlotId | str
    category: PartCategory


class RejectedPair(SlotCategoryPair):
    reason: str


class BulkAssignmentSummary(BaseModel):
    model_config = {"frozen": True}

    total: int
    valid: int
    invalid: int
    validity_percentage: float


class BulkAssignmentReport(BaseModel):
    model_config = {"frozen": True}

    valid: bool
    valid_assignments: list[SlotCategoryPair] = Field(default_factory=list)
    invalid_assignments: list[RejectedPair] = Field(default_factory=list)
    summary: BulkAssignmentSummary
