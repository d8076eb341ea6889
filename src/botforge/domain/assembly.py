"""Assembly input and report models for whole-bot budget validation."""

from __future__ import annotations

from pydantic import BaseModel, Field

from botforge.domain.budget import PartUsage, SlotBudget
from botforge.domain.types import Archetype, PartCategory
from botforge.domain.validation import ValidationResults


class AssemblyPart(BaseModel):
    model_config = {"frozen": True}

    id: str
    category: PartCategory
    name: str = ""


class AssemblyChip(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str = ""


class AssemblyConfig(BaseModel):
    """Everything a caller wants to bolt onto one skeleton.

    ``budget`` overrides the archetype's default slot counts when given.
    Parts whose category is a chip category are tallied with the chips.
    """

    model_config = {"frozen": True}

    archetype: Archetype
    budget: SlotBudget | None = None
    parts: list[AssemblyPart] = Field(default_factory=list)
    expansion_chips: list[AssemblyChip] = Field(default_factory=list)
    soul_chips: list[AssemblyChip] = Field(default_factory=list)

    def equipped_categories(self) -> list[PartCategory]:
        categories = [p.category for p in self.parts]
        categories.extend(PartCategory.EXPANSION_CHIP for _ in self.expansion_chips)
        categories.extend(PartCategory.SOUL_CHIP for _ in self.soul_chips)
        return categories


class SlotRuleInput(BaseModel):
    """Entity validated by assembly rules.

    ``assembly`` carries the raw input for rules that inspect individual parts.
    """

    model_config = {"frozen": True}

    archetype: Archetype
    budget: SlotBudget
    usage: PartUsage
    assembly: AssemblyConfig | None = None


class AssemblyReport(ValidationResults):
    """Rule-engine results enriched with the resolved assembly inputs."""

    assembly: AssemblyConfig
    budget: SlotBudget
    usage: PartUsage
    can_assemble: bool
    recommendations: list[str] = Field(default_factory=list)
