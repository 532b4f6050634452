"""Structural fingerprint + template pattern models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from funnelsight.models.page import LayoutPersonality, StepIntent

SectionRole = Literal["hero", "body", "action", "footer", "feature", "testimonial"]
DifferenceType = Literal["spacing", "personality", "role", "structure"]

SECTION_ROLES: tuple[str, ...] = ("hero", "body", "action", "footer", "feature", "testimonial")


class StructuralFingerprint(BaseModel):
    """Content-agnostic structural signature of a page."""

    model_config = ConfigDict(frozen=True)

    hash: str
    section_count: int = 0
    role_sequence: list[SectionRole] = Field(default_factory=list)
    spacing_ratios: list[float] = Field(default_factory=list)  # mean-normalized to 1.0
    depth_profile: list[int] = Field(default_factory=list)  # node count per depth
    type_distribution: dict[str, float] = Field(default_factory=dict)  # sums to 1
    cta_positions: list[float] = Field(default_factory=list)  # normalized traversal index
    headline_positions: list[float] = Field(default_factory=list)
    inferred_personality: LayoutPersonality = "clean"
    inferred_intent: StepIntent = "content"


class IdealSpacing(BaseModel):
    model_config = ConfigDict(frozen=True)

    section_gap: float
    block_gap: float
    content_gap: float


class TemplatePattern(BaseModel):
    """Read-only reference entry of the template registry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    fingerprint: StructuralFingerprint
    ideal_spacing: IdealSpacing
    suggested_personality: LayoutPersonality


class TemplateDifference(BaseModel):
    type: DifferenceType
    description: str
    node_ids: list[str] = Field(default_factory=list)
    suggestion: str = ""


class TemplateMatch(BaseModel):
    template: TemplatePattern
    similarity: float
    differences: list[TemplateDifference] = Field(default_factory=list)
