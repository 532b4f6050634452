"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from funnelsight.models.fingerprint import StructuralFingerprint, TemplateMatch, TemplatePattern
from funnelsight.models.suggestion import Suggestion


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    heuristics_registered: int = 0
    templates_registered: int = 0
    geometry_locked: bool = True


class StructuralSummary(BaseModel):
    funnel_intent: str
    funnel_intent_confidence: float
    section_roles: dict[str, str] = Field(default_factory=dict)
    likely_personality: str
    personality_confidence: float
    hierarchy_confidence: float


class AnalyzeResponse(BaseModel):
    suggestions: list[Suggestion] = Field(default_factory=list)
    layout: list[Suggestion] = Field(default_factory=list)
    composition: list[Suggestion] = Field(default_factory=list)
    structural: list[Suggestion] = Field(default_factory=list)
    template: Suggestion | None = None
    structure: StructuralSummary | None = None
    processing_time_ms: float = 0.0
    errors: dict[str, str] = Field(default_factory=dict)


class LayoutResponse(BaseModel):
    suggestions: list[Suggestion] = Field(default_factory=list)
    geometry_locked: bool = True


class TemplateMatchResponse(BaseModel):
    fingerprint: StructuralFingerprint
    match: TemplateMatch | None = None
    suggestion: Suggestion | None = None


class TemplateListResponse(BaseModel):
    templates: list[TemplatePattern] = Field(default_factory=list)


class TemplatePlanResponse(BaseModel):
    template_id: str
    personality: str
    props_changes: dict[str, dict[str, Any]] = Field(default_factory=dict)
    section_order: list[str] = Field(default_factory=list)
    preview_node_ids: list[str] = Field(default_factory=list)
    changes: list[str] = Field(default_factory=list)
    already_applied: bool = False


class PersonalityResponse(BaseModel):
    personality: str
    label: str
    description: str
    variables: dict[str, str] = Field(default_factory=dict)


class IntentResponse(BaseModel):
    intent: str
    confidence: float
    source: str
    variables: dict[str, str] = Field(default_factory=dict)
    inspector_order: list[str] = Field(default_factory=list)
    collapse_hints: dict[str, bool] = Field(default_factory=dict)


class TriggerResponse(BaseModel):
    action: str
    layout: bool = False
    composition: bool = False
    structural: bool = False
    template: bool = False
