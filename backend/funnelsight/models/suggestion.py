"""Suggestion data model — one record shape shared by every analyzer family."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

SuggestionType = Literal["spacing", "alignment", "hierarchy", "cta-emphasis", "readability"]
SuggestionCategory = Literal["layout", "composition"]
SuggestionSource = Literal["heuristic", "ai", "template"]

SUGGESTION_TYPES: tuple[str, ...] = (
    "spacing",
    "alignment",
    "hierarchy",
    "cta-emphasis",
    "readability",
)


class Recommendation(BaseModel):
    token: str | None = None  # Design token to adjust, e.g. "--block-gap"
    delta: float | None = None  # Numeric change to apply


class Suggestion(BaseModel):
    """A non-binding, confidence-scored recommendation for specific nodes.

    ``id`` is opaque: it never takes part in equality-style comparisons such as
    deduplication (see ``signature``).
    """

    id: str
    type: SuggestionType
    confidence: float = Field(ge=0.0, le=1.0)
    message: str
    affected_node_ids: list[str] = Field(min_length=1)
    recommendation: Recommendation = Field(default_factory=Recommendation)

    category: SuggestionCategory = "layout"
    source: SuggestionSource = "heuristic"
    heuristic: str = ""  # e.g. "section-missing-cta"

    # Structural (source="ai")
    transform_directive: str | None = None

    # Template (source="template")
    template_id: str | None = None
    match_score: float | None = None
    can_apply: bool = False
    apply_label: str | None = None

    @property
    def signature(self) -> tuple[str, ...]:
        """Order-insensitive affected-node key used for deduplication."""
        return tuple(sorted(self.affected_node_ids))

    def content_key(self) -> dict[str, Any]:
        """Everything except the opaque id. Two runs over the same page compare equal on this."""
        return self.model_dump(exclude={"id"})


class ApplyResult(BaseModel):
    success: bool
    modified_node_ids: list[str] = Field(default_factory=list)
    # nodeId -> partial props to merge through the host's undoable mutation path
    props_changes: dict[str, dict[str, Any]] = Field(default_factory=dict)
    # Page-level fields (e.g. layout_personality) the host should patch
    page_changes: dict[str, Any] = Field(default_factory=dict)
    description: str = ""
