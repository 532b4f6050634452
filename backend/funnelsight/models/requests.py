"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from funnelsight.models.page import Page, RenderMode, Viewport
from funnelsight.models.suggestion import Suggestion


class AnalyzeRequest(BaseModel):
    page: Page = Field(..., description="Page to analyze")
    viewport: Viewport = Field(default="desktop", description="desktop | mobile")


class ApplyRequest(BaseModel):
    page: Page = Field(..., description="Current page state")
    suggestion: Suggestion = Field(..., description="Suggestion the user chose to apply")


class TemplateMatchRequest(BaseModel):
    page: Page = Field(..., description="Page to fingerprint and match")
    threshold: float | None = Field(
        default=None,
        ge=0,
        le=1,
        description="Similarity threshold (defaults to settings)",
    )


class TemplatePlanRequest(BaseModel):
    page: Page = Field(..., description="Page the template would be applied to")


class IntentRequest(BaseModel):
    page: Page = Field(..., description="Page whose intent to resolve")
    funnel_position: int | None = Field(default=None, ge=0, description="0-based index in the funnel")
    total_pages: int | None = Field(default=None, ge=1, description="Number of pages in the funnel")
    template_hint: str | None = Field(default=None, description="Intent suggested by a template")
    mode: RenderMode = Field(default="editor", description="Render mode for CSS variables")
