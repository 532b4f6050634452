"""Template catalog, matching and application planning."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from funnelsight.config import Settings
from funnelsight.dependencies import get_settings
from funnelsight.engine.template.catalog import default_registry
from funnelsight.engine.template.matching import analyze_template_match
from funnelsight.engine.template.normalize import (
    describe_template_changes,
    is_template_applied,
    plan_template_application,
    preview_template_application,
)
from funnelsight.models.requests import TemplateMatchRequest, TemplatePlanRequest
from funnelsight.models.responses import (
    TemplateListResponse,
    TemplateMatchResponse,
    TemplatePlanResponse,
)

router = APIRouter()


@router.get("/templates", response_model=TemplateListResponse)
async def list_templates() -> TemplateListResponse:
    return TemplateListResponse(templates=default_registry().all())


@router.post("/templates/match", response_model=TemplateMatchResponse)
async def match_template(
    request: TemplateMatchRequest,
    settings: Settings = Depends(get_settings),
) -> TemplateMatchResponse:
    threshold = request.threshold if request.threshold is not None else settings.template_similarity_threshold
    analysis = analyze_template_match(request.page, threshold=threshold)
    return TemplateMatchResponse(
        fingerprint=analysis.fingerprint,
        match=analysis.match,
        suggestion=analysis.suggestion,
    )


@router.post("/templates/{template_id}/plan", response_model=TemplatePlanResponse)
async def plan_template(template_id: str, request: TemplatePlanRequest) -> TemplatePlanResponse:
    page = request.page
    plan = plan_template_application(page, template_id)
    if plan is None:
        raise HTTPException(404, f"Unknown template: {template_id}")
    return TemplatePlanResponse(
        template_id=plan.template_id,
        personality=plan.personality,
        props_changes=plan.props_changes,
        section_order=plan.section_order,
        preview_node_ids=preview_template_application(page, template_id),
        changes=describe_template_changes(page, template_id),
        already_applied=is_template_applied(page, template_id),
    )
