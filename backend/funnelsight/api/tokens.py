"""Decorative token projections and recompute triggers."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from funnelsight.engine.intent import (
    inspector_collapse_hints,
    inspector_section_order,
    intent_variables,
    resolve_page_intent,
)
from funnelsight.engine.personality import (
    DESCRIPTIONS,
    DISPLAY_NAMES,
    is_valid_personality,
    personality_variables,
    resolve_personality,
)
from funnelsight.engine.triggers import (
    should_recompute_composition,
    should_recompute_layout,
    should_run_structural_analysis,
    should_run_template_analysis,
)
from funnelsight.models.requests import IntentRequest
from funnelsight.models.responses import IntentResponse, PersonalityResponse, TriggerResponse

router = APIRouter()


@router.get("/personality/{name}", response_model=PersonalityResponse)
async def personality(name: str) -> PersonalityResponse:
    if not is_valid_personality(name):
        raise HTTPException(404, f"Unknown personality: {name}")
    resolved = resolve_personality(name)
    return PersonalityResponse(
        personality=resolved.personality,
        label=DISPLAY_NAMES[name],
        description=DESCRIPTIONS[name],
        variables=personality_variables(resolved),
    )


@router.post("/intent", response_model=IntentResponse)
async def intent(request: IntentRequest) -> IntentResponse:
    resolved = resolve_page_intent(
        request.page,
        funnel_position=request.funnel_position,
        total_pages=request.total_pages,
        template_hint=request.template_hint,
    )
    return IntentResponse(
        intent=resolved.intent,
        confidence=resolved.confidence,
        source=resolved.source,
        variables=intent_variables(resolved, request.mode),
        inspector_order=inspector_section_order(resolved.intent),
        collapse_hints=inspector_collapse_hints(resolved.intent),
    )


@router.get("/triggers/{action}", response_model=TriggerResponse)
async def triggers(action: str) -> TriggerResponse:
    return TriggerResponse(
        action=action,
        layout=should_recompute_layout(action),
        composition=should_recompute_composition(action),
        structural=should_run_structural_analysis(action),
        template=should_run_template_analysis(action),
    )
