"""POST /api/analyze — whole-page suggestions; POST /api/analyze/layout — layout family only."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from funnelsight.dependencies import get_pipeline
from funnelsight.engine.pipeline import SuggestionPipeline
from funnelsight.models.requests import AnalyzeRequest
from funnelsight.models.responses import AnalyzeResponse, LayoutResponse, StructuralSummary

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    pipeline: SuggestionPipeline = Depends(get_pipeline),
) -> AnalyzeResponse:
    start = time.perf_counter()
    result = pipeline.analyze_page(request.page, request.viewport)
    elapsed = (time.perf_counter() - start) * 1000

    structure = None
    structural = []
    if result.structural is not None:
        s = result.structural
        structural = s.suggestions
        structure = StructuralSummary(
            funnel_intent=s.funnel_intent,
            funnel_intent_confidence=s.funnel_intent_confidence,
            section_roles=s.section_roles,
            likely_personality=s.likely_personality,
            personality_confidence=s.personality_confidence,
            hierarchy_confidence=s.hierarchy_confidence,
        )

    return AnalyzeResponse(
        suggestions=result.merged,
        layout=result.layout,
        composition=result.composition,
        structural=structural,
        template=result.template.suggestion if result.template else None,
        structure=structure,
        processing_time_ms=round(elapsed, 1),
        errors=result.errors,
    )


@router.post("/analyze/layout", response_model=LayoutResponse)
async def analyze_layout(
    request: AnalyzeRequest,
    pipeline: SuggestionPipeline = Depends(get_pipeline),
) -> LayoutResponse:
    return LayoutResponse(
        suggestions=pipeline.analyze_layout(request.page, request.viewport),
        geometry_locked=pipeline.policy.geometry_locked,
    )
