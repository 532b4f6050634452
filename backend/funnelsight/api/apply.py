"""POST /api/apply — prop patches for one suggestion. The page is never modified."""

from __future__ import annotations

from fastapi import APIRouter

from funnelsight.engine.apply import apply_suggestion
from funnelsight.models.requests import ApplyRequest
from funnelsight.models.suggestion import ApplyResult

router = APIRouter()


@router.post("/apply", response_model=ApplyResult)
async def apply(request: ApplyRequest) -> ApplyResult:
    return apply_suggestion(request.page, request.suggestion)
