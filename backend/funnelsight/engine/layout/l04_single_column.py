"""L.04 — Single-Column Centering. Opt-in pages read best as one centered column."""

from __future__ import annotations

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.tree import is_row

NAME = "single-column-centering"


@heuristic(
    id="L.04",
    family=Family.LAYOUT,
    name=NAME,
    tags={"optin"},
    description="Multi-column layout on an opt-in step",
)
def single_column_centering(ctx: AnalysisContext) -> list[Suggestion]:
    if ctx.intent != "optin":
        return []

    rows = [n for n in ctx.nodes if is_row(n) and len(n.children) > 1]
    if not rows:
        return []

    return [Suggestion(
        id=ctx.new_id("alignment"),
        type="alignment",
        confidence=ctx.config.centering_confidence,
        message="Opt-in pages typically work better with a single centered column.",
        affected_node_ids=[n.id for n in rows],
        recommendation=Recommendation(token="--layout-columns", delta=1 - len(rows)),
        heuristic=NAME,
    )]
