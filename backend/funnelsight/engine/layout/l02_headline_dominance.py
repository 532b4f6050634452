"""L.02 — Headline Dominance.

Every headline should be at least 1.15× every body text on the page.
"""

from __future__ import annotations

import math

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.tree import is_headline, is_text, numeric_prop

NAME = "headline-dominance"


@heuristic(
    id="L.02",
    family=Family.LAYOUT,
    name=NAME,
    description="Headline not dominant enough over body text",
)
def headline_dominance(ctx: AnalysisContext) -> list[Suggestion]:
    cfg = ctx.config
    headlines = [n for n in ctx.nodes if is_headline(n)]
    bodies = [n for n in ctx.nodes if is_text(n)]
    if not headlines or not bodies:
        return []

    out: list[Suggestion] = []
    for headline in headlines:
        head_size = numeric_prop(headline, "fontSize", cfg.default_headline_size)
        for body in bodies:
            body_size = numeric_prop(body, "fontSize", cfg.default_body_size)
            if body_size <= 0:
                continue
            if head_size / body_size >= cfg.dominance_ratio:
                continue
            delta = body_size * cfg.dominance_ratio - head_size
            if not math.isfinite(delta):
                continue
            out.append(Suggestion(
                id=ctx.new_id("hierarchy"),
                type="hierarchy",
                confidence=cfg.dominance_confidence,
                message="Headline could be more prominent relative to body text.",
                affected_node_ids=[headline.id, body.id],
                recommendation=Recommendation(
                    token="--headline-font-size",
                    delta=math.ceil(delta),
                ),
                heuristic=NAME,
            ))
    return out
