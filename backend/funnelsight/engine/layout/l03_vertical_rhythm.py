"""L.03 — Vertical Rhythm Break.

Within a container of 3+ children the effective gaps (container gap plus the
adjacent margins) should be even. Flags the single most deviant pair.
"""

from __future__ import annotations

import math

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.page import Node
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.math_helpers import dispersion_ratio, round_half_up, safe_mean
from funnelsight.utils.tree import numeric_prop

NAME = "vertical-rhythm"


def effective_gaps(container: Node, default_gap: float) -> list[float]:
    gap = numeric_prop(container, "gap", default_gap)
    kids = container.children
    return [
        gap + numeric_prop(kids[i], "marginBottom", 0.0) + numeric_prop(kids[i + 1], "marginTop", 0.0)
        for i in range(len(kids) - 1)
    ]


@heuristic(
    id="L.03",
    family=Family.LAYOUT,
    name=NAME,
    description="Inconsistent vertical spacing between stacked nodes",
)
def vertical_rhythm(ctx: AnalysisContext) -> list[Suggestion]:
    cfg = ctx.config
    out: list[Suggestion] = []

    for container in ctx.nodes:
        if len(container.children) < cfg.rhythm_min_children:
            continue
        gaps = effective_gaps(container, ctx.metrics.spacing.block_gap)
        if dispersion_ratio(gaps) <= cfg.rhythm_threshold:
            continue

        avg = safe_mean(gaps)
        worst = max(range(len(gaps)), key=lambda i: abs(gaps[i] - avg))
        shift = avg - gaps[worst]
        if not math.isfinite(shift):
            continue
        out.append(Suggestion(
            id=ctx.new_id("spacing"),
            type="spacing",
            confidence=cfg.rhythm_confidence,
            message="Vertical spacing feels inconsistent between elements.",
            affected_node_ids=[container.children[worst].id, container.children[worst + 1].id],
            recommendation=Recommendation(token="--block-gap", delta=round_half_up(shift)),
            heuristic=NAME,
        ))
    return out
