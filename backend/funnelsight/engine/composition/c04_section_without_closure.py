"""C.04 — Section Without Closure.

Every top-level section except the last needs bottom breathing room:
paddingBottom + marginBottom + root gap should reach 75% of the step gap.
"""

from __future__ import annotations

import math

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.math_helpers import clamp
from funnelsight.utils.tree import flatten, is_section, numeric_prop

NAME = "section-without-closure"


@heuristic(
    id="C.04",
    family=Family.COMPOSITION,
    name=NAME,
    description="Section ends abruptly without bottom spacing",
)
def section_without_closure(ctx: AnalysisContext) -> list[Suggestion]:
    root = ctx.root
    step_gap = ctx.metrics.spacing.step_gap
    expected = step_gap * ctx.config.closure_ratio
    root_gap = numeric_prop(root, "gap", step_gap)

    sections = [
        c for c in root.children
        if c.children and (is_section(c) or len(c.children) >= 2)
    ]

    out: list[Suggestion] = []
    for section in sections[:-1]:
        bottom = numeric_prop(section, "paddingBottom", 0.0) + numeric_prop(section, "marginBottom", 0.0)
        closure = bottom + root_gap
        if closure >= expected or not math.isfinite(closure):
            continue

        confidence = 0.5 + min(0.2, len(flatten(section)) * 0.02)
        if ctx.personality == "editorial":
            confidence += 0.15
        elif ctx.personality == "dense":
            confidence -= 0.25

        out.append(Suggestion(
            id=ctx.new_id(NAME),
            type="spacing",
            category="composition",
            confidence=clamp(confidence, 0.3, 0.85),
            message="This section could use more breathing room at the end.",
            affected_node_ids=[section.id],
            recommendation=Recommendation(
                token="--composition-section-closure",
                delta=math.ceil(expected - closure),
            ),
            heuristic=NAME,
        ))
    return out
