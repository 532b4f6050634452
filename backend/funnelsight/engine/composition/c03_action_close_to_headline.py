"""C.03 — Action Too Close to Headline.

A CTA that immediately follows a headline with less than 1.5× the action gap
between them feels rushed.
"""

from __future__ import annotations

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.page import Node
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.math_helpers import clamp
from funnelsight.utils.tree import is_cta, is_headline, numeric_prop

NAME = "action-too-close-to-headline"


@heuristic(
    id="C.03",
    family=Family.COMPOSITION,
    name=NAME,
    description="CTA placed directly under a headline without separation",
)
def action_too_close_to_headline(ctx: AnalysisContext) -> list[Suggestion]:
    spacing = ctx.metrics.spacing
    expected = spacing.action_gap * ctx.config.headline_action_factor
    out: list[Suggestion] = []

    def visit(container: Node) -> None:
        kids = container.children
        gap = numeric_prop(container, "gap", spacing.block_gap)
        for current, following in zip(kids, kids[1:]):
            if not (is_headline(current) and is_cta(following)):
                continue
            if gap >= expected:
                continue
            confidence = 0.6
            if gap < spacing.content_gap:
                confidence += 0.2
            if ctx.personality == "dense":
                confidence -= 0.2
            out.append(Suggestion(
                id=ctx.new_id(NAME),
                type="spacing",
                category="composition",
                confidence=clamp(confidence, 0.3, 0.9),
                message="Consider adding supporting content between headline and action.",
                affected_node_ids=[current.id, following.id],
                recommendation=Recommendation(token="--composition-headline-action-gap", delta=expected - gap),
                heuristic=NAME,
            ))
        for child in kids:
            if child.children:
                visit(child)

    visit(ctx.root)
    return out
