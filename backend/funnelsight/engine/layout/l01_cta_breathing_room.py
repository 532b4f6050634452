"""L.01 — CTA Breathing Room.

A CTA sitting directly next to a form field needs at least the minimum gap
in its container.
"""

from __future__ import annotations

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.page import Node
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.tree import is_cta, is_input, numeric_prop

NAME = "cta-breathing-room"


@heuristic(
    id="L.01",
    family=Family.LAYOUT,
    name=NAME,
    description="CTA too close to adjacent form fields",
)
def cta_breathing_room(ctx: AnalysisContext) -> list[Suggestion]:
    cfg = ctx.config
    min_gap = cfg.cta_min_gap
    out: list[Suggestion] = []

    def make(cta: Node, other: Node, confidence: float, message: str, gap: float) -> Suggestion:
        return Suggestion(
            id=ctx.new_id("cta-emphasis"),
            type="cta-emphasis",
            confidence=confidence,
            message=message,
            affected_node_ids=[cta.id, other.id],
            recommendation=Recommendation(token="--layout-cta-min-gap", delta=min_gap - gap),
            heuristic=NAME,
        )

    def visit(container: Node) -> None:
        children = container.children
        gap = numeric_prop(container, "gap", ctx.metrics.spacing.action_gap)
        if gap < min_gap:
            for i, node in enumerate(children):
                if not is_cta(node):
                    continue
                if i > 0 and is_input(children[i - 1]):
                    out.append(make(
                        node, children[i - 1], cfg.cta_confidence_before_input,
                        "Action button could use more breathing room from form fields.", gap,
                    ))
                if i < len(children) - 1 and is_input(children[i + 1]):
                    out.append(make(
                        node, children[i + 1], cfg.cta_confidence_after_input,
                        "Consider adding space after the action button.", gap,
                    ))
        for child in children:
            if child.children:
                visit(child)

    visit(ctx.root)
    return out
