"""L.05 — Visual Weight Balance.

Root children are split into a top and bottom half (top gets the odd one).
Each node weighs 1, heavy types add 2, and children count half.
"""

from __future__ import annotations

import math

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.page import Node
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.math_helpers import round_half_up
from funnelsight.utils.tree import node_type

NAME = "visual-weight-balance"

HEAVY_TYPES = frozenset({"hero", "image", "video", "card", "button", "cta"})


def is_heavy(node: Node) -> bool:
    return node_type(node) in HEAVY_TYPES


def visual_weight(nodes: list[Node]) -> float:
    total = 0.0
    for node in nodes:
        total += 1.0
        if is_heavy(node):
            total += 2.0
        total += 0.5 * visual_weight(node.children)
    return total


@heuristic(
    id="L.05",
    family=Family.LAYOUT,
    name=NAME,
    description="Bottom-heavy page",
)
def visual_weight_balance(ctx: AnalysisContext) -> list[Suggestion]:
    kids = ctx.root.children
    if len(kids) < 2:
        return []

    mid = math.ceil(len(kids) / 2)
    top, bottom = kids[:mid], kids[mid:]
    top_w, bottom_w = visual_weight(top), visual_weight(bottom)
    total = top_w + bottom_w
    if total == 0:
        return []

    ratio = bottom_w / total
    if ratio <= ctx.config.bottom_heavy_ratio:
        return []

    heavy = [n.id for n in bottom if is_heavy(n)]
    return [Suggestion(
        id=ctx.new_id("alignment"),
        type="alignment",
        confidence=ctx.config.balance_confidence,
        message="Layout feels bottom-heavy. Consider moving key elements higher.",
        affected_node_ids=heavy or [bottom[0].id],
        recommendation=Recommendation(token="--visual-balance", delta=round_half_up((ratio - 0.5) * 100)),
        heuristic=NAME,
    )]
