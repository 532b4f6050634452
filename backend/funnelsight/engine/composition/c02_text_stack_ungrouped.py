"""C.02 — Ungrouped Text Stack.

Three or more consecutive text/headline siblings that share their container
with other content read as disconnected. Skipped when the run already is the
whole container, or when the container is itself a dedicated group.
"""

from __future__ import annotations

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.page import Node
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.tree import is_grouping, is_headline, is_text, node_type

NAME = "text-stack-ungrouped"


def _is_copy(node: Node) -> bool:
    return is_text(node) or is_headline(node)


@heuristic(
    id="C.02",
    family=Family.COMPOSITION,
    name=NAME,
    description="Consecutive text nodes without a grouping container",
)
def text_stack_ungrouped(ctx: AnalysisContext) -> list[Suggestion]:
    min_run = ctx.config.text_stack_min
    out: list[Suggestion] = []

    def flush(container: Node, run: list[Node]) -> None:
        if len(run) < min_run:
            return
        if len(run) == len(container.children):
            return
        if is_grouping(container) and node_type(container) != "container":
            return
        out.append(Suggestion(
            id=ctx.new_id(NAME),
            type="hierarchy",
            category="composition",
            confidence=min(0.9, 0.5 + (len(run) - min_run) * 0.1),
            message="These text elements could be grouped together for better structure.",
            affected_node_ids=[n.id for n in run],
            recommendation=Recommendation(token="--composition-group-text"),
            heuristic=NAME,
        ))

    def visit(container: Node) -> None:
        run: list[Node] = []
        for child in container.children:
            if _is_copy(child):
                run.append(child)
            else:
                flush(container, run)
                run = []
            if not is_text(child) and child.children:
                visit(child)
        flush(container, run)

    visit(ctx.root)
    return out
