"""AnalysisContext — the read-only view of one page that every heuristic receives.

Heuristics return new suggestions and never write to the page. The only
mutable fields are pipeline bookkeeping (completed heuristics, errors).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from funnelsight.engine.config import PipelineConfig
from funnelsight.engine.ids import SuggestionIdGenerator, default_id_generator
from funnelsight.engine.layout_metrics import LayoutMetrics, resolve_layout_metrics
from funnelsight.engine.personality import SensitivityProfile
from funnelsight.engine.tokens import RULE_0, GeometryPolicy
from funnelsight.models.page import Node, Page
from funnelsight.utils.tree import flatten


@dataclass
class AnalysisContext:
    page: Page
    metrics: LayoutMetrics
    # Depth-first, root first
    nodes: list[Node] = field(default_factory=list)
    viewport: str = "desktop"
    config: PipelineConfig = field(default_factory=PipelineConfig)
    new_id: SuggestionIdGenerator = field(default_factory=default_id_generator)

    # --- Pipeline metadata ---
    completed: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    _parents: dict[str, Node] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.nodes:
            self.nodes = flatten(self.page.canvas_root)
        for node in self.nodes:
            for child in node.children:
                self._parents[child.id] = node

    @property
    def root(self) -> Node:
        return self.page.canvas_root

    @property
    def personality(self) -> str:
        return self.metrics.personality.personality

    @property
    def intent(self) -> str:
        return self.metrics.intent

    @property
    def sensitivity(self) -> SensitivityProfile:
        return self.metrics.personality.suggestions

    @property
    def policy(self) -> GeometryPolicy:
        return self.metrics.policy

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def parent_of(self, node_id: str) -> Node | None:
        return self._parents.get(node_id)


def create_context(
    page: Page,
    viewport: str = "desktop",
    *,
    config: PipelineConfig | None = None,
    policy: GeometryPolicy = RULE_0,
    id_generator: SuggestionIdGenerator | None = None,
) -> AnalysisContext:
    """Build a context from editor state. The page's own personality drives sensitivity."""
    return AnalysisContext(
        page=page,
        metrics=resolve_layout_metrics(page, policy=policy),
        viewport=viewport,
        config=config or PipelineConfig(),
        new_id=id_generator or default_id_generator(),
    )


# Layout and composition share one context shape; the names mirror the two
# entry points the editor calls.
create_layout_context = create_context
create_composition_context = create_context
