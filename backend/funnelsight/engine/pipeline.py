"""Suggestion pipeline — runs the analyzer families and ranks what they return.

Every entry point is a pure function of the page plus injected configuration.
The only state touched is the suggestion-ID counter.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from funnelsight.engine.config import PipelineConfig
from funnelsight.engine.context import AnalysisContext, create_context
from funnelsight.engine.ids import SuggestionIdGenerator, default_id_generator
from funnelsight.engine.ranking import adjust_composition, adjust_layout, finalize
from funnelsight.engine.registry import Family, HeuristicRegistry, discover, get_registry
from funnelsight.engine.structural import StructuralInference
from funnelsight.engine.structural import analyze_structure as _analyze_structure
from funnelsight.engine.template.catalog import TemplateRegistry, default_registry
from funnelsight.engine.template.matching import TemplateAnalysis
from funnelsight.engine.template.matching import analyze_template_match as _analyze_template_match
from funnelsight.engine.tokens import RULE_0, GeometryPolicy
from funnelsight.models.page import Page
from funnelsight.models.suggestion import Suggestion

logger = logging.getLogger(__name__)


@dataclass
class PageAnalysis:
    """Every family's output for one page, plus the merged top list."""

    layout: list[Suggestion] = field(default_factory=list)
    composition: list[Suggestion] = field(default_factory=list)
    structural: StructuralInference | None = None
    template: TemplateAnalysis | None = None
    merged: list[Suggestion] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)


class SuggestionPipeline:
    """Orchestrates the layout, composition, structural and template analyzers."""

    def __init__(
        self,
        registry: HeuristicRegistry | None = None,
        config: PipelineConfig | None = None,
        policy: GeometryPolicy = RULE_0,
        template_registry: TemplateRegistry | None = None,
        id_generator: SuggestionIdGenerator | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()
        self.policy = policy
        self.template_registry = template_registry if template_registry is not None else default_registry()
        self.new_id = id_generator or default_id_generator()

    def context(self, page: Page, viewport: str = "desktop") -> AnalysisContext:
        return create_context(
            page,
            viewport,
            config=self.config,
            policy=self.policy,
            id_generator=self.new_id,
        )

    def run_family(self, ctx: AnalysisContext, family: Family) -> list[Suggestion]:
        """Run every heuristic of one family. A failing heuristic is recorded and skipped."""
        start = time.perf_counter()
        specs = self.registry.get_family(family)
        raw: list[Suggestion] = []
        for spec in specs:
            t0 = time.perf_counter()
            try:
                found = spec.fn(ctx)
                raw.extend(found)
                ctx.completed.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s produced %d in %.1fms", spec.id, len(found), elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "%s: %d/%d heuristics, %d raw suggestions in %.1fms",
            family.name.capitalize(),
            len(ctx.completed & {s.id for s in specs}),
            len(specs),
            len(raw),
            total,
        )
        return raw

    def _policy_gate(self, page: Page) -> bool:
        """True when layout intelligence must not run at all."""
        if self.policy.geometry_locked:
            logger.info("Layout analysis of %s skipped: geometry locked", page.id)
            return True
        return False

    def analyze_layout(self, page: Page, viewport: str = "desktop") -> list[Suggestion]:
        if self._policy_gate(page):
            return []
        ctx = self.context(page, viewport)
        raw = self.run_family(ctx, Family.LAYOUT)
        return finalize(adjust_layout(raw, ctx.sensitivity))

    def analyze_composition(self, page: Page, viewport: str = "desktop") -> list[Suggestion]:
        ctx = self.context(page, viewport)
        raw = self.run_family(ctx, Family.COMPOSITION)
        adjusted = adjust_composition(
            raw, ctx.personality, ctx.sensitivity, self.config.composition_threshold,
        )
        return finalize(adjusted, self.config.composition_cap)

    def analyze_structure(self, page: Page) -> StructuralInference:
        return _analyze_structure(page, config=self.config, id_generator=self.new_id)

    def analyze_template_match(self, page: Page) -> TemplateAnalysis:
        return _analyze_template_match(
            page,
            threshold=self.config.template_threshold,
            registry=self.template_registry,
            id_generator=self.new_id,
        )

    def analyze_page(self, page: Page, viewport: str = "desktop") -> PageAnalysis:
        """All four families, then one merged list sorted, deduped and capped."""
        start = time.perf_counter()
        result = PageAnalysis()

        if not self._policy_gate(page):
            ctx = self.context(page, viewport)
            raw = self.run_family(ctx, Family.LAYOUT)
            result.layout = finalize(adjust_layout(raw, ctx.sensitivity))
            result.errors.update(ctx.errors)

        ctx = self.context(page, viewport)
        raw = self.run_family(ctx, Family.COMPOSITION)
        result.composition = finalize(
            adjust_composition(raw, ctx.personality, ctx.sensitivity, self.config.composition_threshold),
            self.config.composition_cap,
        )
        result.errors.update(ctx.errors)

        result.structural = self.analyze_structure(page)
        result.template = self.analyze_template_match(page)

        candidates = [*result.layout, *result.composition, *result.structural.suggestions]
        if result.template.suggestion is not None:
            candidates.append(result.template.suggestion)
        result.merged = finalize(candidates, self.config.max_suggestions)

        logger.info(
            "Page %s analyzed: %d merged suggestions in %.0fms",
            page.id,
            len(result.merged),
            (time.perf_counter() - start) * 1000,
        )
        return result


def create_pipeline(
    config: PipelineConfig | None = None,
    policy: GeometryPolicy = RULE_0,
    template_registry: TemplateRegistry | None = None,
    id_generator: SuggestionIdGenerator | None = None,
) -> SuggestionPipeline:
    """Factory function for creating a pipeline with every heuristic registered."""
    discover()
    return SuggestionPipeline(
        config=config,
        policy=policy,
        template_registry=template_registry,
        id_generator=id_generator,
    )


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------


def analyze_layout(
    page: Page,
    viewport: str = "desktop",
    *,
    policy: GeometryPolicy = RULE_0,
    config: PipelineConfig | None = None,
    id_generator: SuggestionIdGenerator | None = None,
) -> list[Suggestion]:
    return create_pipeline(config, policy, id_generator=id_generator).analyze_layout(page, viewport)


def analyze_composition(
    page: Page,
    viewport: str = "desktop",
    *,
    config: PipelineConfig | None = None,
    id_generator: SuggestionIdGenerator | None = None,
) -> list[Suggestion]:
    return create_pipeline(config, id_generator=id_generator).analyze_composition(page, viewport)


def analyze_page(
    page: Page,
    viewport: str = "desktop",
    *,
    policy: GeometryPolicy = RULE_0,
    config: PipelineConfig | None = None,
    template_registry: TemplateRegistry | None = None,
    id_generator: SuggestionIdGenerator | None = None,
) -> PageAnalysis:
    pipeline = create_pipeline(config, policy, template_registry, id_generator)
    return pipeline.analyze_page(page, viewport)
