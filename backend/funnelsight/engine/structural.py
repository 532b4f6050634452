"""Structural inference — what a whole page is and how it could be reorganized.

Runs on import, duplication, paste and hydration rather than on every edit.
Produces the funnel intent, a role per top-level section, the likely
personality and a hierarchy-confidence score, then at most two AI-sourced
suggestions carrying a transform directive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from funnelsight.engine.config import PipelineConfig
from funnelsight.engine.ids import SuggestionIdGenerator, default_id_generator
from funnelsight.engine.intent import resolve_page_intent
from funnelsight.engine.personality import resolve_personality
from funnelsight.engine.ranking import sort_by_confidence
from funnelsight.engine.roles import section_roles
from funnelsight.models.page import Node, Page
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.math_helpers import dispersion_ratio, round_half_up, safe_mean
from funnelsight.utils.tree import flatten, is_cta, is_headline, is_hero, is_input, is_text, numeric_prop

logger = logging.getLogger(__name__)

DEFAULT_GAP = 16.0

DIRECTIVE_DESCRIPTIONS: dict[str, str] = {
    "apply-conversion-personality": "Applied conversion-focused personality",
    "apply-editorial-personality": "Applied editorial personality",
    "apply-bold-personality": "Applied bold personality",
    "apply-clean-personality": "Applied clean personality",
    "apply-dense-personality": "Applied dense personality",
    "normalize-section-spacing": "Normalized section spacing",
    "promote-to-hero": "Promoted section to hero",
    "group-into-semantic-container": "Grouped elements into container",
    "add-visual-hierarchy": "Improved visual hierarchy",
    "improve-cta-prominence": "Improved CTA prominence",
}


@dataclass
class StructuralInference:
    funnel_intent: str
    funnel_intent_confidence: float
    section_roles: dict[str, str]
    likely_personality: str
    personality_confidence: float
    hierarchy_confidence: float
    suggestions: list[Suggestion] = field(default_factory=list)


def average_container_gap(root: Node) -> float:
    """Mean ``gap`` over every node that has children (default 16 each)."""
    gaps = [numeric_prop(n, "gap", DEFAULT_GAP) for n in flatten(root) if n.children]
    return safe_mean(gaps, DEFAULT_GAP)


def section_gaps(root: Node) -> list[float]:
    return [numeric_prop(s, "gap", DEFAULT_GAP) for s in root.children]


def infer_personality(page: Page) -> tuple[str, float]:
    if page.layout_personality:
        return page.layout_personality, 0.95

    nodes = flatten(page.canvas_root)
    total = len(nodes)
    cta_count = sum(1 for n in nodes if is_cta(n))
    input_count = sum(1 for n in nodes if is_input(n))
    text_count = sum(1 for n in nodes if is_text(n))
    avg_gap = average_container_gap(page.canvas_root)

    cta_density = cta_count / total if total else 0.0
    content_ratio = text_count / cta_count if cta_count else float(text_count)

    if cta_density > 0.15 and input_count > 0:
        return "conversion", 0.75
    if content_ratio > 4 and avg_gap > 35:
        return "editorial", 0.7
    if avg_gap < 20 and total > 15:
        return "dense", 0.65
    if any(is_hero(n) for n in nodes) and any(is_headline(n) for n in nodes):
        return "bold", 0.6
    return "clean", 0.55


def hierarchy_confidence(page: Page, roles: dict[str, str]) -> float:
    sections = page.canvas_root.children
    score = 0.5
    if "hero" in roles.values():
        score += 0.15
    if sections and roles.get(sections[0].id) == "hero":
        score += 0.1
    headlines = sum(1 for n in flatten(page.canvas_root) if is_headline(n))
    if headlines >= len(sections) * 0.5:
        score += 0.1
    if sections and dispersion_ratio(section_gaps(page.canvas_root)) < 0.3:
        score += 0.15
    return min(1.0, score)


def _ai(
    new_id: SuggestionIdGenerator,
    directive: str,
    type_: str,
    confidence: float,
    message: str,
    affected: list[str],
    token: str,
    delta: float | None = None,
) -> Suggestion:
    return Suggestion(
        id=new_id(f"ai-{directive}"),
        type=type_,
        category="composition",
        source="ai",
        confidence=confidence,
        message=message,
        affected_node_ids=affected,
        recommendation=Recommendation(token=token, delta=delta),
        heuristic="structural-inference",
        transform_directive=directive,
    )


def structural_suggestions(
    page: Page,
    intent: str,
    roles: dict[str, str],
    personality: str,
    personality_confidence: float,
    hierarchy: float,
    config: PipelineConfig,
    new_id: SuggestionIdGenerator,
) -> list[Suggestion]:
    root = page.canvas_root
    nodes = flatten(root)
    out: list[Suggestion] = []

    if personality_confidence > config.personality_mismatch_floor and page.layout_personality != personality:
        out.append(_ai(
            new_id, f"apply-{personality}-personality", "hierarchy", personality_confidence,
            f"This structure would benefit from {personality} personality.",
            [root.id], "--layout-personality",
        ))

    if hierarchy < 0.6 and root.children and not any(is_headline(n) for n in nodes):
        out.append(_ai(
            new_id, "add-visual-hierarchy", "hierarchy", 0.7,
            "Adding headlines would improve visual hierarchy.",
            [c.id for c in root.children[:2]], "--hierarchy-improvement",
        ))

    if root.children and "hero" not in roles.values():
        first = flatten(root.children[0])
        if any(is_headline(n) for n in first) and any(is_cta(n) for n in first):
            out.append(_ai(
                new_id, "promote-to-hero", "cta-emphasis", 0.65,
                "This section could be promoted to a hero section.",
                [root.children[0].id], "--promote-hero",
            ))

    avg_gap = average_container_gap(root)
    gaps = section_gaps(root)
    if len(gaps) > 2 and avg_gap > 0:
        spread = safe_mean([abs(g - avg_gap) for g in gaps]) / avg_gap
        if spread > 0.4:
            out.append(_ai(
                new_id, "normalize-section-spacing", "spacing", 0.6,
                "Normalizing section spacing would improve rhythm.",
                [s.id for s in root.children], "--normalize-spacing", round_half_up(avg_gap),
            ))

    if intent in ("optin", "checkout"):
        ctas = [n for n in nodes if is_cta(n)]
        if len(ctas) == 1:
            expected = resolve_personality(page.layout_personality).cta.min_gap
            out.append(_ai(
                new_id, "improve-cta-prominence", "cta-emphasis", 0.7,
                "CTA could be more prominent for better conversions.",
                [ctas[0].id], "--cta-prominence", expected,
            ))

    kept = [s for s in out if s.confidence >= config.structural_floor]
    return sort_by_confidence(kept)[: config.structural_cap]


def analyze_structure(
    page: Page,
    *,
    config: PipelineConfig | None = None,
    id_generator: SuggestionIdGenerator | None = None,
) -> StructuralInference:
    config = config or PipelineConfig()
    new_id = id_generator or default_id_generator()

    resolved = resolve_page_intent(page)
    roles = section_roles(page.canvas_root)
    personality, personality_conf = infer_personality(page)
    hierarchy = hierarchy_confidence(page, roles)
    suggestions = structural_suggestions(
        page, resolved.intent, roles, personality, personality_conf, hierarchy, config, new_id,
    )
    logger.debug(
        "Structure of %s: intent=%s personality=%s(%.2f) hierarchy=%.2f, %d suggestions",
        page.id, resolved.intent, personality, personality_conf, hierarchy, len(suggestions),
    )
    return StructuralInference(
        funnel_intent=resolved.intent,
        funnel_intent_confidence=resolved.confidence,
        section_roles=roles,
        likely_personality=personality,
        personality_confidence=personality_conf,
        hierarchy_confidence=hierarchy,
        suggestions=suggestions,
    )


def transform_description(directive: str | None) -> str:
    return DIRECTIVE_DESCRIPTIONS.get(directive or "", "Applied structural transformation")
