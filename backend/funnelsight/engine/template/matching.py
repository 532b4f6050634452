"""Template matching — best registry entry above threshold, its differences, and at most one suggestion."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from funnelsight.engine.ids import SuggestionIdGenerator, default_id_generator
from funnelsight.engine.template.catalog import TemplateRegistry, default_registry
from funnelsight.engine.template.fingerprint import derive_fingerprint
from funnelsight.engine.template.similarity import compute_similarity, role_similarity
from funnelsight.engine.tokens import LOCKED_SPACING
from funnelsight.models.fingerprint import (
    StructuralFingerprint,
    TemplateDifference,
    TemplateMatch,
    TemplatePattern,
)
from funnelsight.models.page import Page
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.math_helpers import safe_mean
from funnelsight.utils.tree import numeric_prop

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.72
SPACING_RATIO_TOLERANCE = 0.2
ROOT_GAP_TOLERANCE = 4.0
ROLE_MATCH_FLOOR = 0.8

DIFFERENCE_PRIORITY = ("spacing", "personality", "role", "structure")

# difference type -> suggestion type
_SUGGESTION_TYPE = {
    "spacing": "spacing",
    "personality": "hierarchy",
    "role": "hierarchy",
    "structure": "alignment",
}


@dataclass
class TemplateAnalysis:
    fingerprint: StructuralFingerprint
    match: TemplateMatch | None
    suggestion: Suggestion | None


def detect_differences(
    fingerprint: StructuralFingerprint,
    template: TemplatePattern,
    page: Page | None = None,
) -> list[TemplateDifference]:
    ref = template.fingerprint
    diffs: list[TemplateDifference] = []

    ratio_drift = abs(safe_mean(fingerprint.spacing_ratios, 1.0) - safe_mean(ref.spacing_ratios, 1.0))
    gap_drift = 0.0
    if page is not None:
        root_gap = numeric_prop(page.canvas_root, "gap", LOCKED_SPACING.section_gap)
        gap_drift = abs(root_gap - template.ideal_spacing.section_gap)
    if ratio_drift > SPACING_RATIO_TOLERANCE or gap_drift >= ROOT_GAP_TOLERANCE:
        diffs.append(TemplateDifference(
            type="spacing",
            description="Spacing rhythm differs from template",
            node_ids=[page.canvas_root.id] if page is not None else [],
            suggestion=f"Apply {template.name} spacing",
        ))

    effective = (page.layout_personality if page is not None else None) or fingerprint.inferred_personality
    if effective != template.suggested_personality:
        diffs.append(TemplateDifference(
            type="personality",
            description=f"Structure suggests {template.suggested_personality} personality",
            suggestion=f"Apply {template.suggested_personality} personality",
        ))

    if role_similarity(fingerprint.role_sequence, ref.role_sequence) < ROLE_MATCH_FLOOR:
        mismatched: list[str] = []
        if page is not None:
            for i, section in enumerate(page.canvas_root.children):
                expected = ref.role_sequence[i] if i < len(ref.role_sequence) else None
                if i >= len(fingerprint.role_sequence) or fingerprint.role_sequence[i] != expected:
                    mismatched.append(section.id)
        diffs.append(TemplateDifference(
            type="role",
            description="Section roles differ from template pattern",
            node_ids=mismatched,
            suggestion="Promote sections based on template",
        ))

    if fingerprint.section_count != ref.section_count:
        diffs.append(TemplateDifference(
            type="structure",
            description=f"Page has {fingerprint.section_count} sections, template has {ref.section_count}",
            suggestion="Align section structure with template",
        ))

    return sorted(diffs, key=lambda d: DIFFERENCE_PRIORITY.index(d.type))


def find_template_match(
    fingerprint: StructuralFingerprint,
    threshold: float = SIMILARITY_THRESHOLD,
    registry: TemplateRegistry | None = None,
    page: Page | None = None,
) -> TemplateMatch | None:
    """Highest-similarity template at or above ``threshold``. Earlier entries win ties."""
    registry = registry if registry is not None else default_registry()
    best: TemplatePattern | None = None
    best_score = 0.0
    for template in registry:
        score = compute_similarity(fingerprint, template.fingerprint)
        logger.debug("Template %s similarity %.3f", template.id, score)
        if score >= threshold and score > best_score:
            best, best_score = template, score
    if best is None:
        return None
    return TemplateMatch(
        template=best,
        similarity=best_score,
        differences=detect_differences(fingerprint, best, page),
    )


def generate_template_suggestion(
    page: Page,
    match: TemplateMatch,
    id_generator: SuggestionIdGenerator | None = None,
) -> Suggestion | None:
    if not match.differences:
        return None
    new_id = id_generator or default_id_generator()
    template = match.template
    top = match.differences[0]

    messages = {
        "spacing": f"Apply {template.name} spacing rhythm.",
        "personality": (
            f"This structure matches {template.name}. "
            f"Consider {template.suggested_personality} personality."
        ),
        "role": f"Normalize structure to {template.name} pattern.",
        "structure": f"Structure could align with {template.name} template.",
    }
    return Suggestion(
        id=new_id(f"template-{template.id}"),
        type=_SUGGESTION_TYPE[top.type],
        category="composition",
        source="template",
        confidence=match.similarity,
        message=messages[top.type],
        affected_node_ids=top.node_ids or [page.canvas_root.id],
        recommendation=Recommendation(token=f"--template-{top.type}"),
        heuristic="template-match",
        template_id=template.id,
        match_score=match.similarity,
        can_apply=True,
        apply_label=f"Apply {template.name}",
    )


def analyze_template_match(
    page: Page,
    *,
    threshold: float = SIMILARITY_THRESHOLD,
    registry: TemplateRegistry | None = None,
    id_generator: SuggestionIdGenerator | None = None,
) -> TemplateAnalysis:
    fingerprint = derive_fingerprint(page)
    match = find_template_match(fingerprint, threshold, registry, page)
    suggestion = generate_template_suggestion(page, match, id_generator) if match else None
    if match:
        logger.info(
            "Page %s matches template %s (%.3f, %d differences)",
            page.id, match.template.id, match.similarity, len(match.differences),
        )
    return TemplateAnalysis(fingerprint=fingerprint, match=match, suggestion=suggestion)
