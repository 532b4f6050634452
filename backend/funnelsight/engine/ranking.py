"""Ranking — personality adjustment, thresholding, dedupe, caps and list utilities.

Everything here returns new lists of new suggestion objects.
"""

from __future__ import annotations

from collections.abc import Iterable

from funnelsight.engine.personality import SensitivityProfile
from funnelsight.models.suggestion import Suggestion


def with_confidence(s: Suggestion, confidence: float) -> Suggestion:
    return s.model_copy(update={"confidence": min(1.0, max(0.0, confidence))})


def adjust_layout(suggestions: Iterable[Suggestion], sensitivity: SensitivityProfile) -> list[Suggestion]:
    """Per-type sensitivity thresholds. CTA confidence is weighted but gated on its raw value."""
    out: list[Suggestion] = []
    for s in suggestions:
        confidence = s.confidence
        if s.type == "cta-emphasis":
            confidence *= sensitivity.cta_weight
        if s.confidence < sensitivity.threshold_for(s.type):
            continue
        out.append(with_confidence(s, confidence))
    return out


def adjust_composition(
    suggestions: Iterable[Suggestion],
    personality: str,
    sensitivity: SensitivityProfile,
    base_threshold: float = 0.4,
) -> list[Suggestion]:
    """Personality multipliers first, then the per-type threshold on the adjusted value."""
    out: list[Suggestion] = []
    for s in suggestions:
        confidence = s.confidence
        if personality == "dense":
            confidence *= 0.75
        elif personality == "conversion":
            confidence *= sensitivity.cta_weight if s.type == "cta-emphasis" else 0.85
        elif personality == "editorial":
            if s.type in ("hierarchy", "spacing"):
                confidence *= 1.15
        elif personality == "bold":
            if s.type == "spacing":
                confidence *= 0.9

        if confidence < sensitivity.threshold_for(s.type, base_threshold):
            continue
        out.append(with_confidence(s, confidence))
    return out


def sort_by_confidence(suggestions: Iterable[Suggestion]) -> list[Suggestion]:
    # Stable: ties keep emission order
    return sorted(suggestions, key=lambda s: -s.confidence)


def dedupe_by_signature(suggestions: Iterable[Suggestion]) -> list[Suggestion]:
    """Keep the first suggestion per sorted affected-node key."""
    seen: set[tuple[str, ...]] = set()
    out: list[Suggestion] = []
    for s in suggestions:
        if s.signature in seen:
            continue
        seen.add(s.signature)
        out.append(s)
    return out


def finalize(suggestions: Iterable[Suggestion], cap: int | None = None) -> list[Suggestion]:
    """Sort, dedupe and optionally cap."""
    ranked = dedupe_by_signature(sort_by_confidence(suggestions))
    return ranked if cap is None else ranked[:cap]


def is_node_in_affected_area(node_id: str, suggestions: Iterable[Suggestion]) -> bool:
    return any(node_id in s.affected_node_ids for s in suggestions)


def clear_suggestions_for_node(node_id: str, suggestions: Iterable[Suggestion]) -> list[Suggestion]:
    """Drop suggestions touching a node the user just edited by hand."""
    return [s for s in suggestions if node_id not in s.affected_node_ids]


def merge_with_layout_suggestions(
    layout: list[Suggestion],
    composition: list[Suggestion],
    max_total: int = 3,
) -> list[Suggestion]:
    """Layout first. Composition suggestions fill the remaining slots if they share no node."""
    merged = list(layout)
    for cs in composition:
        if len(merged) >= max_total:
            break
        overlap = any(set(ls.affected_node_ids) & set(cs.affected_node_ids) for ls in merged)
        if not overlap:
            merged.append(cs)
    return merged
