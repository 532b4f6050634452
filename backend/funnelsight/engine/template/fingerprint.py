"""Structural fingerprint derivation.

The fingerprint ignores copy and media content entirely: two pages with the
same skeleton produce the same fingerprint. Personality and intent are
inferred from structural ratios alone, never from the page's stored labels,
so unlabeled pages stay comparable.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable

from funnelsight.engine.roles import section_role
from funnelsight.models.fingerprint import StructuralFingerprint
from funnelsight.models.page import Node, Page
from funnelsight.utils.math_helpers import normalize_to_mean, safe_mean
from funnelsight.utils.tree import is_cta, is_headline, is_input, is_text, node_type, numeric_prop, walk_with_depth

DEFAULT_SECTION_GAP = 16.0


def spacing_ratios(sections: list[Node]) -> list[float]:
    """Section gaps normalized to mean 1.0. The last section's gap is dropped (nothing follows it)."""
    if len(sections) < 2:
        return []
    gaps = [numeric_prop(s, "gap", DEFAULT_SECTION_GAP) for s in sections]
    return normalize_to_mean(gaps)[:-1]


def depth_profile(depths: list[int]) -> list[int]:
    counts = Counter(depths)
    return [counts.get(d, 0) for d in range(max(depths) + 1)] if depths else []


def type_distribution(nodes: list[Node]) -> dict[str, float]:
    total = len(nodes)
    counts = Counter(node_type(n) for n in nodes)
    return {t: c / total for t, c in sorted(counts.items())}


def positions(nodes: list[Node], predicate: Callable[[Node], bool]) -> list[float]:
    total = len(nodes)
    return [i / total for i, n in enumerate(nodes) if predicate(n)]


def _ratio(nodes: list[Node], predicate: Callable[[Node], bool]) -> float:
    return sum(1 for n in nodes if predicate(n)) / len(nodes) if nodes else 0.0


def infer_personality(cta_ratio: float, input_ratio: float, text_ratio: float,
                      ratios: list[float], section_count: int) -> str:
    if cta_ratio > 0.1 and input_ratio > 0.15:
        return "conversion"
    if text_ratio > 0.35 and section_count > 2:
        return "editorial"
    if section_count <= 2 and cta_ratio > 0.1:
        return "bold"
    if section_count > 4 and safe_mean(ratios, 1.0) < 0.9:
        return "dense"
    return "clean"


def infer_intent(input_ratio: float, cta_ratio: float, section_count: int,
                 cta_positions: list[float]) -> str:
    if input_ratio > 0.15 and len(cta_positions) == 1 and cta_positions[0] > 0.7:
        return "optin"
    if input_ratio > 0.25:
        return "checkout"
    if section_count <= 1 and input_ratio == 0 and cta_ratio < 0.15:
        return "thank_you"
    return "content"


def structural_hash(intent: str, section_count: int, roles: list[str]) -> str:
    return f"{intent}-{section_count}-{'-'.join(roles[:4])}"


def derive_fingerprint(page: Page) -> StructuralFingerprint:
    root = page.canvas_root
    walked = list(walk_with_depth(root))
    nodes = [n for n, _ in walked]

    sections = root.children
    roles = [section_role(s, i, len(sections)) for i, s in enumerate(sections)]
    ratios = spacing_ratios(sections)
    cta_positions = positions(nodes, is_cta)

    cta_ratio = _ratio(nodes, is_cta)
    input_ratio = _ratio(nodes, is_input)
    personality = infer_personality(cta_ratio, input_ratio, _ratio(nodes, is_text), ratios, len(sections))
    intent = infer_intent(input_ratio, cta_ratio, len(sections), cta_positions)

    return StructuralFingerprint(
        hash=structural_hash(intent, len(sections), roles),
        section_count=len(sections),
        role_sequence=roles,
        spacing_ratios=ratios,
        depth_profile=depth_profile([d for _, d in walked]),
        type_distribution=type_distribution(nodes),
        cta_positions=cta_positions,
        headline_positions=positions(nodes, is_headline),
        inferred_personality=personality,
        inferred_intent=intent,
    )
