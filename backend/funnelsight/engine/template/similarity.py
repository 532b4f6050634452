"""Fingerprint similarity — weighted average of seven sub-scores in [0, 1].

    sections 2 · roles 3 · intent 2 · personality 1 · types 2 · CTA 1.5 · depth 1

Every sub-score is symmetric, so similarity(a, b) == similarity(b, a).
"""

from __future__ import annotations

from funnelsight.models.fingerprint import StructuralFingerprint
from funnelsight.utils.math_helpers import clamp, cosine_similarity, safe_mean

WEIGHTS: dict[str, float] = {
    "sections": 2.0,
    "roles": 3.0,
    "intent": 2.0,
    "personality": 1.0,
    "types": 2.0,
    "cta": 1.5,
    "depth": 1.0,
}

ROLE_WEIGHTS: dict[str, float] = {
    "hero": 3.0,
    "body": 1.0,
    "action": 2.0,
    "footer": 1.0,
    "feature": 1.5,
    "testimonial": 1.5,
}


def section_count_similarity(a: int, b: int) -> float:
    return max(0.0, 1.0 - abs(a - b) / 4)


def role_similarity(a: list[str], b: list[str]) -> float:
    """Positional exact-match ratio, each slot weighted by the heavier of its two roles."""
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    matched = total = 0.0
    for i in range(max(len(a), len(b))):
        ra = a[i] if i < len(a) else None
        rb = b[i] if i < len(b) else None
        weight = max(ROLE_WEIGHTS.get(ra, 1.0), ROLE_WEIGHTS.get(rb, 1.0))
        if ra == rb:
            matched += weight
        total += weight
    return matched / total


def position_similarity(a: list[float], b: list[float]) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.5
    count_ratio = min(len(a), len(b)) / max(len(a), len(b))
    return (count_ratio + 1.0 - abs(safe_mean(a) - safe_mean(b))) / 2


def profile_similarity(a: list[int], b: list[int]) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.5
    n = max(len(a), len(b))
    pa = list(a) + [0] * (n - len(a))
    pb = list(b) + [0] * (n - len(b))
    scale = max([1, *pa, *pb])
    diff = sum(abs(x - y) for x, y in zip(pa, pb))
    return max(0.0, 1.0 - diff / (n * scale))


def sub_scores(a: StructuralFingerprint, b: StructuralFingerprint) -> dict[str, float]:
    return {
        "sections": section_count_similarity(a.section_count, b.section_count),
        "roles": role_similarity(a.role_sequence, b.role_sequence),
        "intent": 1.0 if a.inferred_intent == b.inferred_intent else 0.5,
        "personality": 1.0 if a.inferred_personality == b.inferred_personality else 0.6,
        "types": cosine_similarity(a.type_distribution, b.type_distribution),
        "cta": position_similarity(a.cta_positions, b.cta_positions),
        "depth": profile_similarity(a.depth_profile, b.depth_profile),
    }


def compute_similarity(a: StructuralFingerprint, b: StructuralFingerprint) -> float:
    scores = sub_scores(a, b)
    weighted = sum(scores[k] * w for k, w in WEIGHTS.items())
    # Rounded so float noise in the cosine term cannot break self-similarity == 1.0
    return round(clamp(weighted / sum(WEIGHTS.values())), 9)
