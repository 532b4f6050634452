"""C.01 — Section Missing CTA.

A section with a headline and body copy but nothing to click. Confidence grows
with text volume, hero sections and conversion intents.
"""

from __future__ import annotations

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, heuristic
from funnelsight.models.suggestion import Recommendation, Suggestion
from funnelsight.utils.tree import find_sections, flatten, is_cta, is_headline, is_hero, is_text

NAME = "section-missing-cta"

CONVERSION_INTENTS = frozenset({"optin", "checkout"})


@heuristic(
    id="C.01",
    family=Family.COMPOSITION,
    name=NAME,
    description="Section has headline and copy but no call-to-action",
)
def section_missing_cta(ctx: AnalysisContext) -> list[Suggestion]:
    out: list[Suggestion] = []
    for section in find_sections(ctx.root):
        inner = flatten(section)
        if any(is_cta(n) for n in inner):
            continue
        if not any(is_headline(n) for n in inner):
            continue
        text_count = sum(1 for n in inner if is_text(n))
        if text_count == 0:
            continue

        confidence = 0.5 + min(0.2, text_count * 0.05)
        if is_hero(section):
            confidence += 0.25
        if ctx.intent in CONVERSION_INTENTS:
            confidence += 0.15

        out.append(Suggestion(
            id=ctx.new_id(NAME),
            type="cta-emphasis",
            category="composition",
            confidence=min(1.0, confidence),
            message="This section could benefit from a call-to-action.",
            affected_node_ids=[section.id],
            recommendation=Recommendation(token="--composition-cta-needed"),
            heuristic=NAME,
        ))
    return out
