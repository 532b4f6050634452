"""Layout metrics resolver — width preset, gutters and the locked vertical rhythm for a page."""

from __future__ import annotations

from dataclasses import dataclass, field

from funnelsight.engine.intent import PAGE_TYPE_INTENT
from funnelsight.engine.personality import ResolvedPersonality, resolve_personality
from funnelsight.engine.tokens import (
    LOCKED_SPACING,
    PAGE_PADDING_BOTTOM,
    PAGE_PADDING_TOP,
    RULE_0,
    GeometryPolicy,
)
from funnelsight.models.page import Page

WIDTH_PIXELS = {"compact": 420, "standard": 460, "wide": 520}
WIDTH_GUTTERS = {"compact": 16, "standard": 20, "wide": 24}

INTENT_WIDTH = {
    "optin": "compact",
    "content": "wide",
    "checkout": "standard",
    "thank_you": "compact",
}


@dataclass(frozen=True)
class VerticalRhythm:
    step_gap: float
    block_gap: float
    content_gap: float
    action_gap: float


@dataclass(frozen=True)
class Gutters:
    horizontal: float
    top: float
    bottom: float


@dataclass(frozen=True)
class LayoutMetrics:
    intent: str
    width: str
    max_width: int
    gutters: Gutters
    spacing: VerticalRhythm
    personality: ResolvedPersonality
    policy: GeometryPolicy = field(default=RULE_0)


def layout_intent(page: Page) -> str:
    """Explicit layout intent, else the page-type mapping. No tree inference here."""
    if page.layout_intent:
        return page.layout_intent
    return PAGE_TYPE_INTENT.get(page.type, "content")


def locked_rhythm() -> VerticalRhythm:
    # Personality and intent never reach geometry
    return VerticalRhythm(
        step_gap=LOCKED_SPACING.section_gap,
        block_gap=LOCKED_SPACING.block_gap,
        content_gap=LOCKED_SPACING.text_gap,
        action_gap=LOCKED_SPACING.cta_gap,
    )


def resolve_layout_metrics(
    page: Page,
    personality: str | None = None,
    policy: GeometryPolicy = RULE_0,
) -> LayoutMetrics:
    intent = layout_intent(page)
    width = INTENT_WIDTH.get(intent, "standard")
    return LayoutMetrics(
        intent=intent,
        width=width,
        max_width=WIDTH_PIXELS[width],
        gutters=Gutters(
            horizontal=WIDTH_GUTTERS[width],
            top=PAGE_PADDING_TOP,
            bottom=PAGE_PADDING_BOTTOM,
        ),
        spacing=locked_rhythm(),
        personality=resolve_personality(personality or page.layout_personality),
        policy=policy,
    )
