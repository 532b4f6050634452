"""Intent resolver — what a funnel step is for (opt-in, content, checkout, thank-you).

Signals are tried in a fixed priority order, first match wins:

    explicit (1.0) > template hint (0.85) > composition (0.75)
        > funnel position (0.6) > page type (0.5) > default "content" (0.3)

The resolved intent carries a static orchestration bundle. It only feeds
decorative and ordering hints, never geometry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from funnelsight.engine.tokens import MAX_DECORATIVE_SCALE
from funnelsight.models.page import INTENTS, Node, Page
from funnelsight.utils.tree import (
    is_cta,
    is_headline,
    is_hero,
    is_input,
    is_schedule,
    walk_with_depth,
)

logger = logging.getLogger(__name__)

CONFIDENCE_WEIGHTS: dict[str, float] = {
    "explicit": 1.0,
    "template": 0.85,
    "composition": 0.75,
    "position": 0.6,
    "page_type": 0.5,
    "fallback": 0.3,
}

PAGE_TYPE_INTENT: dict[str, str] = {
    "landing": "content",
    "optin": "optin",
    "appointment": "checkout",
    "thank_you": "thank_you",
}


@dataclass(frozen=True)
class IntentOrchestration:
    focus_bias: str  # top | center | bottom | action
    spacing_rhythm: str  # tight | normal | relaxed
    cta_emphasis: str  # subtle | normal | prominent
    inspector_priority: tuple[str, ...]
    show_composition_guides: bool
    motion_intensity: str  # reduced | normal | enhanced
    hero_expected: bool


ORCHESTRATION: dict[str, IntentOrchestration] = {
    "optin": IntentOrchestration("action", "tight", "prominent", ("content", "style", "layout"), True, "normal", False),
    "content": IntentOrchestration("top", "relaxed", "subtle", ("content", "layout", "style"), True, "normal", True),
    "checkout": IntentOrchestration("center", "normal", "prominent", ("content", "style", "layout"), True, "reduced", False),
    "thank_you": IntentOrchestration("center", "relaxed", "subtle", ("content", "style", "layout"), False, "enhanced", False),
}

_COLLAPSE_HINTS: dict[str, dict[str, bool]] = {
    "optin": {"content": False, "layout": False, "style": True},
    "checkout": {"content": False, "layout": True, "style": True},
    "content": {"content": False, "layout": False, "style": False},
    "thank_you": {"content": False, "layout": True, "style": False},
}


@dataclass
class IntentSignals:
    explicit_intent: str | None = None
    template_hint: str | None = None
    canvas_root: Node | None = None
    funnel_position: int | None = None
    total_pages: int | None = None
    page_type: str | None = None


@dataclass(frozen=True)
class ResolvedIntent:
    intent: str
    confidence: float
    source: str  # explicit | template | composition | position | page_type | fallback
    orchestration: IntentOrchestration

    @property
    def css_var_prefix(self) -> str:
        return f"--step-intent-{self.intent}"


@dataclass
class CompositionMetrics:
    cta_count: int = 0
    input_count: int = 0
    hero_present: bool = False
    headline_count: int = 0
    schedule_present: bool = False
    total_nodes: int = 0
    depth: int = 0  # deepest 0-based level


def is_valid_intent(value: Any) -> bool:
    return isinstance(value, str) and value in INTENTS


def composition_metrics(root: Node | None) -> CompositionMetrics:
    m = CompositionMetrics()
    if root is None:
        return m
    for node, depth in walk_with_depth(root):
        m.total_nodes += 1
        m.depth = max(m.depth, depth)
        if is_cta(node):
            m.cta_count += 1
        if is_input(node):
            m.input_count += 1
        if is_hero(node):
            m.hero_present = True
        if is_headline(node):
            m.headline_count += 1
        if is_schedule(node):
            m.schedule_present = True
    return m


def intent_from_composition(m: CompositionMetrics) -> str | None:
    if m.schedule_present:
        return "checkout"
    if m.input_count >= 2 or (m.input_count >= 1 and m.cta_count >= 1):
        return "optin"
    if m.total_nodes > 0 and m.cta_count == 0 and m.input_count == 0:
        if m.total_nodes < 10 and m.depth < 4:
            return "thank_you"
    if m.hero_present or m.headline_count >= 2:
        return "content"
    return None


def intent_from_position(position: int, total: int) -> str | None:
    if position < 0 or total <= 0:
        return None
    normalized = position / ((total - 1) or 1)
    if position == 0:
        return "content"
    if position == total - 1 and total > 1:
        return "thank_you"
    if 0.3 < normalized < 0.7:
        return "optin"
    if normalized >= 0.7:
        return "checkout"
    return None


def _result(intent: str, source: str) -> ResolvedIntent:
    return ResolvedIntent(
        intent=intent,
        confidence=CONFIDENCE_WEIGHTS[source],
        source=source,
        orchestration=ORCHESTRATION[intent],
    )


def resolve_intent(signals: IntentSignals) -> ResolvedIntent:
    if is_valid_intent(signals.explicit_intent):
        return _result(signals.explicit_intent, "explicit")

    if is_valid_intent(signals.template_hint):
        return _result(signals.template_hint, "template")

    from_composition = intent_from_composition(composition_metrics(signals.canvas_root))
    if from_composition:
        return _result(from_composition, "composition")

    if signals.funnel_position is not None and signals.total_pages is not None:
        from_position = intent_from_position(signals.funnel_position, signals.total_pages)
        if from_position:
            return _result(from_position, "position")

    from_type = PAGE_TYPE_INTENT.get(signals.page_type or "")
    if from_type:
        return _result(from_type, "page_type")

    return _result("content", "fallback")


def resolve_page_intent(
    page: Page,
    *,
    funnel_position: int | None = None,
    total_pages: int | None = None,
    template_hint: str | None = None,
) -> ResolvedIntent:
    resolved = resolve_intent(
        IntentSignals(
            explicit_intent=page.layout_intent,
            template_hint=template_hint,
            canvas_root=page.canvas_root,
            funnel_position=funnel_position,
            total_pages=total_pages,
            page_type=page.type,
        )
    )
    logger.debug("Page %s intent=%s via %s", page.id, resolved.intent, resolved.source)
    return resolved


_FOCUS_BIAS = {"top": "-5%", "center": "0%", "bottom": "5%", "action": "8%"}
_CTA_EMPHASIS = {"subtle": "0.97", "normal": "1", "prominent": f"{MAX_DECORATIVE_SCALE:g}"}
_MOTION = {
    # (runtime, editor/preview)
    "reduced": ("0.6", "0.7"),
    "normal": ("0.85", "1"),
    "enhanced": ("1", "1.2"),
}


def intent_variables(resolved: ResolvedIntent, mode: str = "editor") -> dict[str, str]:
    """Decorative CSS variables for the resolved intent. Rhythm and gap scales stay at 1."""
    orch = resolved.orchestration
    runtime, other = _MOTION[orch.motion_intensity]
    return {
        "--step-intent": resolved.intent,
        "--step-intent-focus-bias": _FOCUS_BIAS[orch.focus_bias],
        "--step-intent-spacing-rhythm": "1",
        "--step-intent-cta-emphasis": _CTA_EMPHASIS[orch.cta_emphasis],
        "--step-intent-motion-intensity": runtime if mode == "runtime" else other,
        "--step-intent-hero-expected": "1" if orch.hero_expected else "0",
        "--step-intent-show-guides": "1" if orch.show_composition_guides else "0",
        "--step-intent-block-gap-scale": "1",
        "--step-intent-action-gap-scale": "1",
        "--step-intent-content-gap-scale": "1",
    }


def inspector_section_order(intent: str) -> list[str]:
    orch = ORCHESTRATION.get(intent, ORCHESTRATION["content"])
    return list(orch.inspector_priority)


def inspector_collapse_hints(intent: str) -> dict[str, bool]:
    return dict(_COLLAPSE_HINTS.get(intent, _COLLAPSE_HINTS["content"]))
