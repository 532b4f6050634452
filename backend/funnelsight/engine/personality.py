"""Personality resolver — named design presets → numeric token bundles.

A personality changes typography, motion, CTA emphasis and how eager the
suggestion engine is. It never changes geometry: the CSS projection below
pins every spacing variable to the locked tokens and clamps scale factors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from funnelsight.engine.tokens import LOCKED_SPACING, MAX_DECORATIVE_SCALE
from funnelsight.models.page import PERSONALITIES

logger = logging.getLogger(__name__)

DEFAULT_PERSONALITY = "clean"


@dataclass(frozen=True)
class SpacingProfile:
    section_gap: float = 40.0
    block_gap: float = 28.0
    content_gap: float = 16.0
    action_gap: float = 28.0
    rhythm_multiplier: float = 1.0


@dataclass(frozen=True)
class TypographyProfile:
    headline_scale: float = 1.0
    body_scale: float = 1.0
    line_height: float = 1.5
    letter_spacing: float = 0.0


@dataclass(frozen=True)
class CTAProfile:
    weight: int = 600
    min_gap: float = 24.0
    prominence: float = 1.0


@dataclass(frozen=True)
class HeroProfile:
    padding_scale: float = 1.0
    headline_emphasis: float = 1.0


@dataclass(frozen=True)
class MotionProfile:
    duration_scale: float = 1.0
    easing_intensity: float = 0.5
    stagger: bool = True
    delay_ms: int = 50


@dataclass(frozen=True)
class SensitivityProfile:
    """Per-suggestion-type confidence thresholds plus the CTA confidence multiplier."""

    spacing: float = 0.25
    hierarchy: float = 0.15
    cta: float = 0.20
    alignment: float = 0.30
    cta_weight: float = 1.0

    def threshold_for(self, suggestion_type: str, default: float = 0.0) -> float:
        return {
            "spacing": self.spacing,
            "hierarchy": self.hierarchy,
            "cta-emphasis": self.cta,
            "alignment": self.alignment,
        }.get(suggestion_type, default)


@dataclass(frozen=True)
class ResolvedPersonality:
    personality: str
    spacing: SpacingProfile
    typography: TypographyProfile
    cta: CTAProfile
    hero: HeroProfile
    motion: MotionProfile
    suggestions: SensitivityProfile


# Only the keys that differ from the dataclass defaults.
_OVERRIDES: dict[str, dict[str, dict[str, Any]]] = {
    "clean": {
        "spacing": {"section_gap": 44, "block_gap": 32, "content_gap": 18, "action_gap": 32, "rhythm_multiplier": 1.05},
        "typography": {"line_height": 1.6},
        "motion": {"duration_scale": 1.1, "easing_intensity": 0.4},
    },
    "editorial": {
        "spacing": {"section_gap": 56, "block_gap": 36, "content_gap": 20, "action_gap": 28, "rhythm_multiplier": 1.15},
        "typography": {"headline_scale": 1.25, "body_scale": 1.05, "line_height": 1.7, "letter_spacing": -0.01},
        "hero": {"padding_scale": 1.2, "headline_emphasis": 1.3},
        "motion": {"duration_scale": 1.2, "easing_intensity": 0.35, "delay_ms": 80},
        "suggestions": {"hierarchy": 0.10, "spacing": 0.20},
    },
    "bold": {
        "spacing": {"section_gap": 48, "block_gap": 32, "content_gap": 16, "action_gap": 36, "rhythm_multiplier": 1.1},
        "typography": {"headline_scale": 1.35, "body_scale": 1.0, "line_height": 1.45, "letter_spacing": 0.02},
        "cta": {"weight": 700, "min_gap": 28, "prominence": 1.15},
        "hero": {"padding_scale": 1.15, "headline_emphasis": 1.4},
        "motion": {"duration_scale": 0.9, "easing_intensity": 0.65, "delay_ms": 40},
    },
    "dense": {
        "spacing": {"section_gap": 28, "block_gap": 20, "content_gap": 12, "action_gap": 20, "rhythm_multiplier": 0.85},
        "typography": {"headline_scale": 0.95, "body_scale": 0.95, "line_height": 1.4},
        "cta": {"weight": 600, "min_gap": 16, "prominence": 0.95},
        "hero": {"padding_scale": 0.85, "headline_emphasis": 0.9},
        "motion": {"duration_scale": 0.8, "easing_intensity": 0.55, "stagger": False, "delay_ms": 30},
        "suggestions": {"spacing": 0.35, "hierarchy": 0.25, "alignment": 0.40},
    },
    "conversion": {
        "spacing": {"section_gap": 36, "block_gap": 24, "content_gap": 14, "action_gap": 36, "rhythm_multiplier": 0.95},
        "typography": {"headline_scale": 1.15, "body_scale": 1.0, "line_height": 1.5},
        "cta": {"weight": 700, "min_gap": 32, "prominence": 1.25},
        "hero": {"padding_scale": 1.0, "headline_emphasis": 1.2},
        "motion": {"duration_scale": 0.85, "easing_intensity": 0.6, "delay_ms": 35},
        "suggestions": {"cta": 0.10, "cta_weight": 1.5, "spacing": 0.30},
    },
}

DISPLAY_NAMES: dict[str, str] = {
    "clean": "Clean",
    "editorial": "Editorial",
    "bold": "Bold",
    "dense": "Dense",
    "conversion": "Conversion",
}

DESCRIPTIONS: dict[str, str] = {
    "clean": "Balanced spacing and calm typography",
    "editorial": "Generous whitespace and expressive headlines",
    "bold": "High-contrast headlines and strong calls to action",
    "dense": "Compact layout for information-heavy pages",
    "conversion": "Action-focused with prominent calls to action",
}

_BASE = ResolvedPersonality(
    personality=DEFAULT_PERSONALITY,
    spacing=SpacingProfile(),
    typography=TypographyProfile(),
    cta=CTAProfile(),
    hero=HeroProfile(),
    motion=MotionProfile(),
    suggestions=SensitivityProfile(),
)


def is_valid_personality(value: Any) -> bool:
    return isinstance(value, str) and value in PERSONALITIES


def resolve_personality(personality: str | None = None) -> ResolvedPersonality:
    """Merge the base tokens with the personality's overrides.

    Unknown or missing names resolve to ``clean``.
    """
    name = personality if is_valid_personality(personality) else DEFAULT_PERSONALITY
    if personality is not None and name != personality:
        logger.debug("Unknown personality %r, using %s", personality, name)
    overrides = _OVERRIDES[name]
    return ResolvedPersonality(
        personality=name,
        spacing=replace(_BASE.spacing, **overrides.get("spacing", {})),
        typography=replace(_BASE.typography, **overrides.get("typography", {})),
        cta=replace(_BASE.cta, **overrides.get("cta", {})),
        hero=replace(_BASE.hero, **overrides.get("hero", {})),
        motion=replace(_BASE.motion, **overrides.get("motion", {})),
        suggestions=replace(_BASE.suggestions, **overrides.get("suggestions", {})),
    )


def personality_variables(resolved: ResolvedPersonality) -> dict[str, str]:
    """Decorative-only CSS variable projection.

    Spacing variables are the locked tokens regardless of personality; every
    scale factor is clamped to the decorative maximum.
    """
    typo = resolved.typography
    motion = resolved.motion
    return {
        "--personality-section-gap": f"{LOCKED_SPACING.section_gap:g}px",
        "--personality-block-gap": f"{LOCKED_SPACING.block_gap:g}px",
        "--personality-content-gap": f"{LOCKED_SPACING.text_gap:g}px",
        "--personality-action-gap": f"{LOCKED_SPACING.cta_gap:g}px",
        "--personality-rhythm": "1",
        "--personality-headline-scale": f"{min(typo.headline_scale, MAX_DECORATIVE_SCALE):g}",
        "--personality-body-scale": f"{min(typo.body_scale, MAX_DECORATIVE_SCALE):g}",
        "--personality-line-height": f"{typo.line_height:g}",
        "--personality-letter-spacing": f"{typo.letter_spacing:g}em",
        "--personality-cta-weight": str(resolved.cta.weight),
        "--personality-cta-min-gap": f"{LOCKED_SPACING.cta_gap:g}px",
        "--personality-cta-prominence": f"{min(resolved.cta.prominence, MAX_DECORATIVE_SCALE):g}",
        "--personality-hero-padding": "1",
        "--personality-hero-emphasis": f"{min(resolved.hero.headline_emphasis, MAX_DECORATIVE_SCALE):g}",
        "--motion-duration-scale": f"{motion.duration_scale:g}",
        "--motion-easing-intensity": f"{motion.easing_intensity:g}",
        "--motion-stagger": f"{motion.delay_ms}ms" if motion.stagger else "0ms",
    }


def personality_options() -> list[dict[str, str]]:
    return [
        {"value": p, "label": DISPLAY_NAMES[p], "description": DESCRIPTIONS[p]}
        for p in PERSONALITIES
    ]
