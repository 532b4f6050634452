"""Template registry — read-only reference patterns the matcher compares against.

The registry is passed into the matcher explicitly; ``default_registry()``
holds the five built-in funnel patterns.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from funnelsight.models.fingerprint import IdealSpacing, StructuralFingerprint, TemplatePattern


class TemplateRegistry:
    """Immutable, ordered collection of template patterns keyed by ID."""

    def __init__(self, templates: Iterable[TemplatePattern] = ()) -> None:
        self._templates: dict[str, TemplatePattern] = {}
        for t in templates:
            if t.id in self._templates:
                raise ValueError(f"Duplicate template ID: {t.id}")
            self._templates[t.id] = t

    def get(self, template_id: str) -> TemplatePattern | None:
        return self._templates.get(template_id)

    def all(self) -> list[TemplatePattern]:
        return list(self._templates.values())

    def extend(self, templates: Iterable[TemplatePattern]) -> TemplateRegistry:
        """New registry with ``templates`` appended. The receiver is unchanged."""
        return TemplateRegistry([*self._templates.values(), *templates])

    def __iter__(self) -> Iterator[TemplatePattern]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates


BUILTIN_TEMPLATES: tuple[TemplatePattern, ...] = (
    # Hero + form + CTA
    TemplatePattern(
        id="optin-standard",
        name="Standard Opt-in",
        fingerprint=StructuralFingerprint(
            hash="optin-hero-form-cta",
            section_count=2,
            role_sequence=["hero", "action"],
            spacing_ratios=[1.0],
            depth_profile=[1, 2, 3],
            type_distribution={
                "hero": 0.2, "headline": 0.15, "text": 0.25,
                "input": 0.2, "button": 0.1, "container": 0.1,
            },
            cta_positions=[0.85],
            headline_positions=[0.1],
            inferred_personality="conversion",
            inferred_intent="optin",
        ),
        ideal_spacing=IdealSpacing(section_gap=36, block_gap=24, content_gap=14),
        suggested_personality="conversion",
    ),
    # Hero + body sections + footer
    TemplatePattern(
        id="content-editorial",
        name="Editorial Content",
        fingerprint=StructuralFingerprint(
            hash="content-hero-body-footer",
            section_count=4,
            role_sequence=["hero", "body", "body", "footer"],
            spacing_ratios=[1.0, 1.2, 1.0],
            depth_profile=[1, 2, 2, 3],
            type_distribution={
                "hero": 0.1, "headline": 0.2, "text": 0.4,
                "image": 0.15, "container": 0.15,
            },
            cta_positions=[0.15, 0.9],
            headline_positions=[0.05, 0.25, 0.5],
            inferred_personality="editorial",
            inferred_intent="content",
        ),
        ideal_spacing=IdealSpacing(section_gap=56, block_gap=36, content_gap=20),
        suggested_personality="editorial",
    ),
    # Hero + features + CTA + footer
    TemplatePattern(
        id="landing-conversion",
        name="Conversion Landing",
        fingerprint=StructuralFingerprint(
            hash="landing-hero-features-cta",
            section_count=4,
            role_sequence=["hero", "feature", "action", "footer"],
            spacing_ratios=[1.0, 0.9, 1.1],
            depth_profile=[1, 2, 3, 2],
            type_distribution={
                "hero": 0.15, "headline": 0.15, "text": 0.25,
                "button": 0.15, "image": 0.1, "container": 0.2,
            },
            cta_positions=[0.2, 0.7],
            headline_positions=[0.1, 0.35, 0.6],
            inferred_personality="bold",
            inferred_intent="content",
        ),
        ideal_spacing=IdealSpacing(section_gap=48, block_gap=32, content_gap=16),
        suggested_personality="bold",
    ),
    # Form-heavy, single CTA
    TemplatePattern(
        id="checkout-compact",
        name="Compact Checkout",
        fingerprint=StructuralFingerprint(
            hash="checkout-form-action",
            section_count=2,
            role_sequence=["body", "action"],
            spacing_ratios=[1.0],
            depth_profile=[1, 2, 3, 3],
            type_distribution={
                "headline": 0.1, "text": 0.15, "input": 0.35,
                "button": 0.1, "container": 0.3,
            },
            cta_positions=[0.9],
            headline_positions=[0.05],
            inferred_personality="clean",
            inferred_intent="checkout",
        ),
        ideal_spacing=IdealSpacing(section_gap=32, block_gap=24, content_gap=12),
        suggested_personality="clean",
    ),
    # Simple confirmation
    TemplatePattern(
        id="thankyou-simple",
        name="Simple Thank You",
        fingerprint=StructuralFingerprint(
            hash="thankyou-confirm",
            section_count=1,
            role_sequence=["hero"],
            spacing_ratios=[],
            depth_profile=[1, 2],
            type_distribution={"headline": 0.3, "text": 0.5, "button": 0.1, "container": 0.1},
            cta_positions=[0.8],
            headline_positions=[0.15],
            inferred_personality="clean",
            inferred_intent="thank_you",
        ),
        ideal_spacing=IdealSpacing(section_gap=40, block_gap=28, content_gap=16),
        suggested_personality="clean",
    ),
)

_default = TemplateRegistry(BUILTIN_TEMPLATES)


def default_registry() -> TemplateRegistry:
    return _default


def get_template(template_id: str, registry: TemplateRegistry | None = None) -> TemplatePattern | None:
    return (registry if registry is not None else _default).get(template_id)
