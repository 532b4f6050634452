"""Section roles — the one role cascade used by structural inference, fingerprints and template reordering.

Rules, first match wins:
    1. hero type / role / isHero            → hero
    2. explicit ``role`` prop naming a role  → that role
    3. first section with headline + CTA     → hero
    4. 2+ CTAs, or 1 CTA and no copy         → action
    5. 2+ form fields and a headline         → hero
    6. last of several sections, < 3 texts   → footer
    7. media and copy                        → feature
    8.                                       → body
"""

from __future__ import annotations

from funnelsight.models.fingerprint import SECTION_ROLES
from funnelsight.models.page import Node
from funnelsight.utils.tree import flatten, is_cta, is_headline, is_hero, is_input, is_media, is_text

# Canonical top-to-bottom order used when reordering sections
ROLE_ORDER_PRIORITY: dict[str, int] = {
    "hero": 0,
    "feature": 1,
    "body": 2,
    "action": 3,
    "testimonial": 4,
    "footer": 5,
}


def section_role(section: Node, index: int, total: int) -> str:
    if is_hero(section):
        return "hero"

    explicit = section.props.get("role")
    if isinstance(explicit, str) and explicit.lower() in SECTION_ROLES:
        return explicit.lower()

    nodes = flatten(section)
    has_headline = any(is_headline(n) for n in nodes)
    cta_count = sum(1 for n in nodes if is_cta(n))
    text_count = sum(1 for n in nodes if is_text(n))

    if index == 0 and has_headline and cta_count > 0:
        return "hero"
    if cta_count >= 2 or (cta_count == 1 and text_count == 0):
        return "action"
    if has_headline and sum(1 for n in nodes if is_input(n)) >= 2:
        return "hero"
    if total > 1 and index == total - 1 and text_count < 3:
        return "footer"
    if text_count > 0 and any(is_media(n) for n in nodes):
        return "feature"
    return "body"


def section_roles(root: Node) -> dict[str, str]:
    """Role per direct child of ``root``, in document order."""
    sections = root.children
    return {s.id: section_role(s, i, len(sections)) for i, s in enumerate(sections)}
