"""Tree utilities — flatten, lookup, type/role predicates, numeric prop access. No engine imports.

Predicates are total: type-set membership first, then the ``variant``/``role``
prop overrides, otherwise False. They never look at the parent.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from funnelsight.models.page import Node

CTA_TYPES = frozenset({"button", "cta", "submit", "link-button"})
HEADLINE_TYPES = frozenset({"headline", "heading", "title", "hero-headline", "h1", "h2", "h3"})
TEXT_TYPES = frozenset({"text", "paragraph", "body", "content", "caption"})
INPUT_TYPES = frozenset({"input", "textarea", "select", "form-field", "form", "form-group"})
HERO_TYPES = frozenset({"hero", "hero-section", "banner"})
SECTION_TYPES = frozenset({"section", "container", "hero", "content-block", "feature-section"})
GROUPING_TYPES = frozenset({"container", "stack", "row", "column", "group", "card"})
MEDIA_TYPES = frozenset({"image", "video", "embed", "media"})
SCHEDULE_TYPES = frozenset({"calendar", "calendly", "schedule", "booking", "embed"})


def node_type(node: Node) -> str:
    return (node.type or "").lower()


def _prop_str(node: Node, key: str) -> str:
    value = node.props.get(key)
    return value.lower() if isinstance(value, str) else ""


def flatten(node: Node) -> list[Node]:
    """Depth-first, node before its children. Includes ``node`` itself."""
    out: list[Node] = []
    stack = [node]
    while stack:
        current = stack.pop()
        out.append(current)
        stack.extend(reversed(current.children))
    return out


def walk_with_depth(node: Node, depth: int = 0) -> Iterator[tuple[Node, int]]:
    """Same order as ``flatten`` but yields ``(node, depth)`` pairs."""
    yield node, depth
    for child in node.children:
        yield from walk_with_depth(child, depth + 1)


def tree_depth(node: Node) -> int:
    """Number of levels, so a lone root has depth 1."""
    if not node.children:
        return 1
    return 1 + max(tree_depth(c) for c in node.children)


def find_node(root: Node, node_id: str) -> Node | None:
    for n in flatten(root):
        if n.id == node_id:
            return n
    return None


def find_parent(root: Node, node_id: str) -> Node | None:
    for n in flatten(root):
        for child in n.children:
            if child.id == node_id:
                return n
    return None


def numeric_prop(node: Node | None, key: str, fallback: float) -> float:
    """Read a numeric prop, falling back on missing, non-numeric, bool or non-finite values."""
    if node is None:
        return fallback
    value: Any = node.props.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    try:
        as_float = float(value)
    except (OverflowError, ValueError):
        return fallback
    if not math.isfinite(as_float):
        return fallback
    return as_float


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_cta(node: Node) -> bool:
    if node_type(node) in CTA_TYPES:
        return True
    return _prop_str(node, "variant") == "primary" or _prop_str(node, "role") == "cta"


def is_headline(node: Node) -> bool:
    if node_type(node) in HEADLINE_TYPES:
        return True
    return _prop_str(node, "variant") == "headline" or _prop_str(node, "role") == "heading"


def is_text(node: Node) -> bool:
    if node_type(node) in TEXT_TYPES:
        return True
    return _prop_str(node, "variant") in ("body", "caption")


def is_input(node: Node) -> bool:
    if node_type(node) in INPUT_TYPES:
        return True
    return _prop_str(node, "type") == "input" or _prop_str(node, "role") == "form"


def is_hero(node: Node) -> bool:
    if node_type(node) in HERO_TYPES:
        return True
    return _prop_str(node, "role") == "hero" or node.props.get("isHero") is True


def is_section(node: Node) -> bool:
    if node_type(node) in SECTION_TYPES:
        return True
    return _prop_str(node, "role") == "section" or node.props.get("isSection") is True


def is_grouping(node: Node) -> bool:
    return node_type(node) in GROUPING_TYPES


def is_media(node: Node) -> bool:
    return node_type(node) in MEDIA_TYPES


def is_schedule(node: Node) -> bool:
    return node_type(node) in SCHEDULE_TYPES


def is_row(node: Node) -> bool:
    direction = _prop_str(node, "direction") or _prop_str(node, "flexDirection")
    return direction in ("row", "row-reverse")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def find_sections(root: Node) -> list[Node]:
    """Direct children of the root plus any deeper ``is_section`` node.

    The root itself is never a section. Descent stops at a section, so
    sections nested inside a section are not reported twice.
    """
    sections: list[Node] = []

    def visit(node: Node, depth: int) -> None:
        if depth >= 1 and (depth == 1 or is_section(node)):
            sections.append(node)
        if depth == 0 or not is_section(node):
            for child in node.children:
                visit(child, depth + 1)

    visit(root, 0)
    return sections


def count(nodes: list[Node], predicate) -> int:
    return sum(1 for n in nodes if predicate(n))
