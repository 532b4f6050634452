"""Suggestion applier — turns one suggestion into a prop patch map.

Nothing here mutates the page. The host merges ``props_changes`` (and
``page_changes``) through its own undoable mutation path. Failure is a normal
result with ``success=False`` and a description, never an exception.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from funnelsight.engine.personality import is_valid_personality
from funnelsight.engine.structural import transform_description
from funnelsight.engine.template.catalog import TemplateRegistry
from funnelsight.engine.template.normalize import describe_template_changes, plan_template_application
from funnelsight.models.page import Page
from funnelsight.models.suggestion import ApplyResult, Suggestion
from funnelsight.utils.tree import find_node, find_parent, numeric_prop

logger = logging.getLogger(__name__)

TYPE_LABELS = {
    "spacing": "Spacing",
    "alignment": "Balance",
    "hierarchy": "Hierarchy",
    "cta-emphasis": "Emphasis",
    "readability": "Readability",
}

TYPE_ICONS = {
    "spacing": "↕",
    "alignment": "⊡",
    "hierarchy": "△",
    "cta-emphasis": "◉",
    "readability": "¶",
}

_PERSONALITY_DIRECTIVE = re.compile(r"^apply-(.+)-personality$")


def _fail(description: str) -> ApplyResult:
    return ApplyResult(success=False, description=description)


def suggestion_type_label(suggestion_type: str) -> str:
    return TYPE_LABELS.get(suggestion_type, "Layout")


def suggestion_icon(suggestion_type: str) -> str:
    return TYPE_ICONS.get(suggestion_type, "○")


# ---------------------------------------------------------------------------
# Per-type handlers
# ---------------------------------------------------------------------------


def apply_spacing(page: Page, s: Suggestion) -> ApplyResult:
    """Widen or tighten the first affected node's parent gap by ``delta`` (floor 8)."""
    delta = s.recommendation.delta
    if len(s.affected_node_ids) < 2 or not delta:
        return _fail("Unable to determine spacing adjustment.")
    root = page.canvas_root
    if find_node(root, s.affected_node_ids[0]) is None:
        return _fail("Affected node not found.")
    parent = find_parent(root, s.affected_node_ids[0])
    if parent is None:
        return _fail("Parent container not found.")

    gap = max(8.0, numeric_prop(parent, "gap", 12.0) + delta)
    return ApplyResult(
        success=True,
        modified_node_ids=[parent.id],
        props_changes={parent.id: {"gap": gap}},
        description=f"Adjusted spacing to {gap:g}px.",
    )


def apply_cta_emphasis(page: Page, s: Suggestion) -> ApplyResult:
    """Give the CTA's container more gap (floor 16, default +8)."""
    if not s.affected_node_ids:
        return _fail("No affected elements found.")
    parent = find_parent(page.canvas_root, s.affected_node_ids[0])
    if parent is None:
        return _fail("Parent container not found.")

    delta = s.recommendation.delta if s.recommendation.delta is not None else 8.0
    gap = max(16.0, numeric_prop(parent, "gap", 12.0) + delta)
    return ApplyResult(
        success=True,
        modified_node_ids=list(dict.fromkeys([parent.id, *s.affected_node_ids])),
        props_changes={parent.id: {"gap": gap}},
        description="Added breathing room around action button.",
    )


def apply_hierarchy(page: Page, s: Suggestion) -> ApplyResult:
    delta = s.recommendation.delta
    if not s.affected_node_ids or not delta:
        return _fail("Unable to determine hierarchy adjustment.")
    headline = find_node(page.canvas_root, s.affected_node_ids[0])
    if headline is None:
        return _fail("Headline element not found.")

    size = numeric_prop(headline, "fontSize", 24.0) + delta
    return ApplyResult(
        success=True,
        modified_node_ids=[headline.id],
        props_changes={headline.id: {"fontSize": size}},
        description="Increased headline prominence.",
    )


def apply_alignment(page: Page, s: Suggestion) -> ApplyResult:
    if not s.affected_node_ids:
        return _fail("No elements to align.")
    root = page.canvas_root

    if s.recommendation.token == "--layout-columns":
        changes = {
            node_id: {"direction": "column", "alignItems": "center"}
            for node_id in s.affected_node_ids
            if find_node(root, node_id) is not None
        }
        if not changes:
            return _fail("No elements to align.")
        return ApplyResult(
            success=True,
            modified_node_ids=list(changes),
            props_changes=changes,
            description="Centered layout for better focus.",
        )

    # Rebalancing: lift the first affected node's container slightly
    parent = find_parent(root, s.affected_node_ids[0])
    if parent is None:
        return _fail("Unable to adjust alignment.")
    return ApplyResult(
        success=True,
        modified_node_ids=[parent.id],
        props_changes={parent.id: {"paddingTop": numeric_prop(parent, "paddingTop", 0.0) + 8}},
        description="Adjusted visual balance.",
    )


def apply_readability(page: Page, s: Suggestion) -> ApplyResult:
    changes: dict[str, dict[str, Any]] = {}
    for node_id in s.affected_node_ids:
        node = find_node(page.canvas_root, node_id)
        if node is not None:
            changes[node_id] = {"lineHeight": min(2.0, numeric_prop(node, "lineHeight", 1.5) + 0.1)}
    if not changes:
        return _fail("No elements to adjust.")
    return ApplyResult(
        success=True,
        modified_node_ids=list(changes),
        props_changes=changes,
        description="Improved text readability.",
    )


_HANDLERS = {
    "spacing": apply_spacing,
    "cta-emphasis": apply_cta_emphasis,
    "hierarchy": apply_hierarchy,
    "alignment": apply_alignment,
    "readability": apply_readability,
}


# ---------------------------------------------------------------------------
# Structural (AI) transforms
# ---------------------------------------------------------------------------


def apply_personality_suggestion(page: Page, s: Suggestion) -> dict[str, Any]:
    """Page-level patch for an ``apply-<personality>-personality`` directive, else {}."""
    match = _PERSONALITY_DIRECTIVE.match(s.transform_directive or "")
    if not match or not is_valid_personality(match.group(1)):
        return {}
    return {"layout_personality": match.group(1)}


def apply_structural_transform(page: Page, s: Suggestion) -> dict[str, dict[str, Any]]:
    root = page.canvas_root
    targets = [i for i in s.affected_node_ids if find_node(root, i) is not None]
    directive = s.transform_directive

    if directive == "normalize-section-spacing":
        if not s.recommendation.delta:
            return {}
        return {i: {"gap": s.recommendation.delta} for i in targets}
    if directive == "promote-to-hero":
        return {i: {"role": "hero"} for i in targets}
    if directive == "improve-cta-prominence":
        return {i: {"variant": "primary", "fontWeight": 700} for i in targets}
    # Personality and hierarchy directives carry no node patch
    return {}


def _apply_ai(page: Page, s: Suggestion) -> ApplyResult:
    page_changes = apply_personality_suggestion(page, s)
    changes = apply_structural_transform(page, s)
    if not page_changes and not changes:
        return _fail(f"No automatic change for {s.transform_directive}.")
    return ApplyResult(
        success=True,
        modified_node_ids=list(changes) or [page.canvas_root.id],
        props_changes=changes,
        page_changes=page_changes,
        description=transform_description(s.transform_directive) + ".",
    )


def _apply_template(page: Page, s: Suggestion, registry: TemplateRegistry | None) -> ApplyResult:
    plan = plan_template_application(page, s.template_id or "", registry)
    if plan is None:
        return _fail(f'Template "{s.template_id}" not found.')
    page_changes: dict[str, Any] = {"layout_personality": plan.personality}
    if plan.section_order:
        page_changes["section_order"] = plan.section_order
    changes = plan.props_changes
    return ApplyResult(
        success=True,
        modified_node_ids=list(dict.fromkeys([*changes, *(d.node_id for d in plan.reorder)])),
        props_changes=changes,
        page_changes=page_changes,
        description="; ".join(describe_template_changes(page, plan.template_id, registry)) + ".",
    )


def apply_suggestion(
    page: Page,
    suggestion: Suggestion,
    registry: TemplateRegistry | None = None,
) -> ApplyResult:
    """Route by source first (template, ai), then by suggestion type."""
    if suggestion.source == "template" and suggestion.template_id:
        result = _apply_template(page, suggestion, registry)
    elif suggestion.source == "ai" and suggestion.transform_directive:
        result = _apply_ai(page, suggestion)
    else:
        handler = _HANDLERS.get(suggestion.type)
        result = handler(page, suggestion) if handler else _fail("Unknown suggestion type.")

    logger.debug(
        "Apply %s (%s/%s): success=%s %s",
        suggestion.id, suggestion.source, suggestion.type, result.success, result.description,
    )
    return result
