"""Template soft normalization.

Planning is pure and never touches the page. ``normalize_page`` returns a new
page with a plan applied; the input page is left as it was. Nothing here runs
unless the user explicitly asks to apply a template.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from funnelsight.engine.personality import resolve_personality
from funnelsight.engine.roles import ROLE_ORDER_PRIORITY, section_role
from funnelsight.engine.template.catalog import TemplateRegistry, get_template
from funnelsight.models.fingerprint import TemplatePattern
from funnelsight.models.page import Page
from funnelsight.utils.tree import find_node, numeric_prop

logger = logging.getLogger(__name__)

# Fraction of section roles that must disagree with the template before reordering
REORDER_MISMATCH_THRESHOLD = 0.6
APPLIED_GAP_TOLERANCE = 4.0


@dataclass(frozen=True)
class SpacingAdjustment:
    node_id: str
    props: dict[str, Any]


@dataclass(frozen=True)
class ReorderDirective:
    node_id: str
    from_index: int
    to_index: int


@dataclass
class TemplatePlan:
    template_id: str
    template_name: str
    personality: str
    spacing: list[SpacingAdjustment] = field(default_factory=list)
    reorder: list[ReorderDirective] = field(default_factory=list)
    # Final order of top-level section ids (empty when no reorder)
    section_order: list[str] = field(default_factory=list)

    @property
    def props_changes(self) -> dict[str, dict[str, Any]]:
        changes: dict[str, dict[str, Any]] = {}
        for adj in self.spacing:
            changes.setdefault(adj.node_id, {}).update(adj.props)
        return changes


@dataclass
class TemplateApplicationResult:
    success: bool
    page: Page
    template_id: str
    modified_node_ids: list[str] = field(default_factory=list)
    description: str = ""


def spacing_adjustments(page: Page, template: TemplatePattern) -> list[SpacingAdjustment]:
    """Root gets the section gap, sections the block gap and half the personality's
    section gap as vertical padding, nested containers the content gap."""
    ideal = template.ideal_spacing
    half = resolve_personality(template.suggested_personality).spacing.section_gap / 2
    root = page.canvas_root

    out = [SpacingAdjustment(root.id, {"gap": ideal.section_gap})]
    for section in root.children:
        out.append(SpacingAdjustment(section.id, {
            "gap": ideal.block_gap,
            "paddingTop": half,
            "paddingBottom": half,
        }))
        for child in section.children:
            if child.children:
                out.append(SpacingAdjustment(child.id, {"gap": ideal.content_gap}))
    return out


def reorder_directives(page: Page, template: TemplatePattern) -> list[ReorderDirective]:
    """Stable sort of sections by role priority, only when counts match and most roles disagree."""
    sections = page.canvas_root.children
    expected = template.fingerprint.role_sequence
    if not sections or len(sections) != len(expected):
        return []

    roles = [section_role(s, i, len(sections)) for i, s in enumerate(sections)]
    mismatched = sum(1 for have, want in zip(roles, expected) if have != want)
    if mismatched / len(roles) < REORDER_MISMATCH_THRESHOLD:
        return []

    order = sorted(range(len(sections)), key=lambda i: ROLE_ORDER_PRIORITY.get(roles[i], 99))
    return [
        ReorderDirective(node_id=sections[old].id, from_index=old, to_index=new)
        for new, old in enumerate(order)
        if old != new
    ]


def plan_template_application(
    page: Page,
    template_id: str,
    registry: TemplateRegistry | None = None,
) -> TemplatePlan | None:
    template = get_template(template_id, registry)
    if template is None:
        return None

    reorder = reorder_directives(page, template)
    section_order: list[str] = []
    if reorder:
        ids = [s.id for s in page.canvas_root.children]
        moved = {d.to_index: d.node_id for d in reorder}
        section_order = [moved.get(i, sid) for i, sid in enumerate(ids)]

    return TemplatePlan(
        template_id=template.id,
        template_name=template.name,
        personality=template.suggested_personality,
        spacing=spacing_adjustments(page, template),
        reorder=reorder,
        section_order=section_order,
    )


def apply_template_spacing(
    page: Page,
    template_id: str,
    registry: TemplateRegistry | None = None,
) -> dict[str, dict[str, Any]]:
    """Gap-only patch: root section gap and per-section block gap."""
    template = get_template(template_id, registry)
    if template is None:
        return {}
    changes = {page.canvas_root.id: {"gap": template.ideal_spacing.section_gap}}
    for section in page.canvas_root.children:
        changes[section.id] = {"gap": template.ideal_spacing.block_gap}
    return changes


def normalize_page(page: Page, plan: TemplatePlan) -> TemplateApplicationResult:
    """Apply a plan to a deep copy of ``page``."""
    result = page.model_copy(deep=True)
    root = result.canvas_root

    spacing_ids: list[str] = []
    for adj in plan.spacing:
        node = find_node(root, adj.node_id)
        if node is None:
            continue
        node.props.update(adj.props)
        spacing_ids.append(adj.node_id)

    if plan.section_order:
        by_id = {c.id: c for c in root.children}
        if set(by_id) == set(plan.section_order):
            root.children = [by_id[i] for i in plan.section_order]

    result.layout_personality = plan.personality

    reordered = [d.node_id for d in plan.reorder]
    modified = list(dict.fromkeys([*spacing_ids, *reordered]))

    changes: list[str] = []
    if spacing_ids:
        changes.append(f"adjusted spacing on {len(spacing_ids)} elements")
    if reordered:
        changes.append(f"reordered {len(reordered)} sections")
    changes.append(f"applied {plan.personality} personality")

    logger.info("Applied template %s to page %s", plan.template_id, page.id)
    return TemplateApplicationResult(
        success=True,
        page=result,
        template_id=plan.template_id,
        modified_node_ids=modified,
        description=f'Applied "{plan.template_name}": {", ".join(changes)}.',
    )


def apply_template(
    page: Page,
    template_id: str,
    registry: TemplateRegistry | None = None,
) -> TemplateApplicationResult:
    plan = plan_template_application(page, template_id, registry)
    if plan is None:
        return TemplateApplicationResult(
            success=False,
            page=page,
            template_id=template_id,
            description=f'Template "{template_id}" not found.',
        )
    return normalize_page(page, plan)


def preview_template_application(
    page: Page,
    template_id: str,
    registry: TemplateRegistry | None = None,
) -> list[str]:
    """IDs that applying the template would touch, for highlighting."""
    plan = plan_template_application(page, template_id, registry)
    if plan is None:
        return []
    ids = [page.canvas_root.id, *(s.id for s in page.canvas_root.children)]
    ids.extend(d.node_id for d in plan.reorder)
    return list(dict.fromkeys(ids))


def describe_template_changes(
    page: Page,
    template_id: str,
    registry: TemplateRegistry | None = None,
) -> list[str]:
    plan = plan_template_application(page, template_id, registry)
    if plan is None:
        return ["Template not found"]
    changes = [f"Apply {plan.template_name} spacing rhythm"]
    if page.layout_personality != plan.personality:
        changes.append(f"Switch to {plan.personality} personality")
    if plan.reorder:
        changes.append(f"Reorder sections to match {plan.template_name} structure")
    return changes


def is_template_applied(
    page: Page,
    template_id: str,
    registry: TemplateRegistry | None = None,
) -> bool:
    template = get_template(template_id, registry)
    if template is None:
        return False
    if page.layout_personality != template.suggested_personality:
        return False
    root_gap = numeric_prop(page.canvas_root, "gap", 0.0)
    return abs(root_gap - template.ideal_spacing.section_gap) < APPLIED_GAP_TOLERANCE
