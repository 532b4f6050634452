"""Recompute triggers — which editor actions should re-run which analyzer family.

Layout and composition react to ordinary edits. Structural and template
analysis are heavier and only run when a whole page arrives.
"""

from __future__ import annotations

LAYOUT_TRIGGERS = frozenset({
    "ADD_NODE",
    "DELETE_NODE",
    "COMMIT_NODE_PROPS",
    "UPDATE_PAGE_PROPS",
    "MOVE_NODE_UP",
    "MOVE_NODE_DOWN",
    "MOVE_NODE_TO_PARENT",
    "HYDRATE_FROM_STORAGE",
})

# Prop edits inside a node don't change composition
COMPOSITION_TRIGGERS = LAYOUT_TRIGGERS - {"COMMIT_NODE_PROPS"}

STRUCTURAL_TRIGGERS = frozenset({
    "HYDRATE_FROM_STORAGE",
    "DUPLICATE_PAGE",
    "IMPORT_PAGE",
    "PASTE_NODES",
})

TEMPLATE_TRIGGERS = STRUCTURAL_TRIGGERS

FAMILY_TRIGGERS: dict[str, frozenset[str]] = {
    "layout": LAYOUT_TRIGGERS,
    "composition": COMPOSITION_TRIGGERS,
    "structural": STRUCTURAL_TRIGGERS,
    "template": TEMPLATE_TRIGGERS,
}


def should_recompute_layout(action: str) -> bool:
    return action in LAYOUT_TRIGGERS


def should_recompute_composition(action: str) -> bool:
    return action in COMPOSITION_TRIGGERS


def should_run_structural_analysis(action: str) -> bool:
    return action in STRUCTURAL_TRIGGERS


def should_run_template_analysis(action: str) -> bool:
    return action in TEMPLATE_TRIGGERS


def should_recompute(family: str, action: str) -> bool:
    """Generic lookup. Unknown families never recompute."""
    return action in FAMILY_TRIGGERS.get(family, frozenset())
