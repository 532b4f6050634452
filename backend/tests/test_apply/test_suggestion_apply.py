"""Tests for the suggestion applier. Nothing here may modify the page."""

from __future__ import annotations

import pytest

from funnelsight.engine.apply import (
    apply_personality_suggestion,
    apply_structural_transform,
    apply_suggestion,
    suggestion_icon,
    suggestion_type_label,
)
from funnelsight.engine.structural import analyze_structure
from funnelsight.engine.template.matching import analyze_template_match
from funnelsight.models.suggestion import Recommendation, Suggestion
from tests.conftest import make_page, node, optin_page, uneven_sections_page


def page_with_form():
    return make_page(node(
        "root", "container",
        node(
            "form", "container",
            node("title", "headline", fontSize=16),
            node("copy", "text", lineHeight=1.95),
            node("email", "input"),
            node("submit", "button"),
            gap=10,
        ),
        node("cols", "container", node("a", "text"), node("b", "text"), direction="row"),
    ))


def make(type_, *ids, token=None, delta=None, **fields):
    return Suggestion(
        id="s-1",
        type=type_,
        confidence=0.7,
        message="test",
        affected_node_ids=list(ids),
        recommendation=Recommendation(token=token, delta=delta),
        **fields,
    )


@pytest.fixture
def page():
    return page_with_form()


# ---- 1. Spacing ----


class TestSpacing:
    def test_adjusts_parent_gap(self, page):
        result = apply_suggestion(page, make("spacing", "email", "submit", delta=6))
        assert result.success
        assert result.props_changes == {"form": {"gap": 16}}
        assert result.modified_node_ids == ["form"]
        assert result.description == "Adjusted spacing to 16px."

    def test_gap_floor(self, page):
        result = apply_suggestion(page, make("spacing", "email", "submit", delta=-40))
        assert result.props_changes == {"form": {"gap": 8}}

    def test_requires_delta_and_two_nodes(self, page):
        assert not apply_suggestion(page, make("spacing", "email", "submit")).success
        assert not apply_suggestion(page, make("spacing", "email", delta=4)).success

    def test_missing_node(self, page):
        result = apply_suggestion(page, make("spacing", "ghost", "submit", delta=4))
        assert not result.success
        assert result.description == "Affected node not found."

    def test_root_has_no_parent(self, page):
        result = apply_suggestion(page, make("spacing", "root", "form", delta=4))
        assert result.description == "Parent container not found."


# ---- 2. Other types ----


def test_cta_emphasis_defaults(page):
    result = apply_suggestion(page, make("cta-emphasis", "submit", "email"))
    assert result.success
    assert result.props_changes == {"form": {"gap": 18}}
    assert result.modified_node_ids == ["form", "submit", "email"]


def test_cta_emphasis_floor(page):
    result = apply_suggestion(page, make("cta-emphasis", "submit", delta=-20))
    assert result.props_changes == {"form": {"gap": 16}}


def test_hierarchy(page):
    result = apply_suggestion(page, make("hierarchy", "title", "copy", delta=3))
    assert result.props_changes == {"title": {"fontSize": 19}}
    assert result.description == "Increased headline prominence."
    assert apply_suggestion(page, make("hierarchy", "ghost", delta=3)).description == "Headline element not found."


def test_alignment_columns(page):
    result = apply_suggestion(page, make("alignment", "cols", token="--layout-columns"))
    assert result.props_changes == {"cols": {"direction": "column", "alignItems": "center"}}
    assert result.description == "Centered layout for better focus."


def test_alignment_rebalance(page):
    result = apply_suggestion(page, make("alignment", "cols", token="--visual-balance"))
    assert result.props_changes == {"root": {"paddingTop": 8}}
    assert apply_suggestion(page, make("alignment", "root")).description == "Unable to adjust alignment."


def test_readability_caps_line_height(page):
    result = apply_suggestion(page, make("readability", "copy", "a"))
    assert result.props_changes["copy"]["lineHeight"] == 2.0
    assert result.props_changes["a"]["lineHeight"] == pytest.approx(1.6)


def test_page_is_never_mutated(page):
    before = page.model_dump()
    for s in (
        make("spacing", "email", "submit", delta=6),
        make("cta-emphasis", "submit"),
        make("hierarchy", "title", delta=3),
        make("alignment", "cols", token="--layout-columns"),
        make("readability", "copy"),
    ):
        assert apply_suggestion(page, s).success
    assert page.model_dump() == before


# ---- 3. Template and structural routing ----


def test_template_suggestion_routes_to_plan():
    page = optin_page()
    suggestion = analyze_template_match(page).suggestion
    result = apply_suggestion(page, suggestion)
    assert result.success
    assert result.props_changes["root"] == {"gap": 36}
    assert result.page_changes == {"layout_personality": "conversion"}
    assert "root" in result.modified_node_ids


def test_unknown_template_fails():
    s = make("spacing", "root", source="template", template_id="nope")
    result = apply_suggestion(optin_page(), s)
    assert not result.success


def test_structural_spacing_transform():
    page = uneven_sections_page()
    spacing = [s for s in analyze_structure(page).suggestions if s.transform_directive == "normalize-section-spacing"][0]
    result = apply_suggestion(page, spacing)
    assert result.success
    assert result.props_changes == {"s1": {"gap": 23}, "s2": {"gap": 23}, "s3": {"gap": 23}}
    assert result.description == "Normalized section spacing."


def test_personality_directive():
    s = make("hierarchy", "root", source="ai", transform_directive="apply-editorial-personality")
    assert apply_personality_suggestion(optin_page(), s) == {"layout_personality": "editorial"}
    result = apply_suggestion(optin_page(), s)
    assert result.page_changes == {"layout_personality": "editorial"}
    assert result.props_changes == {}
    assert result.modified_node_ids == ["root"]


def test_bogus_personality_directive():
    s = make("hierarchy", "root", source="ai", transform_directive="apply-fancy-personality")
    assert apply_personality_suggestion(optin_page(), s) == {}


def test_promote_and_prominence_transforms():
    page = optin_page()
    promote = make("cta-emphasis", "hero", "ghost", source="ai", transform_directive="promote-to-hero")
    assert apply_structural_transform(page, promote) == {"hero": {"role": "hero"}}
    prominence = make("cta-emphasis", "submit", source="ai", transform_directive="improve-cta-prominence")
    assert apply_structural_transform(page, prominence) == {"submit": {"variant": "primary", "fontWeight": 700}}


def test_hierarchy_directive_has_nothing_to_apply():
    s = make("hierarchy", "hero", source="ai", transform_directive="add-visual-hierarchy")
    result = apply_suggestion(optin_page(), s)
    assert not result.success


# ---- 4. Labels ----


def test_labels_and_icons():
    assert suggestion_type_label("alignment") == "Balance"
    assert suggestion_type_label("cta-emphasis") == "Emphasis"
    assert suggestion_type_label("other") == "Layout"
    assert suggestion_icon("spacing") == "↕"
    assert suggestion_icon("other") == "○"
