"""Tests for tree traversal, predicates and numeric helpers."""

from __future__ import annotations

import math

import pytest

from funnelsight.utils.math_helpers import (
    cosine_similarity,
    dispersion_ratio,
    mean_abs_deviation,
    normalize_to_mean,
    round_half_up,
)
from funnelsight.utils.tree import (
    find_node,
    find_parent,
    find_sections,
    flatten,
    is_cta,
    is_headline,
    is_hero,
    is_input,
    is_row,
    is_section,
    is_text,
    numeric_prop,
    tree_depth,
    walk_with_depth,
)
from tests.conftest import node, optin_page


# ---- 1. Traversal ----


def test_flatten_is_preorder_and_includes_root():
    root = optin_page().canvas_root
    ids = [n.id for n in flatten(root)]
    assert ids == ["root", "hero", "title", "subtitle", "email", "name", "cta-section", "submit"]


def test_walk_with_depth_matches_flatten_order():
    root = optin_page().canvas_root
    walked = list(walk_with_depth(root))
    assert [n.id for n, _ in walked] == [n.id for n in flatten(root)]
    assert [d for _, d in walked] == [0, 1, 2, 2, 2, 2, 1, 2]


def test_tree_depth():
    assert tree_depth(node("a", "text")) == 1
    assert tree_depth(optin_page().canvas_root) == 3


def test_find_node_and_parent():
    root = optin_page().canvas_root
    assert find_node(root, "email").type == "input"
    assert find_node(root, "missing") is None
    assert find_parent(root, "submit").id == "cta-section"
    assert find_parent(root, "root") is None


def test_find_sections_excludes_root_and_nested_sections():
    root = node(
        "root", "container",
        node("a", "text"),
        node("wrap", "stack", node("inner", "section", node("deep", "section"))),
    )
    assert [s.id for s in find_sections(root)] == ["a", "wrap", "inner"]


# ---- 2. Predicates ----


class TestPredicates:
    def test_type_membership_is_case_insensitive(self):
        assert is_cta(node("b", "Button"))
        assert is_headline(node("h", "H1"))
        assert is_text(node("p", "paragraph"))
        assert is_input(node("f", "textarea"))
        assert is_hero(node("x", "banner"))
        assert is_section(node("s", "content-block"))

    def test_prop_overrides(self):
        assert is_cta(node("l", "link", variant="primary"))
        assert is_cta(node("l", "link", role="cta"))
        assert is_headline(node("t", "label", variant="headline"))
        assert is_text(node("t", "label", variant="caption"))
        assert is_hero(node("s", "section", role="hero"))
        assert is_hero(node("s", "section", isHero=True))
        assert is_section(node("g", "group", isSection=True))

    def test_non_string_props_never_match(self):
        assert not is_cta(node("x", "div", variant=3))
        assert not is_hero(node("x", "div", isHero="yes"))

    def test_row_direction(self):
        assert is_row(node("r", "container", direction="row"))
        assert is_row(node("r", "container", flexDirection="row-reverse"))
        assert not is_row(node("c", "container", direction="column"))
        assert not is_row(node("c", "container"))


# ---- 3. Numeric props ----


@pytest.mark.parametrize("value", [None, "12", True, math.nan, math.inf, -math.inf, 10**400, -(10**400), [1]])
def test_numeric_prop_falls_back(value):
    assert numeric_prop(node("n", "text", gap=value), "gap", 7.0) == 7.0


def test_numeric_prop_reads_numbers():
    assert numeric_prop(node("n", "text", gap=12), "gap", 0.0) == 12.0
    assert numeric_prop(None, "gap", 5.0) == 5.0
    assert numeric_prop(node("n", "text", gap=10**20), "gap", 0.0) == 1e20


# ---- 4. Math helpers ----


def test_dispersion_ratio():
    assert dispersion_ratio([]) == 0.0
    assert dispersion_ratio([0, 0]) == 0.0
    assert dispersion_ratio([10, 10, 10]) == 0.0
    assert mean_abs_deviation([8, 8, 48, 8, 8]) == pytest.approx(12.8)
    assert dispersion_ratio([8, 8, 48, 8, 8]) == pytest.approx(0.8)


def test_normalize_to_mean():
    assert normalize_to_mean([]) == []
    assert normalize_to_mean([0, 0]) == [1.0, 1.0]
    assert normalize_to_mean([10, 30]) == pytest.approx([0.5, 1.5])


def test_cosine_similarity():
    assert cosine_similarity({}, {}) == 0.0
    assert cosine_similarity({"a": 1.0}, {"b": 1.0}) == 0.0
    assert cosine_similarity({"a": 0.5, "b": 0.5}, {"b": 0.5, "a": 0.5}) == pytest.approx(1.0)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.4) == 2
