"""Shared test fixtures."""

from __future__ import annotations

import pytest

from funnelsight.engine.ids import SuggestionIdGenerator
from funnelsight.engine.registry import discover
from funnelsight.models.page import Node, Page

# Every heuristic module registered once for the whole session
discover()


def node(node_id: str, node_type: str, *children: Node, **props) -> Node:
    return Node(id=node_id, type=node_type, props=props, children=list(children))


def make_page(root: Node, page_type: str = "landing", **fields) -> Page:
    return Page(id=fields.pop("id", "page-1"), name="Test", type=page_type, canvas_root=root, **fields)


# Sample pages. Builders return fresh objects so tests can't leak mutations.


def missing_cta_page() -> Page:
    """Hero section with a headline and three paragraphs but nothing to click."""
    return make_page(node(
        "root", "container",
        node(
            "hero", "hero",
            node("hero-title", "headline"),
            node("hero-p1", "text"),
            node("hero-p2", "text"),
            node("hero-p3", "text"),
        ),
    ))


def optin_page(**fields) -> Page:
    """Hero with headline, copy and two fields, then an action section with one button."""
    return make_page(node(
        "root", "container",
        node(
            "hero", "hero",
            node("title", "headline"),
            node("subtitle", "text"),
            node("email", "input"),
            node("name", "input"),
        ),
        node("cta-section", "section", node("submit", "button")),
    ), "optin", **fields)


def dominance_page() -> Page:
    return make_page(node(
        "root", "container",
        node("headline", "headline", fontSize=16),
        node("body", "text", fontSize=16),
    ))


def unbalanced_page(personality: str | None = None) -> Page:
    """Trips all five layout heuristics at once.

    - cramped form: button between two inputs in an 8px row
    - headline smaller than the paragraph next to it
    - 40px margin breaking the root's 8px rhythm
    - row layout on an opt-in step
    - media and a card piled into the bottom half
    """
    return make_page(node(
        "root", "container",
        node("title", "headline", fontSize=18),
        node("intro", "text", fontSize=20),
        node(
            "form", "container",
            node("email", "input"),
            node("submit", "button"),
            node("phone", "input"),
            direction="row",
            gap=8,
        ),
        node("gallery", "image", marginTop=40),
        node("promo", "video"),
        node("offer", "card", node("offer-cta", "button"), node("offer-img", "image")),
        gap=8,
    ), "optin", layout_personality=personality)


def uneven_sections_page() -> Page:
    """Three text-only sections with wildly different gaps and no headline anywhere."""
    return make_page(node(
        "root", "container",
        node("s1", "section", node("s1-text", "text"), gap=8),
        node("s2", "section", node("s2-text", "text"), gap=8),
        node("s3", "section", node("s3-text", "text"), gap=60),
    ))


@pytest.fixture
def ids() -> SuggestionIdGenerator:
    return SuggestionIdGenerator()
