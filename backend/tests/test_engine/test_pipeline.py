"""Tests for the suggestion pipeline orchestrator."""

from __future__ import annotations

import pytest

from funnelsight.engine.ids import SuggestionIdGenerator
from funnelsight.engine.pipeline import (
    SuggestionPipeline,
    analyze_composition,
    analyze_layout,
    analyze_page,
    create_pipeline,
)
from funnelsight.engine.ranking import (
    adjust_composition,
    clear_suggestions_for_node,
    dedupe_by_signature,
    finalize,
    is_node_in_affected_area,
    merge_with_layout_suggestions,
)
from funnelsight.engine.personality import resolve_personality
from funnelsight.engine.registry import Family, HeuristicRegistry, HeuristicSpec
from funnelsight.engine.tokens import RULE_0, UNLOCKED
from funnelsight.engine.triggers import (
    should_recompute,
    should_recompute_composition,
    should_recompute_layout,
    should_run_structural_analysis,
    should_run_template_analysis,
)
from funnelsight.models.suggestion import Suggestion
from tests.conftest import (
    dominance_page,
    make_page,
    missing_cta_page,
    node,
    optin_page,
    unbalanced_page,
    uneven_sections_page,
)

SAMPLE_PAGES = [missing_cta_page, optin_page, dominance_page, unbalanced_page, uneven_sections_page]


def _suggestion(sid: str, confidence: float, *ids: str, type_: str = "spacing") -> Suggestion:
    return Suggestion(id=sid, type=type_, confidence=confidence, message=sid, affected_node_ids=list(ids))


# ---- 1. Geometry lock ----


def test_locked_policy_returns_nothing_for_layout():
    assert analyze_layout(unbalanced_page(), policy=RULE_0) == []


def test_locked_policy_runs_no_layout_heuristic():
    calls: list[str] = []

    def spy(ctx):
        calls.append(ctx.page.id)
        return []

    reg = HeuristicRegistry()
    reg.register(HeuristicSpec(id="L.99", family=Family.LAYOUT, fn=spy))
    SuggestionPipeline(registry=reg, policy=RULE_0).analyze_layout(unbalanced_page())
    assert calls == []
    SuggestionPipeline(registry=reg, policy=UNLOCKED).analyze_layout(unbalanced_page())
    assert calls == ["page-1"]


def test_unlocked_unbalanced_page_trips_every_layout_heuristic():
    found = analyze_layout(unbalanced_page(), policy=UNLOCKED)
    assert {s.heuristic for s in found} == {
        "cta-breathing-room",
        "headline-dominance",
        "vertical-rhythm",
        "single-column-centering",
        "visual-weight-balance",
    }


def test_locked_page_analysis_still_runs_other_families():
    result = analyze_page(optin_page())
    assert result.layout == []
    assert result.composition
    assert result.template is not None and result.template.suggestion is not None


# ---- 2. Determinism, bounds, caps ----


@pytest.mark.parametrize("build", SAMPLE_PAGES)
def test_analysis_is_deterministic_up_to_ids(build):
    first = analyze_page(build(), policy=UNLOCKED)
    second = analyze_page(build(), policy=UNLOCKED)
    assert [s.content_key() for s in first.merged] == [s.content_key() for s in second.merged]
    assert [s.content_key() for s in first.layout] == [s.content_key() for s in second.layout]
    assert [s.id for s in first.merged] != [s.id for s in second.merged]


@pytest.mark.parametrize("build", SAMPLE_PAGES)
def test_bounds_caps_and_dedupe(build):
    result = analyze_page(build(), policy=UNLOCKED)
    every = [*result.layout, *result.composition, *result.structural.suggestions, *result.merged]
    assert all(0.0 <= s.confidence <= 1.0 for s in every)
    assert len(result.composition) <= 2
    assert len(result.structural.suggestions) <= 2
    assert len(result.merged) <= 3
    for family in (result.layout, result.composition, result.merged):
        signatures = [s.signature for s in family]
        assert len(signatures) == len(set(signatures))
        confidences = [s.confidence for s in family]
        assert confidences == sorted(confidences, reverse=True)


def test_injected_ids_are_sequential():
    ids = SuggestionIdGenerator()
    found = analyze_composition(missing_cta_page(), id_generator=ids)
    assert [s.id for s in found] == ["section-missing-cta-1"]


# ---- 3. Personality ----


def test_dense_never_exceeds_clean():
    def by_key(personality):
        result = analyze_page(unbalanced_page(personality), policy=UNLOCKED)
        return {
            (s.heuristic, s.type, s.signature): s.confidence
            for s in [*result.layout, *result.composition]
        }

    clean, dense = by_key("clean"), by_key("dense")
    shared = clean.keys() & dense.keys()
    assert shared
    assert all(dense[k] <= clean[k] for k in shared)


def test_composition_adjustment_multipliers():
    raw = [
        _suggestion("a", 0.8, "x", type_="cta-emphasis"),
        _suggestion("b", 0.6, "y", type_="hierarchy"),
    ]
    dense = adjust_composition(raw, "dense", resolve_personality("dense").suggestions)
    assert [s.confidence for s in dense] == pytest.approx([0.6, 0.45])

    conversion = adjust_composition(raw, "conversion", resolve_personality("conversion").suggestions)
    assert [s.confidence for s in conversion] == pytest.approx([1.0, 0.51])

    editorial = adjust_composition(raw, "editorial", resolve_personality("editorial").suggestions)
    assert [s.confidence for s in editorial] == pytest.approx([0.8, 0.69])


def test_composition_threshold_drops_low_confidence():
    raw = [_suggestion("a", 0.35, "x", type_="readability")]
    assert adjust_composition(raw, "clean", resolve_personality().suggestions) == []


# ---- 4. Ranking utilities ----


def test_dedupe_ignores_id_order():
    first = _suggestion("a", 0.9, "n1", "n2")
    second = _suggestion("b", 0.5, "n2", "n1")
    assert dedupe_by_signature([first, second]) == [first]


def test_finalize_sorts_stably_and_caps():
    items = [_suggestion("a", 0.5, "1"), _suggestion("b", 0.9, "2"), _suggestion("c", 0.5, "3")]
    assert [s.id for s in finalize(items)] == ["b", "a", "c"]
    assert [s.id for s in finalize(items, cap=2)] == ["b", "a"]


def test_affected_area_helpers():
    items = [_suggestion("a", 0.5, "n1", "n2"), _suggestion("b", 0.5, "n3")]
    assert is_node_in_affected_area("n2", items)
    assert not is_node_in_affected_area("n9", items)
    assert [s.id for s in clear_suggestions_for_node("n1", items)] == ["b"]


def test_merge_prefers_layout_and_skips_overlap():
    layout = [_suggestion("l1", 0.9, "a", "b")]
    composition = [
        _suggestion("c1", 0.95, "b"),
        _suggestion("c2", 0.7, "c"),
        _suggestion("c3", 0.6, "d"),
    ]
    merged = merge_with_layout_suggestions(layout, composition, max_total=2)
    assert [s.id for s in merged] == ["l1", "c2"]


# ---- 5. Failure isolation ----


def test_failing_heuristic_is_recorded_and_skipped():
    def boom(ctx):
        raise RuntimeError("bad tree")

    def ok(ctx):
        return [_suggestion("ok-1", 0.9, ctx.root.id, type_="hierarchy")]

    reg = HeuristicRegistry()
    reg.register(HeuristicSpec(id="C.90", family=Family.COMPOSITION, fn=boom))
    reg.register(HeuristicSpec(id="C.91", family=Family.COMPOSITION, fn=ok))
    pipeline = SuggestionPipeline(registry=reg)

    ctx = pipeline.context(optin_page())
    found = pipeline.run_family(ctx, Family.COMPOSITION)
    assert [s.id for s in found] == ["ok-1"]
    assert ctx.errors == {"C.90": "bad tree"}
    assert ctx.completed == {"C.91"}

    result = pipeline.analyze_page(optin_page())
    assert result.errors == {"C.90": "bad tree"}


def test_extreme_prop_values_never_fail_a_heuristic():
    page = make_page(node(
        "root", "container",
        node("title", "headline", fontSize=1),
        node("copy", "text", fontSize=1e308),
        node("s1", "section", node("s1-text", "text"), paddingBottom=-1e308, marginBottom=-1e308),
        node("s2", "section", node("s2-text", "text"), marginTop=1e308, gap=10**400),
        gap=1e308,
    ))
    result = analyze_page(page, policy=UNLOCKED, id_generator=SuggestionIdGenerator())
    assert result.errors == {}
    assert result.structural is not None


def test_create_pipeline_carries_config():
    pipeline = create_pipeline(policy=UNLOCKED)
    assert pipeline.policy is UNLOCKED
    assert pipeline.config.max_suggestions == 3
    assert len(pipeline.template_registry) == 5


# ---- 6. Triggers ----


def test_trigger_tables():
    assert should_recompute_layout("COMMIT_NODE_PROPS")
    assert not should_recompute_composition("COMMIT_NODE_PROPS")
    assert should_recompute_composition("MOVE_NODE_UP")
    assert should_run_structural_analysis("PASTE_NODES")
    assert not should_run_structural_analysis("ADD_NODE")
    assert should_run_template_analysis("IMPORT_PAGE")
    assert should_recompute("layout", "HYDRATE_FROM_STORAGE")
    assert not should_recompute("unknown", "ADD_NODE")
