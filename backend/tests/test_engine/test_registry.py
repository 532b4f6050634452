"""Tests for the heuristic registry."""

from __future__ import annotations

import pytest

from funnelsight.engine.context import AnalysisContext
from funnelsight.engine.registry import Family, HeuristicRegistry, HeuristicSpec, get_registry
from funnelsight.models.suggestion import Suggestion


def _noop(ctx: AnalysisContext) -> list[Suggestion]:
    return []


def test_register_and_get():
    reg = HeuristicRegistry()
    spec = HeuristicSpec(id="L.01", family=Family.LAYOUT, fn=_noop)
    reg.register(spec)
    assert reg.get("L.01") is spec
    assert reg.count == 1


def test_duplicate_id_raises():
    reg = HeuristicRegistry()
    reg.register(HeuristicSpec(id="C.01", family=Family.COMPOSITION, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate heuristic ID"):
        reg.register(HeuristicSpec(id="C.01", family=Family.COMPOSITION, fn=_noop))


def test_get_family_sorted_by_id():
    reg = HeuristicRegistry()
    reg.register(HeuristicSpec(id="L.02", family=Family.LAYOUT, fn=_noop))
    reg.register(HeuristicSpec(id="C.01", family=Family.COMPOSITION, fn=_noop))
    reg.register(HeuristicSpec(id="L.01", family=Family.LAYOUT, fn=_noop))
    assert [s.id for s in reg.get_family(Family.LAYOUT)] == ["L.01", "L.02"]
    assert [s.id for s in reg.all()] == ["L.01", "L.02", "C.01"]


def test_builtin_heuristics_registered():
    reg = get_registry()
    assert [s.id for s in reg.get_family(Family.LAYOUT)] == ["L.01", "L.02", "L.03", "L.04", "L.05"]
    assert [s.id for s in reg.get_family(Family.COMPOSITION)] == ["C.01", "C.02", "C.03", "C.04"]
    assert reg.get("C.01").name == "section-missing-cta"
    assert "optin" in reg.get("L.04").tags
