"""Heuristic registry — every heuristic is a standalone function registered via decorator.

Usage:
    @heuristic(id="L.01", family=Family.LAYOUT, description="CTA breathing room")
    def cta_breathing_room(ctx: AnalysisContext) -> list[Suggestion]:
        ...

Adding a new heuristic = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from funnelsight.engine.context import AnalysisContext
    from funnelsight.models.suggestion import Suggestion

logger = logging.getLogger(__name__)

HeuristicFn = Callable[["AnalysisContext"], "list[Suggestion]"]


class Family(enum.IntEnum):
    LAYOUT = 0
    COMPOSITION = 1


@dataclass
class HeuristicSpec:
    id: str
    family: Family
    fn: HeuristicFn
    name: str = ""  # machine name, e.g. "section-missing-cta"
    tags: set[str] = field(default_factory=set)
    description: str = ""


class HeuristicRegistry:
    """Registry of heuristics keyed by ID."""

    def __init__(self) -> None:
        self._heuristics: dict[str, HeuristicSpec] = {}

    def register(self, spec: HeuristicSpec) -> None:
        if spec.id in self._heuristics:
            raise ValueError(f"Duplicate heuristic ID: {spec.id}")
        self._heuristics[spec.id] = spec
        logger.debug("Registered heuristic %s (%s)", spec.id, spec.family.name)

    def get(self, heuristic_id: str) -> HeuristicSpec:
        return self._heuristics[heuristic_id]

    def get_family(self, family: Family) -> list[HeuristicSpec]:
        specs = [s for s in self._heuristics.values() if s.family == family]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[HeuristicSpec]:
        return sorted(self._heuristics.values(), key=lambda s: (s.family, s.id))

    @property
    def count(self) -> int:
        return len(self._heuristics)


# Module-level singleton
_registry = HeuristicRegistry()


def get_registry() -> HeuristicRegistry:
    return _registry


def heuristic(
    *,
    id: str,
    family: Family,
    name: str = "",
    tags: set[str] | None = None,
    description: str = "",
):
    """Decorator to register a heuristic function."""

    def decorator(fn: HeuristicFn):
        spec = HeuristicSpec(
            id=id,
            family=family,
            fn=fn,
            name=name or fn.__name__.replace("_", "-"),
            tags=tags or set(),
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator


_FAMILY_PACKAGES = ("layout", "composition")


def discover() -> None:
    """Import every heuristic module so the @heuristic decorators fire. Safe to call twice."""
    for package_name in _FAMILY_PACKAGES:
        package = importlib.import_module(f"funnelsight.engine.{package_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")
