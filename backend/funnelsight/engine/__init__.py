"""FunnelSight structural & layout intelligence engine."""

from funnelsight.engine.registry import heuristic, Family, get_registry
from funnelsight.engine.context import AnalysisContext, create_context
from funnelsight.engine.pipeline import SuggestionPipeline, PageAnalysis, create_pipeline

__all__ = [
    "heuristic",
    "Family",
    "get_registry",
    "AnalysisContext",
    "create_context",
    "SuggestionPipeline",
    "PageAnalysis",
    "create_pipeline",
]
