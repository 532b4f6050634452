"""FastAPI dependency injection."""

from __future__ import annotations

from funnelsight.config import Settings, settings
from funnelsight.engine.config import PipelineConfig
from funnelsight.engine.pipeline import SuggestionPipeline, create_pipeline
from funnelsight.engine.tokens import GeometryPolicy


def get_settings() -> Settings:
    return settings


def policy_from_settings(s: Settings) -> GeometryPolicy:
    return GeometryPolicy(
        allow_spacing=s.allow_spacing,
        allow_alignment=s.allow_alignment,
        allow_geometry=s.allow_geometry,
    )


def get_pipeline() -> SuggestionPipeline:
    s = get_settings()
    config = PipelineConfig(
        template_threshold=s.template_similarity_threshold,
        max_suggestions=s.max_suggestions,
    )
    return create_pipeline(config=config, policy=policy_from_settings(s))
