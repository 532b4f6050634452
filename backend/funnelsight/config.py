"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    funnelsight_env: str = "development"
    funnelsight_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Geometry policy (all False keeps layout intelligence locked)
    allow_spacing: bool = False
    allow_alignment: bool = False
    allow_geometry: bool = False

    # Ranking
    template_similarity_threshold: float = 0.72
    max_suggestions: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
