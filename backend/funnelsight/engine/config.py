"""Pipeline configuration — every threshold the heuristics read."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PipelineConfig:
    """Numeric constants for the four analyzer families."""

    # Layout
    cta_min_gap: float = 24.0
    cta_confidence_before_input: float = 0.75
    cta_confidence_after_input: float = 0.7
    dominance_ratio: float = 1.15
    dominance_confidence: float = 0.8
    default_headline_size: float = 32.0
    default_body_size: float = 16.0
    rhythm_min_children: int = 3
    rhythm_threshold: float = 0.25  # MAD / mean
    rhythm_confidence: float = 0.65
    centering_confidence: float = 0.7
    bottom_heavy_ratio: float = 0.65
    balance_confidence: float = 0.6

    # Composition
    text_stack_min: int = 3
    headline_action_factor: float = 1.5
    closure_ratio: float = 0.75
    composition_threshold: float = 0.4
    composition_cap: int = 2

    # Structural
    structural_floor: float = 0.55
    structural_cap: int = 2
    personality_mismatch_floor: float = 0.7

    # Template
    template_threshold: float = 0.72
    template_spacing_tolerance: float = 4.0

    # Merge
    max_suggestions: int = 3
