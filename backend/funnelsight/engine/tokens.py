"""Locked layout tokens and the RULE_0 geometry policy.

Vertical rhythm is fixed for every personality and intent. Intelligence may
only touch decorative properties (opacity, color, bounded scale).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpacingTokens:
    section_gap: float = 64.0
    block_gap: float = 24.0
    text_gap: float = 12.0
    cta_gap: float = 32.0


LOCKED_SPACING = SpacingTokens()

PAGE_PADDING_TOP = 64.0
PAGE_PADDING_BOTTOM = 72.0

MAX_DECORATIVE_SCALE = 1.03


@dataclass(frozen=True)
class GeometryPolicy:
    allow_opacity: bool = True
    allow_color: bool = True
    allow_visibility: bool = True
    allow_spacing: bool = False
    allow_alignment: bool = False
    allow_geometry: bool = False
    max_scale: float = MAX_DECORATIVE_SCALE

    @property
    def geometry_locked(self) -> bool:
        """True when spacing, alignment and geometry are all forbidden."""
        return not (self.allow_spacing or self.allow_alignment or self.allow_geometry)

    def clamp_scale(self, value: float) -> float:
        return min(value, self.max_scale)


RULE_0 = GeometryPolicy()

UNLOCKED = GeometryPolicy(allow_spacing=True, allow_alignment=True, allow_geometry=True)
