"""
Core Models Package

Immutable gem models and the static tables they are built from.

All gem nodes are frozen dataclasses whose attributes are fixed when the
node is created. Nodes are shared by reference: a gem may be fused with
itself or feed several fusions, so identity (not value) is what tells
two gems apart.
"""

from .colors import GemColor, BASE_GEM_CODES, color_for_code, color_name, has_flag
from .blending import BlendTier, BLEND_TIERS, blend, tier_for
from .gems import Gem, calculate_power, calculate_growth

__all__ = [
    "GemColor",
    "BASE_GEM_CODES",
    "color_for_code",
    "color_name",
    "has_flag",
    "BlendTier",
    "BLEND_TIERS",
    "blend",
    "tier_for",
    "Gem",
    "calculate_power",
    "calculate_growth",
]
