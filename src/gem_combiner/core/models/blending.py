"""
Module: blending

Purpose:
    Tiered attribute blending applied at every fusion. The tier is picked
    by the grade gap between the two components (0, 1, or 2+), and each
    tier fixes a (high, low) weight pair per blended attribute.

Key Functions:
    - blend(v1, v2, weights): high * max(v1, v2) + low * min(v1, v2)
    - tier_for(grade1, grade2): Select the BlendTier for a grade gap

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.gems.Gem.combine
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Weights = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class BlendTier:
    """
    Blend weights for one grade-gap tier.

    Attributes:
        grade_gap: Smallest |grade1 - grade2| this tier covers
        grade_step: Added to the larger grade to get the fused grade
        damage: (high, low) weights for Damage
        blood: (high, low) weights for Blood
        critical_multiplier: (high, low) weights for CriticalMultiplier
        leech: (high, low) weights for Leech
    """

    grade_gap: int
    grade_step: int
    damage: Weights
    blood: Weights
    critical_multiplier: Weights
    leech: Weights

    def fused_grade(self, grade1: int, grade2: int) -> int:
        return max(grade1, grade2) + self.grade_step


BLEND_TIERS: Tuple[BlendTier, ...] = (
    BlendTier(
        grade_gap=0,
        grade_step=1,
        damage=(0.87, 0.71),
        blood=(0.78, 0.31),
        critical_multiplier=(0.88, 0.5),
        leech=(0.88, 0.5),
    ),
    BlendTier(
        grade_gap=1,
        grade_step=0,
        damage=(0.86, 0.7),
        blood=(0.79, 0.29),
        critical_multiplier=(0.88, 0.44),
        leech=(0.89, 0.44),
    ),
    BlendTier(
        grade_gap=2,
        grade_step=0,
        damage=(0.85, 0.69),
        blood=(0.8, 0.27),
        critical_multiplier=(0.88, 0.44),
        leech=(0.9, 0.38),
    ),
)


def tier_for(grade1: int, grade2: int) -> BlendTier:
    """Return the tier for the gap between two grades; gaps of 2+ share the last tier."""
    gap = abs(grade1 - grade2)
    return BLEND_TIERS[min(gap, len(BLEND_TIERS) - 1)]


def blend(value1: float, value2: float, weights: Weights) -> float:
    """
    Blend two attribute values.

    The larger value always takes the high weight, so the result does
    not depend on argument order.
    """
    high, low = weights
    if value1 > value2:
        return (high * value1) + (low * value2)
    return (high * value2) + (low * value1)
