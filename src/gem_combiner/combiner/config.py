"""
Module: combiner.config

Purpose:
    Configuration dataclass for usage bookkeeping and recipe parsing.
    Immutable configuration with validation on construction.

Key Classes:
    - CombinerConfig: Settings shared by Workbench and UsageLedger

Dependencies:
    - dataclasses (std)
    - core.utils.recipe_parser: Default grade ceiling

Used By:
    - combiner.ledger.UsageLedger
    - combiner.workbench.Workbench
"""

from __future__ import annotations

from dataclasses import dataclass

from gem_combiner.core.utils.recipe_parser import DEFAULT_MAX_GRADE

NOT_SLOTTED = -1

# Above this, pure chain costs overflow float exponentiation in Growth.
_GRADE_CEILING = 900


@dataclass(frozen=True)
class CombinerConfig:
    """
    Configuration for a combiner workbench (immutable).

    Attributes:
        not_slotted: Sentinel slot value for gems without a placement
        max_grade: Highest grade a pure recipe token may request
        record_usage: Whether fusions register use counts on their inputs

    Invariants:
        - not_slotted < 0 (real slots are non-negative)
        - 1 <= max_grade <= 900

    Example:
        >>> config = CombinerConfig(max_grade=32)
        >>> config.not_slotted
        -1
    """

    not_slotted: int = NOT_SLOTTED
    max_grade: int = DEFAULT_MAX_GRADE
    record_usage: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.not_slotted >= 0:
            raise ValueError(f"not_slotted must be negative: {self.not_slotted}")
        if not 1 <= self.max_grade <= _GRADE_CEILING:
            raise ValueError(
                f"max_grade must be between 1 and {_GRADE_CEILING}: {self.max_grade}"
            )

    def is_slot(self, slot: int) -> bool:
        """Check if a slot value is a real placement rather than the sentinel."""
        return slot != self.not_slotted
