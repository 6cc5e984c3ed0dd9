"""
Module: combiner.ledger

Purpose:
    Usage bookkeeping for shared gem nodes. Gems are immutable and may
    appear in several fusions (or twice in one), so use counts and slot
    placements are kept here, keyed by gem identity, instead of on the
    nodes themselves. Each search branch can own its own ledger.

Key Classes:
    - UsageLedger: Use counts, slots and original slots per gem

Dependencies:
    - logging (std)
    - core.models.gems.Gem
    - combiner.config.CombinerConfig

Used By:
    - combiner.workbench.Workbench
    - External slot assignment (reads is_needed/slot/use_count, writes slot)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from gem_combiner.core.models.gems import Gem

from .config import CombinerConfig

logger = logging.getLogger(__name__)


class UsageLedger:
    """
    Per-gem use counts and slot placements.

    Entries are keyed by the gem object itself; Gem hashes by identity,
    so two structurally equal gems are tracked separately. The ledger
    holds a strong reference to every gem it has seen.

    Example:
        >>> ledger = UsageLedger()
        >>> y = Gem.base("y")
        >>> ledger.record_fusion(Gem.combine(y, y))
        >>> ledger.use_count(y)
        2
    """

    def __init__(self, config: Optional[CombinerConfig] = None):
        self.config = config or CombinerConfig()
        self._use_counts: Dict[Gem, int] = {}
        self._slots: Dict[Gem, int] = {}
        self._original_slots: Dict[Gem, int] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Use Counts
    # ─────────────────────────────────────────────────────────────────────────

    def use_count(self, gem: Gem) -> int:
        """Number of fusions that consumed this gem (self-fusion counts twice)."""
        return self._use_counts.get(gem, 0)

    def record_fusion(self, fused: Gem) -> None:
        """
        Register one use on each component of a fusion.

        Args:
            fused: A fusion result; base gems are ignored
        """
        for component in fused.components:
            self._use_counts[component] = self._use_counts.get(component, 0) + 1

    # ─────────────────────────────────────────────────────────────────────────
    # Slots
    # ─────────────────────────────────────────────────────────────────────────

    def slot(self, gem: Gem) -> int:
        """Current slot of a gem, or config.not_slotted."""
        return self._slots.get(gem, self.config.not_slotted)

    def assign_slot(self, gem: Gem, slot: int) -> None:
        """
        Place a gem in a slot.

        Raises:
            ValueError: If slot is the not_slotted sentinel; use clear_slot()
        """
        if not self.config.is_slot(slot):
            raise ValueError(f"Cannot assign the not_slotted sentinel {slot} as a slot")
        logger.debug("Slot %d <- %r", slot, gem)
        self._slots[gem] = slot

    def clear_slot(self, gem: Gem) -> None:
        self._slots.pop(gem, None)

    def original_slot(self, gem: Gem) -> int:
        """Slot a base gem started in, or config.not_slotted."""
        return self._original_slots.get(gem, self.config.not_slotted)

    def set_original_slot(self, gem: Gem, slot: int) -> None:
        if not gem.is_leaf:
            raise ValueError(f"Only base gems have an original slot: {gem!r}")
        self._original_slots[gem] = slot

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def is_needed(self, gem: Gem) -> bool:
        """
        True for a gem that some fusion consumes but that has no slot yet.

        Unused gems (including base gems nobody fused) are never needed.
        """
        return self.slot(gem) == self.config.not_slotted and self.use_count(gem) > 0

    def needed_gems(self) -> List[Gem]:
        """All tracked gems for which is_needed() holds, in first-use order."""
        return [gem for gem in self._use_counts if self.is_needed(gem)]

    def __iter__(self) -> Iterator[Gem]:
        """Iterate over gems with a recorded use, in first-use order."""
        return iter(list(self._use_counts))

    def __len__(self) -> int:
        return len(self._use_counts)

    def reset(self) -> None:
        """Forget all counts and placements."""
        self._use_counts.clear()
        self._slots.clear()
        self._original_slots.clear()
