"""
Unit Tests for UsageLedger

Tests for use counts, slot placements and the needed-gem query.
"""

import pytest

from gem_combiner.combiner.config import CombinerConfig
from gem_combiner.combiner.ledger import UsageLedger
from gem_combiner.core.models.gems import Gem


class TestUsageLedger:
    """Tests for UsageLedger."""

    @pytest.fixture
    def ledger(self) -> UsageLedger:
        return UsageLedger()

    def test_use_count_when_untracked_then_zero(self, ledger, yellow):
        assert ledger.use_count(yellow) == 0
        assert len(ledger) == 0

    def test_record_fusion_when_distinct_inputs_then_each_counted_once(self, ledger):
        a, b, c = Gem.base("y"), Gem.base("o"), Gem.base("b")
        ledger.record_fusion(Gem.combine(a, b))
        assert ledger.use_count(a) == 1
        assert ledger.use_count(b) == 1
        assert ledger.use_count(c) == 0

    def test_record_fusion_when_self_fusion_then_counted_twice(self, ledger, yellow):
        ledger.record_fusion(Gem.combine(yellow, yellow))
        assert ledger.use_count(yellow) == 2

    def test_record_fusion_when_base_gem_then_ignored(self, ledger, yellow):
        ledger.record_fusion(yellow)
        assert len(ledger) == 0

    def test_use_count_when_structurally_equal_gems_then_tracked_separately(self, ledger):
        a, b = Gem.base("y"), Gem.base("y")
        ledger.record_fusion(Gem.combine(a, a))
        assert ledger.use_count(a) == 2
        assert ledger.use_count(b) == 0

    # ─────────────────────────────────────────────────────────────────────────
    # Slots
    # ─────────────────────────────────────────────────────────────────────────

    def test_slot_when_unassigned_then_not_slotted(self, ledger, yellow):
        assert ledger.slot(yellow) == -1

    def test_assign_slot_when_valid_then_stored(self, ledger, yellow):
        ledger.assign_slot(yellow, 3)
        assert ledger.slot(yellow) == 3
        ledger.clear_slot(yellow)
        assert ledger.slot(yellow) == -1

    def test_assign_slot_when_sentinel_then_raises_error(self, ledger, yellow):
        with pytest.raises(ValueError, match="sentinel"):
            ledger.assign_slot(yellow, -1)

    def test_slot_when_custom_sentinel_then_used(self, yellow):
        ledger = UsageLedger(CombinerConfig(not_slotted=-99))
        assert ledger.slot(yellow) == -99
        ledger.assign_slot(yellow, -1)
        assert ledger.slot(yellow) == -1

    def test_original_slot_when_base_gem_then_stored(self, ledger, yellow):
        assert ledger.original_slot(yellow) == -1
        ledger.set_original_slot(yellow, 7)
        assert ledger.original_slot(yellow) == 7

    def test_original_slot_when_fusion_then_raises_error(self, ledger, yellow_2):
        with pytest.raises(ValueError, match="Only base gems"):
            ledger.set_original_slot(yellow_2, 1)

    # ─────────────────────────────────────────────────────────────────────────
    # Needed Gems
    # ─────────────────────────────────────────────────────────────────────────

    def test_is_needed_when_unused_then_false(self, ledger, yellow):
        assert ledger.is_needed(yellow) is False

    def test_is_needed_when_used_and_unslotted_then_true(self, ledger, yellow):
        ledger.record_fusion(Gem.combine(yellow, yellow))
        assert ledger.is_needed(yellow) is True

    def test_is_needed_when_used_and_slotted_then_false(self, ledger, yellow):
        ledger.record_fusion(Gem.combine(yellow, yellow))
        ledger.assign_slot(yellow, 0)
        assert ledger.is_needed(yellow) is False

    def test_needed_gems_when_mixed_then_lists_unslotted_used_gems(self, ledger):
        y, o = Gem.base("y"), Gem.base("o")
        y2 = Gem.combine(y, y)
        root = Gem.combine(y2, o)
        ledger.record_fusion(y2)
        ledger.record_fusion(root)
        ledger.assign_slot(o, 0)
        assert ledger.needed_gems() == [y, y2]
        assert list(ledger) == [y, y2, o]

    def test_reset_when_called_then_forgets_everything(self, ledger, yellow):
        ledger.record_fusion(Gem.combine(yellow, yellow))
        ledger.assign_slot(yellow, 2)
        ledger.reset()
        assert ledger.use_count(yellow) == 0
        assert ledger.slot(yellow) == -1
