"""
Module: combiner.workbench

Purpose:
    Build gem trees while keeping usage bookkeeping. The Workbench is
    the "fuse" entry point used by slot assignment: every fusion it
    performs registers a use on both inputs in its ledger.

Key Classes:
    - Workbench: Base gem creation, fusion, recipe parsing and loading

Dependencies:
    - logging (std)
    - core.models.gems.Gem
    - core.utils: Recipe parsing and deserialization
    - combiner.ledger.UsageLedger

Used By:
    - External slot assignment / search components
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from gem_combiner.core.models.gems import Gem
from gem_combiner.core.utils.recipe_parser import parse_recipe
from gem_combiner.core.utils.serialization import deserialize_gem, serialize_gem

from .config import CombinerConfig
from .ledger import UsageLedger

logger = logging.getLogger(__name__)


class Workbench:
    """
    Creates and fuses gems, recording usage in a ledger.

    Separate workbenches never share counts, so independent candidate
    trees can be explored side by side.

    Example:
        >>> bench = Workbench()
        >>> y = bench.base("y")
        >>> g = bench.fuse(y, bench.fuse(y, y))
        >>> g.recipe(), bench.ledger.use_count(y)
        ('(2y+y)', 3)
    """

    def __init__(
        self,
        config: Optional[CombinerConfig] = None,
        ledger: Optional[UsageLedger] = None,
    ):
        self.config = config or CombinerConfig()
        self.ledger = ledger or UsageLedger(self.config)

    def base(self, code: str) -> Gem:
        """Build a base gem; raises InvalidArgumentError for unknown codes."""
        return Gem.base(code)

    def fuse(self, gem1: Gem, gem2: Gem) -> Gem:
        """
        Fuse two gems and register one use on each input.

        Raises:
            NullArgumentError: If either gem is None
        """
        fused = Gem.combine(gem1, gem2)
        if self.config.record_usage:
            self.ledger.record_fusion(fused)
        logger.debug(
            "Fused %s, grade %d, cost %d", fused.spec_word, fused.grade, fused.cost
        )
        return fused

    def parse(self, recipe: str) -> Gem:
        """Build a tree from a recipe string, fusing through this workbench."""
        return parse_recipe(
            recipe, base=self.base, fuse=self.fuse, max_grade=self.config.max_grade
        )

    def load(self, data: Dict[str, Any]) -> Gem:
        """Rebuild a serialized gem, fusing through this workbench."""
        return deserialize_gem(data, parser=self.parse)

    def dump(self, gem: Gem) -> Dict[str, Any]:
        return serialize_gem(gem)

    # Bookkeeping shortcuts for slot assignment

    def use_count(self, gem: Gem) -> int:
        return self.ledger.use_count(gem)

    def slot(self, gem: Gem) -> int:
        return self.ledger.slot(gem)

    def is_needed(self, gem: Gem) -> bool:
        return self.ledger.is_needed(gem)
