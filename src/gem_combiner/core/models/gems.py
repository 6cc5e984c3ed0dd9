"""
Module: gems

Purpose:
    Provides the Gem dataclass - an immutable node of a fusion tree.
    A Gem is either a base gem built from a one-letter code, or the
    fusion of two existing gems. Every derived attribute (color, cost,
    grade, blended stats, power, growth) is computed once by the
    factory methods and never recomputed.

Key Functions:
    - Gem.base(code): Build a base gem from its letter
    - Gem.combine(gem1, gem2): Fuse two gems into a new one
    - Gem.recipe(): Canonical recipe string of the tree
    - Gem.iter_unique(): Iterate distinct nodes of the tree
    - Gem.to_dict() / Gem.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - math (std)
    - .colors
    - .blending

Used By:
    - combiner.workbench.Workbench
    - core.utils.recipe_parser
    - core.utils.serialization

Sharing Model:
    Gems compare and hash by identity. The same gem may be fused with
    itself or used as a component of several unrelated fusions, so usage
    bookkeeping (use counts, slots) lives outside the node, in
    combiner.ledger.UsageLedger.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..errors import NullArgumentError
from .blending import blend, tier_for
from .colors import GemColor, base_damage, color_for_code, color_name, has_flag

# Cost elasticity of Growth for spec gems; leech (orange) specs scale differently.
ORANGE_SPEC_EXPONENT = 0.627216
SPEC_EXPONENT = 1.414061


def calculate_power(
    color: GemColor,
    damage: float,
    blood: float,
    critical_multiplier: float,
    leech: float,
) -> float:
    """
    Combat output of a gem with the given color and stats.

    A pure red gem has no usable power. Blood counts once when black is
    present, and a second time when yellow is present too; the yellow
    (damage * crit) term takes priority over the orange (leech) term.
    """
    if color == GemColor.RED:
        return 0.0

    power = 1.0
    if has_flag(color, GemColor.BLACK):
        power *= blood

    if has_flag(color, GemColor.YELLOW):
        power *= damage * critical_multiplier
        if has_flag(color, GemColor.BLACK):
            # blood is squared here
            power *= blood
    elif has_flag(color, GemColor.ORANGE):
        power *= leech

    return power


def calculate_growth(power: float, cost: int, color: GemColor, is_spec: bool) -> float:
    """
    Cost-normalized efficiency used to rank fusions.

    Spec gems use a power law on cost; other gems use the logarithm of
    power with cost as the base. Zero power gives -inf.
    """
    if is_spec:
        exponent = ORANGE_SPEC_EXPONENT if has_flag(color, GemColor.ORANGE) else SPEC_EXPONENT
        return power / math.pow(cost, exponent)
    if power <= 0:
        return -math.inf
    return math.log(power, cost)


@dataclass(frozen=True, slots=True, eq=False)
class Gem:
    """
    Fusion tree node (immutable).

    Attributes:
        color: Union of all base colors in the tree
        cost: Number of base gem units consumed (h counts as 2)
        grade: Tier of the gem; base gems start at cost - 1
        damage: Blended damage, never below either component's
        blood: Blended blood (black) stat
        critical_multiplier: Blended crit (yellow) stat
        leech: Blended leech (orange) stat
        power: Combat output, see calculate_power()
        growth: Ranking value, see calculate_growth(); 0.0 for base gems
        is_spec: True once a fusion mixed colors anywhere below it
        is_pure_upgrade: True for a base gem or a self-fusion of a pure gem
        leaf_count: Number of base gem occurrences in the tree
        components: () for base gems, (component1, component2) otherwise
        letter: Gem code for base gems, None for fusions
        pure_recipe: Compact "<n><code>" recipe when is_pure_upgrade

    Invariants:
        - components is empty exactly when letter is set
        - component1.cost >= component2.cost
        - cost of a fusion is the sum of its components' costs

    Example:
        >>> y = Gem.base("y")
        >>> g = Gem.combine(y, y)
        >>> g.grade, g.recipe()
        (1, '2y')
        >>> Gem.combine(y, g).recipe()
        '(2y+y)'
    """

    color: GemColor
    cost: int
    grade: int
    damage: float
    blood: float
    critical_multiplier: float
    leech: float
    power: float
    growth: float
    is_spec: bool = False
    is_pure_upgrade: bool = True
    leaf_count: int = 1
    components: Tuple[Gem, ...] = ()
    letter: Optional[str] = None
    pure_recipe: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate node shape on construction."""
        if len(self.components) not in (0, 2):
            raise ValueError(f"A gem has 0 or 2 components, got {len(self.components)}")
        if self.is_leaf != (self.letter is not None):
            raise ValueError("Base gems must have a letter and fusions must not")
        if self.cost < 1:
            raise ValueError(f"Gem cost must be positive: {self.cost}")
        if self.grade < 0:
            raise ValueError(f"Gem grade cannot be negative: {self.grade}")
        if not self.is_leaf:
            first, second = self.components
            if first.cost < second.cost:
                raise ValueError("component1 must not cost less than component2")
            if self.cost != first.cost + second.cost:
                raise ValueError(
                    f"Fusion cost {self.cost} != {first.cost} + {second.cost}"
                )

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def base(cls, code: str) -> Gem:
        """
        Build a base gem from its letter.

        Args:
            code: One of "b", "g", "h", "k", "m", "o", "r", "y"

        Returns:
            Base Gem with table-driven stats

        Raises:
            InvalidArgumentError: If code is not a gem letter
        """
        color = color_for_code(code)
        cost = 2 if code == "h" else 1
        blood = 1.0 if has_flag(color, GemColor.BLACK) else 0.0
        critical_multiplier = 1.0 if has_flag(color, GemColor.YELLOW) else 0.0
        leech = 1.0 if has_flag(color, GemColor.ORANGE) else 0.0
        damage = base_damage(color)

        return cls(
            color=color,
            cost=cost,
            grade=cost - 1,
            damage=damage,
            blood=blood,
            critical_multiplier=critical_multiplier,
            leech=leech,
            power=calculate_power(color, damage, blood, critical_multiplier, leech),
            growth=0.0,
            letter=code,
            pure_recipe=code,
        )

    @classmethod
    def combine(cls, gem1: Gem, gem2: Gem) -> Gem:
        """
        Fuse two gems.

        The inputs are put in canonical order first: the costlier gem
        becomes component1, and on a cost tie the lower color value does.
        When cost and color both tie the arguments keep their order. Both
        arguments may be the same instance.

        This does not touch any usage bookkeeping; see
        combiner.workbench.Workbench.fuse for that.

        Raises:
            NullArgumentError: If either gem is None
        """
        if gem1 is None:
            raise NullArgumentError("gem1")
        if gem2 is None:
            raise NullArgumentError("gem2")

        first, second = _canonical_order(gem1, gem2)

        color = GemColor.GENERIC
        is_spec = False
        for component in (first, second):
            color |= component.color
        for component in (first, second):
            is_spec = is_spec or component.is_spec or component.color != color

        tier = tier_for(first.grade, second.grade)
        grade = tier.fused_grade(first.grade, second.grade)
        damage = blend(first.damage, second.damage, tier.damage)
        blood = blend(first.blood, second.blood, tier.blood)
        critical_multiplier = blend(
            first.critical_multiplier, second.critical_multiplier, tier.critical_multiplier
        )
        leech = blend(first.leech, second.leech, tier.leech)

        damage = max(damage, max(first.damage, second.damage))
        cost = first.cost + second.cost
        power = calculate_power(color, damage, blood, critical_multiplier, leech)

        is_pure_upgrade = first is second and first.is_pure_upgrade
        pure_recipe = None
        if is_pure_upgrade:
            pure_recipe = f"{grade + 1}{first.pure_recipe[-1]}"

        return cls(
            color=color,
            cost=cost,
            grade=grade,
            damage=damage,
            blood=blood,
            critical_multiplier=critical_multiplier,
            leech=leech,
            power=power,
            growth=calculate_growth(power, cost, color, is_spec),
            is_spec=is_spec,
            is_pure_upgrade=is_pure_upgrade,
            leaf_count=first.leaf_count + second.leaf_count,
            components=(first, second),
            pure_recipe=pure_recipe,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_leaf(self) -> bool:
        """Check if this is a base gem."""
        return len(self.components) == 0

    @property
    def is_upgrade(self) -> bool:
        """True for a fusion of one gem with itself."""
        return not self.is_leaf and self.components[0] is self.components[1]

    @property
    def component1(self) -> Optional[Gem]:
        return self.components[0] if self.components else None

    @property
    def component2(self) -> Optional[Gem]:
        return self.components[1] if self.components else None

    @property
    def pure_letter(self) -> Optional[str]:
        """Base gem letter a pure upgrade chain is rooted at."""
        return self.pure_recipe[-1] if self.pure_recipe else None

    @property
    def spec_word(self) -> str:
        return "Spec" if self.is_spec else "Combine"

    # ─────────────────────────────────────────────────────────────────────────
    # Recipe & Iteration
    # ─────────────────────────────────────────────────────────────────────────

    def recipe(self) -> str:
        """
        Canonical recipe string.

        Pure upgrade chains collapse to "<grade+1><code>" (a base gem is
        just its code); anything else is "(" + recipe1 + "+" + recipe2 + ")".
        """
        parts: list[str] = []
        stack: list[Gem | str] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif item.pure_recipe is not None:
                parts.append(item.pure_recipe)
            else:
                first, second = item.components
                stack.extend((")", second, "+", first, "("))
        return "".join(parts)

    def iter_unique(self) -> Iterator[Gem]:
        """
        Iterate over distinct nodes of this tree (post-order).

        Shared components, including both sides of a self-fusion, are
        yielded once.

        Yields:
            Each Gem instance in the tree exactly once, children first
        """
        seen: set[int] = set()
        stack: list[tuple[Gem, bool]] = [(self, False)]
        while stack:
            gem, expanded = stack.pop()
            if expanded:
                yield gem
                continue
            if id(gem) in seen:
                continue
            seen.add(id(gem))
            stack.append((gem, True))
            for component in reversed(gem.components):
                if id(component) not in seen:
                    stack.append((component, False))

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to a dictionary.

        The tree itself is carried by the recipe string; the derived
        values are included for consumers and for consistency checks on
        load. Non-finite growth is exported as None.
        """
        return {
            "recipe": self.recipe(),
            "color": color_name(self.color),
            "cost": self.cost,
            "grade": self.grade,
            "is_spec": self.is_spec,
            "is_pure_upgrade": self.is_pure_upgrade,
            "power": self.power,
            "growth": self.growth if math.isfinite(self.growth) else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Gem:
        """
        Deserialize from a dictionary produced by to_dict().

        Raises:
            ValidationError: If the payload is invalid or inconsistent
        """
        from ..utils.serialization import deserialize_gem

        return deserialize_gem(data)

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"Gem({self.recipe()!r}, {color_name(self.color)}, "
            f"grade={self.grade}, cost={self.cost})"
        )


def _canonical_order(gem1: Gem, gem2: Gem) -> Tuple[Gem, Gem]:
    """Put the costlier gem first; on a cost tie, the lower color value."""
    if gem2.cost > gem1.cost or (gem2.cost == gem1.cost and gem2.color < gem1.color):
        return gem2, gem1
    return gem1, gem2
