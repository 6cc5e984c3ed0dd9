"""
Module: colors

Purpose:
    Provides the GemColor flag domain - four primitive colors plus the
    composite colors that are fixed unions of them - together with the
    static lookup tables used to build base gems.

Key Functions:
    - color_for_code(code): Resolve a one-letter gem code to its color
    - base_damage(color): Damage coefficient of a base gem (Yellow = 1)
    - has_flag(color, flag): Flag subset check
    - color_name(color) / color_from_name(name): Stable names for any union

Dependencies:
    - enum (std)
    - types (std)
    - ..errors.InvalidArgumentError

Used By:
    - core.models.gems.Gem
    - core.utils.recipe_parser
    - core.schemas.validator
"""

from __future__ import annotations

from enum import IntFlag
from types import MappingProxyType
from typing import Mapping

from ..errors import InvalidArgumentError


class GemColor(IntFlag):
    """
    Color flags of a gem.

    Generic is the zero value. Composite colors are unions of the
    primitives, so membership is a flag subset check and ordering is
    the plain numeric comparison of the flag values.
    """
    GENERIC = 0
    ORANGE = 1
    YELLOW = 1 << 1
    BLACK = 1 << 2
    RED = 1 << 3
    HIT_FARM = BLACK | RED
    MANA = ORANGE | BLACK | RED
    KILL = YELLOW | BLACK | RED

    def __str__(self) -> str:
        return color_name(self)


# Enumeration order callers use to list every base gem type.
BASE_GEM_CODES = "oykmgbrh"

# Damage of a base gem as a fraction of Yellow's damage.
_BASE_DAMAGE: Mapping[GemColor, float] = MappingProxyType({
    GemColor.BLACK: 1.18181818181818,
    GemColor.GENERIC: 0.0,
    GemColor.HIT_FARM: 0.0,
    GemColor.KILL: 1.0,
    GemColor.MANA: 0.0,
    GemColor.ORANGE: 0.7272727272727272,
    GemColor.RED: 0.909090909090909,
    GemColor.YELLOW: 1.0,
})

_CODE_COLORS: Mapping[str, GemColor] = MappingProxyType({
    "b": GemColor.BLACK,
    "g": GemColor.GENERIC,
    "h": GemColor.HIT_FARM,
    "k": GemColor.KILL,
    "m": GemColor.MANA,
    "o": GemColor.ORANGE,
    "r": GemColor.RED,
    "y": GemColor.YELLOW,
})


def has_flag(color: GemColor, flag: GemColor) -> bool:
    """Return True if every bit of ``flag`` is set in ``color``."""
    return (color & flag) == flag


def color_for_code(code: str) -> GemColor:
    """
    Resolve a base gem code to its color.

    Args:
        code: Single lowercase letter from BASE_GEM_CODES

    Returns:
        The GemColor for that code

    Raises:
        InvalidArgumentError: If the code is not a known gem letter
    """
    try:
        return _CODE_COLORS[code]
    except (KeyError, TypeError):
        raise InvalidArgumentError(f"Invalid letter value for gem: {code!r}") from None


def base_damage(color: GemColor) -> float:
    """Damage coefficient of a base gem of the given color."""
    return _BASE_DAMAGE[color]


def is_gem_code(code: str) -> bool:
    """Check whether ``code`` is one of the eight base gem letters."""
    return code in _CODE_COLORS


_NAMED_COLORS: Mapping[int, str] = MappingProxyType({
    int(member): name for name, member in GemColor.__members__.items()
})
_PRIMITIVES = (GemColor.ORANGE, GemColor.YELLOW, GemColor.BLACK, GemColor.RED)


def color_name(color: GemColor) -> str:
    """
    Stable display name for a color.

    Named colors (including the composite aliases) use their member
    name. Any other union is spelled as its primitives joined by "|",
    e.g. "ORANGE|YELLOW".
    """
    value = int(color)
    if value in _NAMED_COLORS:
        return _NAMED_COLORS[value]
    return "|".join(_NAMED_COLORS[int(p)] for p in _PRIMITIVES if value & p)


def color_from_name(name: str) -> GemColor:
    """
    Inverse of color_name().

    Raises:
        KeyError: If any part of the name is not a GemColor member
    """
    color = GemColor.GENERIC
    for part in name.split("|"):
        color |= GemColor.__members__[part]
    return color
