"""
Gem Combiner Core Package

The value model of gem fusion: colors, base gems, fusions, the blending
tiers applied at each fusion, the Power/Growth ranking metric and the
canonical recipe notation.

Everything here is pure. Creating a fusion never mutates its inputs;
use counts and slots are tracked by gem_combiner.combiner.
"""

from .errors import (
    GemError,
    InvalidArgumentError,
    NullArgumentError,
    RecipeSyntaxError,
    ValidationError,
)
from .models import Gem, GemColor, BASE_GEM_CODES
from .utils import parse_recipe, serialize_gem, deserialize_gem

__all__ = [
    "GemError",
    "InvalidArgumentError",
    "NullArgumentError",
    "RecipeSyntaxError",
    "ValidationError",
    "Gem",
    "GemColor",
    "BASE_GEM_CODES",
    "parse_recipe",
    "serialize_gem",
    "deserialize_gem",
]
