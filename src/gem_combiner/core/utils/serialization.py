"""
Serialization Utilities

Dictionary export and import for gem trees.

The recipe string is the only structural data in a payload; the
derived values (color, cost, grade, power, growth) travel alongside it
for consumers and are re-checked against the rebuilt tree on load.
Nothing here touches the filesystem.
"""

from __future__ import annotations

from typing import Any, Callable

from ..errors import ValidationError
from ..models.colors import color_name
from ..models.gems import Gem
from ..schemas.validator import GEM_SCHEMA_VERSION, validate_gem_payload
from .recipe_parser import parse_recipe


def serialize_gem(gem: Gem) -> dict[str, Any]:
    """
    Serialize a Gem to a dictionary.

    The output passes validate_gem_payload(strict=True).
    """
    return {"schema_version": GEM_SCHEMA_VERSION, **gem.to_dict()}


def deserialize_gem(
    data: dict[str, Any],
    *,
    validate: bool = True,
    parser: Callable[[str], Gem] = parse_recipe,
) -> Gem:
    """
    Rebuild a Gem from a serialized payload.

    Args:
        data: Dictionary from serialize_gem()
        validate: Whether to validate the payload against the schema first
        parser: Recipe parser; pass Workbench.parse to register usage

    Returns:
        Root Gem of the rebuilt tree

    Raises:
        ValidationError: If the payload is invalid, or the rebuilt tree
            disagrees with the payload's cost, grade or color
        RecipeSyntaxError: If the recipe cannot be parsed
    """
    if validate:
        validate_gem_payload(data, strict=True)

    gem = parser(data["recipe"])

    mismatches = [
        f"{field}: payload {expected!r} != rebuilt {actual!r}"
        for field, expected, actual in (
            ("cost", data.get("cost", gem.cost), gem.cost),
            ("grade", data.get("grade", gem.grade), gem.grade),
            ("color", data.get("color", color_name(gem.color)), color_name(gem.color)),
        )
        if expected != actual
    ]
    if mismatches:
        raise ValidationError(
            f"Payload does not match recipe {data['recipe']!r}",
            path="recipe",
            errors=mismatches,
        )
    return gem
