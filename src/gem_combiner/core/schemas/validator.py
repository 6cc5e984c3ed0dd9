"""
Schema Validation Utilities

Validates serialized gem payloads.

Basic checks run on every call and fail fast with a field path;
strict mode additionally validates against the packaged JSON Schema
(gem.schema.json) with jsonschema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ValidationError
from ..models.colors import color_from_name

# Schema version constants
GEM_SCHEMA_VERSION = 1

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def validate_gem_payload(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a serialized gem.

    Args:
        data: Gem dictionary to validate
        strict: If True, also validate against gem.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Gem payload must be a dict, got {type(data).__name__}")

    required = ["schema_version", "recipe", "color", "cost", "grade"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    version = data.get("schema_version")
    if version != GEM_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported gem schema version: {version} (expected {GEM_SCHEMA_VERSION})",
            path="schema_version"
        )

    recipe = data.get("recipe")
    if not isinstance(recipe, str) or not recipe.strip():
        raise ValidationError(
            f"Invalid recipe: {recipe!r} (must be a non-empty string)",
            path="recipe"
        )

    color = data.get("color")
    try:
        color_from_name(color)
    except (KeyError, AttributeError):
        raise ValidationError(f"Invalid color: {color!r}", path="color") from None

    cost = data.get("cost")
    if not isinstance(cost, int) or isinstance(cost, bool) or cost < 1:
        raise ValidationError(
            f"Invalid cost: {cost} (must be a positive integer)",
            path="cost"
        )

    grade = data.get("grade")
    if not isinstance(grade, int) or isinstance(grade, bool) or grade < 0:
        raise ValidationError(
            f"Invalid grade: {grade} (must be non-negative integer)",
            path="grade"
        )

    if strict:
        schema = _load_schema("gem")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e
