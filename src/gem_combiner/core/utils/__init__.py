"""Recipe parsing and serialization helpers."""

from .recipe_parser import DEFAULT_MAX_GRADE, parse_recipe
from .serialization import serialize_gem, deserialize_gem

__all__ = ["DEFAULT_MAX_GRADE", "parse_recipe", "serialize_gem", "deserialize_gem"]
