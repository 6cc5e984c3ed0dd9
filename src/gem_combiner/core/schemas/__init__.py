"""Payload validation for serialized gems."""

from .validator import GEM_SCHEMA_VERSION, validate_gem_payload

__all__ = ["GEM_SCHEMA_VERSION", "validate_gem_payload"]
