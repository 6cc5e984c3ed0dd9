"""
Error types raised by gem construction, recipe parsing and payload
validation. All are construction-time failures with no recovery path.
"""

from __future__ import annotations


class GemError(Exception):
    """Base class for all gem_combiner errors."""


class InvalidArgumentError(GemError, ValueError):
    """Raised when a base gem code is outside the gem alphabet."""


class NullArgumentError(GemError, TypeError):
    """Raised when a fusion operand is missing."""

    def __init__(self, name: str):
        super().__init__(f"Fusion operand {name!r} cannot be None")
        self.name = name


class RecipeSyntaxError(GemError, ValueError):
    """Raised when recipe text does not follow the recipe grammar."""

    def __init__(self, message: str, text: str = "", position: int = -1):
        if position >= 0:
            message = f"{message} at position {position} in {text!r}"
        super().__init__(message)
        self.text = text
        self.position = position


class ValidationError(GemError):
    """Raised when a serialized gem payload fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []
