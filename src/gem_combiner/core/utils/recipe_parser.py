"""
Recipe Parsing

Reads canonical recipe strings back into gem trees.

Grammar:
    expr  := token | "(" expr "+" expr ")"
    token := [digits] code

A bare code is a base gem. "<n><code>" is a pure upgrade chain of grade
n - 1, built by fusing one base gem with itself until it reaches that
grade; "1y" is simply "y", and "2h" is "h" because h starts at grade 1.
Whitespace is ignored.

Fusion and base construction are injectable so callers that keep usage
bookkeeping (combiner.workbench.Workbench) can route fusions through it.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..errors import RecipeSyntaxError
from ..models.colors import is_gem_code
from ..models.gems import Gem

logger = logging.getLogger(__name__)

# Highest grade a pure token may request. Costs above 2**900 overflow
# float exponentiation when Growth is computed.
DEFAULT_MAX_GRADE = 256

BaseFactory = Callable[[str], Gem]
FuseFunction = Callable[[Gem, Gem], Gem]


class _RecipeReader:
    """Single-pass reader over one recipe string."""

    def __init__(self, text: str, base: BaseFactory, fuse: FuseFunction, max_grade: int):
        self.text = text
        self.pos = 0
        self.base = base
        self.fuse = fuse
        self.max_grade = max_grade

    def fail(self, message: str, position: int | None = None) -> RecipeSyntaxError:
        position = self.pos if position is None else position
        logger.debug("Rejected recipe %r: %s at %d", self.text, message, position)
        return RecipeSyntaxError(message, self.text, position)

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        self.skip_whitespace()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        if self.peek() != char:
            found = self.peek() or "end of recipe"
            raise self.fail(f"Expected {char!r}, found {found!r}")
        self.pos += 1

    def read_document(self) -> Gem:
        if not self.peek():
            raise self.fail("Empty recipe", 0)
        gem = self.read_expr()
        if self.peek():
            raise self.fail(f"Unexpected {self.peek()!r} after recipe")
        return gem

    def read_expr(self) -> Gem:
        # One entry per open "(": the left operand once it has been read.
        open_sums: list[list[Gem]] = []
        while True:
            if self.peek() == "(":
                self.pos += 1
                open_sums.append([])
                continue
            gem = self.read_token()
            while open_sums:
                left = open_sums[-1]
                if not left:
                    left.append(gem)
                    self.expect("+")
                    break
                self.expect(")")
                open_sums.pop()
                gem = self.fuse(left[0], gem)
            else:
                return gem

    def read_token(self) -> Gem:
        self.skip_whitespace()
        start = self.pos
        while self.pos < len(self.text) and "0" <= self.text[self.pos] <= "9":
            self.pos += 1
        digits = self.text[start:self.pos]

        code = self.text[self.pos] if self.pos < len(self.text) else ""
        if not is_gem_code(code):
            found = code or "end of recipe"
            raise self.fail(f"Expected a gem code, found {found!r}")
        self.pos += 1

        gem = self.base(code)
        if not digits:
            return gem

        grade = int(digits) - 1
        if grade > self.max_grade:
            raise self.fail(f"Grade {grade} exceeds the maximum of {self.max_grade}", start)
        if grade < gem.grade:
            raise self.fail(f"{digits}{code} is below the base grade of {code!r}", start)
        while gem.grade < grade:
            gem = self.fuse(gem, gem)
        return gem


def parse_recipe(
    text: str,
    *,
    base: BaseFactory = Gem.base,
    fuse: FuseFunction = Gem.combine,
    max_grade: int = DEFAULT_MAX_GRADE,
) -> Gem:
    """
    Build a gem tree from a recipe string.

    Every parenthesised sum creates a fresh fusion, so "(y+y)" fuses two
    distinct base gems and is not a pure upgrade; use "2y" for that.

    Args:
        text: Recipe in the grammar produced by Gem.recipe()
        base: Factory for base gems
        fuse: Fusion function
        max_grade: Largest grade a pure token may request

    Returns:
        Root Gem of the parsed tree

    Raises:
        RecipeSyntaxError: If text is not a valid recipe
    """
    return _RecipeReader(text, base, fuse, max_grade).read_document()
