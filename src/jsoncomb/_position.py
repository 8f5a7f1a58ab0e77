"""Source positions tracked while parsing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """
    Location in the input as characters consumed, line and column.

    Lines and columns start at 1; the index starts at 0.
    """

    index: int = 0
    line: int = 1
    column: int = 1

    def advance(self, char: str) -> Position:
        """Returns the position just past ``char``."""
        if char == "\n":
            return Position(self.index + 1, self.line + 1, 1)
        return Position(self.index + 1, self.line, self.column + 1)

    def __sub__(self, other: Position) -> int:
        if not isinstance(other, Position):
            return NotImplemented
        return self.index - other.index

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"
