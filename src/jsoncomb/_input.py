"""Character sources the combinators read from."""

from __future__ import annotations

from typing import Protocol

from ._errors import JSONDecodeError
from ._position import Position

OUT_OF_BOUNDS = "Out of bounds"


class Input(Protocol):
    """
    Read-only character source addressed by ``Position``.

    Implementations must be side-effect free: reading the same position twice
    gives the same result.
    """

    def next(self, pos: Position) -> tuple[str, Position]:
        """Reads one character at ``pos``."""
        ...

    def next_range(self, pos: Position, count: int) -> tuple[str, Position]:
        """Reads exactly ``count`` characters starting at ``pos``."""
        ...

    def error_at(self, pos: Position, reason: str) -> JSONDecodeError:
        """Builds a fresh single-entry error at ``pos``."""
        ...


class StrInput:
    """Input backed by an in-memory ``str``."""

    __slots__ = ("text",)

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(
                f"text must be str, not {type(text).__name__}"
            )
        self.text = text

    def __len__(self) -> int:
        return len(self.text)

    def __repr__(self) -> str:
        return f"StrInput({self.text!r})"

    def next(self, pos: Position) -> tuple[str, Position]:
        if pos.index >= len(self.text):
            raise self.error_at(pos, OUT_OF_BOUNDS)
        char = self.text[pos.index]
        return char, pos.advance(char)

    def next_range(self, pos: Position, count: int) -> tuple[str, Position]:
        end = pos.index + count
        if count < 0 or end > len(self.text):
            raise self.error_at(pos, OUT_OF_BOUNDS)

        chunk = self.text[pos.index : end]
        for char in chunk:
            pos = pos.advance(char)
        return chunk, pos

    def error_at(self, pos: Position, reason: str) -> JSONDecodeError:
        return JSONDecodeError.at(pos, reason)

    def at_end(self, pos: Position) -> bool:
        """Reports whether ``pos`` has consumed the whole text."""
        return pos.index >= len(self.text)
