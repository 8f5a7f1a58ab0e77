"""
Diagnostic trails raised by the combinator and grammar layers.

An error is an append-only sequence of ``(position, reason)`` pairs. The
first entry is the deepest failure; every rule the error unwinds through
appends its own reason, so the last entry is the outermost context.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Self
from typing import TypeAlias

from ._position import Position

Reason: TypeAlias = tuple[Position | None, str]


class JsonError(ValueError):
    """
    Base error carrying a diagnostic trail.

    Instances are immutable: ``add_reason`` returns a new error of the same
    type with one more entry.
    """

    def __init__(self, reasons: Iterable[Reason]) -> None:
        self.reasons: tuple[Reason, ...] = tuple(reasons)
        if not self.reasons:
            raise ValueError("an error needs at least one reason")

        self.msg = self.reasons[0][1]
        self.position = next(
            (pos for pos, _ in self.reasons if pos is not None), None
        )
        super().__init__(self._describe())

    @classmethod
    def plain(cls, reason: str) -> Self:
        """Builds a single-entry error with no position attached."""
        return cls([(None, reason)])

    @classmethod
    def at(cls, position: Position, reason: str) -> Self:
        """Builds a single-entry error at ``position``."""
        return cls([(position, reason)])

    def add_reason(self, position: Position | None, reason: str) -> Self:
        """Returns a copy of this error with ``reason`` appended."""
        return type(self)((*self.reasons, (position, reason)))

    @property
    def furthest(self) -> int:
        """Largest input index mentioned by the trail, or -1 if none is."""
        return max(
            (pos.index for pos, _ in self.reasons if pos is not None),
            default=-1,
        )

    def trail(self) -> str:
        """Renders the reason labels from deepest to outermost."""
        return " > ".join(reason for _, reason in self.reasons)

    def _describe(self) -> str:
        return self.msg


class JSONDecodeError(JsonError):
    """
    Raised when input does not match the grammar or a read runs past the end.

    ``msg``, ``pos``, ``lineno`` and ``colno`` describe the deepest failure;
    the full trail is kept in ``reasons``.
    """

    @property
    def pos(self) -> int:
        return self.position.index if self.position else 0

    @property
    def lineno(self) -> int:
        return self.position.line if self.position else 1

    @property
    def colno(self) -> int:
        return self.position.column if self.position else 1

    def _describe(self) -> str:
        return (
            f"{self.msg} at line {self.lineno}, column {self.colno}"
            f" ({self.trail()})"
        )


class JsonAccessError(JsonError):
    """Raised by value accessors when the value holds a different variant."""
