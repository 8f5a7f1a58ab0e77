"""
Primitive parser combinators.

Every parser exposes ``parse(source, current) -> (output, next_position)``
and raises ``JsonError`` on failure. Positions are immutable values, so a
failed branch never consumes input: alternatives simply retry from the
position they were given.

Failures are never swallowed silently. Each combinator appends its own
reason label to the child's trail before re-raising, which builds the
breadcrumb trail reported to the caller.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from typing import Generic
from typing import TypeAlias
from typing import TypeVar

from ._errors import JsonError
from ._input import Input
from ._position import Position
from ._profiling import ProfileContext

OVERFLOW = "Overflow"

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")

Predicate: TypeAlias = Callable[[str], bool]


class Parser(ABC, Generic[T]):
    """A parsing capability over any ``Input``."""

    @abstractmethod
    def parse(self, source: Input, current: Position) -> tuple[T, Position]:
        """Parses at ``current``, returning the output and the next position."""


@dataclass(frozen=True, slots=True)
class Either:
    """Output of ``OneOf``: which branch matched and what it produced."""

    is_first: bool
    value: Any

    @classmethod
    def first(cls, value: Any) -> Either:
        return cls(True, value)

    @classmethod
    def second(cls, value: Any) -> Either:
        return cls(False, value)


class ExpectChar(Parser[str]):
    """Consumes one character accepted by ``predicate``."""

    def __init__(self, predicate: Predicate, reason: str = "ExpectChar"):
        self.predicate = predicate
        self.reason = reason

    def __repr__(self) -> str:
        return f"ExpectChar({self.reason})"

    def parse(self, source: Input, current: Position) -> tuple[str, Position]:
        try:
            char, pos = source.next(current)
        except JsonError as error:
            raise error.add_reason(current, self.reason) from None

        if not self.predicate(char):
            raise source.error_at(current, self.reason)
        return char, pos


class Null(Parser[None]):
    """Always succeeds without consuming input."""

    def parse(self, source: Input, current: Position) -> tuple[None, Position]:
        return None, current


class Concat(Parser[tuple[A, B]]):
    """Runs ``first`` then ``second``; outputs both as a pair."""

    def __init__(self, first: Parser[A], second: Parser[B]):
        self.first = first
        self.second = second

    def parse(
        self, source: Input, current: Position
    ) -> tuple[tuple[A, B], Position]:
        try:
            output1, pos = self.first.parse(source, current)
        except JsonError as error:
            raise error.add_reason(current, "Concat1") from None

        try:
            output2, pos = self.second.parse(source, pos)
        except JsonError as error:
            raise error.add_reason(current, "Concat2") from None

        return (output1, output2), pos


class OneOf(Parser[Either]):
    """
    Ordered choice between two parsers started at the same position.

    When both branches fail, the trail of the branch that got further into
    the input is kept; on a tie the second branch's trail wins.
    """

    def __init__(self, first: Parser[Any], second: Parser[Any]):
        self.first = first
        self.second = second

    def parse(self, source: Input, current: Position) -> tuple[Either, Position]:
        try:
            output, pos = self.first.parse(source, current)
        except JsonError as first_error:
            try:
                output, pos = self.second.parse(source, current)
            except JsonError as second_error:
                kept = (
                    first_error
                    if first_error.furthest > second_error.furthest
                    else second_error
                )
                raise kept.add_reason(current, "OneOf") from None
            return Either.second(output), pos
        return Either.first(output), pos


class OneOrMore(Parser[list[T]]):
    """
    Repeats ``parser`` until it fails, requiring at least one match.

    Stops early if a match consumes nothing, so repetition always terminates.
    """

    def __init__(self, parser: Parser[T]):
        self.parser = parser

    def parse(
        self, source: Input, current: Position
    ) -> tuple[list[T], Position]:
        try:
            output, pos = self.parser.parse(source, current)
        except JsonError as error:
            raise error.add_reason(current, "OneOrMore") from None

        outputs = [output]
        while True:
            try:
                output, next_pos = self.parser.parse(source, pos)
            except JsonError:
                return outputs, pos
            if next_pos == pos:
                return outputs, pos
            outputs.append(output)
            pos = next_pos


class Literal(Parser[str]):
    """
    Matches ``text`` exactly by fixed-width lookahead.

    With ``boundary`` set, the match also fails when the next character is
    accepted by it (``nullable`` is then not read as ``null``).
    """

    def __init__(
        self,
        text: str,
        reason: str = "Literal",
        boundary: Predicate | None = None,
    ):
        self.text = text
        self.reason = reason
        self.boundary = boundary

    def parse(self, source: Input, current: Position) -> tuple[str, Position]:
        try:
            chunk, pos = source.next_range(current, len(self.text))
        except JsonError as error:
            raise error.add_reason(current, self.reason) from None

        if chunk != self.text:
            raise source.error_at(current, self.reason)
        if self.boundary is not None and self._runs_on(
            source, pos, self.boundary
        ):
            raise source.error_at(pos, self.reason)
        return chunk, pos

    @staticmethod
    def _runs_on(source: Input, pos: Position, boundary: Predicate) -> bool:
        try:
            following, _ = source.next(pos)
        except JsonError:
            # end of input is a valid boundary
            return False
        return boundary(following)


class Map(Parser[U], Generic[T, U]):
    """Transforms the output of ``parser`` without adding a reason label."""

    def __init__(self, parser: Parser[T], build: Callable[[T], U]):
        self.parser = parser
        self.build = build

    def parse(self, source: Input, current: Position) -> tuple[U, Position]:
        output, pos = self.parser.parse(source, current)
        return self.build(output), pos


class Rule(Parser[U], Generic[T, U]):
    """
    Named grammar rule.

    Appends ``name`` to any failure of the wrapped parser and maps its output
    through ``build``. A ``build`` raising ``OverflowError`` fails the rule
    with an ``Overflow`` reason at the end of the matched text.
    """

    def __init__(
        self,
        name: str,
        parser: Parser[T],
        build: Callable[[T], U] | None = None,
    ):
        self.name = name
        self.parser = parser
        self.build = build

    def __repr__(self) -> str:
        return f"Rule({self.name})"

    def parse(self, source: Input, current: Position) -> tuple[U, Position]:
        with ProfileContext(self.name) as profile:
            try:
                output, pos = self.parser.parse(source, current)
            except JsonError as error:
                raise error.add_reason(current, self.name) from None

            if self.build is not None:
                try:
                    output = self.build(output)
                except OverflowError:
                    raise source.error_at(pos, OVERFLOW).add_reason(
                        current, self.name
                    ) from None

            profile.consumed(pos - current)
            return output, pos


class Lazy(Parser[T]):
    """Resolves its parser on every call, for rules that refer to themselves."""

    def __init__(self, resolve: Callable[[], Parser[T]]):
        self.resolve = resolve

    def parse(self, source: Input, current: Position) -> tuple[T, Position]:
        return self.resolve().parse(source, current)


def concat(*parsers: Parser[Any]) -> Parser[Any]:
    """Right-nested sequencing: ``concat(a, b, c)`` outputs ``(a, (b, c))``."""
    if len(parsers) < 2:
        raise ValueError("concat needs at least two parsers")
    if len(parsers) == 2:
        return Concat(parsers[0], parsers[1])
    return Concat(parsers[0], concat(*parsers[1:]))


def one_of(*parsers: Parser[Any]) -> Parser[Either]:
    """Right-nested ordered choice over any number of parsers."""
    if len(parsers) < 2:
        raise ValueError("one_of needs at least two parsers")
    if len(parsers) == 2:
        return OneOf(parsers[0], parsers[1])
    return OneOf(parsers[0], one_of(*parsers[1:]))


def zero_or_one(parser: Parser[Any]) -> Parser[Either]:
    """Optional match; the second branch holds ``None`` when absent."""
    return OneOf(parser, Null())


def zero_or_more(parser: Parser[Any]) -> Parser[Either]:
    """Optional repetition; the first branch holds the collected outputs."""
    return OneOf(OneOrMore(parser), Null())


def items(output: Either) -> list[Any]:
    """Unwraps a ``zero_or_more`` output into a (possibly empty) list."""
    return output.value if output.is_first else []


def innermost(output: Any) -> Any:
    """Unwraps the ``Either`` nesting produced by ``one_of``."""
    while isinstance(output, Either):
        output = output.value
    return output
