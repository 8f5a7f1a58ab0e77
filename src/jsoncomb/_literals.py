"""Named single-character matchers built from declarative range lists."""

from __future__ import annotations

from typing import TypeAlias

from ._combinators import ExpectChar

CharRange: TypeAlias = str | tuple[str, str]


def char_class(name: str, *members: CharRange) -> ExpectChar:
    """
    Builds a matcher accepting any character listed in ``members``.

    Each member is either a single character or an inclusive ``(low, high)``
    code-point range. The matcher fails with ``name`` as its reason.
    """
    if not members:
        raise ValueError(f"{name} needs at least one member")

    singles: set[str] = set()
    ranges: list[tuple[str, str]] = []
    for member in members:
        if isinstance(member, tuple):
            low, high = member
            if len(low) != 1 or len(high) != 1 or low > high:
                raise ValueError(f"{name}: invalid range {member!r}")
            ranges.append((low, high))
        elif isinstance(member, str) and len(member) == 1:
            singles.add(member)
        else:
            raise ValueError(f"{name}: invalid member {member!r}")

    frozen_singles = frozenset(singles)
    frozen_ranges = tuple(ranges)

    def predicate(char: str) -> bool:
        if char in frozen_singles:
            return True
        return any(low <= char <= high for low, high in frozen_ranges)

    return ExpectChar(predicate, name)


WHITESPACE_CHAR = char_class("WhitespaceChar", " ", "\r", "\n", "\t")
SIGN_CHAR = char_class("SignChar", "+", "-")
NEGATIVE_SIGN_CHAR = char_class("NegativeSignChar", "-")
E_CHAR = char_class("EChar", "E", "e")
ONE_TO_NINE_CHAR = char_class("OneToNineChar", ("1", "9"))
DIGIT_CHAR = char_class("DigitChar", ("0", "9"))
DOT_CHAR = char_class("DotChar", ".")
HEX_CHAR = char_class("HexChar", ("0", "9"), ("a", "f"), ("A", "F"))
DOUBLE_QUOTE_CHAR = char_class("DoubleQuoteChar", '"')
OPEN_CURLY_BRACKET_CHAR = char_class("OpenCurlyBracketChar", "{")
CLOSE_CURLY_BRACKET_CHAR = char_class("CloseCurlyBracketChar", "}")
COMMA_CHAR = char_class("CommaChar", ",")
COLON_CHAR = char_class("ColonChar", ":")
OPEN_SQUARE_BRACKET_CHAR = char_class("OpenSquareBracketChar", "[")
CLOSE_SQUARE_BRACKET_CHAR = char_class("CloseSquareBracketChar", "]")


def is_identifier_char(char: str) -> bool:
    """Characters that may not directly follow a literal in boundary mode."""
    return char.isalnum() or char == "_"
