"""
JSON grammar rules composed from the primitive combinators.

Rules follow the json.org railroad diagrams: Element is a Value with
surrounding whitespace, Member is a key/Element pair, and Value tries
Object, Array, String, Number, then the fixed literals, in that order.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import Any

from ._combinators import Either
from ._combinators import Lazy
from ._combinators import Literal
from ._combinators import Map
from ._combinators import OneOrMore
from ._combinators import Parser
from ._combinators import Rule
from ._combinators import concat
from ._combinators import innermost
from ._combinators import items
from ._combinators import one_of
from ._combinators import zero_or_more
from ._combinators import zero_or_one
from ._config import ParseConfig
from ._errors import JsonError
from ._input import Input
from ._literals import CLOSE_CURLY_BRACKET_CHAR
from ._literals import CLOSE_SQUARE_BRACKET_CHAR
from ._literals import COLON_CHAR
from ._literals import COMMA_CHAR
from ._literals import DIGIT_CHAR
from ._literals import DOT_CHAR
from ._literals import DOUBLE_QUOTE_CHAR
from ._literals import E_CHAR
from ._literals import HEX_CHAR
from ._literals import NEGATIVE_SIGN_CHAR
from ._literals import ONE_TO_NINE_CHAR
from ._literals import OPEN_CURLY_BRACKET_CHAR
from ._literals import OPEN_SQUARE_BRACKET_CHAR
from ._literals import SIGN_CHAR
from ._literals import WHITESPACE_CHAR
from ._literals import is_identifier_char
from ._position import Position
from ._value import JsonValue
from ._value import NumberValue

U64_MAX = 2**64 - 1
I64_MAX = 2**63 - 1
I64_MIN_MAGNITUDE = 2**63
I32_MAX = 2**31 - 1
I32_MIN_MAGNITUDE = 2**31

SIMPLE_ESCAPES = frozenset('"\\/bfnrt')
CONTROL_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}

HIGH_SURROGATES = range(0xD800, 0xDC00)
LOW_SURROGATES = range(0xDC00, 0xE000)


def _accumulate(digits: Iterable[str]) -> int:
    value = 0
    for digit in digits:
        value = value * 10 + int(digit)
    return value


def _bounded(value: int, limit: int) -> int:
    if value > limit:
        raise OverflowError(f"{value} exceeds {limit}")
    return value


def _positive_integer(output: Either) -> int:
    if output.is_first:
        head, tail = output.value
        digits = [head, *tail]
    else:
        digits = [output.value]
    return _bounded(_accumulate(digits), U64_MAX)


def _negative_integer(output: tuple[str, int]) -> int:
    _, magnitude = output
    return -_bounded(magnitude, I64_MIN_MAGNITUDE)


def _integer(output: Either) -> tuple[int, bool]:
    if output.is_first:
        return _bounded(output.value, I64_MAX), False
    return output.value, True


def _fraction(output: Either) -> tuple[int, int]:
    if not output.is_first:
        return 0, 0
    _, digits = output.value
    return _bounded(_accumulate(digits), U64_MAX), len(digits)


def _exponent(output: Either) -> int:
    if not output.is_first:
        return 0
    _, (sign, digits) = output.value
    magnitude = _accumulate(digits)
    if sign.is_first and sign.value == "-":
        return -_bounded(magnitude, I32_MIN_MAGNITUDE)
    return _bounded(magnitude, I32_MAX)


def _number(output: Any) -> NumberValue:
    (integer, negative), ((fraction, fraction_length), exponent) = output
    return NumberValue(integer, fraction, fraction_length, exponent, negative)


def _string(output: Any) -> str:
    _, (characters, _) = output
    return "".join(items(characters))


def _element(output: Any) -> JsonValue:
    _, (value, _) = output
    return value


def _member(output: Any) -> tuple[str, JsonValue]:
    _, (key, (_, (_, value))) = output
    return key, value


def _separated(output: Any) -> list[Any]:
    head, rest = output
    return [head, *(item for _, item in items(rest))]


def _contents(output: Any) -> list[Any]:
    _, body = output
    return body.value[0] if body.is_first else []


class Escape(Parser[str]):
    """
    Decodes the character following a backslash.

    ``\\uXXXX`` reads four hex digits as one code unit. A high surrogate must
    be followed by an escaped low surrogate and the pair decodes to a single
    character; any other surrogate is rejected.
    """

    def __init__(self, hex_digit: Parser[int], control_escapes: bool = False):
        self.hex_digit = hex_digit
        self.control_escapes = control_escapes
        self.surrogate_prefix = Literal("\\u", "LowSurrogate")

    def parse(self, source: Input, current: Position) -> tuple[str, Position]:
        try:
            char, pos = source.next(current)
        except JsonError as error:
            raise error.add_reason(current, "Escape") from None

        if char in SIMPLE_ESCAPES:
            if self.control_escapes:
                return CONTROL_ESCAPES.get(char, char), pos
            return char, pos
        if char != "u":
            raise source.error_at(current, "Escape")

        code, pos = self._code_unit(source, pos, current)
        if code in HIGH_SURROGATES:
            low, pos = self._low_surrogate(source, pos, current)
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
        elif code in LOW_SURROGATES:
            raise source.error_at(current, "Escape")
        return chr(code), pos

    def _code_unit(
        self, source: Input, pos: Position, current: Position
    ) -> tuple[int, Position]:
        code = 0
        for _ in range(4):
            try:
                nibble, pos = self.hex_digit.parse(source, pos)
            except JsonError as error:
                raise error.add_reason(current, "Escape") from None
            code = code << 4 | nibble
        return code, pos

    def _low_surrogate(
        self, source: Input, pos: Position, current: Position
    ) -> tuple[int, Position]:
        try:
            _, pos = self.surrogate_prefix.parse(source, pos)
        except JsonError as error:
            raise error.add_reason(current, "Escape") from None

        low, pos = self._code_unit(source, pos, current)
        if low not in LOW_SURROGATES:
            raise source.error_at(current, "Escape")
        return low, pos


class Character(Parser[str]):
    """One string character: an escape, or any raw character except ``"``."""

    def __init__(self, escape: Parser[str]):
        self.escape = escape

    def parse(self, source: Input, current: Position) -> tuple[str, Position]:
        try:
            char, pos = source.next(current)
        except JsonError as error:
            raise error.add_reason(current, "Character") from None

        if char == "\\":
            try:
                return self.escape.parse(source, pos)
            except JsonError as error:
                raise error.add_reason(current, "Character") from None
        if char == '"':
            raise source.error_at(current, "Character")
        return char, pos


class JsonGrammar:
    """
    The JSON rules, wired together for one set of options.

    Each attribute is a named rule; ``json`` is the document entry point.
    Instances hold no per-parse state and can be shared freely.
    """

    def __init__(
        self, control_escapes: bool = False, literal_boundary: bool = False
    ) -> None:
        self.control_escapes = control_escapes
        self.literal_boundary = literal_boundary

        self.whitespace = zero_or_more(WHITESPACE_CHAR)
        digits = OneOrMore(DIGIT_CHAR)

        self.positive_integer = Rule(
            "PositiveInteger",
            one_of(concat(ONE_TO_NINE_CHAR, digits), DIGIT_CHAR),
            _positive_integer,
        )
        self.negative_integer = Rule(
            "NegativeInteger",
            concat(NEGATIVE_SIGN_CHAR, self.positive_integer),
            _negative_integer,
        )
        self.integer = Rule(
            "Integer",
            one_of(self.positive_integer, self.negative_integer),
            _integer,
        )
        self.fraction = Rule(
            "Fraction", zero_or_one(concat(DOT_CHAR, digits)), _fraction
        )
        self.exponent = Rule(
            "Exponent",
            zero_or_one(concat(E_CHAR, zero_or_one(SIGN_CHAR), digits)),
            _exponent,
        )
        self.number = Rule(
            "Number", concat(self.integer, self.fraction, self.exponent), _number
        )

        self.hex = Rule("Hex", HEX_CHAR, lambda char: int(char, 16))
        self.escape = Escape(self.hex, control_escapes)
        self.character = Character(self.escape)
        self.string = Rule(
            "String",
            concat(
                DOUBLE_QUOTE_CHAR,
                zero_or_more(self.character),
                DOUBLE_QUOTE_CHAR,
            ),
            _string,
        )

        self.element = Rule(
            "Element",
            concat(self.whitespace, Lazy(lambda: self.value), self.whitespace),
            _element,
        )
        self.member = Rule(
            "Member",
            concat(
                self.whitespace,
                self.string,
                self.whitespace,
                COLON_CHAR,
                self.element,
            ),
            _member,
        )
        self.members = Rule(
            "Members",
            concat(self.member, zero_or_more(concat(COMMA_CHAR, self.member))),
            _separated,
        )
        self.object = Rule(
            "Object",
            concat(
                OPEN_CURLY_BRACKET_CHAR,
                one_of(
                    concat(self.members, CLOSE_CURLY_BRACKET_CHAR),
                    concat(self.whitespace, CLOSE_CURLY_BRACKET_CHAR),
                ),
            ),
            lambda output: JsonValue.object(_contents(output)),
        )
        self.elements = Rule(
            "Elements",
            concat(self.element, zero_or_more(concat(COMMA_CHAR, self.element))),
            _separated,
        )
        self.array = Rule(
            "Array",
            concat(
                OPEN_SQUARE_BRACKET_CHAR,
                one_of(
                    concat(self.elements, CLOSE_SQUARE_BRACKET_CHAR),
                    concat(self.whitespace, CLOSE_SQUARE_BRACKET_CHAR),
                ),
            ),
            lambda output: JsonValue.array(_contents(output)),
        )

        boundary = is_identifier_char if literal_boundary else None
        self.value = Rule(
            "Value",
            one_of(
                self.object,
                self.array,
                Map(self.string, JsonValue.string),
                Map(self.number, JsonValue.number),
                Map(
                    Literal("null", "NullLiteral", boundary),
                    lambda _: JsonValue.null(),
                ),
                Map(
                    Literal("true", "TrueLiteral", boundary),
                    lambda _: JsonValue.boolean(True),
                ),
                Map(
                    Literal("false", "FalseLiteral", boundary),
                    lambda _: JsonValue.boolean(False),
                ),
            ),
            innermost,
        )
        self.json = self.element


@functools.cache
def build_grammar(
    control_escapes: bool = False, literal_boundary: bool = False
) -> JsonGrammar:
    """Returns the shared grammar for one combination of options."""
    return JsonGrammar(control_escapes, literal_boundary)


def grammar_for(config: ParseConfig) -> JsonGrammar:
    return build_grammar(config.control_escapes, config.literal_boundary)
