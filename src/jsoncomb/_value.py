"""
Parsed value tree and typed accessors.

Values are immutable and produced fresh by each parse. Numbers keep their
decimal components exactly; floating-point rounding only happens when a
caller asks for it through ``NumberValue.to_float``.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any
from typing import TypeAlias

from ._errors import JsonAccessError

ObjectPairsHook: TypeAlias = Callable[[list[tuple[str, Any]]], Any] | None
ObjectHook: TypeAlias = Callable[[dict[str, Any]], Any] | None


@dataclass(frozen=True, slots=True)
class NumberValue:
    """
    A JSON number split into exact components.

    ``fraction`` holds the fractional digits as an integer magnitude and
    ``fraction_length`` their count, so ``.007`` is ``(7, 3)``. ``negative``
    records the literal's sign, which the integer part alone loses for
    ``-0.5``. The value is
    ``sign * (|integer| + fraction / 10**fraction_length) * 10**exponent``.
    """

    integer: int
    fraction: int = 0
    fraction_length: int = 0
    exponent: int = 0
    negative: bool = False

    def __post_init__(self) -> None:
        if self.integer < 0 and not self.negative:
            object.__setattr__(self, "negative", True)
        if self.fraction < 0 or self.fraction_length < 0:
            raise ValueError("fraction components must be non-negative")
        if self.fraction >= 10**self.fraction_length and self.fraction:
            raise ValueError("fraction has more digits than fraction_length")

    @property
    def is_integer(self) -> bool:
        """True when the literal had neither fraction nor exponent."""
        return self.fraction_length == 0 and self.exponent == 0

    def to_decimal(self) -> Decimal:
        """Returns the exact decimal value."""
        # each component fits 64 bits; the zero padding can be arbitrarily long
        digits = str(abs(self.integer))
        if self.fraction_length:
            digits += str(self.fraction).zfill(self.fraction_length)
        return Decimal(
            (
                1 if self.negative else 0,
                tuple(int(d) for d in digits),
                self.exponent - self.fraction_length,
            )
        )

    def to_float(self) -> float:
        """Converts to float, rounding once from the exact value."""
        return float(self.to_decimal())

    def __float__(self) -> float:
        return self.to_float()


class JsonKind(Enum):
    """Variants of ``JsonValue``."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class JsonValue:
    """
    Tagged union over the six JSON variants.

    Objects are ordered ``(key, value)`` pairs and keep duplicate keys in the
    order they were read. Strings hold already escape-decoded text.
    """

    kind: JsonKind
    payload: Any = None

    @classmethod
    def object(cls, members: Iterable[tuple[str, JsonValue]]) -> JsonValue:
        return cls(JsonKind.OBJECT, tuple(members))

    @classmethod
    def array(cls, elements: Iterable[JsonValue]) -> JsonValue:
        return cls(JsonKind.ARRAY, tuple(elements))

    @classmethod
    def string(cls, text: str) -> JsonValue:
        return cls(JsonKind.STRING, text)

    @classmethod
    def number(cls, number: NumberValue) -> JsonValue:
        return cls(JsonKind.NUMBER, number)

    @classmethod
    def boolean(cls, flag: bool) -> JsonValue:
        return cls(JsonKind.BOOLEAN, flag)

    @classmethod
    def null(cls) -> JsonValue:
        return cls(JsonKind.NULL)

    def _expect(self, kind: JsonKind, accessor: str) -> Any:
        if self.kind is not kind:
            raise JsonAccessError.plain(f"{accessor} error")
        return self.payload

    def get_object(self) -> list[tuple[str, JsonValue]]:
        return list(self._expect(JsonKind.OBJECT, "get_object"))

    def get_array(self) -> list[JsonValue]:
        return list(self._expect(JsonKind.ARRAY, "get_array"))

    def get_string(self) -> str:
        return self._expect(JsonKind.STRING, "get_string")

    def get_chars(self) -> list[str]:
        return list(self._expect(JsonKind.STRING, "get_chars"))

    def get_bytes(self) -> bytes:
        """
        Returns each code point truncated to its low byte.

        Lossy for anything outside Latin-1; use ``get_string`` for text.
        """
        text = self._expect(JsonKind.STRING, "get_bytes")
        return bytes(ord(char) & 0xFF for char in text)

    def get_number(self) -> NumberValue:
        return self._expect(JsonKind.NUMBER, "get_number")

    def get_number_f64(self) -> float:
        return self._expect(JsonKind.NUMBER, "get_number_f64").to_float()

    def get_bool(self) -> bool:
        return self._expect(JsonKind.BOOLEAN, "get_bool")

    def is_null(self) -> bool:
        return self.kind is JsonKind.NULL

    def to_python(
        self,
        *,
        object_pairs_hook: ObjectPairsHook = None,
        object_hook: ObjectHook = None,
        use_decimal: bool = False,
    ) -> Any:
        """
        Converts the tree to plain Python objects.

        Numbers without fraction or exponent become ``int``; others become
        ``float``, or ``Decimal`` with ``use_decimal``. Objects become
        ``dict`` (later duplicates win) unless a hook is given;
        ``object_pairs_hook`` sees every pair and takes priority over
        ``object_hook``.
        """

        def convert(value: JsonValue) -> Any:
            if value.kind is JsonKind.OBJECT:
                pairs = [(key, convert(item)) for key, item in value.payload]
                if object_pairs_hook is not None:
                    return object_pairs_hook(pairs)
                obj = dict(pairs)
                if object_hook is not None:
                    return object_hook(obj)
                return obj
            elif value.kind is JsonKind.ARRAY:
                return [convert(item) for item in value.payload]
            elif value.kind is JsonKind.NUMBER:
                number: NumberValue = value.payload
                if number.is_integer:
                    return number.integer
                if use_decimal:
                    return number.to_decimal()
                return number.to_float()
            else:
                return value.payload

        return convert(self)
