"""
JSON parsing built on a small parser-combinator toolkit.

``parse`` runs the JSON grammar over any ``Input`` and returns an immutable
``JsonValue`` tree together with the position where parsing stopped.
Numbers are kept as exact decimal components until a caller converts them.
``loads`` and ``load`` wrap ``parse`` with the familiar ``json`` module
interface: the whole document must be consumed and the result is converted
to plain Python objects.
"""

import logging
from typing import IO
from typing import Any

from ._combinators import Concat
from ._combinators import Either
from ._combinators import ExpectChar
from ._combinators import Lazy
from ._combinators import Literal
from ._combinators import Map
from ._combinators import Null
from ._combinators import OneOf
from ._combinators import OneOrMore
from ._combinators import Parser
from ._combinators import Rule
from ._combinators import concat
from ._combinators import one_of
from ._combinators import zero_or_more
from ._combinators import zero_or_one
from ._config import DEFAULT_CONFIG
from ._config import ParseConfig
from ._errors import JSONDecodeError
from ._errors import JsonAccessError
from ._errors import JsonError
from ._grammar import JsonGrammar
from ._grammar import build_grammar
from ._grammar import grammar_for
from ._input import Input
from ._input import StrInput
from ._literals import char_class
from ._position import Position
from ._profiling import HotPathStats
from ._profiling import clear_hot_path_stats
from ._profiling import get_hot_path_stats
from ._value import JsonKind
from ._value import JsonValue
from ._value import NumberValue

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def parse(
    source: Input | str,
    position: Position | None = None,
    *,
    config: ParseConfig | None = None,
) -> tuple[JsonValue, Position]:
    """
    Parses one JSON element starting at ``position``.

    Returns the value and the position after its trailing whitespace. Input
    beyond that position is left alone; callers that need the whole document
    consumed must check the returned position themselves.
    """
    if isinstance(source, str):
        source = StrInput(source)
    config = config or DEFAULT_CONFIG
    log = config.logger or logger
    start = position if position is not None else Position()

    log.debug("parsing JSON from %s", start)
    try:
        value, end = grammar_for(config).json.parse(source, start)
    except JsonError as error:
        log.debug("JSON parse failed: %s", error)
        raise

    log.debug(
        "parsed %s value, consumed %d characters", value.kind.value, end - start
    )
    return value, end


def loads(s: str, **kwargs: Any) -> Any:
    """
    Parses a complete JSON document into Python objects.

    Keyword arguments build a ``ParseConfig``. Raises ``JSONDecodeError``
    when the text is not valid or has data after the document.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    if s.startswith("\ufeff"):
        raise JSONDecodeError.at(
            Position(), "Unexpected BOM (Byte Order Mark)"
        )

    source = StrInput(s)
    value, end = parse(source, config=config)
    if not source.at_end(end):
        raise JSONDecodeError.at(end, "Extra data")

    return value.to_python(
        object_pairs_hook=config.object_pairs_hook,
        object_hook=config.object_hook,
        use_decimal=config.use_decimal,
    )


def load(fp: IO[str], **kwargs: Any) -> Any:
    """Parses a complete JSON document read from a file-like object."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


__all__ = [
    "Concat",
    "Either",
    "ExpectChar",
    "HotPathStats",
    "Input",
    "JSONDecodeError",
    "JsonAccessError",
    "JsonError",
    "JsonGrammar",
    "JsonKind",
    "JsonValue",
    "Lazy",
    "Literal",
    "Map",
    "Null",
    "NumberValue",
    "OneOf",
    "OneOrMore",
    "ParseConfig",
    "Parser",
    "Position",
    "Rule",
    "StrInput",
    "build_grammar",
    "char_class",
    "clear_hot_path_stats",
    "concat",
    "get_hot_path_stats",
    "grammar_for",
    "load",
    "loads",
    "one_of",
    "parse",
    "zero_or_more",
    "zero_or_one",
]
