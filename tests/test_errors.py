"""
Diagnostic trail tests.

Validates that errors are immutable, keep their reasons in the order rules
unwound, and render a readable message.
"""

import pytest

from jsoncomb import JSONDecodeError
from jsoncomb import JsonAccessError
from jsoncomb import JsonError
from jsoncomb import Position


def test_add_reason_returns_new_error() -> None:
    """
    Validates add_reason leaves the original error untouched.
    """
    base = JSONDecodeError.at(Position(4, 1, 5), "DigitChar")

    extended = base.add_reason(Position(), "Number")

    assert base.reasons == ((Position(4, 1, 5), "DigitChar"),)
    assert extended.reasons == (
        (Position(4, 1, 5), "DigitChar"),
        (Position(), "Number"),
    )
    assert type(extended) is JSONDecodeError


def test_deepest_reason_describes_error() -> None:
    err = (
        JSONDecodeError.at(Position(7, 2, 3), "ColonChar")
        .add_reason(Position(5, 2, 1), "Member")
        .add_reason(Position(), "Object")
    )

    assert err.msg == "ColonChar"
    assert (err.pos, err.lineno, err.colno) == (7, 2, 3)
    assert err.trail() == "ColonChar > Member > Object"
    assert str(err) == (
        "ColonChar at line 2, column 3 (ColonChar > Member > Object)"
    )


def test_plain_error_has_no_position() -> None:
    err = JsonAccessError.plain("get_array error")

    assert err.reasons == ((None, "get_array error"),)
    assert err.position is None
    assert err.furthest == -1
    assert str(err) == "get_array error"


def test_decode_error_without_position() -> None:
    err = JSONDecodeError.plain("Unexpected")

    assert (err.pos, err.lineno, err.colno) == (0, 1, 1)


def test_position_taken_from_first_positioned_reason() -> None:
    err = JsonError.plain("deep").add_reason(Position(3, 1, 4), "outer")

    assert err.position == Position(3, 1, 4)


def test_furthest_is_max_index() -> None:
    err = (
        JSONDecodeError.at(Position(2, 1, 3), "a")
        .add_reason(Position(9, 1, 10), "b")
        .add_reason(Position(0, 1, 1), "c")
    )

    assert err.furthest == 9


def test_empty_trail_rejected() -> None:
    with pytest.raises(ValueError):
        JsonError([])


def test_error_hierarchy() -> None:
    assert issubclass(JSONDecodeError, JsonError)
    assert issubclass(JsonAccessError, JsonError)
    assert issubclass(JsonError, ValueError)
