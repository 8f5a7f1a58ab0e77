"""
Test data generators for JSON parsing benchmarks.

Creates JSON documents exercising different parts of the grammar:
- Flat and nested objects
- Arrays of mixed values
- Number-heavy content with fractions and exponents
- String-heavy content with escape sequences
"""

import json
import random
import string
from typing import Any

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_NULL_TYPE = 5
_ESCAPE_PROBABILITY = 0.3

DATA_TYPES = [
    "small_object",
    "mixed_array",
    "nested_structure",
    "number_heavy",
    "string_heavy",
]


def generate_test_data(data_type: str, seed: int = 1234) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "small_object": _generate_small_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "number_heavy": _generate_number_heavy,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    rng = random.Random(seed)
    return generators[data_type](rng)


def _generate_small_object(rng: random.Random) -> str:
    """Generates a small JSON object (< 1KB) with basic key-value pairs."""
    data = {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "tags": [_random_string(rng, 6) for _ in range(3)],
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": None},
    }
    return json.dumps(data)


def _generate_mixed_array(rng: random.Random) -> str:
    """Generates an array with mixed data types."""
    array: list[Any] = []

    for i in range(200):
        choice = rng.randint(1, 6)
        if choice == _INT_TYPE:
            array.append(rng.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            array.append(round(rng.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            array.append(_random_string(rng, rng.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            array.append(rng.choice([True, False]))
        elif choice == _NULL_TYPE:
            array.append(None)
        else:
            array.append(
                {
                    "index": i,
                    "value": _random_string(rng, 10),
                    "score": round(rng.uniform(0, 100), 2),
                }
            )

    return json.dumps(array)


def _generate_nested_structure(rng: random.Random) -> str:
    """Generates a nested structure, kept shallow enough for recursion."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(rng, 10)}

        return {
            "level": depth,
            "data": _random_string(rng, 15),
            "items": [create_nested_dict(depth - 1) for _ in range(2)],
        }

    return json.dumps(create_nested_dict(6))


def _generate_number_heavy(rng: random.Random) -> str:
    """Generates numbers with fractions, leading fraction zeros and exponents."""
    numbers = []
    for _ in range(300):
        integer = rng.randint(-99999, 99999)
        fraction = f"{rng.randint(0, 999):03d}"
        exponent = rng.randint(-30, 30)
        numbers.append(f"{integer}.{fraction}e{exponent:+d}")
    return "[" + ", ".join(numbers) + "]"


def _generate_string_heavy(rng: random.Random) -> str:
    """Generates JSON with many string escape sequences."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(
                    rng.choice(['\\"', "\\\\", "\\/", "\\n", "\\t", "\\u00e9"])
                )
            else:
                chars.append(
                    rng.choice(string.ascii_letters + string.digits + " ")
                )
        return '"' + "".join(chars) + '"'

    strings = [create_escaped_string() for _ in range(100)]
    return '{"strings": [' + ", ".join(strings) + "]}"


def _random_string(rng: random.Random, length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(rng.choices(string.ascii_letters, k=length))
