"""
Test data generators for parsing benchmarks.

Creates documents that are valid both in the restricted dialect and in
standard JSON, so every library parses the same text:
- Different sizes (small/large)
- Different shapes (wide arrays, deep nesting)
- String-heavy content with long leaves
"""

import random
import string
from typing import Any

import jleaf

# Characters that mean the same thing in both grammars
_LEAF_ALPHABET = string.ascii_letters + string.digits + " .,:-_/@{}[]"


def generate_test_data(data_type: str) -> str:
    """Generates benchmark data based on specified type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "wide_array": _generate_wide_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type]()


def _generate_small_object() -> str:
    """Generates a small object (< 1KB) with basic members."""
    data = {
        "id": "12345",
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": "yes",
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }
    return jleaf.dumps(data)


def _generate_large_object() -> str:
    """Generates a large object (> 10KB) with many fields."""
    data: dict[str, Any] = {
        "user_id": str(random.randint(1000000, 9999999)),
        "profile": {
            "first_name": _random_string(10),
            "last_name": _random_string(12),
            "email": f"{_random_string(8)}@{_random_string(6)}.com",
            "address": {
                "street": f"{random.randint(1, 9999)} {_random_string(8)} St",
                "city": _random_string(12),
                "zip": str(random.randint(10000, 99999)),
                "country": "US",
            },
            "languages": random.sample(["en", "es", "fr", "de", "zh"], k=3),
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": f"{random.uniform(1.0, 1000.0):.2f}",
                "currency": random.choice(["USD", "EUR", "GBP", "JPY"]),
                "description": f"Payment for {_random_string(20)}",
                "status": random.choice(["completed", "pending", "failed"]),
            }
            for i in range(80)
        ],
    }
    return jleaf.dumps(data)


def _generate_wide_array() -> str:
    """Generates one member holding a long array of leaves and objects."""
    items: list[Any] = []
    for i in range(500):
        if i % 5 == 0:
            items.append({"index": str(i), "value": _random_string(10)})
        else:
            items.append(_random_string(random.randint(5, 30)))
    return jleaf.dumps({"items": items})


def _generate_nested_structure() -> str:
    """Generates a deeply nested structure."""

    def create_nested(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": str(depth),
            "data": _random_string(15),
            "items": [create_nested(depth - 1) for _ in range(3)],
            "nested": create_nested(depth - 1),
        }

    return jleaf.dumps(create_nested(6))


def _generate_string_heavy() -> str:
    """Generates long leaves full of characters that are structural elsewhere."""
    data = {
        "strings": [_random_leaf(200) for _ in range(100)],
        "by_key": {f"key_{i}": _random_leaf(120) for i in range(50)},
    }
    return jleaf.dumps(data)


def _random_leaf(length: int) -> str:
    return "".join(random.choices(_LEAF_ALPHABET, k=length))


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
