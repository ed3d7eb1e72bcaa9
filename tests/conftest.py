"""
Pytest configuration and shared fixtures for jleaf tests.

Provides immutable test data fixtures shared by the parser, strategy and
round-trip tests.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import jleaf


@dataclass(frozen=True)
class DialectTestCase:
    """
    Immutable container for dialect test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    expected_error: type[jleaf.ParseError] | None = None
    expected_pos: int | None = None


@pytest.fixture(params=list(jleaf.ParseStrategy), ids=lambda s: s.value)
def strategy(request: pytest.FixtureRequest) -> jleaf.ParseStrategy:
    """Runs a test once per parser implementation."""
    return request.param  # type: ignore[no-any-return]


@pytest.fixture
def dialect_fail_cases() -> list[DialectTestCase]:
    """
    Provides documents that must fail parsing, with the error and offset.

    Offsets are identical for both strategies; the error type is the one the
    recursive parser raises (the single-pass parser may raise a subclass).
    """
    unexpected = jleaf.UnexpectedCharacter
    eoi = jleaf.UnexpectedEndOfInput
    return [
        DialectTestCase("empty document", "", True, None, eoi, 0),
        DialectTestCase("whitespace only", " \n\t", True, None, eoi, 3),
        DialectTestCase("root is an array", '["a"]', True, None, unexpected, 0),
        DialectTestCase("root is a string", '"a"', True, None, unexpected, 0),
        DialectTestCase("unclosed object", "{", True, None, eoi, 1),
        DialectTestCase(
            "trailing comma", '{"a":"b",}', True, None, unexpected, 9
        ),
        DialectTestCase("missing colon", '{"a" "b"}', True, None, unexpected, 5),
        DialectTestCase(
            "double colon", '{"a"::"b"}', True, None, unexpected, 5
        ),
        DialectTestCase(
            "comma instead of colon", '{"a","b"}', True, None, unexpected, 4
        ),
        DialectTestCase(
            "unterminated value", '{"a":"b', True, None, eoi, 7
        ),
        DialectTestCase("unterminated name", '{"a', True, None, eoi, 3),
        DialectTestCase("missing value", '{"a":}', True, None, unexpected, 5),
        DialectTestCase(
            "number value", '{"a":1}', True, None, unexpected, 5
        ),
        DialectTestCase(
            "literal value", '{"a": true}', True, None, unexpected, 6
        ),
        DialectTestCase(
            "unquoted name", "{a:\"b\"}", True, None, unexpected, 1
        ),
        DialectTestCase(
            "single quotes", "{'a':'b'}", True, None, unexpected, 1
        ),
        DialectTestCase(
            "missing member comma",
            '{"a":"b" "c":"d"}',
            True,
            None,
            unexpected,
            9,
        ),
        DialectTestCase(
            "array trailing comma", '{"a":["x",]}', True, None, unexpected, 10
        ),
        DialectTestCase(
            "array missing comma", '{"a":["x" "y"]}', True, None, unexpected, 10
        ),
        DialectTestCase(
            "mismatched close", '{"a":["x"}', True, None, unexpected, 9
        ),
        DialectTestCase("unclosed array", '{"a":["x"', True, None, eoi, 9),
        DialectTestCase(
            "nested object without name", '{{"a":"b"}}', True, None, unexpected, 1
        ),
        DialectTestCase(
            "nested array without name", '{["a"]}', True, None, unexpected, 1
        ),
        DialectTestCase(
            "carriage return is not whitespace",
            '{\r"a":"b"}',
            True,
            None,
            unexpected,
            1,
        ),
    ]


@pytest.fixture
def dialect_pass_cases() -> list[DialectTestCase]:
    """
    Provides documents that must parse, with their plain Python form.
    """
    return [
        DialectTestCase("empty object", "{}", False, {}),
        DialectTestCase("spaced empty object", "{ \n\t}", False, {}),
        DialectTestCase("empty array member", '{"a":[]}', False, {"a": []}),
        DialectTestCase("spaced empty array", '{"a":[  ]}', False, {"a": []}),
        DialectTestCase("simple member", '{"a":"b"}', False, {"a": "b"}),
        DialectTestCase("empty strings", '{"":""}', False, {"": ""}),
        DialectTestCase(
            "leading whitespace", '  \n{"a":"b"}', False, {"a": "b"}
        ),
        DialectTestCase(
            "array of leaves",
            '{"list":["x","y","z"]}',
            False,
            {"list": ["x", "y", "z"]},
        ),
        DialectTestCase(
            "deep objects",
            '{"a":{"b":{"c":{"d":"e"}}}}',
            False,
            {"a": {"b": {"c": {"d": "e"}}}},
        ),
        DialectTestCase(
            "nested arrays",
            '{"m":[["a","b"],[],[["c"]]]}',
            False,
            {"m": [["a", "b"], [], [["c"]]]},
        ),
        DialectTestCase(
            "objects in arrays",
            '{"people":[{"name":"ann"},{"name":"bob","tags":["x"]}]}',
            False,
            {"people": [{"name": "ann"}, {"name": "bob", "tags": ["x"]}]},
        ),
        DialectTestCase(
            "raw characters in strings",
            '{"sp ace":"1.5e3 true null \\n {:} [,] \u00e9"}',
            False,
            {"sp ace": "1.5e3 true null \\n {:} [,] \u00e9"},
        ),
        DialectTestCase(
            "whitespace everywhere",
            '{ "a" :\n[ "x" ,\t"y" ] ,\n "b" : { } }',
            False,
            {"a": ["x", "y"], "b": {}},
        ),
    ]
