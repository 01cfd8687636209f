"""
Pytest configuration and shared fixtures for lfpjson tests.

Provides immutable test data fixtures: well-formed documents, the catalogue
of malformed inputs, sources used for truncation checks and the lenient
inputs the reader deliberately accepts.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import pytest

import lfpjson


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


# fail18.json nests its string this many arrays deep
FAIL18_DEPTH = 19


def _nested(value: Any, depth: int) -> Any:
    for _ in range(depth):
        value = [value]
    return value


class GrowingSource:
    """A text source that can be fed more data after reporting its end."""

    def __init__(self, text: str = "") -> None:
        self.buffer = text

    def feed(self, text: str) -> None:
        self.buffer += text

    def read(self, n: int = -1) -> str:
        if n < 0:
            n = len(self.buffer)
        chunk, self.buffer = self.buffer[:n], self.buffer[n:]
        return chunk


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides malformed inputs that must raise JSONSyntaxError.

    Truncated input is covered separately: it raises JSONEndOfInput.
    """
    fail_docs = [
        '{a": 123, "b": 234}',
        '{"a: 123, "b": 234}',
        '{"a" 123, "b": 234}',
        '{"a": 123 "b": 234}',
        '{"a": 123, b": 234}',
        '{"a": 123, "b" 234}',
        '{,"a": 123, "b": 234}',
        '{"a": 123, , "b": 234}',
        '{"a": 123,, "b": 234}',
        '{"a": 123 ,,"b": 234}',
        "{,}",
        "[,2,3]",
        "[1 2,3]",
        "[1,,3]",
        "[1,2 3]",
        "[1,2,3,]",
        "trondheim",
        "flase",
        "nil",
        '"\\?"',
        "/* invalid */123",
        "/* invalid */\n123",
        "/- invalid\n123",
        "}",
        "]",
        # https://json.org/JSON_checker/test/fail7.json
        '["Comma after the close"],',
        # https://json.org/JSON_checker/test/fail8.json
        '["Extra close"]]',
        # https://json.org/JSON_checker/test/fail9.json
        '{"Extra comma": true,}',
        # https://json.org/JSON_checker/test/fail10.json
        '{"Extra value after close": true} "misplaced quoted value"',
        # https://json.org/JSON_checker/test/fail11.json
        '{"Illegal expression": 1 + 2}',
        # https://json.org/JSON_checker/test/fail12.json
        '{"Illegal invocation": alert()}',
        # https://json.org/JSON_checker/test/fail14.json
        '{"Numbers cannot be hex": 0x14}',
        # https://json.org/JSON_checker/test/fail15.json
        '["Illegal backslash escape: \\x15"]',
        # https://json.org/JSON_checker/test/fail16.json
        "[\\naked]",
        # https://json.org/JSON_checker/test/fail17.json
        '["Illegal backslash escape: \\017"]',
        # https://json.org/JSON_checker/test/fail19.json
        '{"Missing colon" null}',
        # https://json.org/JSON_checker/test/fail20.json
        '{"Double colon":: null}',
        # https://json.org/JSON_checker/test/fail21.json
        '{"Comma instead of colon", null}',
        # https://json.org/JSON_checker/test/fail22.json
        '["Colon instead of comma": false]',
        # https://json.org/JSON_checker/test/fail23.json
        '["Bad value", truth]',
        # https://json.org/JSON_checker/test/fail26.json
        '["tab\\   character\\   in\\  string\\  "]',
        # https://json.org/JSON_checker/test/fail28.json
        '["line\\\nbreak"]',
        # https://json.org/JSON_checker/test/fail29.json
        "[0e]",
        # https://json.org/JSON_checker/test/fail30.json
        "[0e+]",
        # https://json.org/JSON_checker/test/fail31.json
        "[0e+-1]",
        # https://json.org/JSON_checker/test/fail33.json
        '["mismatch"}',
        "true love waits",
    ]

    return [
        JsonTestCase(description=doc, input_data=doc, should_fail=True)
        for doc in fail_docs
    ]


@pytest.fixture
def truncation_sources() -> list[str]:
    """
    Provides complete documents whose every proper prefix is incomplete.

    Bare numbers are left out: a prefix of ``123`` is the number ``12``.
    """
    return [
        '{"a": 123}',
        '{"a": 123, "": null, "b\\"b": []}',
        "[1,[2,3],4,5]",
        "[{},{},{}]",
        '"ab\\"cd"',
        "true",
        "false",
        "null",
        "[1.5, -2e+3, 0.25E-1]",
        '"\\u00e9\\uD834\\uDD1E"',
        '{"x": [true, false, null]}',
        "// note\n[1]",
        "'single'",
    ]


@pytest.fixture
def lenient_cases() -> list[JsonTestCase]:
    """
    Provides inputs outside strict JSON that the reader accepts on purpose.
    """
    return [
        JsonTestCase(
            "fail1.json - top-level string",
            '"A JSON payload should be an object or array, not a string."',
            False,
            "A JSON payload should be an object or array, not a string.",
        ),
        JsonTestCase(
            "fail13.json - leading zeros",
            '{"Numbers cannot have leading zeroes": 013}',
            False,
            {"Numbers cannot have leading zeroes": Decimal(13)},
        ),
        JsonTestCase(
            "fail18.json - deep nesting",
            "[" * FAIL18_DEPTH + '"Too deep"' + "]" * FAIL18_DEPTH,
            False,
            _nested("Too deep", FAIL18_DEPTH),
        ),
        JsonTestCase(
            "fail24.json - single quotes", "['single quote']", False,
            ["single quote"],
        ),
        JsonTestCase(
            "fail25.json - raw tabs",
            '["\ttab\tcharacter\tin\tstring\t"]',
            False,
            ["\ttab\tcharacter\tin\tstring\t"],
        ),
        JsonTestCase(
            "fail27.json - raw line break",
            '["line\nbreak"]',
            False,
            ["line\nbreak"],
        ),
        JsonTestCase(
            "raw control character",
            '["A\u001fZ control characters in string"]',
            False,
            ["A\u001fZ control characters in string"],
        ),
        JsonTestCase(
            "line comments",
            "// leading\n[1, // inline\n 2] // trailing",
            False,
            [Decimal(1), Decimal(2)],
        ),
        JsonTestCase(
            "double quote inside single quotes",
            "'say \"hi\"'",
            False,
            'say "hi"',
        ),
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must parse successfully.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
            should_fail=False,
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
            should_fail=False,
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
            should_fail=False,
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental parsing.

    Covers all JSON primitive types and basic container structures.
    """
    return [
        JsonTestCase("null value", "null", False, lfpjson.NULL),
        JsonTestCase("true boolean", "true", False, True),
        JsonTestCase("false boolean", "false", False, False),
        JsonTestCase("integer", "42", False, Decimal(42)),
        JsonTestCase("negative integer", "-17", False, Decimal(-17)),
        JsonTestCase("float", "3.14", False, Decimal("3.14")),
        JsonTestCase("empty string", '""', False, ""),
        JsonTestCase("simple string", '"hello"', False, "hello"),
        JsonTestCase("empty array", "[]", False, []),
        JsonTestCase("empty object", "{}", False, {}),
        JsonTestCase(
            "simple array", "[1, 2, 3]", False,
            [Decimal(1), Decimal(2), Decimal(3)],
        ),
        JsonTestCase(
            "simple object", '{"key": "value"}', False, {"key": "value"}
        ),
    ]
