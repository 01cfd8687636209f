"""
Value model: the six JSON shapes, structural lexemes and the escape table.

JSON values are plain Python objects: ``str``, ``decimal.Decimal``,
``bool``, ``NULL``, ``list`` and ``dict``. ``None`` is deliberately not one
of them; it stands for "absent" and the writer refuses it.
"""

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from ._errors import JSONTypeError

if TYPE_CHECKING:
    from ._writer import JSONWriter


class JsonNull:
    """
    The JSON ``null`` value.

    All instances compare equal to each other, so code must test with
    ``==`` or ``isinstance`` rather than identity.
    """

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonNull)

    def __hash__(self) -> int:
        return hash(JsonNull)

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NULL"


NULL = JsonNull()

JsonValue = (
    str
    | Decimal
    | bool
    | JsonNull
    | list["JsonValue"]
    | dict[str, "JsonValue"]
)
# The writer additionally accepts native numbers and any iterable
JsonValueLoose = Any


class Lexeme(Enum):
    """Structural tokens; values are the source characters."""

    OBJECT_START = "{"
    OBJECT_END = "}"
    ARRAY_START = "["
    ARRAY_END = "]"
    COLON = ":"
    COMMA = ","


Token = JsonValue | Lexeme


class JsonKind(Enum):
    """The closed set of JSON value shapes."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


_ALL_JSON_TYPES = (str, Decimal, int, float, bool, JsonNull, list, dict)


def kind_of(value: Any) -> JsonKind:
    """Classifies a native value into exactly one of the six JSON shapes."""
    if isinstance(value, JsonNull):
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, int | float | Decimal):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list | tuple):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    raise JSONTypeError(_ALL_JSON_TYPES, value)


@runtime_checkable
class JSONSerializable(Protocol):
    """Objects that write themselves by delegating back into the writer."""

    def json_serialize(self, writer: "JSONWriter") -> None: ...


# Escape character -> decoded character, shared by reader and writer
ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

WHITESPACE = " \t\n\r"
DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"
BOM = "\ufeff"


def is_iso_control(char: str) -> bool:
    code = ord(char)
    return code <= 0x1F or 0x7F <= code <= 0x9F
