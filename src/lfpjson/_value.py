"""
Typed accessor and builder facade over JSON value trees.

Every accessor checks the shape of the wrapped value and raises
JSONTypeError when it does not match. Builders return the same handle so
that complex values can be assembled by chaining::

    JSONValue.new_map().put("x", True).put("y", JSONValue.new_list().add(1))
"""

from collections.abc import Hashable
from collections.abc import Iterator
from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING
from typing import Any
from typing import Self

from ._errors import JSONTypeError
from ._types import JsonKind
from ._types import JsonNull
from ._types import JsonValue
from ._types import JsonValueLoose
from ._types import kind_of

if TYPE_CHECKING:
    from ._writer import JSONWriter


def _float_to_decimal(value: float) -> Decimal:
    """Shortest double representation, whole numbers without ``.0``."""
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return Decimal(text)


def _normalize(value: JsonValueLoose) -> JsonValueLoose:
    """
    Unwraps handles and turns native numbers into Decimal, recursively.

    Tuples and other sequences become lists and mappings become dicts, so
    every container held by a handle is one the accessors accept.
    """
    if isinstance(value, JSONValue):
        return value.value
    if isinstance(value, bool | str | Decimal | JsonNull):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # Lossy on purpose: goes through double precision
        return _float_to_decimal(value)
    if isinstance(value, Mapping):
        return {key: _normalize(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_normalize(item) for item in value]
    return value


def _kind_or_none(value: Any) -> JsonKind | None:
    try:
        return kind_of(value)
    except JSONTypeError:
        return None


def json_equal(a: Any, b: Any) -> bool:
    """Structural equality that never confuses booleans with numbers."""
    kind = _kind_or_none(a)
    if kind is not _kind_or_none(b):
        return False
    if kind is JsonKind.ARRAY:
        return len(a) == len(b) and all(
            json_equal(x, y) for x, y in zip(a, b, strict=True)
        )
    if kind is JsonKind.OBJECT:
        return a.keys() == b.keys() and all(
            json_equal(a[key], b[key]) for key in a
        )
    return bool(a == b)


def _freeze(value: Any) -> Hashable:
    kind = _kind_or_none(value)
    if kind is JsonKind.ARRAY:
        return (kind, tuple(_freeze(item) for item in value))
    if kind is JsonKind.OBJECT:
        return (
            kind,
            frozenset((key, _freeze(item)) for key, item in value.items()),
        )
    return (kind, value)


class JSONValue:
    """
    Wraps a JSON value for shape-checked access and chained construction.

    Equality and hashing follow the wrapped value, not the wrapper.
    """

    __slots__ = ("_blob",)

    def __init__(self, blob: JsonValueLoose) -> None:
        self._blob = _normalize(blob)

    @classmethod
    def wrap(cls, blob: JsonValueLoose) -> Self | None:
        """Wraps blob; None (an absent value) stays None."""
        if blob is None:
            return None
        if isinstance(blob, cls):
            return blob
        return cls(blob)

    @classmethod
    def _adopt(cls, blob: JsonValue) -> Self:
        """Wraps an already normalized tree without copying it."""
        handle = cls.__new__(cls)
        handle._blob = blob
        return handle

    @staticmethod
    def unwrap(value: JsonValueLoose) -> JsonValueLoose:
        return value.value if isinstance(value, JSONValue) else value

    @classmethod
    def new_list(cls) -> Self:
        return cls([])

    @classmethod
    def new_map(cls) -> Self:
        return cls({})

    @property
    def value(self) -> JsonValueLoose:
        return self._blob

    @property
    def kind(self) -> JsonKind:
        return kind_of(self._blob)

    def string_value(self) -> str:
        if isinstance(self._blob, str):
            return self._blob
        raise JSONTypeError(str, self._blob)

    def _check_number(self) -> Decimal:
        if isinstance(self._blob, Decimal):
            return self._blob
        raise JSONTypeError(Decimal, self._blob)

    def long_value(self) -> int:
        """Returns the number as an int, truncating any fraction."""
        return int(self._check_number())

    def double_value(self) -> float:
        return float(self._check_number())

    def decimal_value(self) -> Decimal:
        return self._check_number()

    def boolean_value(self) -> bool:
        if isinstance(self._blob, bool):
            return self._blob
        raise JSONTypeError(bool, self._blob)

    def check_null(self) -> None:
        if not isinstance(self._blob, JsonNull):
            raise JSONTypeError(JsonNull, self._blob)

    def list_value(self) -> list[JsonValue]:
        if isinstance(self._blob, list):
            return self._blob
        raise JSONTypeError(list, self._blob)

    def map_value(self) -> dict[str, JsonValue]:
        if isinstance(self._blob, dict):
            return self._blob
        raise JSONTypeError(dict, self._blob)

    def get(self, key: int | str) -> "JSONValue | None":
        """
        Returns the wrapped element at an index or under a key.

        A missing key gives None; an index out of range raises IndexError.
        """
        if isinstance(key, str):
            item = self.map_value().get(key)
            return None if item is None else JSONValue._adopt(item)
        return JSONValue._adopt(self.list_value()[key])

    def __getitem__(self, key: int | str) -> "JSONValue":
        if isinstance(key, str):
            return JSONValue._adopt(self.map_value()[key])
        return JSONValue._adopt(self.list_value()[key])

    def set(self, index: int, value: JsonValueLoose) -> Self:
        self.list_value()[index] = _normalize(value)
        return self

    def add(self, value: JsonValueLoose) -> Self:
        self.list_value().append(_normalize(value))
        return self

    def put(self, key: str, value: JsonValueLoose) -> Self:
        self.map_value()[key] = _normalize(value)
        return self

    def remove(self, key: str) -> Self:
        """Removes key if present."""
        self.map_value().pop(key, None)
        return self

    def contains_key(self, key: str) -> bool:
        return key in self.map_value()

    def __contains__(self, key: str) -> bool:
        return self.contains_key(key)

    def size(self) -> int:
        if isinstance(self._blob, list | dict):
            return len(self._blob)
        raise JSONTypeError((list, dict), self._blob)

    def __len__(self) -> int:
        return self.size()

    def elements(self) -> Iterator["JSONValue"]:
        return (JSONValue._adopt(item) for item in self.list_value())

    def keys(self) -> Iterator[str]:
        return iter(list(self.map_value()))

    def values(self) -> Iterator["JSONValue"]:
        return (
            JSONValue._adopt(item) for item in self.map_value().values()
        )

    def items(self) -> Iterator[tuple[str, "JSONValue"]]:
        return (
            (key, JSONValue._adopt(item))
            for key, item in self.map_value().items()
        )

    def __iter__(self) -> Iterator[Any]:
        """Iterates elements of an array or keys of an object."""
        if isinstance(self._blob, Mapping):
            return self.keys()
        if isinstance(self._blob, list):
            return self.elements()
        raise JSONTypeError((list, dict), self._blob)

    def json_serialize(self, writer: "JSONWriter") -> None:
        writer.write(self._blob)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONValue):
            return NotImplemented
        return json_equal(self._blob, other._blob)

    def __hash__(self) -> int:
        return hash(_freeze(self._blob))

    def __str__(self) -> str:
        from ._writer import JSONWriter

        return JSONWriter.write_to_string(self._blob)

    def __repr__(self) -> str:
        return f"JSONValue({self._blob!r})"
