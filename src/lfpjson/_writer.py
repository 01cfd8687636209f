"""Serializes JSON values and native Python data to JSON text."""

import io
import logging
import math
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import replace
from decimal import Decimal
from typing import IO
from typing import Any

from ._config import WriterConfig
from ._errors import JSONSerializationError
from ._profiling import ProfileContext
from ._types import ESCAPES
from ._types import JsonNull
from ._types import JSONSerializable
from ._types import JsonValueLoose
from ._types import is_iso_control

logger = logging.getLogger(__name__)

INDENT_WIDTH = 2

# Decoded character -> escape sequence, the inverse of the reader's table
_ENCODE_ESCAPES = {char: "\\" + escape for escape, char in ESCAPES.items()}


def _encode_string(s: str, escape_slash: bool) -> str:
    """Encode string with the reader's escape table plus \\uXXXX controls."""
    result = ['"']
    for char in s:
        escaped = _ENCODE_ESCAPES.get(char)
        if escaped is not None and (char != "/" or escape_slash):
            result.append(escaped)
        elif is_iso_control(char):
            result.append(f"\\u{ord(char):04X}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _encode_number(n: int | float | Decimal) -> str:
    """Encode numeric values without losing digits."""
    if isinstance(n, Decimal):
        if not n.is_finite():
            raise JSONSerializationError(
                f"Cannot write non-finite number in JSON format: {n}", n
            )
        return str(n)
    if isinstance(n, float):
        if not math.isfinite(n):
            raise JSONSerializationError(
                f"Cannot write non-finite number in JSON format: {n}", n
            )
        text = repr(n)
        return text[:-2] if text.endswith(".0") else text
    return str(n)


class JSONWriter:
    """
    Writes JSON text to a character stream.

    Handles ``NULL``, ``bool``, numbers (``int``, ``float``, ``Decimal``),
    ``str``, mappings with string keys and other iterables, plus any object
    implementing ``json_serialize(writer)``. Anything else, including
    ``None``, raises JSONSerializationError.
    """

    def __init__(
        self, stream: IO[str], config: WriterConfig | None = None
    ) -> None:
        if not hasattr(stream, "write"):
            raise TypeError("stream must have a write() method")

        self._stream = stream
        self.config = config or WriterConfig()
        self._indent_level = 0

    @classmethod
    def write_to(
        cls, stream: IO[str], value: JsonValueLoose, indent: bool = False
    ) -> None:
        cls(stream, WriterConfig(indent=indent)).write(value)

    @classmethod
    def write_to_string(
        cls, value: JsonValueLoose, indent: bool = False
    ) -> str:
        buffer = io.StringIO()
        cls.write_to(buffer, value, indent)
        return buffer.getvalue()

    @property
    def stream(self) -> IO[str]:
        return self._stream

    @property
    def indent_mode(self) -> bool:
        return self.config.indent

    @indent_mode.setter
    def indent_mode(self, value: bool) -> None:
        self.config = replace(self.config, indent=value)

    @property
    def sort_keys(self) -> bool:
        return self.config.sort_keys

    @sort_keys.setter
    def sort_keys(self, value: bool) -> None:
        self.config = replace(self.config, sort_keys=value)

    def newline(self) -> None:
        """In indent mode, starts a new line at the current nesting depth."""
        if self.config.indent:
            self._emit("\n" + " " * (INDENT_WIDTH * self._indent_level))

    def write(self, obj: JsonValueLoose) -> None:  # noqa: PLR0911
        """Emits obj as JSON text."""
        if isinstance(obj, JsonNull):
            self._emit("null")
        elif isinstance(obj, JSONSerializable):
            obj.json_serialize(self)
        elif isinstance(obj, bool):
            self._emit("true" if obj else "false")
        elif isinstance(obj, int | float | Decimal):
            self._emit(_encode_number(obj))
        elif isinstance(obj, str):
            self._emit(_encode_string(obj, self.config.escape_slash))
        elif isinstance(obj, Mapping):
            self._write_mapping(obj)
        elif isinstance(obj, Iterable) and not isinstance(
            obj, bytes | bytearray
        ):
            self._write_iterable(obj)
        else:
            logger.debug("No JSON representation for %r", type(obj))
            raise JSONSerializationError(
                f"Cannot write object in JSON format: {obj!r}", obj
            )

    def _write_member(self, value: Any, where: str) -> None:
        try:
            self.write(value)
        except JSONSerializationError as e:
            e.add_note(f"while writing {where}")
            raise

    def _begin_member(self, first: bool) -> None:
        if first:
            self._indent_level += 1
        else:
            self._emit(",")
        self.newline()

    def _end_container(self, bracket: str, empty: bool) -> None:
        if not empty:
            self._indent_level -= 1
            self.newline()
        self._emit(bracket)

    def _write_mapping(self, mapping: Mapping[Any, Any]) -> None:
        with ProfileContext("write_mapping", len(mapping)):
            keys = list(mapping.keys())
            for key in keys:
                if not isinstance(key, str):
                    raise JSONSerializationError(
                        f"Cannot write non-string JSON map key: {key!r}", key
                    )
            if self.config.sort_keys:
                keys.sort()

            self._emit("{")
            for index, key in enumerate(keys):
                self._begin_member(index == 0)
                self._emit(_encode_string(key, self.config.escape_slash))
                self._emit(":")
                self._write_member(mapping[key], f"key {key!r}")
            self._end_container("}", not keys)

    def _write_iterable(self, items: Iterable[Any]) -> None:
        with ProfileContext("write_iterable"):
            self._emit("[")
            count = 0
            for item in items:
                self._begin_member(count == 0)
                self._write_member(item, f"index {count}")
                count += 1
            self._end_container("]", count == 0)

    def _emit(self, text: str) -> None:
        self._stream.write(text)
