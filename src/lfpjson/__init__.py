"""
Streaming JSON reading and writing with DOM and event-driven parsing.

Reads any number of concatenated JSON values off one character stream,
either as complete value trees (``JSONReader``) or as a flat sequence of
tokens with explicit start/end markers (``JSONEventReader``). Numbers are
kept as ``decimal.Decimal`` so no digits are lost between reading and
writing. ``JSONWriter`` serializes values back, with deterministic key order
by default and optional pretty-printing.

The module-level ``loads``/``load``/``dumps``/``dump`` functions follow the
standard library json module's calling conventions.
"""

import io
from typing import IO
from typing import Any

from ._config import ParseConfig
from ._config import WriterConfig
from ._errors import JSONEndOfInput
from ._errors import JSONError
from ._errors import JSONSerializationError
from ._errors import JSONSyntaxError
from ._errors import JSONTypeError
from ._events import EventState
from ._events import JSONEventReader
from ._profiling import HotPathStats
from ._profiling import clear_hot_path_stats
from ._profiling import format_hot_path_stats
from ._profiling import get_hot_path_stats
from ._reader import JSONReader
from ._tokenizer import JSONTokenizer
from ._types import NULL
from ._types import JsonKind
from ._types import JsonNull
from ._types import JSONSerializable
from ._types import JsonValue
from ._types import JsonValueLoose
from ._types import Lexeme
from ._types import Token
from ._types import kind_of
from ._value import JSONValue
from ._value import json_equal
from ._writer import JSONWriter

__version__ = "0.1.0"


def loads(s: str, **kwargs: Any) -> JsonValue:
    """
    Parses exactly one JSON value from a string.

    Keyword arguments are ParseConfig options. Trailing input other than
    whitespace and comments raises JSONSyntaxError.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    return JSONReader.read_from(s, config=ParseConfig(**kwargs))


def load(fp: IO[str], **kwargs: Any) -> JsonValue:
    """Parses exactly one JSON value from a text stream, reading lazily."""
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return JSONReader.read_from(fp, config=ParseConfig(**kwargs))


def dumps(obj: JsonValueLoose, **kwargs: Any) -> str:
    """Serializes obj to a JSON string; keyword arguments are WriterConfig."""
    config = WriterConfig(**kwargs)
    fp = io.StringIO()
    JSONWriter(fp, config).write(obj)
    return fp.getvalue()


def dump(obj: JsonValueLoose, fp: IO[str], **kwargs: Any) -> None:
    """Serializes obj as JSON text to a writable text stream."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    JSONWriter(fp, WriterConfig(**kwargs)).write(obj)


__all__ = [
    "NULL",
    "EventState",
    "HotPathStats",
    "JSONEndOfInput",
    "JSONError",
    "JSONEventReader",
    "JSONReader",
    "JSONSerializable",
    "JSONSerializationError",
    "JSONSyntaxError",
    "JSONTokenizer",
    "JSONTypeError",
    "JSONValue",
    "JSONWriter",
    "JsonKind",
    "JsonNull",
    "JsonValue",
    "JsonValueLoose",
    "Lexeme",
    "ParseConfig",
    "Token",
    "WriterConfig",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "format_hot_path_stats",
    "get_hot_path_stats",
    "json_equal",
    "kind_of",
    "load",
    "loads",
]
