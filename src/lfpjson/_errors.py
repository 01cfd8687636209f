"""Error taxonomy shared by the reader, the value wrapper and the writer."""

from typing import Any


class JSONError(Exception):
    """Base class for every error signalled by lfpjson."""


class JSONEndOfInput(JSONError, EOFError):
    """
    Raised when the input ends before a complete value was read.

    Distinct from JSONSyntaxError so that streaming callers can tell
    "need more data" apart from "malformed input". Supplying more data to
    the same source and calling again resumes reading.
    """


class JSONSyntaxError(JSONError, ValueError):
    """
    Handles malformed JSON text with approximate position information.

    Carries the bare message plus line, column and character offset of the
    point at which the problem was noticed.
    """

    def __init__(
        self, msg: str, lineno: int = 1, colno: int = 1, pos: int = 0
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.lineno = lineno
        self.colno = colno
        self.pos = pos

        super().__init__(f"{msg} at line {lineno}, column {colno}")


def _format_type_list(types: tuple[type, ...]) -> str:
    names = [t.__name__ for t in types]
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " or " + names[-1]


class JSONTypeError(JSONError, TypeError):
    """
    Signals a shape mismatch, e.g. asking for a number when holding an array.

    A caller-logic error rather than an I/O failure.
    """

    def __init__(self, expected: type | tuple[type, ...], actual: Any) -> None:
        if not isinstance(expected, tuple):
            expected = (expected,)
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected JSON value of type {_format_type_list(expected)} "
            f"but got: {actual!r}"
        )


class JSONSerializationError(JSONError, TypeError):
    """Describes a value that has no JSON representation."""

    def __init__(self, msg: str, value: Any) -> None:
        self.value = value
        super().__init__(msg)
