"""
DOM-style reader: recursive descent over the tokenizer building a tree.

Strings become ``str``, numbers ``decimal.Decimal``, true and false
``bool``, null ``NULL``, arrays ``list`` and objects ``dict``.
"""

from typing import TYPE_CHECKING

from ._config import ParseConfig
from ._profiling import ProfileContext
from ._tokenizer import JSONTokenizer
from ._tokenizer import Source
from ._types import JsonValue
from ._types import Lexeme
from ._types import Token

if TYPE_CHECKING:
    from ._value import JSONValue


class JSONReader:
    """
    Reads complete JSON values, one per call, from a character stream.

    Several concatenated values can be read from the same stream; the
    tokenizer's lookahead carries over between calls. Running out of input
    raises JSONEndOfInput, malformed input raises JSONSyntaxError.
    """

    def __init__(
        self,
        source: Source | JSONTokenizer,
        config: ParseConfig | None = None,
    ) -> None:
        if isinstance(source, JSONTokenizer):
            self.tokenizer = source
        else:
            self.tokenizer = JSONTokenizer(source, config)

    @classmethod
    def read_from(
        cls,
        source: Source,
        expect_eof: bool = True,
        config: ParseConfig | None = None,
    ) -> JsonValue:
        """Reads one value; unless told otherwise, nothing may follow it."""
        reader = cls(source, config)
        result = reader.read()
        if expect_eof:
            reader.expect_end_of_input()
        return result

    @classmethod
    def read_value_from(
        cls,
        source: Source,
        expect_eof: bool = True,
        config: ParseConfig | None = None,
    ) -> "JSONValue":
        from ._value import JSONValue

        return JSONValue._adopt(cls.read_from(source, expect_eof, config))

    def next_token(self) -> Token:
        """Returns the next raw token without assembling containers."""
        return self.tokenizer.next_token()

    def read(self) -> JsonValue:
        """Reads and returns the next complete JSON value."""
        return self._value_from(self.tokenizer.next_token())

    def read_value(self) -> "JSONValue":
        """Reads the next value and wraps it for typed access."""
        from ._value import JSONValue

        return JSONValue._adopt(self.read())

    def expect_end_of_input(self) -> None:
        """Fails unless only whitespace and comments remain."""
        if not self.tokenizer.at_end():
            raise self.tokenizer.syntax_error("Extra data", at_cursor=True)

    def _value_from(self, token: Token) -> JsonValue:
        """Turns a token that must start a value into a complete value."""
        if token is Lexeme.OBJECT_START:
            return self._read_object()
        if token is Lexeme.ARRAY_START:
            return self._read_array()
        if isinstance(token, Lexeme):
            raise self.tokenizer.syntax_error(
                f"Unexpected lexeme {token.value!r}"
            )
        return token

    def _read_object(self) -> dict[str, JsonValue]:
        with ProfileContext("read_object"):
            result: dict[str, JsonValue] = {}
            key = self.tokenizer.next_token()
            if key is Lexeme.OBJECT_END:
                return result

            while True:
                if not isinstance(key, str):
                    raise self.tokenizer.syntax_error(
                        "Expected string map key"
                    )
                if self.tokenizer.next_token() is not Lexeme.COLON:
                    raise self.tokenizer.syntax_error(
                        "Expected colon separating key from value"
                    )
                # Later duplicates overwrite earlier ones
                result[key] = self.read()

                separator = self.tokenizer.next_token()
                if separator is Lexeme.OBJECT_END:
                    return result
                if separator is not Lexeme.COMMA:
                    raise self.tokenizer.syntax_error(
                        "Expected comma separating map keys"
                    )
                key = self.tokenizer.next_token()

    def _read_array(self) -> list[JsonValue]:
        with ProfileContext("read_array"):
            result: list[JsonValue] = []
            token = self.tokenizer.next_token()
            if token is Lexeme.ARRAY_END:
                return result

            while True:
                result.append(self._value_from(token))

                separator = self.tokenizer.next_token()
                if separator is Lexeme.ARRAY_END:
                    return result
                if separator is not Lexeme.COMMA:
                    raise self.tokenizer.syntax_error(
                        "Expected comma separating array values"
                    )
                token = self.tokenizer.next_token()
