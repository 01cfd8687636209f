"""
Tokenizer for JSON text read one character at a time from a stream.

Holds exactly one character of lookahead. Structural tokens, strings and
literals consume only their own characters; a number has to look at the
character after its last digit, so that character is consumed from the
underlying stream and kept in the lookahead buffer. Reading ``123xy``
therefore leaves ``y`` on the stream. Mixing direct reads of the stream
with tokenizer calls is not supported.
"""

import io
import logging
from collections.abc import Iterator
from decimal import Decimal
from typing import IO

from ._config import ParseConfig
from ._errors import JSONEndOfInput
from ._errors import JSONSyntaxError
from ._profiling import ProfileContext
from ._types import BOM
from ._types import DIGITS
from ._types import ESCAPES
from ._types import HEX_DIGITS
from ._types import NULL
from ._types import WHITESPACE
from ._types import JsonValue
from ._types import Lexeme
from ._types import Token

logger = logging.getLogger(__name__)

Source = str | IO[str]

_STRUCTURAL = {lexeme.value: lexeme for lexeme in Lexeme}
_LITERALS: dict[str, tuple[str, JsonValue]] = {
    "t": ("true", True),
    "f": ("false", False),
    "n": ("null", NULL),
}


def _join_surrogates(text: str) -> str:
    """Combines surrogate pairs decoded from consecutive \\u escapes."""
    return text.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )


class JSONTokenizer:
    """
    Turns a character stream into scalar values and structural lexemes.

    Not safe for concurrent use; create one instance per stream.
    """

    def __init__(
        self, source: Source, config: ParseConfig | None = None
    ) -> None:
        if isinstance(source, str):
            source = io.StringIO(source)
        elif not hasattr(source, "read"):
            raise TypeError("source must be a str or have a read() method")

        self.source: IO[str] = source
        self.config = config or ParseConfig()
        self.lineno = 1
        self.colno = 1
        self.pos = 0

        self._lookahead: str | None = None
        self._fresh = True
        self._token_lineno = 1
        self._token_colno = 1
        self._token_pos = 0

    def _peek(self) -> str:
        """Returns the lookahead character, reading it if needed; "" at end."""
        if self._lookahead is None:
            char = self.source.read(1)
            if self._fresh and char:
                self._fresh = False
                if char == BOM and self.config.skip_bom:
                    logger.debug("Skipping byte-order mark")
                    char = self.source.read(1)
            # End of input is not remembered; the next call polls again.
            if not char:
                return ""
            self._lookahead = char
        return self._lookahead

    def _advance(self) -> str:
        """Consumes and returns the lookahead character."""
        char = self._peek()
        if not char:
            raise JSONEndOfInput("Unexpected end of input")

        self._lookahead = None
        self.pos += 1
        if char == "\n":
            self.lineno += 1
            self.colno = 1
        else:
            self.colno += 1
        return char

    def _lexical_error(self, msg: str) -> JSONSyntaxError:
        return JSONSyntaxError(msg, self.lineno, self.colno, self.pos)

    def syntax_error(
        self, msg: str, at_cursor: bool = False
    ) -> JSONSyntaxError:
        """
        Builds a syntax error at the start of the last token.

        With ``at_cursor`` the error points at the unconsumed lookahead
        character instead.
        """
        if at_cursor:
            return self._lexical_error(msg)
        return JSONSyntaxError(
            msg, self._token_lineno, self._token_colno, self._token_pos
        )

    def skip_whitespace(self) -> None:
        """Skips whitespace and // line comments."""
        while True:
            char = self._peek()
            if not char:
                return
            if char in WHITESPACE:
                self._advance()
            elif char == "/" and self.config.allow_comments:
                self._skip_comment()
            else:
                return

    def _skip_comment(self) -> None:
        self._advance()
        if self._advance() != "/":
            raise self._lexical_error("Invalid comment")

        char = self._peek()
        while char and char != "\n":
            self._advance()
            char = self._peek()

    def at_end(self) -> bool:
        """Skips whitespace and comments, then reports input exhaustion."""
        self.skip_whitespace()
        return not self._peek()

    def next_token(self) -> Token:
        """
        Returns the next scalar value or structural lexeme.

        Raises JSONEndOfInput if the input runs out before a token is
        complete, and JSONSyntaxError for malformed input.
        """
        self.skip_whitespace()
        self._token_lineno = self.lineno
        self._token_colno = self.colno
        self._token_pos = self.pos

        char = self._peek()
        if not char:
            raise JSONEndOfInput("No more input")

        lexeme = _STRUCTURAL.get(char)
        if lexeme is not None:
            self._advance()
            return lexeme
        if char == '"' or (char == "'" and self.config.allow_single_quotes):
            return self._scan_string()
        if char in DIGITS or char == "-":
            return self._scan_number()
        if char in _LITERALS:
            word, value = _LITERALS[char]
            return self._scan_literal(word, value)

        raise self._lexical_error(f"Invalid character {char!r}")

    def tokens(self) -> Iterator[Token]:
        """Yields tokens until the input ends cleanly between tokens."""
        while not self.at_end():
            yield self.next_token()

    def _scan_string(self) -> str:
        """Scans a string closed by the same delimiter that opened it."""
        with ProfileContext("scan_string") as profile:
            delimiter = self._advance()
            chunks: list[str] = []
            has_surrogate = False

            while True:
                char = self._advance()
                if char == delimiter:
                    break
                if char != "\\":
                    chunks.append(char)
                    continue

                escape = self._advance()
                if escape == "u":
                    decoded = self._scan_unicode_escape()
                    if "\ud800" <= decoded <= "\udfff":
                        has_surrogate = True
                    chunks.append(decoded)
                elif escape in ESCAPES:
                    chunks.append(ESCAPES[escape])
                else:
                    raise self._lexical_error(
                        f"Invalid string escape {escape!r}"
                    )

            text = "".join(chunks)
            profile.chars = len(text)

        if has_surrogate:
            text = _join_surrogates(text)
        return text

    def _scan_unicode_escape(self) -> str:
        digits = ""
        for _ in range(4):
            char = self._advance()
            if char not in HEX_DIGITS:
                raise self._lexical_error(
                    f"Invalid unicode escape sequence: \\u{digits}{char}"
                )
            digits += char
        return chr(int(digits, 16))

    def _scan_digits(self, text: list[str]) -> None:
        """Scans a run of at least one ASCII digit."""
        char = self._peek()
        if not char:
            raise JSONEndOfInput("Input ended inside a number")
        if char not in DIGITS:
            raise self._lexical_error("Invalid number")

        while char and char in DIGITS:
            text.append(self._advance())
            char = self._peek()

    def _scan_number(self) -> Decimal:
        """Scans a number, keeping every digit of its literal text."""
        with ProfileContext("scan_number") as profile:
            text: list[str] = []

            if self._peek() == "-":
                text.append(self._advance())
            self._scan_digits(text)

            if self._peek() == ".":
                text.append(self._advance())
                self._scan_digits(text)

            if self._peek() in ("e", "E"):
                text.append(self._advance())
                if self._peek() in ("+", "-"):
                    text.append(self._advance())
                self._scan_digits(text)

            literal = "".join(text)
            profile.chars = len(literal)

        return Decimal(literal)

    def _scan_literal(self, word: str, value: JsonValue) -> JsonValue:
        """Matches true, false or null one character at a time."""
        with ProfileContext("scan_literal", len(word)):
            for expected in word:
                char = self._peek()
                if not char:
                    raise JSONEndOfInput(f"Input ended inside {word!r}")
                if char != expected:
                    raise self._lexical_error(
                        f"Invalid input parsing {word!r}"
                    )
                self._advance()
        return value
