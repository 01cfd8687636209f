"""
Event-driven reader: a flat token stream instead of a value tree.

Nesting is tracked with an explicit state plus a stack of saved states,
so arbitrarily deep input is consumed without recursion.
"""

import logging
from collections.abc import Iterator
from enum import Enum

from ._config import ParseConfig
from ._reader import JSONReader
from ._tokenizer import JSONTokenizer
from ._tokenizer import Source
from ._types import Lexeme
from ._types import Token

logger = logging.getLogger(__name__)


class EventState(Enum):
    """Position within the grammar of the innermost open container."""

    GENERAL = "general"
    FIRST_MAP_KEY = "first_map_key"
    SUBSEQUENT_MAP_KEY = "subsequent_map_key"
    MAP_COLON = "map_colon"
    MAP_VALUE = "map_value"
    MAP_COMMA_OR_END = "map_comma_or_end"
    FIRST_ARRAY_VALUE = "first_array_value"
    SUBSEQUENT_ARRAY_VALUE = "subsequent_array_value"
    ARRAY_COMMA_OR_END = "array_comma_or_end"


class JSONEventReader:
    """
    SAX-style reader emitting scalars, keys and start/end lexemes.

    Commas and colons are validated and swallowed. ``next()`` returns
    ``None`` once the input is exhausted between top-level values.
    """

    def __init__(
        self,
        source: Source | JSONTokenizer | JSONReader,
        config: ParseConfig | None = None,
    ) -> None:
        if isinstance(source, JSONReader):
            self.tokenizer = source.tokenizer
        elif isinstance(source, JSONTokenizer):
            self.tokenizer = source
        else:
            self.tokenizer = JSONTokenizer(source, config)

        self.state = EventState.GENERAL
        self._stack: list[EventState] = []

    @property
    def depth(self) -> int:
        """Number of containers currently open."""
        return len(self._stack)

    def at_boundary(self) -> bool:
        """True when sitting exactly between top-level values."""
        return self.state is EventState.GENERAL and not self._stack

    def __iter__(self) -> Iterator[Token]:
        return iter(self.next, None)

    def next(self) -> Token | None:  # noqa: PLR0911, PLR0912
        """
        Returns the next token, or None at the end of the stream.

        End of input inside a value raises JSONEndOfInput. Calling again
        after the end returns None again.
        """
        while True:
            if self.at_boundary() and self.tokenizer.at_end():
                logger.debug("Event stream reached end of input")
                return None
            token = self.tokenizer.next_token()

            state = self.state
            if state is EventState.GENERAL:
                self._maybe_enter_nested(token)
                return token

            if state in (
                EventState.FIRST_MAP_KEY,
                EventState.SUBSEQUENT_MAP_KEY,
            ):
                if (
                    state is EventState.FIRST_MAP_KEY
                    and token is Lexeme.OBJECT_END
                ):
                    self._pop()
                    return token
                if not isinstance(token, str):
                    raise self.tokenizer.syntax_error(
                        "Expected string map key"
                    )
                self.state = EventState.MAP_COLON
                return token

            if state is EventState.MAP_COLON:
                if token is not Lexeme.COLON:
                    raise self.tokenizer.syntax_error(
                        "Expected colon separating key from value"
                    )
                self.state = EventState.MAP_VALUE
                continue

            if state is EventState.MAP_VALUE:
                self.state = EventState.MAP_COMMA_OR_END
                self._maybe_enter_nested(token)
                return token

            if state is EventState.MAP_COMMA_OR_END:
                if token is Lexeme.OBJECT_END:
                    self._pop()
                    return token
                if token is not Lexeme.COMMA:
                    raise self.tokenizer.syntax_error(
                        "Expected comma separating map keys"
                    )
                self.state = EventState.SUBSEQUENT_MAP_KEY
                continue

            if state in (
                EventState.FIRST_ARRAY_VALUE,
                EventState.SUBSEQUENT_ARRAY_VALUE,
            ):
                if (
                    state is EventState.FIRST_ARRAY_VALUE
                    and token is Lexeme.ARRAY_END
                ):
                    self._pop()
                    return token
                self.state = EventState.ARRAY_COMMA_OR_END
                self._maybe_enter_nested(token)
                return token

            # ARRAY_COMMA_OR_END
            if token is Lexeme.ARRAY_END:
                self._pop()
                return token
            if token is not Lexeme.COMMA:
                raise self.tokenizer.syntax_error(
                    "Expected comma separating array values"
                )
            self.state = EventState.SUBSEQUENT_ARRAY_VALUE

    def _maybe_enter_nested(self, token: Token) -> None:
        """Opens a container, or rejects a lexeme where a value belongs."""
        if token is Lexeme.OBJECT_START:
            self._push(EventState.FIRST_MAP_KEY)
        elif token is Lexeme.ARRAY_START:
            self._push(EventState.FIRST_ARRAY_VALUE)
        elif isinstance(token, Lexeme):
            raise self.tokenizer.syntax_error(
                f"Unexpected lexeme {token.value!r}"
            )

    def _push(self, state: EventState) -> None:
        self._stack.append(self.state)
        self.state = state

    def _pop(self) -> None:
        self.state = self._stack.pop()
