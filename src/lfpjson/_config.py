"""Immutable option objects for reading and writing."""

from dataclasses import dataclass
from dataclasses import fields


def _check_flags(config: object) -> None:
    for field in fields(config):  # type: ignore[arg-type]
        if not isinstance(getattr(config, field.name), bool):
            raise TypeError(f"{field.name} must be a boolean")


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures tokenizer behavior with immutable settings.

    The defaults accept the lenient dialect: single-quoted strings and
    ``//`` line comments, with a leading byte-order mark ignored.
    """

    skip_bom: bool = True
    allow_comments: bool = True
    allow_single_quotes: bool = True

    def __post_init__(self) -> None:
        _check_flags(self)


@dataclass(frozen=True)
class WriterConfig:
    """
    Configures serialization with immutable settings.

    ``indent`` turns on pretty-printing, ``sort_keys`` gives deterministic
    object key order and ``escape_slash`` writes ``/`` as ``\\/``.
    """

    indent: bool = False
    sort_keys: bool = True
    escape_slash: bool = True

    def __post_init__(self) -> None:
        _check_flags(self)
