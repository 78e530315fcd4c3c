"""Codepoint and sanitization helpers for raw argument text.

Tokens are ``str`` values decoded the way Python decodes ``sys.argv``: bytes
that are not valid in the filesystem encoding become lone surrogates
(``surrogateescape``). Those surrogates are the "invalid text units" this
module deals with.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from typing import TypeVar

from lexopt.errors import NonUnicodeValue, ParsingFailed

T = TypeVar("T")

REPLACEMENT_CHARACTER = "\ufffd"

_SURROGATES = re.compile("[\ud800-\udfff]")


def is_surrogate(ch: str) -> bool:
    """Return True if ch is a lone surrogate, i.e. an undecodable unit."""
    return "\ud800" <= ch <= "\udfff"


def is_valid_text(s: str) -> bool:
    """Return True if s holds no undecodable units."""
    return _SURROGATES.search(s) is None


def sanitize(s: str) -> str:
    """Replace every undecodable unit in s with U+FFFD."""
    return _SURROGATES.sub(REPLACEMENT_CHARACTER, s)


def codepoint_at(s: str, pos: int) -> str | None:
    """Return the unit at pos, or None when pos is past the end."""
    if pos < len(s):
        return s[pos]
    return None


def to_token(arg: str | bytes | os.PathLike[str] | os.PathLike[bytes]) -> str:
    """Normalize a raw argument to ``str``, keeping undecodable bytes."""
    return os.fsdecode(arg)


def value_string(value: str) -> str:
    """Return value unchanged if it is valid text, else raise NonUnicodeValue."""
    if not is_valid_text(value):
        raise NonUnicodeValue(value)
    return value


def parse_value(value: str, converter: Callable[[str], T]) -> T:
    """Convert value with converter, reporting failures as ParsingFailed.

    >>> parse_value("10", int)
    10
    """
    text = value_string(value)
    try:
        return converter(text)
    except (ValueError, TypeError) as exc:
        raise ParsingFailed(value, exc) from exc
