"""Lazy collector for options that take several values."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexopt.parser import Parser


class ValuesIter:
    """Iterator returned by ``Parser.values()``.

    Yields the attached value or the next token first, then keeps taking
    tokens for as long as they do not look like options. An ``=``-attached
    value is always the only one. Once exhausted it stays exhausted.
    """

    def __init__(self, parser: Parser) -> None:
        self._parser: Parser | None = parser
        self._took_first = False

    def __iter__(self) -> ValuesIter:
        return self

    def __next__(self) -> str:
        parser = self._parser
        if parser is None:
            raise StopIteration

        if self._took_first:
            value = parser._next_if_normal()
        else:
            self._took_first = True
            attached = parser._raw_optional_value()
            if attached is not None:
                value, had_eq = attached
                if had_eq:
                    self._parser = None
                return value
            value = parser._next_if_normal()
            if value is None:
                raise RuntimeError(
                    "internal error: ValuesIter must yield at least one value "
                    "(were tokens consumed before the first pull?)"
                )

        if value is None:
            self._parser = None
            raise StopIteration
        return value
