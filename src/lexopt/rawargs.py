"""Shared token cursor and the raw-argument view over it."""

from __future__ import annotations

from collections.abc import Callable, Iterable


class ArgSource:
    """Immutable token tuple with a read index that only moves forward.

    A Parser and every RawArgs created from it share one ArgSource, so a
    token consumed through any of them is gone for all of them.
    """

    __slots__ = ("tokens", "index")

    def __init__(self, tokens: Iterable[str]) -> None:
        self.tokens: tuple[str, ...] = tuple(tokens)
        self.index = 0

    def peek(self) -> str | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def pop(self) -> str | None:
        token = self.peek()
        if token is not None:
            self.index += 1
        return token

    def remaining(self) -> tuple[str, ...]:
        return self.tokens[self.index :]


class RawArgs:
    """Iterator over the parser's unconsumed raw tokens.

    Obtained from ``Parser.raw_args()`` or ``Parser.try_raw_args()``. Use it
    to handle syntax the parser does not know about, such as ``-13`` meaning
    ``-n 13``, then go back to ``Parser.next()``.
    """

    def __init__(self, source: ArgSource) -> None:
        self._source = source

    def __iter__(self) -> RawArgs:
        return self

    def __next__(self) -> str:
        token = self._source.pop()
        if token is None:
            raise StopIteration
        return token

    def peek(self) -> str | None:
        """Return the next token without consuming it."""
        return self._source.peek()

    def next_if(self, predicate: Callable[[str], bool]) -> str | None:
        """Consume and return the next token only if predicate accepts it."""
        token = self._source.peek()
        if token is not None and predicate(token):
            return self._source.pop()
        return None

    def as_list(self) -> list[str]:
        """Return the remaining tokens without consuming them."""
        return list(self._source.remaining())

    def __repr__(self) -> str:
        return f"RawArgs({self.as_list()!r})"
