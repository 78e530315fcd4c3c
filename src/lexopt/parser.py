"""The argument parser: a pull-based lexer over command-line tokens."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from lexopt.args import Arg, Long, Short, Value
from lexopt.errors import MissingValue, UnexpectedValue
from lexopt.rawargs import ArgSource, RawArgs
from lexopt.text import REPLACEMENT_CHARACTER, codepoint_at, is_surrogate, sanitize, to_token
from lexopt.values import ValuesIter

logger = logging.getLogger(__name__)

RawArg = str | bytes | os.PathLike[str] | os.PathLike[bytes]


# ----------------------------------------------------------------------
# Lexing states
# ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class _Idle:
    """Nothing is in progress."""


@dataclass(frozen=True, slots=True)
class _PendingValue:
    """The last token was --option=value and value has not been used."""

    value: str


@dataclass(slots=True)
class _Shorts:
    """Inside a -abc cluster; pos indexes the next unconsumed unit."""

    arg: str
    pos: int


@dataclass(frozen=True, slots=True)
class _FinishedOpts:
    """A -- was seen; everything after it is positional."""


_State = _Idle | _PendingValue | _Shorts | _FinishedOpts

_IDLE = _Idle()
_FINISHED = _FinishedOpts()


class Parser:
    """Pull options and positional values out of a list of raw arguments.

    Call ``next()`` repeatedly. After it returns an option, ``value()``,
    ``values()`` or ``optional_value()`` claim that option's argument.
    ``raw_args()`` and ``try_raw_args()`` give direct access to the remaining
    tokens for syntax the parser does not handle itself.
    """

    def __init__(self, args: Iterable[RawArg], bin_name: RawArg | None = None) -> None:
        self._source = ArgSource(to_token(arg) for arg in args)
        self._state: _State = _IDLE
        self._last_option: Short | Long | None = None
        self._bin_name = sanitize(to_token(bin_name)) if bin_name is not None else None
        logger.debug(
            "parser created: %d tokens, bin_name=%r", len(self._source.tokens), self._bin_name
        )

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> Parser:
        """Parse ``sys.argv``; its first element is the program name."""
        return cls.from_iter(sys.argv)

    @classmethod
    def from_iter(cls, args: Iterable[RawArg]) -> Parser:
        """Parse args whose first element is the program name.

        An empty sequence gives a parser with no program name and no tokens.
        """
        it = iter(args)
        bin_name = next(it, None)
        return cls(it, bin_name=bin_name)

    @classmethod
    def from_args(cls, args: Iterable[RawArg]) -> Parser:
        """Parse args without a program name in front."""
        return cls(args)

    # ------------------------------------------------------------------
    # Lexing
    # ------------------------------------------------------------------

    def next(self) -> Arg | None:
        """Return the next option or positional argument, or None at the end.

        Raises UnexpectedValue if the last option had a value that was never
        consumed, as in ``--option=value`` or ``-o=value``. Parsing can
        continue after that error.
        """
        state = self._state

        if isinstance(state, _PendingValue):
            self._state = _IDLE
            option = self._format_last_option()
            if option is None:
                raise RuntimeError("internal error: pending value without an option")
            logger.debug("unclaimed value %r for %s", state.value, option)
            raise UnexpectedValue(option, state.value)

        if isinstance(state, _Shorts):
            short = self._next_short(state)
            if short is not None:
                return short
            # Cluster exhausted, state is idle again: read the next token.

        elif isinstance(state, _FinishedOpts):
            return self._next_positional()

        token = self._source.pop()
        if token is None:
            return None

        if token == "--":
            logger.debug("option separator seen, remaining tokens are positional")
            self._state = _FINISHED
            return self._next_positional()

        if token.startswith("--"):
            name, eq, value = token.partition("=")
            if eq:
                self._state = _PendingValue(value)
            option = Long(sanitize(name[2:]))
            self._last_option = option
            return option

        if token.startswith("-") and token != "-":
            shorts = _Shorts(token, 1)
            self._state = shorts
            # A cluster holds at least one unit after the dash, so this yields.
            return self._next_short(shorts)

        return Value(token)

    def __iter__(self) -> Iterator[Arg]:
        """Yield arguments until the input is exhausted.

        The loop body may claim values with ``value()`` and friends.
        """
        while (arg := self.next()) is not None:
            yield arg

    def _next_short(self, state: _Shorts) -> Short | None:
        ch = codepoint_at(state.arg, state.pos)

        if ch is None:
            self._state = _IDLE
            return None

        if ch == "=" and state.pos > 1:
            # "-=" on its own is an option; "-o=..." is a value nobody asked for.
            option = self._format_last_option()
            value = self.optional_value()
            if option is None or value is None:
                raise RuntimeError("internal error: '=' in cluster without an option")
            logger.debug("unclaimed value %r for %s", value, option)
            raise UnexpectedValue(option, value)

        state.pos += 1
        if is_surrogate(ch):
            ch = REPLACEMENT_CHARACTER
        short = Short(ch)
        self._last_option = short
        return short

    def _next_positional(self) -> Value | None:
        token = self._source.pop()
        if token is None:
            return None
        return Value(token)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def value(self) -> str:
        """Return the value of the option that was just emitted.

        Takes the attached value (``-ovalue``, ``--option=value``) if there
        is one, else the next token, even if it looks like an option.

        Raises MissingValue if no tokens are left.
        """
        value = self.optional_value()
        if value is not None:
            return value

        token = self._source.pop()
        if token is not None:
            return token

        raise MissingValue(self._format_last_option())

    def values(self) -> ValuesIter:
        """Return an iterator over one or more values for the current option.

        Values are taken greedily until a token that looks like an option.
        An attached ``=value`` limits the option to that single value. ``--``
        is never consumed. Abandoning the iterator early leaves the rest of
        the tokens for ``next()``.

        Raises MissingValue if not even one value is available.
        """
        if self._has_pending() or self._next_is_normal():
            return ValuesIter(self)
        raise MissingValue(self._format_last_option())

    def optional_value(self) -> str | None:
        """Return a value attached to the last option, if there is one.

        Never consumes another token: ``-ovalue`` and ``--option=value`` give
        ``"value"``, ``-o value`` gives None.
        """
        result = self._raw_optional_value()
        if result is None:
            return None
        return result[0]

    def _raw_optional_value(self) -> tuple[str, bool] | None:
        """Take the attached value, reporting whether it followed an ``=``."""
        state = self._state
        self._state = _IDLE

        if isinstance(state, _PendingValue):
            return state.value, True

        if isinstance(state, _Shorts):
            pos = state.pos
            if pos >= len(state.arg):
                return None
            had_eq = state.arg[pos] == "="
            if had_eq:
                pos += 1
            return state.arg[pos:], had_eq

        if isinstance(state, _FinishedOpts):
            self._state = state

        return None

    def _has_pending(self) -> bool:
        state = self._state
        if isinstance(state, _PendingValue):
            return True
        if isinstance(state, _Shorts):
            return state.pos < len(state.arg)
        return False

    def _next_is_normal(self) -> bool:
        """Return True if the next token can be taken as a plain value."""
        if self._has_pending():
            raise RuntimeError("internal error: lookahead with a pending value")
        token = self._source.peek()
        if token is None:
            return False
        if isinstance(self._state, _FinishedOpts):
            return True
        if token == "-":
            return True
        return not token.startswith("-")

    def _next_if_normal(self) -> str | None:
        if self._next_is_normal():
            return self._source.pop()
        return None

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def raw_args(self) -> RawArgs:
        """Return an iterator over the remaining raw tokens.

        Raises UnexpectedValue if the last option still has an attached
        value (``-o=value``). That value is consumed, so calling again
        succeeds.
        """
        value = self.optional_value()
        if value is not None:
            option = self._format_last_option()
            if option is None:
                raise RuntimeError("internal error: attached value without an option")
            raise UnexpectedValue(option, value)
        return RawArgs(self._source)

    def try_raw_args(self) -> RawArgs | None:
        """Like ``raw_args()`` but return None instead of raising.

        Nothing is consumed when a value is pending, so this is safe to call
        before deciding whether to fall back to ``next()``.
        """
        if self._has_pending():
            return None
        return RawArgs(self._source)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def bin_name(self) -> str | None:
        """The program name (``argv[0]``), if the parser was given one."""
        return self._bin_name

    def _format_last_option(self) -> str | None:
        option = self._last_option
        if isinstance(option, Short):
            return f"-{option.char}"
        if isinstance(option, Long):
            return f"--{option.name}"
        return None

    def __repr__(self) -> str:
        return (
            f"Parser(remaining={list(self._source.remaining())!r}, "
            f"state={self._state!r}, bin_name={self._bin_name!r})"
        )
