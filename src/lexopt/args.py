"""Classified argument types produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass

from lexopt.errors import UnexpectedArgument, UnexpectedOption


@dataclass(frozen=True, slots=True)
class Short:
    """A short option, e.g. ``Short("q")`` for ``-q``."""

    char: str

    def unexpected(self) -> UnexpectedOption:
        """Return the error to raise when this option is not recognised."""
        return UnexpectedOption(f"-{self.char}")


@dataclass(frozen=True, slots=True)
class Long:
    """A long option, e.g. ``Long("verbose")`` for ``--verbose``."""

    name: str

    def unexpected(self) -> UnexpectedOption:
        return UnexpectedOption(f"--{self.name}")


@dataclass(frozen=True, slots=True)
class Value:
    """A positional argument, e.g. ``/etc/passwd``.

    The payload is the raw token. It may contain lone surrogates standing in
    for bytes that were not valid text; ``os.fsencode`` recovers them.
    """

    value: str

    def unexpected(self) -> UnexpectedArgument:
        return UnexpectedArgument(self.value)


Arg = Short | Long | Value
