"""Error types raised while lexing command-line arguments."""

from __future__ import annotations


class Error(Exception):
    """Base class for every argument error.

    ``str(exc)`` is the human-readable message produced by ``format()``.
    """

    def __init__(self) -> None:
        super().__init__(self.format())

    def format(self) -> str:
        raise NotImplementedError


class MissingValue(Error):
    """An option needed a value but none was left."""

    def __init__(self, option: str | None = None) -> None:
        self.option = option
        super().__init__()

    def format(self) -> str:
        if self.option is None:
            return "missing argument"
        return f"missing value for option '{self.option}'"


class UnexpectedOption(Error):
    """An option was found that the program does not know."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__()

    def format(self) -> str:
        return f"invalid option '{self.option}'"


class UnexpectedArgument(Error):
    """A positional argument was found where none was expected."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__()

    def format(self) -> str:
        return f"unexpected argument {self.value!r}"


class UnexpectedValue(Error):
    """An option got a value it did not claim, as in ``--flag=value``."""

    def __init__(self, option: str, value: str) -> None:
        self.option = option
        self.value = value
        super().__init__()

    def format(self) -> str:
        return f"unexpected argument for option '{self.option}': {self.value!r}"


class ParsingFailed(Error):
    """Converting a value failed. ``cause`` is the converter's exception."""

    def __init__(self, value: str, cause: BaseException) -> None:
        self.value = value
        self.cause = cause
        super().__init__()

    def format(self) -> str:
        return f"cannot parse argument {self.value!r}: {self.cause}"


class NonUnicodeValue(Error):
    """A value held bytes that are not valid text."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__()

    def format(self) -> str:
        return f"argument is invalid unicode: {self.value!r}"


class Custom(Error):
    """Wraps an arbitrary error (or message) raised by the calling program."""

    def __init__(self, error: BaseException | str) -> None:
        self.error = error
        super().__init__()

    def format(self) -> str:
        return str(self.error)
