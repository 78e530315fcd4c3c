"""A pull-based lexer for command-line arguments."""

from __future__ import annotations

from lexopt.args import Arg, Long, Short, Value
from lexopt.errors import (
    Custom,
    Error,
    MissingValue,
    NonUnicodeValue,
    ParsingFailed,
    UnexpectedArgument,
    UnexpectedOption,
    UnexpectedValue,
)
from lexopt.parser import Parser
from lexopt.rawargs import RawArgs
from lexopt.text import parse_value, value_string
from lexopt.values import ValuesIter

__version__ = "0.1.0"

__all__ = [
    "Arg",
    "Custom",
    "Error",
    "Long",
    "MissingValue",
    "NonUnicodeValue",
    "Parser",
    "ParsingFailed",
    "RawArgs",
    "Short",
    "UnexpectedArgument",
    "UnexpectedOption",
    "UnexpectedValue",
    "Value",
    "ValuesIter",
    "__version__",
    "parse_value",
    "value_string",
]
