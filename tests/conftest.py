"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from lexopt.args import Arg
from lexopt.parser import Parser


@pytest.fixture
def parse():
    """Return a helper that builds a Parser from a whitespace-separated string."""

    def _parse(args: str) -> Parser:
        return Parser.from_args(args.split())

    return _parse


def collect(parser: Parser) -> list[Arg]:
    """Call next() until the input is exhausted and return everything emitted."""
    args = []
    while (arg := parser.next()) is not None:
        args.append(arg)
    return args


def assert_args(parser: Parser, expected: list[Arg]) -> None:
    """Assert that the parser emits exactly expected and then stops."""
    actual = collect(parser)
    assert actual == expected, f"Expected {expected}, got {actual}"
    assert parser.next() is None
