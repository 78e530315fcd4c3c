"""Test raw_args(), try_raw_args() and the RawArgs cursor."""

import pytest

from lexopt.args import Long, Short, Value
from lexopt.errors import UnexpectedValue
from lexopt.parser import Parser
from lexopt.rawargs import RawArgs


class TestRawArgs:
    def test_at_start(self, parse):
        p = parse("-a b")
        raw = p.raw_args()
        assert isinstance(raw, RawArgs)
        assert raw.as_list() == ["-a", "b"]

    def test_pending_value_raises(self, parse):
        p = parse("-o=v rest")
        assert p.next() == Short("o")
        with pytest.raises(UnexpectedValue) as exc_info:
            p.raw_args()
        assert exc_info.value.option == "-o"
        assert exc_info.value.value == "v"
        # The value was drained, so a second call succeeds
        assert p.raw_args().as_list() == ["rest"]

    def test_rest_of_cluster_raises(self, parse):
        p = parse("-ab")
        assert p.next() == Short("a")
        with pytest.raises(UnexpectedValue) as exc_info:
            p.raw_args()
        assert exc_info.value.option == "-a"
        assert exc_info.value.value == "b"
        assert p.next() is None

    def test_pending_long_value_raises(self, parse):
        p = parse("--opt=x")
        p.next()
        with pytest.raises(UnexpectedValue) as exc_info:
            p.raw_args()
        assert exc_info.value.option == "--opt"

    def test_exhausted_cluster_is_fine(self, parse):
        p = parse("-a b")
        p.next()
        assert p.raw_args().as_list() == ["b"]

    def test_shares_index_with_parser(self, parse):
        p = parse("-a b c d")
        p.next()
        raw = p.raw_args()
        assert next(raw) == "b"
        assert p.next() == Value("c")
        assert raw.as_list() == ["d"]

    def test_iterate_everything(self, parse):
        p = parse("x -y --z")
        assert list(p.raw_args()) == ["x", "-y", "--z"]
        assert p.next() is None

    def test_after_separator(self, parse):
        p = parse("a -- -x")
        assert p.next() == Value("a")
        assert p.raw_args().as_list() == ["--", "-x"]

    def test_in_finished_mode(self, parse):
        p = parse("-- a b")
        assert p.next() == Value("a")
        raw = p.try_raw_args()
        assert raw is not None
        assert raw.as_list() == ["b"]

    def test_repr(self, parse):
        assert repr(parse("a b").raw_args()) == "RawArgs(['a', 'b'])"


class TestTryRawArgs:
    def test_none_when_pending(self, parse):
        p = parse("-ab")
        assert p.next() == Short("a")
        assert p.try_raw_args() is None
        # Nothing was consumed
        assert p.next() == Short("b")

    def test_none_for_pending_long_value(self, parse):
        p = parse("--opt=x")
        p.next()
        assert p.try_raw_args() is None
        assert p.value() == "x"

    def test_empty_remainder_is_not_none(self):
        p = Parser.from_args([])
        raw = p.try_raw_args()
        assert raw is not None
        assert raw.peek() is None
        assert next(raw, None) is None


class TestCursor:
    def test_peek_does_not_consume(self, parse):
        p = parse("a b")
        raw = p.raw_args()
        assert raw.peek() == "a"
        assert raw.peek() == "a"
        assert p.next() == Value("a")

    def test_next_if(self, parse):
        p = parse("-13 --follow")
        raw = p.raw_args()
        assert raw.next_if(lambda a: a.startswith("--")) is None
        assert raw.next_if(lambda a: a.lstrip("-").isdigit()) == "-13"
        assert p.next() == Long("follow")

    def test_next_if_at_end(self):
        raw = Parser.from_args([]).raw_args()
        assert raw.next_if(lambda a: True) is None

    def test_as_list_does_not_consume(self, parse):
        p = parse("a b")
        raw = p.raw_args()
        assert raw.as_list() == ["a", "b"]
        assert raw.as_list() == ["a", "b"]
        assert next(raw) == "a"

    def test_stop_iteration(self, parse):
        raw = parse("a").raw_args()
        assert next(raw) == "a"
        with pytest.raises(StopIteration):
            next(raw)

    def test_raw_tokens_are_not_sanitized(self):
        p = Parser.from_args([b"-\xff"])
        assert p.raw_args().as_list() == ["-\udcff"]
