"""Record and print what a parser makes of a token list."""

from __future__ import annotations

import json
import sys
from collections.abc import Collection
from dataclasses import dataclass
from typing import TextIO

from lexopt.args import Short, Value
from lexopt.errors import Error
from lexopt.parser import Parser


@dataclass(frozen=True, slots=True)
class TraceEntry:
    """One step of a trace: an argument with any values it claimed, or an error."""

    kind: str  # "short", "long", "value" or "error"
    text: str
    values: tuple[str, ...] = ()


def trace(
    parser: Parser,
    value_options: Collection[str] = (),
    multi_options: Collection[str] = (),
) -> list[TraceEntry]:
    """Drive parser to the end of its input and record every step.

    Options are named the way they are written (``-n``, ``--number``).
    Those in value_options claim one value, those in multi_options claim
    values greedily. Errors are recorded and parsing carries on.
    """
    entries: list[TraceEntry] = []
    while True:
        try:
            arg = parser.next()
        except Error as exc:
            entries.append(TraceEntry("error", str(exc)))
            continue
        if arg is None:
            return entries

        if isinstance(arg, Value):
            entries.append(TraceEntry("value", arg.value))
            continue

        if isinstance(arg, Short):
            kind, written = "short", f"-{arg.char}"
        else:
            kind, written = "long", f"--{arg.name}"

        try:
            if written in multi_options:
                values = tuple(parser.values())
            elif written in value_options:
                values = (parser.value(),)
            else:
                values = ()
        except Error as exc:
            entries.append(TraceEntry(kind, written))
            entries.append(TraceEntry("error", str(exc)))
            continue
        entries.append(TraceEntry(kind, written, values))


def dump_trace(
    entries: list[TraceEntry], *, file: TextIO = sys.stdout, as_json: bool = False
) -> None:
    """Print entries to *file*, one per line."""
    for entry in entries:
        if as_json:
            _dump_json(entry, file)
        else:
            _dump_text(entry, file)


def _dump_text(entry: TraceEntry, f: TextIO) -> None:
    if entry.kind == "error":
        f.write(f"error: {entry.text}\n")
    elif entry.kind == "value":
        f.write(f"Value({entry.text!r})\n")
    else:
        label = "Short" if entry.kind == "short" else "Long"
        f.write(f"{label}({entry.text})")
        if entry.values:
            f.write(" = " + ", ".join(repr(v) for v in entry.values))
        f.write("\n")


def _dump_json(entry: TraceEntry, f: TextIO) -> None:
    record: dict[str, object] = {"kind": entry.kind, "text": entry.text}
    if entry.values:
        record["values"] = list(entry.values)
    # ensure_ascii writes lone surrogates as \udcXX escapes.
    f.write(json.dumps(record) + "\n")

