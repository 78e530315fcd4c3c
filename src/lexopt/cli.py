"""Command-line interface: ``lexdump`` shows how tokens are lexed."""

from __future__ import annotations

import logging
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lexopt import __version__
from lexopt.args import Long, Short, Value
from lexopt.debug import dump_trace, trace
from lexopt.errors import Error
from lexopt.parser import Parser
from lexopt.text import value_string

CONFIG_NAME = "lexdump.toml"

USAGE = """\
Usage: lexdump [OPTIONS] [--] TOKEN...

Show how TOKEN... is split into options and values.

Options:
  -o, --value-option OPT   OPT takes one value (repeatable)
  -m, --multi-option OPT   OPT takes one or more values (repeatable)
      --json               Print one JSON object per line
  -c, --config FILE        Config file (default: lexdump.toml if present)
  -v, --verbose            Log parser activity to stderr
  -V, --version            Print version and exit
  -h, --help               Print this help and exit

Put -- before the first TOKEN that starts with a dash.
"""


@dataclass(slots=True)
class CommandLine:
    """What was given on the command line, before config is merged in."""

    tokens: list[str] = field(default_factory=list)
    value_options: list[str] = field(default_factory=list)
    multi_options: list[str] = field(default_factory=list)
    as_json: bool = False
    config: Path | None = None
    verbose: bool = False
    help: bool = False
    version: bool = False


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Resolved options."""

    tokens: list[str]
    value_options: frozenset[str]
    multi_options: frozenset[str]
    as_json: bool


def parse_command_line(argv: list[str] | None = None) -> CommandLine:
    """Parse lexdump's own arguments. argv excludes the program name.

    Raises lexopt.errors.Error on bad usage.
    """
    parser = Parser.from_env() if argv is None else Parser.from_args(argv)
    cmd = CommandLine()
    for arg in parser:
        if arg in (Short("o"), Long("value-option")):
            cmd.value_options.append(value_string(parser.value()))
        elif arg in (Short("m"), Long("multi-option")):
            cmd.multi_options.append(value_string(parser.value()))
        elif arg == Long("json"):
            cmd.as_json = True
        elif arg in (Short("c"), Long("config")):
            cmd.config = Path(parser.value())
        elif arg in (Short("v"), Long("verbose")):
            cmd.verbose = True
        elif arg in (Short("h"), Long("help")):
            cmd.help = True
        elif arg in (Short("V"), Long("version")):
            cmd.version = True
        elif isinstance(arg, Value):
            cmd.tokens.append(arg.value)
        else:
            raise arg.unexpected()
    return cmd


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(cmd: CommandLine, search_dir: Path) -> CliOptions:
    """Merge config file and command line into CliOptions.

    Precedence: config file < command line. Option lists are combined.
    """
    config = load_config(cmd.config, search_dir)

    value_options: set[str] = set()
    multi_options: set[str] = set()
    cfg_options = config.get("options")
    if isinstance(cfg_options, dict):
        cfg_value = cfg_options.get("value")
        if isinstance(cfg_value, list):
            value_options.update(str(o) for o in cfg_value)
        cfg_multi = cfg_options.get("multi")
        if isinstance(cfg_multi, list):
            multi_options.update(str(o) for o in cfg_multi)
    value_options.update(cmd.value_options)
    multi_options.update(cmd.multi_options)

    as_json = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        as_json = cfg_output.get("format") == "json"
    if cmd.as_json:
        as_json = True

    return CliOptions(
        tokens=list(cmd.tokens),
        value_options=frozenset(value_options),
        multi_options=frozenset(multi_options),
        as_json=as_json,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    try:
        cmd = parse_command_line(argv)
    except Error as exc:
        print(f"error: {exc}", file=sys.stderr)
        print("Try 'lexdump --help' for more information.", file=sys.stderr)
        return 2

    if cmd.help:
        sys.stdout.write(USAGE)
        return 0
    if cmd.version:
        print(f"lexdump {__version__}")
        return 0

    if cmd.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr
        )

    try:
        options = resolve_options(cmd, Path("."))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: cannot load config: {exc}", file=sys.stderr)
        return 2

    entries = trace(
        Parser.from_args(options.tokens), options.value_options, options.multi_options
    )
    dump_trace(entries, file=sys.stdout, as_json=options.as_json)

    if any(entry.kind == "error" for entry in entries):
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
