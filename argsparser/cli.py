"""``argsparser-reflow``: wrap text to a margin and line width.

The command line is handled by :class:`argsparser.ArgsParser` itself, so the
tool doubles as a working example of the library.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .colors import color
from .config import ParserConfig, get_runtime_config
from .errors import ArgsParserError, HelpShown
from .parser import ArgsParser
from .reflow import reflow
from .version import __version__

PROG = "argsparser-reflow"

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2

_LOGGER = logging.getLogger("argsparser.cli")


def build_parser(config: Optional[ParserConfig] = None) -> ArgsParser:
    """Construct the argument parser for the reflow command."""

    config = config or ParserConfig()
    parser = ArgsParser(
        description=(
            "Re-wrap text so each line fits within a line width after a left "
            "margin. Existing line breaks are kept and words are never split."
        ),
        epilogue="Reads standard input when INPUT is omitted or '-'.",
        program_name=config.program_name or PROG,
        exit_on_help=False,
        margin_size=config.margin_size,
        line_size=config.line_size,
    )
    parser.add_option(
        ["-m", "--margin"],
        1,
        "<N>",
        "Number of spaces prefixed to every output line (default: 0).",
    )
    parser.add_option(
        ["-w", "--width"],
        1,
        "<N>",
        f"Total line width including the margin; 0 disables wrapping "
        f"(default: {config.line_size}).",
    )
    parser.add_option(["-v", "--verbose"], 0, "", "Log debug details to stderr.")
    parser.add_option("--version", 0, "", "Print the version and exit.")
    parser.add_positional("INPUT", "Text file to reflow.")
    return parser


def _error(message: str) -> None:
    print(color(f"error: {message}", fg="red", stream=sys.stderr), file=sys.stderr)


def _size_option(parser: ArgsParser, alias: str, default: int) -> int:
    if not parser.has_value(alias):
        return default
    raw = parser.values_for(alias)[0]
    try:
        size = int(raw)
    except ValueError:
        raise ValueError(f'"{alias}" expects an integer, got "{raw}".') from None
    if size < 0:
        raise ValueError(f'"{alias}" must not be negative, got {size}.')
    return size


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv) if argv is not None else sys.argv[1:]
    config = get_runtime_config()
    parser = build_parser(config)

    try:
        parser.parse(args)
    except HelpShown:
        return EXIT_OK
    except ArgsParserError as exc:
        _error(str(exc))
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    if parser.was_present("--verbose"):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if parser.was_present("--version"):
        print(f"{parser.program_name} {__version__}")
        return EXIT_OK

    try:
        margin = _size_option(parser, "--margin", 0)
        width = _size_option(parser, "--width", config.line_size)
    except ValueError as exc:
        _error(str(exc))
        return EXIT_USAGE

    source = parser.positional_values[0] if parser.positional_values else "-"
    try:
        text = _read_input(source)
    except (OSError, UnicodeDecodeError) as exc:
        _error(f"cannot read {source}: {getattr(exc, 'strerror', None) or exc}")
        return EXIT_IO_ERROR

    _LOGGER.debug("Reflowing %d characters (margin=%d, width=%d)", len(text), margin, width)
    sys.stdout.write(reflow(text, margin, width) + "\n")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
