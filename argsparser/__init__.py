"""Command-line argument parsing with reflowed help output."""

from __future__ import annotations

from .config import DEFAULT_PROGRAM_NAME, ParserConfig, get_runtime_config, load_config, reload_config
from .errors import (
    ArgsParserError,
    DuplicateArgumentError,
    HelpShown,
    InsufficientParametersError,
    PositionalIndexError,
    UnknownArgumentError,
)
from .parser import HELP_ALIASES, ArgsParser
from .reflow import DEFAULT_LINE_SIZE, reflow
from .version import __version__

__all__ = [
    "ArgsParser",
    "ArgsParserError",
    "DEFAULT_LINE_SIZE",
    "DEFAULT_PROGRAM_NAME",
    "DuplicateArgumentError",
    "HELP_ALIASES",
    "HelpShown",
    "InsufficientParametersError",
    "ParserConfig",
    "PositionalIndexError",
    "UnknownArgumentError",
    "__version__",
    "get_runtime_config",
    "load_config",
    "main",
    "reflow",
    "reload_config",
]


def main(argv=None):
    from .cli import main as _main

    return _main(argv)
