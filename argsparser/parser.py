"""Command-line argument parser with reflowed usage and help output."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, TextIO, Tuple, Union

from .config import DEFAULT_PROGRAM_NAME, ParserConfig
from .errors import (
    DuplicateArgumentError,
    HelpShown,
    InsufficientParametersError,
    PositionalIndexError,
    UnknownArgumentError,
)
from .reflow import DEFAULT_LINE_SIZE, reflow

__all__ = ["ArgsParser", "HELP_ALIASES"]

_LOGGER = logging.getLogger("argsparser.parser")

HELP_ALIASES: Tuple[str, ...] = ("-h", "/h", "\\h", "--help", "/help", "\\help")

_DEFAULT_INDENT = 4


@dataclass(frozen=True, slots=True)
class _OptionHelp:
    aliases: Tuple[str, ...]
    params_help: str
    help_text: str

    def render(self) -> str:
        return f"{', '.join(self.aliases)} {self.params_help}\n{self.help_text}"


class ArgsParser:
    """Registers options and positionals, parses argv and prints help.

    Options are looked up by any of their aliases; all aliases of one option
    share a dense integer identifier assigned at registration. Each option
    has a fixed number of value slots (its arity) that parsing fills from the
    tokens immediately following the alias. Tokens that are not known aliases
    fill the registered positional arguments in order.
    """

    def __init__(
        self,
        show_help: bool = True,
        description: str = "",
        epilogue: str = "",
        program_name: str = "",
        exit_on_help: bool = True,
        margin_size: int = 0,
        line_size: int = DEFAULT_LINE_SIZE,
        *,
        stream: Optional[TextIO] = None,
    ) -> None:
        if margin_size < 0:
            raise ValueError("margin_size must not be negative.")
        if line_size < 0:
            raise ValueError("line_size must not be negative.")
        self._exit_on_help = exit_on_help
        self._margin_size = margin_size
        self._line_size = line_size
        self._stream = stream
        self._program_name = program_name
        self._description = reflow(description, 0, line_size) if description else ""
        self._epilogue = reflow(epilogue, 0, line_size) if epilogue else ""
        self._help_id: Optional[int] = None

        self._aliases: Dict[str, int] = {}
        self._values: Dict[int, List[str]] = {}
        self._present: Set[int] = set()
        self._option_help: Dict[str, _OptionHelp] = {}
        self._positional_args: List[Tuple[str, str]] = []
        self._positional_values: List[str] = []

        if show_help:
            help_text = ("" if margin_size > 0 else " " * _DEFAULT_INDENT) + "Shows this help."
            self._help_id = self.add_option(HELP_ALIASES, 0, "", help_text)

    @classmethod
    def from_config(cls, config: ParserConfig, **overrides) -> "ArgsParser":
        """Build a parser from ``config``; keyword ``overrides`` win."""

        kwargs = config.to_dict()
        kwargs.update(overrides)
        return cls(**kwargs)

    # -- configuration ---------------------------------------------------

    @property
    def program_name(self) -> str:
        return self._program_name

    @property
    def description(self) -> str:
        return self._description

    @property
    def epilogue(self) -> str:
        return self._epilogue

    @property
    def help_id(self) -> Optional[int]:
        return self._help_id

    @property
    def margin_size(self) -> int:
        return self._margin_size

    @property
    def line_size(self) -> int:
        return self._line_size

    @property
    def exit_on_help(self) -> bool:
        return self._exit_on_help

    def fix_help_text(self, text: str) -> str:
        """Reflow ``text`` with this parser's margin and line size."""

        return reflow(text, self._margin_size, self._line_size)

    # -- registration ----------------------------------------------------

    def add_option(
        self,
        aliases: Union[str, Sequence[str]],
        arity: int = 0,
        params_help: str = "",
        help_text: str = "",
    ) -> int:
        """Register an option under every name in ``aliases``.

        ``arity`` is the number of tokens consumed after the alias. Returns the
        identifier shared by all aliases. Raises :class:`DuplicateArgumentError`
        if any alias is already taken; nothing is registered in that case.
        """

        names = (aliases,) if isinstance(aliases, str) else tuple(aliases)
        if not names:
            raise ValueError("Invalid empty arguments.")
        if arity < 0:
            raise ValueError("arity must not be negative.")
        seen: Set[str] = set()
        for name in names:
            if name in self._aliases or name in seen:
                raise DuplicateArgumentError(name)
            seen.add(name)

        option_id = len(self._values)
        for name in names:
            self._aliases[name] = option_id
        self._values[option_id] = [""] * arity
        self._option_help[names[0]] = _OptionHelp(names, params_help, self.fix_help_text(help_text))
        _LOGGER.debug("Registered option %s (id=%d, arity=%d)", ", ".join(names), option_id, arity)
        return option_id

    def add_positional(self, name: str, help_text: str = "") -> int:
        """Append a positional argument and return its index."""

        self._positional_args.append((name, self.fix_help_text(help_text)))
        _LOGGER.debug("Registered positional %s at %d", name, len(self._positional_args) - 1)
        return len(self._positional_args) - 1

    # -- parsing ---------------------------------------------------------

    def parse(self, args: Sequence[str], start_index: int = 0) -> None:
        """Parse ``args`` starting at ``start_index``.

        Pass ``sys.argv`` with ``start_index=1`` to skip the program path; the
        program name is then taken from it unless one was configured.
        """

        start_index = max(start_index, 0)
        argc = len(args)
        if argc < start_index:
            raise ValueError("Not enough arguments.")

        if not self._program_name and argc > 0 and start_index > 0:
            self._program_name = Path(args[0]).name
        if not self._program_name:
            self._program_name = DEFAULT_PROGRAM_NAME

        i = start_index
        while i < argc:
            token = args[i]
            try:
                option_id = self.find_id(token)
            except UnknownArgumentError:
                if len(self._positional_values) >= len(self._positional_args):
                    raise
                _LOGGER.debug("Captured positional %d: %r", len(self._positional_values), token)
                self._positional_values.append(token)
                i += 1
                continue

            if option_id == self._help_id:
                self._trigger_help()
                return

            self._present.add(option_id)
            slots = self._values[option_id]
            if slots:
                available = argc - i - 1
                if available < len(slots):
                    raise InsufficientParametersError(token, len(slots), available)
                slots[:] = args[i + 1 : i + 1 + len(slots)]
                i += len(slots)
            i += 1

    def _trigger_help(self) -> None:
        _LOGGER.debug("Help requested; discarding registrations")
        self._aliases.clear()
        self._values.clear()
        self._present.clear()
        self._positional_values.clear()
        self._help_id = None
        self.show_help()

    # -- queries ---------------------------------------------------------

    def is_valid_alias(self, alias: str) -> bool:
        return alias in self._aliases

    def find_id(self, alias: str) -> int:
        """Return the identifier registered for ``alias``."""

        try:
            return self._aliases[alias]
        except KeyError:
            raise UnknownArgumentError(alias) from None

    def was_present(self, arg: Union[str, int]) -> bool:
        """Whether the option (by alias or identifier) appeared in the input."""

        option_id = self.find_id(arg) if isinstance(arg, str) else arg
        return option_id in self._present

    def has_value(self, alias: str) -> bool:
        option_id = self.find_id(alias)
        return option_id in self._present and bool(self._values[option_id])

    def values_for(self, alias: str) -> List[str]:
        return list(self._values[self.find_id(alias)])

    def positional_at(self, index: int) -> str:
        if not 0 <= index < len(self._positional_values):
            raise PositionalIndexError(index, len(self._positional_values))
        return self._positional_values[index]

    @property
    def positional_values(self) -> Tuple[str, ...]:
        return tuple(self._positional_values)

    # -- rendering -------------------------------------------------------

    def _indent(self) -> int:
        return self._margin_size if self._margin_size > 0 else _DEFAULT_INDENT

    def _program_label(self) -> str:
        return self._program_name or DEFAULT_PROGRAM_NAME

    def format_usage(self) -> str:
        prog = self._program_label()
        parts = ["Usage:\n", " " * self._indent(), prog]
        if self._option_help:
            parts.append(" OPTIONS")
        continuation = " " * (len(prog) + 1 + self._indent())
        for name, _ in self._positional_args:
            parts.append(f" \\\n{continuation}{name}")
        parts.append("\n")
        return "".join(parts)

    def format_help(self) -> str:
        parts: List[str] = []
        if self._description:
            parts.append(self._description + "\n\n")
        parts.append(self.format_usage())
        if self._positional_args:
            parts.append(f"\nPOSITIONAL ARGUMENTS: {len(self._positional_args)}\n")
            for name, help_text in self._positional_args:
                parts.append(f"{name}\n{help_text}\n\n")
        if self._option_help:
            parts.append("\nOPTIONS:\n")
            for entry in self._option_help.values():
                if entry.help_text:
                    parts.append(entry.render() + "\n\n")
        if self._epilogue:
            parts.append(f"\n{self._epilogue}\n")
        return "".join(parts)

    def _output(self, stream: Optional[TextIO]) -> TextIO:
        return stream or self._stream or sys.stdout

    def print_usage(self, stream: Optional[TextIO] = None) -> None:
        self._output(stream).write(self.format_usage())

    def show_help(self, stream: Optional[TextIO] = None) -> None:
        """Write the full help text, then exit or raise :class:`HelpShown`."""

        out = self._output(stream)
        out.write(self.format_help())
        out.flush()
        if self._exit_on_help:
            raise SystemExit(0)
        raise HelpShown()
