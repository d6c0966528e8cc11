"""Exceptions raised by :mod:`argsparser`."""

from __future__ import annotations

__all__ = [
    "ArgsParserError",
    "DuplicateArgumentError",
    "UnknownArgumentError",
    "InsufficientParametersError",
    "PositionalIndexError",
    "HelpShown",
]


class ArgsParserError(Exception):
    """Base class for argument registration and parsing failures."""


class DuplicateArgumentError(ArgsParserError, ValueError):
    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f'Invalid duplicated argument: "{argument}".')


class UnknownArgumentError(ArgsParserError, LookupError):
    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f'Invalid argument: "{argument}".')


class InsufficientParametersError(ArgsParserError, ValueError):
    def __init__(self, argument: str, expected: int, available: int) -> None:
        self.argument = argument
        self.expected = expected
        self.available = available
        super().__init__(
            f'Insufficient number of parameters for argument "{argument}".'
        )


class PositionalIndexError(ArgsParserError, IndexError):
    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(
            f"Positional argument {index} out of range ({count} captured)."
        )


class HelpShown(Exception):
    """Raised after help was displayed when the parser does not exit.

    Not an error: callers should stop consuming arguments and usually exit
    successfully.
    """

    def __init__(self, message: str = "Help requested.") -> None:
        super().__init__(message)
