"""Exception types raised by the game engine and the command reader."""

from __future__ import annotations


class SnakesLaddersError(Exception):
    """Base class for every error this package raises."""


class ConfigurationError(SnakesLaddersError):
    """Raised when the board, players or dice are set up illegally."""


class CommandError(SnakesLaddersError):
    """Raised when a command line cannot be parsed."""

    def __init__(self, message: str, line: str):
        super().__init__(f"{message}: {line!r}")
        self.line = line
