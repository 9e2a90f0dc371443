"""Command values and the line reader that produces them.

One command per line: a keyword followed by arguments separated by a
single space, e.g. ``board 3 4`` or ``powerup escalator 6 9``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from snakes_ladders.board import PowerType
from snakes_ladders.errors import CommandError


# ── Command types ────────────────────────────────────────────────────

@dataclass(frozen=True)
class BoardCommand:
    columns: int
    rows: int


@dataclass(frozen=True)
class PlayersCommand:
    count: int


@dataclass(frozen=True)
class DiceCommand:
    faces: tuple[int, ...]


@dataclass(frozen=True)
class LadderCommand:
    start: int
    end: int


@dataclass(frozen=True)
class SnakeCommand:
    start: int
    end: int


@dataclass(frozen=True)
class PowerUpCommand:
    kind: PowerType
    cells: tuple[int, ...]


@dataclass(frozen=True)
class TurnsCommand:
    count: int


Command = (
    BoardCommand | PlayersCommand | DiceCommand | LadderCommand
    | SnakeCommand | PowerUpCommand | TurnsCommand
)


# ── Parsing ──────────────────────────────────────────────────────────

# keyword → (exact argument count or None for "one or more")
_ARITY: dict[str, int | None] = {
    "board": 2,
    "players": 1,
    "dice": None,
    "ladder": 2,
    "snake": 2,
    "powerup": None,
    "turns": 1,
}


def _number(text: str, line: str, minimum: int = 1) -> int:
    try:
        value = int(text)
    except ValueError:
        raise CommandError(f"Expected a number, got {text!r}", line) from None
    if value < minimum:
        raise CommandError(f"Expected a number of at least {minimum}, got {text!r}", line)
    return value


def parse_command(line: str) -> Command:
    """Parse one command line. Raises CommandError on anything malformed."""
    keyword, *params = line.split(" ")

    if keyword not in _ARITY:
        raise CommandError(f"Unknown keyword {keyword!r}", line)
    arity = _ARITY[keyword]
    if arity is not None and len(params) != arity:
        raise CommandError(f"{keyword} takes {arity} argument(s), got {len(params)}", line)
    if arity is None and not params:
        raise CommandError(f"{keyword} needs at least one argument", line)

    if keyword == "powerup":
        try:
            kind = PowerType.from_name(params[0])
        except ValueError:
            raise CommandError(f"Unknown powerup {params[0]!r}", line) from None
        if len(params) < 2:
            raise CommandError("powerup needs at least one cell", line)
        return PowerUpCommand(kind, tuple(_number(p, line) for p in params[1:]))

    if keyword == "turns":
        # zero rounds is a legal no-op
        return TurnsCommand(_number(params[0], line, minimum=0))

    nums = [_number(p, line) for p in params]

    if keyword == "board":
        return BoardCommand(columns=nums[0], rows=nums[1])
    if keyword == "players":
        return PlayersCommand(nums[0])
    if keyword == "dice":
        return DiceCommand(tuple(nums))
    if keyword == "ladder":
        return LadderCommand(start=nums[0], end=nums[1])
    return SnakeCommand(start=nums[0], end=nums[1])


def read_commands(lines: Iterable[str]) -> Iterator[Command]:
    """Parse every non-blank line, in order."""
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        yield parse_command(line)
