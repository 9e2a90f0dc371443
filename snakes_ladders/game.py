"""Game state: applies commands and sequences turns until someone wins."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger

from snakes_ladders.board import Board
from snakes_ladders.commands import (
    BoardCommand,
    Command,
    DiceCommand,
    LadderCommand,
    PlayersCommand,
    PowerUpCommand,
    SnakeCommand,
    TurnsCommand,
)
from snakes_ladders.engine import (
    MAX_PLAYERS,
    Move,
    PlayerState,
    player_name,
    resolve_roll,
)
from snakes_ladders.errors import ConfigurationError
from snakes_ladders.render import render_board


# ── Structured types ────────────────────────────────────────────────

@dataclass
class TurnRecord:
    """Record of a single resolved player-turn."""

    turn_number: int
    player: int
    roll: int
    positions_before: list[int]
    positions_after: list[int]
    moves: list[Move]
    won: bool = False


# ── Observer ────────────────────────────────────────────────────────

class GameObserver(Protocol):
    """Receives a record after every resolved player-turn."""

    def on_turn(self, record: TurnRecord) -> None: ...


@dataclass
class ListObserver:
    """Default observer, collects records into a list."""

    records: list[TurnRecord] = field(default_factory=list)

    def on_turn(self, record: TurnRecord) -> None:
        self.records.append(record)


# ── State ───────────────────────────────────────────────────────────

class GameState:
    """Board, players, dice cycle and turn counter for one match.

    Starts unconfigured; ``turns`` is only legal once ``board``,
    ``players`` and ``dice`` have all been applied.
    """

    def __init__(self, observer: GameObserver | None = None):
        self.board: Board | None = None
        self.players: list[PlayerState] = []
        self.dice: tuple[int, ...] = ()
        self.turn = 0
        self.observer = observer or ListObserver()

    # ── setup ──

    def set_board(self, columns: int, rows: int) -> None:
        if self.board is None:
            self.board = Board(columns, rows)
        else:
            self.board.set_size(columns, rows)

    def set_player_count(self, count: int) -> None:
        if not 1 <= count <= MAX_PLAYERS:
            raise ConfigurationError(
                f"Player count must be between 1 and {MAX_PLAYERS}, got {count}."
            )
        self.players = [PlayerState() for _ in range(count)]

    def set_dice(self, faces: tuple[int, ...] | list[int]) -> None:
        if not faces or any(f < 1 for f in faces):
            raise ConfigurationError(f"Dice faces must be positive, got {list(faces)}.")
        self.dice = tuple(faces)

    def _require_board(self) -> Board:
        if self.board is None:
            raise ConfigurationError("The board size must be set before adding features.")
        return self.board

    def apply(self, command: Command) -> None:
        if isinstance(command, BoardCommand):
            self.set_board(command.columns, command.rows)
        elif isinstance(command, PlayersCommand):
            self.set_player_count(command.count)
        elif isinstance(command, DiceCommand):
            self.set_dice(command.faces)
        elif isinstance(command, LadderCommand):
            self._require_board().add_ladder(command.start, command.end)
        elif isinstance(command, SnakeCommand):
            self._require_board().add_snake(command.start, command.end)
        elif isinstance(command, PowerUpCommand):
            self._require_board().add_powerups(command.kind, list(command.cells))
        elif isinstance(command, TurnsCommand):
            self.play_turns(command.count)
        else:
            raise ConfigurationError(f"Unknown command: {command!r}")

    # ── play ──

    def next_roll(self) -> int:
        return self.dice[self.turn % len(self.dice)]

    def play_turns(self, count: int) -> int | None:
        """Play up to *count* rounds. Returns the winner's index, if any."""
        if self.board is None or not self.players or not self.dice:
            raise ConfigurationError(
                "board, players and dice must all be set before playing turns."
            )
        winner = self.winner()
        if winner is not None:
            logger.debug(f"Player {player_name(winner)} has already won; ignoring turns {count}")
            return winner

        for _ in range(count):
            for player_idx in range(len(self.players)):
                if self._play_turn(player_idx):
                    winner = self.winner()
                    assert winner is not None
                    logger.info(f"Player {player_name(winner)} won on turn {self.turn}")
                    return winner
        return None

    def _play_turn(self, player_idx: int) -> bool:
        roll = self.next_roll()
        before = [p.location for p in self.players]
        result = resolve_roll(self.board, self.players, player_idx, roll)
        self.turn += 1
        self.observer.on_turn(TurnRecord(
            turn_number=self.turn,
            player=player_idx,
            roll=roll,
            positions_before=before,
            positions_after=[p.location for p in self.players],
            moves=result.moves,
            won=result.won,
        ))
        return result.won

    # ── queries ──

    def winner(self) -> int | None:
        """Index of the player at or beyond the last cell, if any."""
        if self.board is None:
            return None
        size = self.board.size()
        for idx, player in enumerate(self.players):
            if player.location >= size:
                return idx
        return None

    def render(self) -> str:
        board = self._require_board()
        return render_board(board, self.players, self.winner())
