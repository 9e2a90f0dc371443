"""Player state and turn resolution: one die roll becomes a chain of moves."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from loguru import logger

from snakes_ladders.board import (
    Board,
    LadderStart,
    PowerType,
    PowerUp,
    SnakeStart,
    Winning,
)

MAX_PLAYERS = 26


def player_name(index: int) -> str:
    """Players are named A, B, ... by declaration order."""
    return chr(ord("A") + index)


@dataclass
class PlayerState:
    location: int = 1
    powerup: PowerType | None = None

    def take_powerup(self, kind: PowerType) -> bool:
        """Consume *kind* if held. Returns whether it was."""
        if self.powerup is kind:
            self.powerup = None
            return True
        return False


@dataclass
class Move:
    """One relocation within a roll's chain."""

    player: int
    start: int
    landing: int
    end: int
    cause: str  # "roll" | "bump" | "rejected"
    powerup_used: PowerType | None = None
    powerup_gained: PowerType | None = None


@dataclass
class RollResult:
    """What happened after a roll."""

    won: bool = False
    moves: list[Move] = field(default_factory=list)

    @property
    def rejected(self) -> bool:
        return bool(self.moves) and self.moves[0].cause == "rejected"


def _land(board: Board, player: PlayerState, move: Move) -> bool:
    """Apply the effect of the cell *player* just landed on.

    Updates *move* with where the player ends up. Returns True on a win.
    """
    size = board.size()
    prop = board.property_at(player.location)

    if isinstance(prop, Winning):
        pass
    elif isinstance(prop, SnakeStart):
        if player.take_powerup(PowerType.ANTIVENOM):
            move.powerup_used = PowerType.ANTIVENOM
        else:
            player.location = prop.end
    elif isinstance(prop, LadderStart):
        if player.take_powerup(PowerType.ESCALATOR):
            move.powerup_used = PowerType.ESCALATOR
            climb = player.location + 2 * (prop.end - player.location)
            player.location = max(1, min(climb, size))
        else:
            player.location = prop.end
    elif isinstance(prop, PowerUp):
        player.powerup = prop.kind
        move.powerup_gained = prop.kind

    move.end = player.location
    return player.location >= size


def _occupants(players: list[PlayerState], mover: int) -> list[int]:
    cell = players[mover].location
    return [
        idx for idx, other in enumerate(players)
        if idx != mover and other.location == cell
    ]


def _shares_cell(players: list[PlayerState], idx: int) -> bool:
    return any(
        other.location == players[idx].location
        for j, other in enumerate(players) if j != idx
    )


def resolve_roll(
    board: Board, players: list[PlayerState], actor: int, roll: int,
) -> RollResult:
    """Resolve *actor* rolling *roll*, including every bump it causes.

    Mutates *players*. Everyone already on a cell the mover lands on is
    bumped in turn, so the chain stops at the first win or once no two
    players share a cell.
    """
    player = players[actor]
    delta = roll
    doubled = player.take_powerup(PowerType.DOUBLE)
    if doubled:
        delta *= 2

    if player.location + delta > board.size():
        logger.debug(
            f"Player {player_name(actor)} rolled {roll}; "
            f"{player.location} + {delta} is off the board"
        )
        return RollResult(moves=[Move(
            player=actor,
            start=player.location,
            landing=player.location,
            end=player.location,
            cause="rejected",
            powerup_used=PowerType.DOUBLE if doubled else None,
        )])

    result = RollResult()
    mover = actor
    cause = "roll"
    pending: deque[int] = deque()
    while True:
        current = players[mover]
        start = current.location
        current.location += delta
        move = Move(player=mover, start=start, landing=current.location,
                    end=current.location, cause=cause)
        if cause == "roll" and doubled:
            move.powerup_used = PowerType.DOUBLE

        won = _land(board, current, move)
        result.moves.append(move)
        logger.debug(
            f"Player {player_name(mover)} {cause}: {start} -> {move.landing} -> {move.end}"
        )
        if won:
            result.won = True
            return result

        for bumped in _occupants(players, mover):
            logger.debug(
                f"Player {player_name(mover)} bumps {player_name(bumped)} off cell {move.end}"
            )
            pending.append(bumped)

        # A queued player may already have been pushed clear by an earlier bump.
        while pending and not _shares_cell(players, pending[0]):
            pending.popleft()
        if not pending:
            return result
        mover, delta, cause = pending.popleft(), 1, "bump"
