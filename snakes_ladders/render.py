"""Text rendering of the board, top row first."""

from __future__ import annotations

from snakes_ladders.board import Board
from snakes_ladders.engine import PlayerState, player_name

COLUMN_SEP = "|"


def _row_border(columns: int) -> str:
    return "+---" * columns + "+"


def _occupant_letter(players: list[PlayerState], index: int) -> str:
    for idx, player in enumerate(players):
        if player.location == index:
            return player_name(idx)
    return " "


def render_board(
    board: Board,
    players: list[PlayerState],
    winner: int | None = None,
) -> str:
    """Format the board as text.

    Each cell takes two lines: its number right-justified in three
    characters, then the occupant's letter (or a space) and the cell
    label. A ``Player X won`` line comes first once someone has won.
    """
    lines: list[str] = []
    if winner is not None:
        lines.append(f"Player {player_name(winner)} won")

    border = _row_border(board.columns)
    for row in range(board.rows, 0, -1):
        numbers = []
        details = []
        for column in range(1, board.columns + 1):
            index = board.coordinate_to_index(row, column)
            numbers.append(f"{index:>3}")
            details.append(_occupant_letter(players, index) + board.property_at(index).label)
        lines.append(border)
        lines.append(COLUMN_SEP + COLUMN_SEP.join(numbers) + COLUMN_SEP)
        lines.append(COLUMN_SEP + COLUMN_SEP.join(details) + COLUMN_SEP)
    lines.append(border)
    return "\n".join(lines)
