"""Plot every player's cell after each turn of a game."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt

from snakes_ladders.engine import player_name
from snakes_ladders.game import TurnRecord


def make_position_chart(
    records: list[TurnRecord],
    player_count: int,
    size: int,
    output_path: str = "positions.png",
    title: str = "Snakes & Ladders Positions",
) -> str:
    """Create a step chart of cell number by turn, one line per player.

    Returns the path to the saved PNG.
    """
    turns = [0] + [r.turn_number for r in records]
    fig, ax = plt.subplots(figsize=(10, 5))

    for idx in range(player_count):
        start = records[0].positions_before[idx] if records else 1
        cells = [start] + [r.positions_after[idx] for r in records]
        ax.step(turns, cells, where="post", label=f"Player {player_name(idx)}")

    ax.axhline(size, color="#999999", linestyle="--", linewidth=1)
    ax.set_xlabel("Turn")
    ax.set_ylabel("Cell")
    ax.set_ylim(bottom=0, top=size + 1)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(loc="upper left")

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
