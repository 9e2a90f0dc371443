"""CLI entry point: python -m snakes_ladders {play,chart}."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field

from loguru import logger

from snakes_ladders.chart import make_position_chart
from snakes_ladders.commands import read_commands
from snakes_ladders.engine import player_name
from snakes_ladders.errors import SnakesLaddersError
from snakes_ladders.game import GameState, ListObserver, TurnRecord


def format_record(record: TurnRecord) -> str:
    """One line per player-turn, e.g. ``turn 4: B rolls 2, 3 -> 11 (ladder)``."""
    name = player_name(record.player)
    start = record.positions_before[record.player]
    end = record.positions_after[record.player]
    line = f"turn {record.turn_number}: {name} rolls {record.roll}, {start} -> {end}"
    notes = []
    for move in record.moves:
        if move.cause == "rejected":
            notes.append("off the board")
        elif move.cause == "bump":
            notes.append(f"bumps {player_name(move.player)} to {move.end}")
        elif move.end != move.landing:
            notes.append("ladder" if move.end > move.landing else "snake")
        if move.powerup_used is not None:
            notes.append(f"uses {move.powerup_used.value}")
        if move.powerup_gained is not None:
            notes.append(f"gains {move.powerup_gained.value}")
    if record.won:
        notes.append("wins")
    if notes:
        line += " (" + ", ".join(notes) + ")"
    return line


@dataclass
class TraceObserver(ListObserver):
    """Collects records and prints each one as it arrives."""

    echo: bool = field(default=True)

    def on_turn(self, record: TurnRecord) -> None:
        super().on_turn(record)
        if self.echo:
            print(format_record(record))


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _play(path: str | None, observer: ListObserver) -> GameState:
    game = GameState(observer=observer)
    if path is None or path == "-":
        for command in read_commands(sys.stdin):
            game.apply(command)
    else:
        with open(path) as fh:
            for command in read_commands(fh):
                game.apply(command)
    return game


# ── play ─────────────────────────────────────────────────────────────

def cmd_play(args: argparse.Namespace) -> None:
    """Apply every command and print the final board."""
    observer = TraceObserver(echo=args.trace)
    game = _play(args.input, observer)
    print(game.render())


# ── chart ────────────────────────────────────────────────────────────

def cmd_chart(args: argparse.Namespace) -> None:
    """Play the game and save a chart of positions by turn."""
    observer = TraceObserver(echo=False)
    game = _play(args.input, observer)
    if game.board is None:
        print("No board was configured.", file=sys.stderr)
        sys.exit(1)
    out = args.output or "positions.png"
    make_position_chart(
        observer.records,
        player_count=len(game.players),
        size=game.board.size(),
        output_path=out,
    )
    print(f"Chart saved to {out}")


# ── main ─────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="snakes_ladders",
        description="Deterministic Snakes & Ladders with powerups",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every move")
    sub = parser.add_subparsers(dest="command")

    p_play = sub.add_parser("play", help="Run commands and print the board")
    p_play.add_argument("input", nargs="?", help="Command file (default: stdin)")
    p_play.add_argument("--trace", action="store_true", help="Print each player-turn")

    p_chart = sub.add_parser("chart", help="Chart player positions by turn")
    p_chart.add_argument("input", nargs="?", help="Command file (default: stdin)")
    p_chart.add_argument("--output", "-o", help="Output PNG path")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "play":
            cmd_play(args)
        elif args.command == "chart":
            cmd_chart(args)
        else:
            parser.print_help()
    except SnakesLaddersError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
