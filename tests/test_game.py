"""Tests for snakes_ladders.game (command application and turn sequencing)."""

import pytest

from snakes_ladders.board import PowerType
from snakes_ladders.commands import (
    BoardCommand,
    DiceCommand,
    PlayersCommand,
    TurnsCommand,
    read_commands,
)
from snakes_ladders.engine import PlayerState
from snakes_ladders.errors import ConfigurationError
from snakes_ladders.game import GameState, ListObserver

SAMPLE_INPUT = """
board 3 4
players 2
dice 1 2 2 2 2
ladder 5 11
snake 8 4
powerup escalator 6 9
powerup antivenom 7
powerup double 4
turns 10
"""


def play(text: str, observer=None) -> GameState:
    game = GameState(observer=observer)
    for command in read_commands(text.splitlines()):
        game.apply(command)
    return game


def setup(columns=10, rows=10, players=2, dice=(1,)) -> GameState:
    game = GameState()
    game.apply(BoardCommand(columns, rows))
    game.apply(PlayersCommand(players))
    game.apply(DiceCommand(tuple(dice)))
    return game


# ── sample game ──────────────────────────────────────────────────────

def test_sample_game_ends_with_b_winning():
    observer = ListObserver()
    game = play(SAMPLE_INPUT, observer)
    assert game.winner() == 1
    assert game.players[0].location == 4
    assert game.players[1].location == 12
    # Stops mid-way through the third round.
    assert game.turn == 6
    assert len(observer.records) == 6
    assert observer.records[-1].won


def test_sample_game_roll_sequence():
    observer = ListObserver()
    play(SAMPLE_INPUT, observer)
    assert [(r.player, r.roll) for r in observer.records] == [
        (0, 1), (1, 2), (0, 2), (1, 2), (0, 2), (1, 1),
    ]


def test_sample_game_intermediate_positions():
    """A picks up Double on 4, B takes the ladder, A doubles onto the snake."""
    observer = ListObserver()
    play(SAMPLE_INPUT, observer)
    after = [r.positions_after for r in observer.records]
    assert after == [[2, 1], [2, 3], [4, 3], [4, 11], [4, 11], [4, 12]]


# ── sequencing ───────────────────────────────────────────────────────

def test_dice_cycle_across_all_player_turns():
    observer = ListObserver()
    game = setup(players=3, dice=(1, 2, 3, 4))
    game.observer = observer
    game.play_turns(2)
    assert [r.player for r in observer.records] == [0, 1, 2, 0, 1, 2]
    assert [r.roll for r in observer.records] == [1, 2, 3, 4, 1, 2]


def test_turn_counter_survives_new_dice():
    observer = ListObserver()
    game = setup(players=1, dice=(1, 2))
    game.observer = observer
    game.play_turns(1)
    game.apply(DiceCommand((5, 6, 1)))
    game.play_turns(1)
    # turn counter is 1, so the second roll uses index 1 of the new sequence.
    assert [r.roll for r in observer.records] == [1, 6]


def test_rejected_turns_still_count():
    game = setup(columns=3, rows=2, players=1, dice=(6, 1))
    game.play_turns(2)
    assert game.turn == 2
    assert game.players[0].location == 2


def test_turns_after_a_win_do_nothing():
    game = play(SAMPLE_INPUT)
    positions = [p.location for p in game.players]
    assert game.play_turns(5) == 1
    assert game.turn == 6
    assert [p.location for p in game.players] == positions


def test_play_turns_returns_none_without_winner():
    game = setup(players=2, dice=(1,))
    assert game.play_turns(2) is None
    assert game.winner() is None


# ── setup ────────────────────────────────────────────────────────────

def test_players_start_on_cell_one():
    game = setup(players=4)
    assert game.players == [PlayerState(1, None)] * 4


def test_players_command_resets_progress():
    game = play(SAMPLE_INPUT)
    game.players[0].powerup = PowerType.ESCALATOR
    game.apply(PlayersCommand(3))
    assert [p.location for p in game.players] == [1, 1, 1]
    assert all(p.powerup is None for p in game.players)
    assert game.winner() is None


@pytest.mark.parametrize("count", [0, 27])
def test_player_count_out_of_range(count):
    game = GameState()
    with pytest.raises(ConfigurationError):
        game.set_player_count(count)


def test_twenty_six_players_allowed():
    game = GameState()
    game.set_player_count(26)
    assert len(game.players) == 26


def test_oversized_board_raises():
    with pytest.raises(ConfigurationError):
        GameState().apply(BoardCommand(40, 25))


@pytest.mark.parametrize("missing", ["board", "players", "dice"])
def test_turns_before_setup_raises(missing):
    game = GameState()
    if missing != "board":
        game.apply(BoardCommand(3, 4))
    if missing != "players":
        game.apply(PlayersCommand(2))
    if missing != "dice":
        game.apply(DiceCommand((1,)))
    with pytest.raises(ConfigurationError):
        game.apply(TurnsCommand(1))


def test_feature_before_board_raises():
    with pytest.raises(ConfigurationError):
        play("ladder 2 5")


# ── winner ───────────────────────────────────────────────────────────

def test_winner_agrees_with_turn_result():
    observer = ListObserver()
    game = setup(columns=2, rows=2, players=2, dice=(3,))
    game.observer = observer
    winner = game.play_turns(3)
    assert winner == 0
    assert game.winner() == 0
    assert observer.records[-1].won


def test_render_uses_winner():
    game = play(SAMPLE_INPUT)
    assert game.render().splitlines()[0] == "Player B won"


def test_zero_turns_plays_nothing():
    observer = ListObserver()
    game = setup(players=2, dice=(3,))
    game.observer = observer
    game.apply(TurnsCommand(0))
    assert game.turn == 0
    assert observer.records == []
