import random

import pytest

from neon_ttt import core
from neon_ttt.models import GameResult, GameState, GameStatus


def board(cells: str):
    return tuple("" if ch == "." else ch for ch in cells)


def play(*indices):
    state = core.new_game()
    for i in indices:
        state, _ = core.apply_move(state, i)
    return state


def test_new_game_is_empty_x_to_move():
    state = core.new_game()
    assert state.board == ("",) * 9
    assert state.current == "X"
    assert state.active is True
    assert state.result.status is GameStatus.IN_PROGRESS


def test_first_row_wins_for_x():
    result = core.evaluate_result(board("XXX......"))
    assert result == GameResult(status=GameStatus.WON, winner="X", line=(0, 1, 2))


def test_full_board_without_line_is_draw():
    result = core.evaluate_result(board("XOXOXOOXO"))
    assert result.status is GameStatus.DRAW
    assert result.winner is None
    assert result.line is None


def test_partial_board_is_in_progress():
    assert core.evaluate_result(board("XO..X....")).status is GameStatus.IN_PROGRESS


@pytest.mark.parametrize("line", core.WINNING_LINES)
def test_every_line_wins(line):
    cells = ["."] * 9
    for i in line:
        cells[i] = "O"
    result = core.evaluate_result(board("".join(cells)))
    assert result.winner == "O"
    assert result.line == line


def test_lines_are_scanned_in_declared_order():
    # Row 0 and column 0 are both complete; the row comes first.
    result = core.evaluate_result(board("XXXX..X.."))
    assert result.line == (0, 1, 2)


def test_win_on_last_cell_beats_draw():
    result = core.evaluate_result(board("XOXOXOOXX"))
    assert result.status is GameStatus.WON
    assert result.line == (0, 4, 8)


def test_move_places_marker_and_toggles_turn():
    state, outcome = core.apply_move(core.new_game(), 4)
    assert outcome.accepted
    assert state.board[4] == "X"
    assert state.current == "O"
    assert state.active


def test_apply_move_does_not_touch_input_state():
    start = core.new_game()
    core.apply_move(start, 0)
    assert start == core.new_game()


def test_occupied_cell_is_ignored():
    state = play(4)
    after, outcome = core.apply_move(state, 4)
    assert not outcome.accepted
    assert after == state


@pytest.mark.parametrize("index", [-1, 9, 42])
def test_out_of_range_index_is_ignored(index):
    state = play(0, 1)
    after, outcome = core.apply_move(state, index)
    assert not outcome.accepted
    assert after == state


def test_winning_move_ends_game_and_keeps_marker():
    state = play(0, 3, 1, 4, 2)
    assert not state.active
    assert state.current == "X"
    assert state.result.status is GameStatus.WON
    assert state.result.winner == "X"
    assert state.result.line == (0, 1, 2)


def test_draw_ends_game():
    # X O X / X O O / O X X
    state = play(0, 1, 2, 4, 3, 5, 7, 6, 8)
    assert state.result.status is GameStatus.DRAW
    assert not state.active


def test_no_moves_after_game_over():
    state = play(0, 3, 1, 4, 2)
    after, outcome = core.apply_move(state, 8)
    assert not outcome.accepted
    assert after == state
    assert outcome.result == state.result


def test_end_game_records_result():
    result = GameResult(status=GameStatus.DRAW)
    state = core.end_game(core.new_game(), result)
    assert state.active is False
    assert state.result == result


@pytest.mark.parametrize("state", [
    core.new_game(),
    play(0, 3, 1, 4, 2),
    play(0, 1, 2, 4, 3, 5, 7, 6, 8),
    GameState(board=("X", "O", "") + ("",) * 6, current="X"),
])
def test_reset_always_returns_fresh_game(state):
    fresh = core.reset()
    assert fresh.board == ("",) * 9
    assert fresh.current == "X"
    assert fresh.active is True


def test_other_toggles():
    assert core.other("X") == "O"
    assert core.other("O") == "X"


def test_marker_counts_stay_balanced_over_random_games():
    rng = random.Random(7)
    for _ in range(200):
        state = core.new_game()
        while state.active:
            state, outcome = core.apply_move(state, rng.randrange(-2, 11))
            xs, os_ = state.board.count("X"), state.board.count("O")
            assert xs - os_ in (0, 1)
