"""
Core game logic for Tic Tac Toe: move validation, win/draw detection, resets.

Every function takes a GameState and returns a new one; nothing here mutates
its input or keeps module state.
"""

import logging
from typing import Sequence, Tuple

from .models import (
    EMPTY,
    IN_PROGRESS,
    GameResult,
    GameState,
    GameStatus,
    Line,
    Marker,
    MoveOutcome,
)

logger = logging.getLogger(__name__)

BOARD_SIZE = 9

# Scan order matters: the first complete line wins.
WINNING_LINES: Tuple[Line, ...] = (
    # Rows
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    # Columns
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    # Diagonals
    (0, 4, 8), (2, 4, 6),
)


# PUBLIC_INTERFACE
def new_game() -> GameState:
    """Fresh board, X to move."""
    return GameState()


# PUBLIC_INTERFACE
def reset() -> GameState:
    """Return to an empty, active board with X to move, whatever the prior state."""
    return new_game()


# PUBLIC_INTERFACE
def other(marker: Marker) -> Marker:
    return "O" if marker == "X" else "X"


# PUBLIC_INTERFACE
def evaluate_result(board: Sequence[str]) -> GameResult:
    """Checks for a winner, then for a draw. Returns the board's GameResult."""
    for line in WINNING_LINES:
        a, b, c = line
        if board[a] and board[a] == board[b] == board[c]:
            return GameResult(status=GameStatus.WON, winner=board[a], line=line)
    if EMPTY not in board:
        return GameResult(status=GameStatus.DRAW)
    return IN_PROGRESS


# PUBLIC_INTERFACE
def is_valid_move(state: GameState, index: int) -> bool:
    return state.active and 0 <= index < BOARD_SIZE and state.board[index] == EMPTY


# PUBLIC_INTERFACE
def end_game(state: GameState, result: GameResult) -> GameState:
    """Mark the game finished and keep the result for stats and display."""
    return state.model_copy(update={"active": False, "result": result})


# PUBLIC_INTERFACE
def apply_move(state: GameState, index: int) -> Tuple[GameState, MoveOutcome]:
    """
    Place the current marker at index and evaluate the board.

    Occupied cells, indices outside 0-8 and finished games are ignored: the
    same state comes back with accepted=False.
    """
    if not is_valid_move(state, index):
        logger.debug("Ignored move at %s (active=%s)", index, state.active)
        return state, MoveOutcome(accepted=False, index=index, result=state.result)

    board = list(state.board)
    board[index] = state.current
    moved = state.model_copy(update={"board": tuple(board)})

    result = evaluate_result(moved.board)
    if result.is_terminal:
        moved = end_game(moved, result)
    else:
        moved = moved.model_copy(update={"current": other(state.current)})
    return moved, MoveOutcome(accepted=True, index=index, result=result)
