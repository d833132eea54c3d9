"""
Static evaluation of connect-four positions.

The score is always computed *for* one player: centre-column pieces earn a
small bonus and every 4-cell window along the four directions is classified
by how many of its cells belong to that player, to the opponent, or are empty.
Calling it for the other player means passing the other player, not negating.
"""
from __future__ import annotations

from typing import Iterator, List, Sequence

from .board import CENTER_COL, COLS, EMPTY, ROWS, WIN_LENGTH, Board, Cell, Player
from .moves import next_player

CENTER_WEIGHT = 3
FOUR_SCORE = 100
THREE_SCORE = 5
TWO_SCORE = 2
OPPONENT_THREE_PENALTY = 4


def evaluate_window(window: Sequence[Cell], player: Player) -> int:
    """Scores a single WIN_LENGTH window from ``player``'s point of view."""
    opponent = next_player(player)
    own = sum(1 for cell in window if cell == player)
    empty = sum(1 for cell in window if cell == EMPTY)
    theirs = sum(1 for cell in window if cell == opponent)

    score = 0
    if own == 4:
        score += FOUR_SCORE
    elif own == 3 and empty == 1:
        score += THREE_SCORE
    elif own == 2 and empty == 2:
        score += TWO_SCORE

    if theirs == 3 and empty == 1:
        score -= OPPONENT_THREE_PENALTY

    return score


def iter_windows(cells: Sequence[Cell]) -> Iterator[List[Cell]]:
    """
    Yields every WIN_LENGTH window of a row-major ROWS x COLS cell sequence:
    horizontal, vertical, then both diagonals.
    """
    def at(r: int, c: int) -> Cell:
        return cells[r * COLS + c]

    span = range(WIN_LENGTH)
    for r in range(ROWS):
        for c in range(COLS - WIN_LENGTH + 1):
            yield [at(r, c + i) for i in span]
    for c in range(COLS):
        for r in range(ROWS - WIN_LENGTH + 1):
            yield [at(r + i, c) for i in span]
    for r in range(ROWS - WIN_LENGTH + 1):
        for c in range(COLS - WIN_LENGTH + 1):
            yield [at(r + i, c + i) for i in span]
    for r in range(WIN_LENGTH - 1, ROWS):
        for c in range(COLS - WIN_LENGTH + 1):
            yield [at(r - i, c + i) for i in span]


def score_cells(cells: Sequence[Cell], player: Player) -> int:
    """Heuristic over a raw row-major cell sequence (the search passes its mutable grid here)."""
    score = CENTER_WEIGHT * sum(1 for r in range(ROWS) if cells[r * COLS + CENTER_COL] == player)
    for window in iter_windows(cells):
        score += evaluate_window(window, player)
    return score


def score_position(board: Board, player: Player) -> int:
    """Higher is better for ``player``."""
    return score_cells(board.grid, player)
