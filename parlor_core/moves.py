from __future__ import annotations

from typing import List, Optional, Tuple

from .board import (
    COLS,
    EMPTY,
    PLAYER1,
    PLAYER2,
    ROWS,
    WIN_LENGTH,
    Board,
    Coord,
    Player,
    WinningLine,
)

# Horizontal, vertical, diagonal down-right, diagonal up-right.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def can_drop(board: Board, col: int) -> bool:
    """True if the column exists and its top cell is still empty."""
    return 0 <= col < COLS and board.at(0, col) == EMPTY


def drop_row(board: Board, col: int) -> Optional[int]:
    """Finds the row a piece dropped into ``col`` would land on."""
    if not 0 <= col < COLS:
        return None
    for r in range(ROWS - 1, -1, -1):
        if board.at(r, col) == EMPTY:
            return r
    return None


def drop(board: Board, col: int, player: Player) -> Optional[Board]:
    """Returns a new board with ``player``'s piece in ``col``, or None if the column is full or out of range."""
    if not can_drop(board, col):
        return None
    row = drop_row(board, col)
    if row is None:
        return None
    return board.with_cell(row, col, player)


def legal_columns(board: Board) -> List[int]:
    return [c for c in range(COLS) if can_drop(board, c)]


def next_player(player: Player) -> Player:
    return PLAYER2 if player == PLAYER1 else PLAYER1


def _run_through(board: Board, r: int, c: int, dr: int, dc: int) -> List[Coord]:
    """Collects the same-occupant run through (r, c) along (dr, dc), ordered from the backward end."""
    player = board.at(r, c)
    cells: List[Coord] = [(r, c)]

    nr, nc = r + dr, c + dc
    while 0 <= nr < ROWS and 0 <= nc < COLS and board.at(nr, nc) == player:
        cells.append((nr, nc))
        nr, nc = nr + dr, nc + dc

    nr, nc = r - dr, c - dc
    while 0 <= nr < ROWS and 0 <= nc < COLS and board.at(nr, nc) == player:
        cells.insert(0, (nr, nc))
        nr, nc = nr - dr, nc - dc

    return cells


def find_winning_line(board: Board) -> Optional[Tuple[Player, WinningLine]]:
    """
    Scans every occupied cell in all four directions.
    Returns the winner together with the first WIN_LENGTH cells of its run.
    """
    for r, c in board.coords():
        if board.at(r, c) == EMPTY:
            continue
        for dr, dc in DIRECTIONS:
            cells = _run_through(board, r, c, dr, dc)
            if len(cells) >= WIN_LENGTH:
                return board.at(r, c), tuple(cells[:WIN_LENGTH])
    return None


def winning_line(board: Board) -> Optional[WinningLine]:
    found = find_winning_line(board)
    return found[1] if found is not None else None


def winner(board: Board) -> Optional[Player]:
    found = find_winning_line(board)
    return found[0] if found is not None else None


def is_draw(board: Board) -> bool:
    return winner(board) is None and not legal_columns(board)


def is_game_over(board: Board) -> bool:
    return winner(board) is not None or not legal_columns(board)


def count_pieces(board: Board, player: Player) -> int:
    return sum(1 for cell in board.grid if cell == player)
