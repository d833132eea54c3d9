"""
Dots-and-boxes board model.

For an N x N grid of boxes there are (N + 1) rows of N horizontal lines and
N rows of N + 1 vertical lines. Box (r, c) is bounded by horizontal lines
(r, c) and (r + 1, c) and by vertical lines (r, c) and (r, c + 1). Drawing
the fourth side of a box claims it, and the player who claimed a box moves
again.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .board import EMPTY, PLAYER1, PLAYER2, Coord, Player

HORIZONTAL = "horizontal"
VERTICAL = "vertical"

GRID_SIZES: Tuple[int, ...] = (3, 4, 5, 6)

Owners = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class Line:
    row: int
    col: int
    kind: str  # HORIZONTAL or VERTICAL


@dataclass(frozen=True)
class BoxesBoard:
    size: int
    horizontal: Owners  # (size + 1) x size
    vertical: Owners    # size x (size + 1)
    boxes: Owners       # size x size

    def __post_init__(self) -> None:
        if self.size not in GRID_SIZES:
            raise ValueError(f"Unsupported grid size: {self.size}")
        n = self.size
        shapes = (
            (self.horizontal, n + 1, n),
            (self.vertical, n, n + 1),
            (self.boxes, n, n),
        )
        for rows, height, width in shapes:
            if len(rows) != height or any(len(row) != width for row in rows):
                raise ValueError(f"Grid shape does not match size {n}")
            for row in rows:
                for owner in row:
                    if owner not in (EMPTY, PLAYER1, PLAYER2):
                        raise ValueError(f"Invalid owner value: {owner!r}")

    @classmethod
    def empty(cls, size: int = 4) -> 'BoxesBoard':
        return cls(
            size=size,
            horizontal=tuple((EMPTY,) * size for _ in range(size + 1)),
            vertical=tuple((EMPTY,) * (size + 1) for _ in range(size)),
            boxes=tuple((EMPTY,) * size for _ in range(size)),
        )

    def line_owner(self, line: Line) -> int:
        if line.kind == HORIZONTAL:
            return self.horizontal[line.row][line.col]
        return self.vertical[line.row][line.col]

    def with_line(self, line: Line, owner: Player) -> 'BoxesBoard':
        if line.kind == HORIZONTAL:
            return BoxesBoard(self.size, _set(self.horizontal, line.row, line.col, owner), self.vertical, self.boxes)
        return BoxesBoard(self.size, self.horizontal, _set(self.vertical, line.row, line.col, owner), self.boxes)

    def with_box(self, row: int, col: int, owner: Player) -> 'BoxesBoard':
        return BoxesBoard(self.size, self.horizontal, self.vertical, _set(self.boxes, row, col, owner))


@dataclass(frozen=True)
class MoveResult:
    board: BoxesBoard
    boxes_completed: int


def _set(rows: Owners, r: int, c: int, value: int) -> Owners:
    row = list(rows[r])
    row[c] = value
    return rows[:r] + (tuple(row),) + rows[r + 1:]


def is_valid_line_position(size: int, line: Line) -> bool:
    if line.kind == HORIZONTAL:
        return 0 <= line.row <= size and 0 <= line.col < size
    if line.kind == VERTICAL:
        return 0 <= line.row < size and 0 <= line.col <= size
    return False


def is_line_drawn(board: BoxesBoard, line: Line) -> bool:
    return board.line_owner(line) != EMPTY


def is_valid_move(board: BoxesBoard, line: Line) -> bool:
    return is_valid_line_position(board.size, line) and not is_line_drawn(board, line)


def available_moves(board: BoxesBoard) -> List[Line]:
    """Undrawn lines: horizontals row by row, then verticals row by row."""
    n = board.size
    moves: List[Line] = []
    for r in range(n + 1):
        for c in range(n):
            if board.horizontal[r][c] == EMPTY:
                moves.append(Line(r, c, HORIZONTAL))
    for r in range(n):
        for c in range(n + 1):
            if board.vertical[r][c] == EMPTY:
                moves.append(Line(r, c, VERTICAL))
    return moves


def count_box_sides(board: BoxesBoard, row: int, col: int) -> int:
    sides = (
        board.horizontal[row][col],
        board.horizontal[row + 1][col],
        board.vertical[row][col],
        board.vertical[row][col + 1],
    )
    return sum(1 for owner in sides if owner != EMPTY)


def adjacent_boxes(size: int, line: Line) -> List[Coord]:
    """The one or two boxes a line borders."""
    found: List[Coord] = []
    if line.kind == HORIZONTAL:
        if line.row > 0:
            found.append((line.row - 1, line.col))
        if line.row < size:
            found.append((line.row, line.col))
    else:
        if line.col > 0:
            found.append((line.row, line.col - 1))
        if line.col < size:
            found.append((line.row, line.col))
    return found


def completed_boxes(board: BoxesBoard, line: Line) -> List[Coord]:
    """Boxes that drawing ``line`` would close."""
    drawn = board.with_line(line, PLAYER1)
    return [
        (r, c) for r, c in adjacent_boxes(board.size, line)
        if count_box_sides(drawn, r, c) == 4
    ]


def make_move(board: BoxesBoard, line: Line, player: Player) -> Optional[MoveResult]:
    """Draws ``line`` for ``player`` and claims any boxes it closes; None for an invalid line."""
    if not is_valid_move(board, line):
        return None
    closed = completed_boxes(board, line)
    next_board = board.with_line(line, player)
    for r, c in closed:
        next_board = next_board.with_box(r, c, player)
    return MoveResult(next_board, len(closed))


def is_game_over(board: BoxesBoard) -> bool:
    return all(owner != EMPTY for row in board.boxes for owner in row)


def calculate_scores(board: BoxesBoard) -> Dict[int, int]:
    scores = {PLAYER1: 0, PLAYER2: 0}
    for row in board.boxes:
        for owner in row:
            if owner in scores:
                scores[owner] += 1
    return scores


def boxes_winner(scores: Dict[int, int]) -> Optional[Player]:
    """Player with more boxes, or None on a tie."""
    if scores[PLAYER1] > scores[PLAYER2]:
        return PLAYER1
    if scores[PLAYER2] > scores[PLAYER1]:
        return PLAYER2
    return None
