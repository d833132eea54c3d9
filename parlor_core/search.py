"""
Depth-bounded minimax with alpha-beta pruning for connect four.

Scores are always from the AI player's perspective: the AI maximizes and the
opponent minimizes. Terminal positions score ``WIN_SCORE + depth`` for an AI
win and ``-WIN_SCORE - depth`` for a loss, so with remaining depth counted
down a faster win (or a slower loss) is preferred. Depth-cutoff and full-board
leaves fall back to the heuristic in ``evaluate``.

The public functions take immutable ``Board`` values and never modify them.
Internally one mutable copy of the grid is shared by the whole tree: a child is
explored by placing a piece, recursing and removing the piece again.

Children are visited centre column first. The ordering only improves pruning;
it never changes the value returned.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .board import CENTER_COL, COLS, EMPTY, ROWS, WIN_LENGTH, Board, Coord, Player
from .evaluate import score_cells
from .moves import DIRECTIONS, legal_columns, next_player, winner

logger = logging.getLogger(__name__)

WIN_SCORE = 100000
SEARCH_DEPTH = 5
INF = math.inf


@dataclass
class SearchStats:
    """Counters collected while searching; handy for logging and benchmarks."""
    nodes: int = 0
    cutoffs: int = 0


def order_center_first(columns: Iterable[int]) -> List[int]:
    """Sorts columns by distance from the centre column (stable, so ties keep ascending order)."""
    return sorted(columns, key=lambda col: abs(CENTER_COL - col))


class _Search:
    """Mutable search context over a single working copy of the grid."""

    def __init__(self, board: Board, ai_player: Player, stats: Optional[SearchStats] = None) -> None:
        self.cells: List[int] = list(board.grid)
        self.ai_player = ai_player
        self.opponent = next_player(ai_player)
        self.stats = stats if stats is not None else SearchStats()
        # A line already on the root board decides every node below it.
        self.root_winner: Optional[Player] = winner(board)

    def place(self, col: int, player: Player) -> int:
        for r in range(ROWS - 1, -1, -1):
            idx = r * COLS + col
            if self.cells[idx] == EMPTY:
                self.cells[idx] = player
                return r
        raise ValueError(f"Column {col} is full")

    def remove(self, row: int, col: int) -> None:
        self.cells[row * COLS + col] = EMPTY

    def open_columns(self) -> List[int]:
        return [c for c in range(COLS) if self.cells[c] == EMPTY]

    def wins_through(self, row: int, col: int) -> bool:
        """True if the piece at (row, col) is part of a WIN_LENGTH run."""
        cells = self.cells
        player = cells[row * COLS + col]
        if player == EMPTY:
            return False
        for dr, dc in DIRECTIONS:
            count = 1
            r, c = row + dr, col + dc
            while 0 <= r < ROWS and 0 <= c < COLS and cells[r * COLS + c] == player:
                count += 1
                r, c = r + dr, c + dc
            r, c = row - dr, col - dc
            while 0 <= r < ROWS and 0 <= c < COLS and cells[r * COLS + c] == player:
                count += 1
                r, c = r - dr, c - dc
            if count >= WIN_LENGTH:
                return True
        return False

    def winner_after(self, last: Optional[Coord]) -> Optional[Player]:
        if self.root_winner is not None:
            return self.root_winner
        if last is None:
            return None
        row, col = last
        if self.wins_through(row, col):
            return self.cells[row * COLS + col]
        return None

    def minimax(
        self,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        last: Optional[Coord] = None,
    ) -> int:
        self.stats.nodes += 1

        won_by = self.winner_after(last)
        if won_by == self.ai_player:
            return WIN_SCORE + depth
        if won_by == self.opponent:
            return -WIN_SCORE - depth

        columns = self.open_columns()
        if depth == 0 or not columns:
            return score_cells(self.cells, self.ai_player)

        mover = self.ai_player if maximizing else self.opponent
        best = -INF if maximizing else INF
        for col in order_center_first(columns):
            row = self.place(col, mover)
            value = self.minimax(depth - 1, alpha, beta, not maximizing, (row, col))
            self.remove(row, col)

            if maximizing:
                best = max(best, value)
                alpha = max(alpha, value)
            else:
                best = min(best, value)
                beta = min(beta, value)
            if beta <= alpha:
                self.stats.cutoffs += 1
                break
        return int(best)


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    ai_player: Player,
    stats: Optional[SearchStats] = None,
) -> int:
    """Alpha-beta minimax value of ``board`` for ``ai_player``; ``maximizing`` tells whose turn it is."""
    return _Search(board, ai_player, stats).minimax(depth, alpha, beta, maximizing)


def search_root(
    board: Board,
    ai_player: Player,
    depth: int = SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
) -> List[Tuple[int, int]]:
    """
    Scores every legal column for ``ai_player`` in centre-first order.
    Each child is searched with a full window so scores are exact.
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")
    ctx = _Search(board, ai_player, stats)
    scored: List[Tuple[int, int]] = []
    for col in order_center_first(legal_columns(board)):
        row = ctx.place(col, ai_player)
        if ctx.winner_after((row, col)) == ai_player:
            score = WIN_SCORE + depth - 1
        else:
            score = ctx.minimax(depth - 1, -INF, INF, False, (row, col))
        ctx.remove(row, col)
        scored.append((col, score))
    return scored


def get_hard_move(board: Board, ai_player: Player, depth: int = SEARCH_DEPTH) -> Optional[int]:
    """
    Picks the column with the best minimax score at a fixed depth.
    An immediately winning column is returned without searching further.
    Ties go to the column met first in centre-first order. None when the board is full.
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")
    available = legal_columns(board)
    if not available:
        return None

    stats = SearchStats()
    ctx = _Search(board, ai_player, stats)
    best_score = -INF
    best_col = available[0]

    for col in order_center_first(available):
        row = ctx.place(col, ai_player)
        if ctx.winner_after((row, col)) == ai_player:
            ctx.remove(row, col)
            logger.debug("hard move: immediate win in column %d", col)
            return col
        score = ctx.minimax(depth - 1, -INF, INF, False, (row, col))
        ctx.remove(row, col)
        if score > best_score:
            best_score = score
            best_col = col

    logger.debug(
        "hard move: column %d score %s (depth=%d nodes=%d cutoffs=%d)",
        best_col, best_score, depth, stats.nodes, stats.cutoffs,
    )
    return best_col
