"""
Dots-and-boxes AI.

- EASY: any available line at random.
- MEDIUM: take the line closing the most boxes, else a random safe line, else
  give away the shortest chain.
- HARD: as MEDIUM for captures; safe lines are chosen by preferring the border;
  when every line is unsafe, open the smallest 2-sided chain.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Set

from .ai import Difficulty
from .board import EMPTY, PLAYER1, Coord
from .boxes import (
    HORIZONTAL,
    BoxesBoard,
    Line,
    adjacent_boxes,
    available_moves,
    completed_boxes,
    count_box_sides,
)

logger = logging.getLogger(__name__)

_default_rng = random.Random()

_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def box_completing_moves(board: BoxesBoard) -> List[Line]:
    return [line for line in available_moves(board) if completed_boxes(board, line)]


def creates_three_sided_box(board: BoxesBoard, line: Line) -> bool:
    """True if drawing ``line`` leaves a box with exactly three sides for the opponent."""
    drawn = board.with_line(line, PLAYER1)
    return any(count_box_sides(drawn, r, c) == 3 for r, c in adjacent_boxes(board.size, line))


def safe_moves(board: BoxesBoard) -> List[Line]:
    return [line for line in available_moves(board) if not creates_three_sided_box(board, line)]


def best_capture(board: BoxesBoard, moves: List[Line]) -> Line:
    """The capture closing the most boxes; the first one wins ties."""
    best = moves[0]
    most = 0
    for line in moves:
        closed = len(completed_boxes(board, line))
        if closed > most:
            most = closed
            best = line
    return best


def estimate_chain_size(board: BoxesBoard, line: Line) -> int:
    """Counts the connected boxes with three or more sides once ``line`` is drawn."""
    drawn = board.with_line(line, PLAYER1)
    n = board.size
    visited: Set[Coord] = set()
    stack: List[Coord] = list(adjacent_boxes(n, line))
    while stack:
        r, c = stack.pop()
        if (r, c) in visited or not (0 <= r < n and 0 <= c < n):
            continue
        if drawn.boxes[r][c] != EMPTY:
            continue
        if count_box_sides(drawn, r, c) < 3:
            continue
        visited.add((r, c))
        for dr, dc in _NEIGHBOURS:
            stack.append((r + dr, c + dc))
    return len(visited)


def find_smallest_sacrifice(board: BoxesBoard) -> Optional[Line]:
    moves = available_moves(board)
    if not moves:
        return None
    best = moves[0]
    smallest: Optional[int] = None
    for line in moves:
        size = estimate_chain_size(board, line)
        if smallest is None or size < smallest:
            smallest = size
            best = line
    return best


def pick_strategic_safe_move(board: BoxesBoard, moves: List[Line], rng: random.Random) -> Line:
    """Prefers lines on the border of the grid, with a little jitter to vary play."""
    n = board.size
    best = moves[0]
    best_score = float("-inf")
    for line in moves:
        score = 0.0
        if line.kind == HORIZONTAL:
            if line.row in (0, n):
                score += 1
            if line.col in (0, n - 1):
                score += 1
        else:
            if line.col in (0, n):
                score += 1
            if line.row in (0, n - 1):
                score += 1
        score += rng.random() * 0.5
        if score > best_score:
            best_score = score
            best = line
    return best


def find_chains(board: BoxesBoard) -> List[List[Coord]]:
    """Groups of connected unclaimed boxes with at least two sides, seeded from 2-sided boxes."""
    n = board.size
    visited: Set[Coord] = set()
    chains: List[List[Coord]] = []
    for r in range(n):
        for c in range(n):
            if board.boxes[r][c] != EMPTY or (r, c) in visited:
                continue
            if count_box_sides(board, r, c) != 2:
                continue
            chain: List[Coord] = []
            queue: List[Coord] = [(r, c)]
            while queue:
                br, bc = queue.pop(0)
                if (br, bc) in visited or not (0 <= br < n and 0 <= bc < n):
                    continue
                if board.boxes[br][bc] != EMPTY or count_box_sides(board, br, bc) < 2:
                    continue
                visited.add((br, bc))
                chain.append((br, bc))
                for dr, dc in _NEIGHBOURS:
                    queue.append((br + dr, bc + dc))
            if chain:
                chains.append(chain)
    return chains


def would_open_chain(board: BoxesBoard, line: Line, chain: List[Coord]) -> bool:
    drawn = board.with_line(line, PLAYER1)
    return any(count_box_sides(drawn, r, c) == 3 for r, c in chain)


def open_smallest_chain(board: BoxesBoard) -> Optional[Line]:
    moves = available_moves(board)
    if not moves:
        return None
    chains = sorted(find_chains(board), key=len)
    if chains:
        smallest = chains[0]
        for line in moves:
            if would_open_chain(board, line, smallest):
                logger.debug("boxes hard: opening chain of %d", len(smallest))
                return line
    return find_smallest_sacrifice(board)


def get_easy_boxes_move(board: BoxesBoard, rng: random.Random) -> Optional[Line]:
    moves = available_moves(board)
    if not moves:
        return None
    return rng.choice(moves)


def get_medium_boxes_move(board: BoxesBoard, rng: random.Random) -> Optional[Line]:
    if not available_moves(board):
        return None
    captures = box_completing_moves(board)
    if captures:
        return best_capture(board, captures)
    safe = safe_moves(board)
    if safe:
        return rng.choice(safe)
    return find_smallest_sacrifice(board)


def get_hard_boxes_move(board: BoxesBoard, rng: random.Random) -> Optional[Line]:
    if not available_moves(board):
        return None
    captures = box_completing_moves(board)
    if captures:
        return best_capture(board, captures)
    safe = safe_moves(board)
    if safe:
        return pick_strategic_safe_move(board, safe, rng)
    return open_smallest_chain(board)


def boxes_ai_pick_move(
    board: BoxesBoard,
    difficulty: str | Difficulty,
    rng: Optional[random.Random] = None,
) -> Optional[Line]:
    """Picks an available line for the AI, or None when every line is drawn."""
    source = rng or _default_rng
    level = Difficulty.parse(difficulty)
    if level is Difficulty.EASY:
        return get_easy_boxes_move(board, source)
    if level is Difficulty.MEDIUM:
        return get_medium_boxes_move(board, source)
    return get_hard_boxes_move(board, source)
