from __future__ import annotations

import enum
import logging
import random
from typing import List, Optional

from .board import CENTER_COL, COLS, Board, Player
from .moves import drop, legal_columns, next_player, winner
from .search import SEARCH_DEPTH, get_hard_move

logger = logging.getLogger(__name__)

# Centre-outward column preference: 3, 2, 4, 1, 5, 0, 6 on a 7-wide board.
CENTER_PREFERENCE: List[int] = sorted(range(COLS), key=lambda col: (abs(CENTER_COL - col), col))

_default_rng = random.Random()


class Difficulty(enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: str | Difficulty) -> Difficulty:
        """Accepts a Difficulty or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value == text:
                return member
        raise ValueError(f"Unknown difficulty: {value!r}")


def _winning_columns(board: Board, player: Player, columns: List[int]) -> List[int]:
    """Columns in which ``player`` would complete a line right away."""
    wins: List[int] = []
    for col in columns:
        after = drop(board, col, player)
        if after is not None and winner(after) == player:
            wins.append(col)
    return wins


def get_easy_move(board: Board, rng: Optional[random.Random] = None) -> Optional[int]:
    """Uniformly random legal column."""
    available = legal_columns(board)
    if not available:
        return None
    return (rng or _default_rng).choice(available)


def get_medium_move(board: Board, ai_player: Player, rng: Optional[random.Random] = None) -> Optional[int]:
    """
    One-ply greedy play, first matching rule wins:
    1. win now,
    2. block the opponent's immediate win,
    3. set up two winning follow-ups at once,
    4. centre-outward preference,
    5. random legal column.
    """
    available = legal_columns(board)
    if not available:
        return None

    wins = _winning_columns(board, ai_player, available)
    if wins:
        return wins[0]

    blocks = _winning_columns(board, next_player(ai_player), available)
    if blocks:
        return blocks[0]

    for col in available:
        after = drop(board, col, ai_player)
        if after is None:
            continue
        if len(_winning_columns(after, ai_player, legal_columns(after))) >= 2:
            logger.debug("medium move: double threat via column %d", col)
            return col

    for col in CENTER_PREFERENCE:
        if col in available:
            return col

    return (rng or _default_rng).choice(available)


def ai_pick_move(
    board: Board,
    ai_player: Player,
    difficulty: str | Difficulty,
    rng: Optional[random.Random] = None,
    depth: int = SEARCH_DEPTH,
) -> Optional[int]:
    """
    Chooses the AI's column for the given difficulty.
    Always a member of legal_columns(board), or None when there is no legal move.
    ``rng`` is the only source of randomness; pass a seeded random.Random for repeatable play.
    """
    level = Difficulty.parse(difficulty)
    if level is Difficulty.EASY:
        move = get_easy_move(board, rng)
    elif level is Difficulty.MEDIUM:
        move = get_medium_move(board, ai_player, rng)
    else:
        move = get_hard_move(board, ai_player, depth=depth)
    logger.debug("ai_pick_move player=%d difficulty=%s -> %s", ai_player, level.value, move)
    return move
