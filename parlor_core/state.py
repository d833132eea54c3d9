from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import PLAYER1, Board, Coord, Player, WinningLine
from .moves import drop, drop_row, find_winning_line, is_draw, legal_columns, next_player

PLAYING = "playing"
WON = "won"
DRAW = "draw"


@dataclass(frozen=True)
class GameState:
    """A connect-four position together with the side to move."""
    board: Board
    turn: Player = PLAYER1
    last_move: Optional[Coord] = None

    @classmethod
    def new(cls) -> 'GameState':
        return cls(board=Board.empty(), turn=PLAYER1)

    def other_player(self) -> Player:
        return next_player(self.turn)

    def with_turn(self, next_turn: Player) -> 'GameState':
        return GameState(self.board, next_turn, self.last_move)

    def legal_moves(self):
        return legal_columns(self.board)

    def apply(self, col: int) -> Optional['GameState']:
        """Drops a piece for the side to move and passes the turn; None if the column is illegal."""
        row = drop_row(self.board, col)
        next_board = drop(self.board, col, self.turn)
        if next_board is None or row is None:
            return None
        return GameState(next_board, self.other_player(), (row, col))

    @property
    def winner(self) -> Optional[Player]:
        found = find_winning_line(self.board)
        return found[0] if found else None

    @property
    def winning_line(self) -> Optional[WinningLine]:
        found = find_winning_line(self.board)
        return found[1] if found else None

    @property
    def status(self) -> str:
        if self.winner is not None:
            return WON
        if is_draw(self.board):
            return DRAW
        return PLAYING
