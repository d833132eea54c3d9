import random

from game import (
    COLS,
    PLAYER1,
    PLAYER2,
    ROWS,
    Board,
    drop,
    legal_columns,
    next_player,
    winner,
)

X = PLAYER1
O = PLAYER2


def board_with(pieces):
    """Builds a board from {(row, col): player}; everything else is empty."""
    rows = [[0] * COLS for _ in range(ROWS)]
    for (r, c), player in pieces.items():
        rows[r][c] = player
    return Board.from_rows(rows)


def drawn_board():
    """A full board with no four in a row: columns alternate, row pairs swap."""
    rows = []
    for r in range(ROWS):
        rows.append([X if ((c % 2) ^ ((r // 2) % 2)) == 0 else O for c in range(COLS)])
    return Board.from_rows(rows)


def random_positions(seed, count, max_plies=20):
    """Non-terminal positions reached by random play, with the side to move."""
    rng = random.Random(seed)
    found = []
    while len(found) < count:
        board = Board.empty()
        player = X
        ok = True
        for _ in range(rng.randrange(0, max_plies)):
            board = drop(board, rng.choice(legal_columns(board)), player)
            player = next_player(player)
            if winner(board) is not None or not legal_columns(board):
                ok = False
                break
        if ok:
            found.append((board, player))
    return found
