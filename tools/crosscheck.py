import argparse
import random
import time
from typing import Optional
import sys
sys.path.append('.')
import game  # type: ignore


def plain_minimax(board, depth: int, maximizing: bool, ai_player: int) -> int:
    """Reference minimax without pruning or move ordering."""
    opponent = game.next_player(ai_player)
    w = game.winner(board)
    if w == ai_player:
        return game.WIN_SCORE + depth
    if w == opponent:
        return -game.WIN_SCORE - depth
    cols = game.legal_columns(board)
    if depth == 0 or not cols:
        return game.score_position(board, ai_player)
    mover = ai_player if maximizing else opponent
    values = [plain_minimax(game.drop(board, c, mover), depth - 1, not maximizing, ai_player) for c in cols]
    return max(values) if maximizing else min(values)


def random_position(rng: random.Random, plies: int) -> Optional[game.Board]:
    """Plays random moves from the empty board; None if the game ended on the way."""
    board = game.Board.empty()
    player = game.PLAYER1
    for _ in range(plies):
        cols = game.legal_columns(board)
        if not cols:
            return None
        board = game.drop(board, rng.choice(cols), player)
        if game.winner(board) is not None:
            return None
        player = game.next_player(player)
    return board


def main():
    parser = argparse.ArgumentParser(description='Cross-check alpha-beta search against plain minimax')
    parser.add_argument('--positions', type=int, default=20)
    parser.add_argument('--depth', type=int, default=3)
    parser.add_argument('--seed', type=int, default=0)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    checked = 0
    mismatches = 0
    while checked < args.positions:
        board = random_position(rng, rng.randrange(0, 20))
        if board is None:
            continue
        ai = rng.choice([game.PLAYER1, game.PLAYER2])
        t0 = time.time()
        pruned = game.minimax(board, args.depth, float('-inf'), float('inf'), True, ai)
        ms_pruned = int((time.time() - t0) * 1000)
        t0 = time.time()
        plain = plain_minimax(board, args.depth, True, ai)
        ms_plain = int((time.time() - t0) * 1000)
        print(f"pos={checked} ai={ai} alphabeta={pruned} ({ms_pruned}ms) plain={plain} ({ms_plain}ms)")
        if pruned != plain:
            mismatches += 1
            print(board.pretty())
        checked += 1
    print(f"Checked {checked} positions, mismatches={mismatches}")


if __name__ == '__main__':
    main()
