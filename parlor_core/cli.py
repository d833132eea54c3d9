from __future__ import annotations

import argparse
import random
from typing import List, Optional

from .ai import Difficulty, ai_pick_move
from .board import PLAYER1, PLAYER2
from .config import configure_logging, default_difficulty, search_depth
from .state import DRAW, WON, GameState


def _print_state(state: GameState) -> None:
    print(state.board.pretty(state.winning_line))


def prompt_human_move(state: GameState) -> int:
    moves = state.legal_moves()
    if not moves:
        raise RuntimeError('No legal moves available')
    print('Your legal columns:', moves)
    while True:
        text = input('Enter a column: ').strip()
        try:
            col = int(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if col in moves:
            return col
        print('Illegal column. Try again.')


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Connect four against the Parlor AI')
    parser.add_argument('--difficulty', choices=[d.value for d in Difficulty], default=default_difficulty(),
                        help='AI difficulty')
    parser.add_argument('--human-side', type=int, choices=[PLAYER1, PLAYER2], default=PLAYER1,
                        help='Which player you are (1 moves first)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the easy/medium tiers')
    parser.add_argument('--depth', type=int, default=None, help='Search depth for the hard tier')
    parser.add_argument('--ai-vs-ai', action='store_true', help='Let the AI play both sides')
    args = parser.parse_args(argv)

    configure_logging()
    rng = random.Random(args.seed)
    depth = args.depth if args.depth is not None else search_depth()
    difficulty = Difficulty.parse(args.difficulty)
    ai_sides = {PLAYER1, PLAYER2} if args.ai_vs_ai else {PLAYER2 if args.human_side == PLAYER1 else PLAYER1}

    state = GameState.new()
    print('Initial board:')
    _print_state(state)
    if not args.ai_vs_ai:
        print(f"AI plays as Player {min(ai_sides)} ({difficulty.value}). You are Player {args.human_side}.")

    while state.status not in (WON, DRAW):
        if state.turn in ai_sides:
            move = ai_pick_move(state.board, state.turn, difficulty, rng=rng, depth=depth)
            if move is None:
                break
            print(f"AI (Player {state.turn}) drops in column {move}")
        else:
            move = prompt_human_move(state)
        next_state = state.apply(move)
        if next_state is None:
            print(f"error: column {move} is not playable.")
            return
        state = next_state
        _print_state(state)

    if state.status == WON:
        print(f"Player {state.winner} wins!")
    else:
        print("It's a draw.")
