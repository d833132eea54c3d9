from __future__ import annotations

# Facade module that re-exports the Parlor core.
# The Flask app, the tools and the tests import from here.
# Single-responsibility modules live under parlor_core/*.

try:
    from .parlor_core.board import (  # type: ignore
        COLS, ROWS, WIN_LENGTH, CENTER_COL, EMPTY, PLAYER1, PLAYER2, Board, Cell, Coord, Player, WinningLine,
    )
    from .parlor_core.moves import (  # type: ignore
        can_drop, drop_row, drop, legal_columns, next_player, find_winning_line, winning_line, winner,
        is_draw, is_game_over, count_pieces,
    )
    from .parlor_core.evaluate import evaluate_window, score_position  # type: ignore
    from .parlor_core.search import (  # type: ignore
        SEARCH_DEPTH, WIN_SCORE, SearchStats, order_center_first, minimax, search_root, get_hard_move,
    )
    from .parlor_core.ai import Difficulty, get_easy_move, get_medium_move, ai_pick_move  # type: ignore
    from .parlor_core.state import GameState, PLAYING, WON, DRAW  # type: ignore
    from .parlor_core.boxes import (  # type: ignore
        HORIZONTAL, VERTICAL, GRID_SIZES, Line, BoxesBoard, MoveResult, available_moves, count_box_sides,
        completed_boxes, make_move, is_valid_move, is_game_over as boxes_game_over, calculate_scores,
        boxes_winner,
    )
    from .parlor_core.boxes_ai import boxes_ai_pick_move  # type: ignore
except ImportError:
    from parlor_core.board import (  # type: ignore
        COLS, ROWS, WIN_LENGTH, CENTER_COL, EMPTY, PLAYER1, PLAYER2, Board, Cell, Coord, Player, WinningLine,
    )
    from parlor_core.moves import (  # type: ignore
        can_drop, drop_row, drop, legal_columns, next_player, find_winning_line, winning_line, winner,
        is_draw, is_game_over, count_pieces,
    )
    from parlor_core.evaluate import evaluate_window, score_position  # type: ignore
    from parlor_core.search import (  # type: ignore
        SEARCH_DEPTH, WIN_SCORE, SearchStats, order_center_first, minimax, search_root, get_hard_move,
    )
    from parlor_core.ai import Difficulty, get_easy_move, get_medium_move, ai_pick_move  # type: ignore
    from parlor_core.state import GameState, PLAYING, WON, DRAW  # type: ignore
    from parlor_core.boxes import (  # type: ignore
        HORIZONTAL, VERTICAL, GRID_SIZES, Line, BoxesBoard, MoveResult, available_moves, count_box_sides,
        completed_boxes, make_move, is_valid_move, is_game_over as boxes_game_over, calculate_scores,
        boxes_winner,
    )
    from parlor_core.boxes_ai import boxes_ai_pick_move  # type: ignore


def main() -> None:
    # CLI driver delegated to parlor_core.cli
    try:
        from .parlor_core.cli import main as _main  # type: ignore
    except ImportError:
        from parlor_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
