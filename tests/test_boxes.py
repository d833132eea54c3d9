import random
import unittest

from game import (
    HORIZONTAL,
    PLAYER1,
    PLAYER2,
    VERTICAL,
    BoxesBoard,
    Line,
    available_moves,
    boxes_ai_pick_move,
    boxes_game_over,
    boxes_winner,
    calculate_scores,
    completed_boxes,
    count_box_sides,
    is_valid_move,
    make_move,
)
from parlor_core.boxes_ai import (
    best_capture,
    box_completing_moves,
    creates_three_sided_box,
    estimate_chain_size,
    find_chains,
    find_smallest_sacrifice,
    open_smallest_chain,
    safe_moves,
)


def H(r, c):
    return Line(r, c, HORIZONTAL)


def V(r, c):
    return Line(r, c, VERTICAL)


def _draw(board, lines, owner=PLAYER1):
    for line in lines:
        board = board.with_line(line, owner)
    return board


def _all_horizontals(size):
    return [H(r, c) for r in range(size + 1) for c in range(size)]


class TestBoxesModel(unittest.TestCase):
    def test_given_sizes_when_creating_empty_board_then_line_counts_match(self):
        for size in (3, 4, 5, 6):
            with self.subTest(size=size):
                board = BoxesBoard.empty(size)
                self.assertEqual(len(available_moves(board)), 2 * size * (size + 1))
                self.assertFalse(boxes_game_over(board))

    def test_given_unsupported_size_when_creating_then_value_error(self):
        with self.assertRaises(ValueError):
            BoxesBoard.empty(2)
        with self.assertRaises(ValueError):
            BoxesBoard(3, ((0,) * 3,) * 3, ((0,) * 4,) * 3, ((0,) * 3,) * 3)

    def test_given_unknown_owner_when_creating_then_value_error(self):
        empty = BoxesBoard.empty(3)
        with self.assertRaises(ValueError):
            BoxesBoard(3, ((7, 0, 0),) + empty.horizontal[1:], empty.vertical, empty.boxes)
        with self.assertRaises(ValueError):
            BoxesBoard(3, empty.horizontal, empty.vertical, ((0, 0, -1),) + empty.boxes[1:])
        with self.assertRaises(ValueError):
            empty.with_line(H(0, 0), 3)

    def test_given_lines_when_validating_then_range_and_drawn_checked(self):
        board = BoxesBoard.empty(3)
        self.assertTrue(is_valid_move(board, H(3, 2)))
        self.assertTrue(is_valid_move(board, V(2, 3)))
        self.assertFalse(is_valid_move(board, H(4, 0)))
        self.assertFalse(is_valid_move(board, V(0, 4)))
        self.assertFalse(is_valid_move(board, Line(0, 0, 'diagonal')))
        drawn = board.with_line(H(0, 0), PLAYER1)
        self.assertFalse(is_valid_move(drawn, H(0, 0)))

    def test_given_available_moves_when_listing_then_horizontals_before_verticals(self):
        moves = available_moves(BoxesBoard.empty(3))
        self.assertEqual(moves[0], H(0, 0))
        self.assertEqual(moves[11], H(3, 2))
        self.assertEqual(moves[12], V(0, 0))

    def test_given_invalid_line_when_making_move_then_none(self):
        board = BoxesBoard.empty(3)
        self.assertIsNone(make_move(board, H(5, 5), PLAYER1))
        drawn = make_move(board, H(0, 0), PLAYER1).board
        self.assertIsNone(make_move(drawn, H(0, 0), PLAYER2))

    def test_given_fourth_side_when_making_move_then_box_claimed(self):
        board = _draw(BoxesBoard.empty(3), [H(0, 0), H(1, 0), V(0, 0)])
        self.assertEqual(count_box_sides(board, 0, 0), 3)
        result = make_move(board, V(0, 1), PLAYER2)
        self.assertEqual(result.boxes_completed, 1)
        self.assertEqual(result.board.boxes[0][0], PLAYER2)
        self.assertEqual(result.board.vertical[0][1], PLAYER2)
        self.assertEqual(board.boxes[0][0], 0)

    def test_given_shared_side_when_making_move_then_two_boxes_claimed(self):
        board = _draw(BoxesBoard.empty(3), [H(0, 0), H(1, 0), V(0, 0), H(0, 1), H(1, 1), V(0, 2)])
        self.assertEqual(completed_boxes(board, V(0, 1)), [(0, 0), (0, 1)])
        result = make_move(board, V(0, 1), PLAYER1)
        self.assertEqual(result.boxes_completed, 2)
        self.assertEqual(calculate_scores(result.board), {PLAYER1: 2, PLAYER2: 0})

    def test_given_finished_game_when_scoring_then_winner_or_tie(self):
        board = BoxesBoard.empty(3)
        owner = PLAYER1
        for line in available_moves(board):
            board = make_move(board, line, owner).board
        self.assertTrue(boxes_game_over(board))
        self.assertEqual(calculate_scores(board), {PLAYER1: 9, PLAYER2: 0})
        self.assertEqual(boxes_winner({PLAYER1: 9, PLAYER2: 0}), PLAYER1)
        self.assertEqual(boxes_winner({PLAYER1: 4, PLAYER2: 5}), PLAYER2)
        self.assertIsNone(boxes_winner({PLAYER1: 8, PLAYER2: 8}))


class TestBoxesAI(unittest.TestCase):
    def test_given_three_sided_box_when_medium_or_hard_then_captures(self):
        board = _draw(BoxesBoard.empty(3), [H(0, 0), H(1, 0), V(0, 0)])
        self.assertEqual(box_completing_moves(board), [V(0, 1)])
        for level in ('medium', 'hard'):
            with self.subTest(level=level):
                self.assertEqual(boxes_ai_pick_move(board, level, random.Random(0)), V(0, 1))

    def test_given_single_and_double_capture_when_choosing_then_double_preferred(self):
        board = _draw(BoxesBoard.empty(3), [
            H(0, 0), H(1, 0), V(0, 0), H(0, 1), H(1, 1), V(0, 2),
            V(2, 0), V(2, 1), H(3, 0),
        ])
        captures = box_completing_moves(board)
        self.assertEqual(captures[0], H(2, 0))
        self.assertIn(V(0, 1), captures)
        self.assertEqual(best_capture(board, captures), V(0, 1))
        self.assertEqual(boxes_ai_pick_move(board, 'medium', random.Random(0)), V(0, 1))

    def test_given_safe_lines_when_medium_moves_then_never_hands_over_a_box(self):
        board = _draw(BoxesBoard.empty(3), [H(0, 0), H(1, 0), H(1, 1), H(2, 1)])
        for seed in range(20):
            move = boxes_ai_pick_move(board, 'medium', random.Random(seed))
            self.assertIn(move, safe_moves(board))
            self.assertFalse(creates_three_sided_box(board, move))

    def test_given_empty_board_when_hard_moves_then_corner_edge_line(self):
        corners = {H(0, 0), H(0, 2), H(3, 0), H(3, 2), V(0, 0), V(2, 0), V(0, 3), V(2, 3)}
        for seed in range(10):
            move = boxes_ai_pick_move(BoxesBoard.empty(3), 'hard', random.Random(seed))
            self.assertIn(move, corners)

    def test_given_only_unsafe_lines_when_medium_or_hard_then_smallest_sacrifice(self):
        board = _draw(BoxesBoard.empty(3), _all_horizontals(3))
        self.assertEqual(safe_moves(board), [])
        self.assertEqual(box_completing_moves(board), [])
        self.assertEqual(estimate_chain_size(board, V(0, 0)), 1)
        self.assertEqual(estimate_chain_size(board, V(0, 1)), 2)
        self.assertEqual(find_smallest_sacrifice(board), V(0, 0))
        self.assertEqual(len(find_chains(board)), 1)
        for level in ('medium', 'hard'):
            with self.subTest(level=level):
                self.assertEqual(boxes_ai_pick_move(board, level, random.Random(0)), V(0, 0))

    def test_given_long_and_short_chains_when_hard_moves_then_opens_short_chain(self):
        # Column 1 and box (1, 2) are claimed. Column 0 is a chain of three;
        # boxes (0, 2) and (2, 2) are chains of one.
        claimed = [(0, 1), (1, 1), (2, 1), (1, 2)]
        lines = [V(r, c) for r in range(3) for c in (0, 1, 2)]
        lines += [H(r, 1) for r in range(4)]
        lines += [H(1, 2), H(2, 2), V(1, 3)]
        board = _draw(BoxesBoard.empty(3), lines)
        for r, c in claimed:
            board = board.with_box(r, c, PLAYER2)
        self.assertEqual(available_moves(board), [
            H(0, 0), H(1, 0), H(2, 0), H(3, 0), H(0, 2), H(3, 2), V(0, 3), V(2, 3),
        ])
        self.assertEqual(safe_moves(board), [])
        self.assertEqual(box_completing_moves(board), [])
        self.assertEqual(sorted(len(chain) for chain in find_chains(board)), [1, 1, 3])
        self.assertEqual(estimate_chain_size(board, H(1, 0)), 2)

        self.assertEqual(find_smallest_sacrifice(board), H(0, 0))
        self.assertEqual(boxes_ai_pick_move(board, 'medium', random.Random(0)), H(0, 0))
        self.assertEqual(open_smallest_chain(board), H(0, 2))
        self.assertEqual(boxes_ai_pick_move(board, 'hard', random.Random(0)), H(0, 2))

    def test_given_seeded_rng_when_easy_moves_then_repeatable_and_available(self):
        board = BoxesBoard.empty(4)
        first = boxes_ai_pick_move(board, 'easy', random.Random(12))
        self.assertEqual(first, boxes_ai_pick_move(board, 'easy', random.Random(12)))
        self.assertIn(first, available_moves(board))

    def test_given_full_board_when_any_tier_moves_then_none(self):
        board = BoxesBoard.empty(3)
        for line in available_moves(board):
            board = make_move(board, line, PLAYER2).board
        for level in ('easy', 'medium', 'hard'):
            with self.subTest(level=level):
                self.assertIsNone(boxes_ai_pick_move(board, level, random.Random(0)))

    def test_given_ai_vs_ai_game_when_played_out_then_all_boxes_claimed(self):
        rng = random.Random(8)
        board = BoxesBoard.empty(4)
        turn = PLAYER1
        levels = {PLAYER1: 'hard', PLAYER2: 'medium'}
        while not boxes_game_over(board):
            line = boxes_ai_pick_move(board, levels[turn], rng)
            result = make_move(board, line, turn)
            self.assertIsNotNone(result)
            board = result.board
            if result.boxes_completed == 0:
                turn = PLAYER2 if turn == PLAYER1 else PLAYER1
        scores = calculate_scores(board)
        self.assertEqual(scores[PLAYER1] + scores[PLAYER2], 16)


if __name__ == '__main__':
    unittest.main()
