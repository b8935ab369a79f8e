"""Alpha-beta search: terminal, draw and cutoff semantics."""

import time
from math import inf

import pytest

from connect4.ai.search import SearchStats, get_best_scoring_move, minimax, score_columns
from connect4.ai.tactics import wins_at
from connect4.config import SEARCH_DEPTH, WIN_SCORE
from connect4.core.board import Board
from connect4.core.scoring import evaluate_board


def plain_minimax(board, depth, maximizing, player, opponent):
    """Reference search without pruning."""
    mover = player if maximizing else opponent
    for col in range(board.cols):
        if wins_at(board, col, mover):
            return WIN_SCORE - depth if maximizing else -(WIN_SCORE - depth)
    if board.is_full():
        return 0
    if depth == 0:
        return evaluate_board(board, player, opponent)

    values = []
    for col in board.valid_moves():
        child, _ = board.drop(col, mover)
        values.append(plain_minimax(child, depth - 1, not maximizing, player, opponent))
    return max(values) if maximizing else min(values)


POSITIONS = [
    [],
    ["...X..."],
    ["...O...", "..XX..."],
    ["..XO...", ".OXXO..", "XOOXXO."],
    ["...X...", "..OO...", ".XXO..."],
]


class TestMinimax:
    def test_maximizer_wins_now(self):
        b = Board.from_strings(["XXX...."])
        assert minimax(b, 2, True, -inf, inf, "X", "O") == WIN_SCORE - 2

    def test_minimizer_wins_now(self):
        b = Board.from_strings(["OOO...."])
        assert minimax(b, 2, False, -inf, inf, "X", "O") == -(WIN_SCORE - 2)

    def test_win_checked_before_depth(self):
        b = Board.from_strings(["XXX...."])
        assert minimax(b, 0, True, -inf, inf, "X", "O") == WIN_SCORE

    def test_full_board_is_draw(self, draw_board):
        assert minimax(draw_board, 3, True, -inf, inf, "X", "O") == 0

    def test_leaf_is_static_eval(self):
        b = Board.from_strings(["...X..."])
        assert minimax(b, 0, True, -inf, inf, "X", "O") == evaluate_board(b, "X", "O") == 7

    @pytest.mark.parametrize("rows", POSITIONS)
    @pytest.mark.parametrize("maximizing", [True, False])
    def test_pruning_matches_full_search(self, rows, maximizing):
        b = Board.from_strings(rows)
        expected = plain_minimax(b, 2, maximizing, "X", "O")
        assert minimax(b, 2, maximizing, -inf, inf, "X", "O") == expected

    def test_stats_counted(self, empty_board):
        stats = SearchStats()
        minimax(empty_board, 2, True, -inf, inf, "X", "O", stats)
        # root + at most 7 + 49 children
        assert 1 < stats.nodes <= 1 + 7 + 49
        assert stats.cutoffs > 0

    def test_expired_deadline_returns_static_eval(self):
        b = Board.from_strings(["...X..."])
        stats = SearchStats()
        value = minimax(b, 3, True, -inf, inf, "X", "O", stats, deadline=time.perf_counter() - 1)
        assert value == evaluate_board(b, "X", "O")
        assert stats.nodes == 1

    def test_expired_deadline_still_sees_wins(self):
        b = Board.from_strings(["XXX...."])
        assert minimax(b, 3, True, -inf, inf, "X", "O", deadline=time.perf_counter() - 1) == WIN_SCORE - 3


class TestBestScoringMove:
    def test_full_column_scores_none(self):
        b = Board.from_strings(["X......", "O......", "X......", "O......", "X......", "O......"])
        scores = score_columns(b, "X", "O")
        assert len(scores) == 7
        assert scores[0] is None
        assert all(s is not None for s in scores[1:])

    def test_takes_the_win(self):
        b = Board.from_strings(["XXX...."])
        assert get_best_scoring_move(b, "X", "O") == 3

    def test_blocks_vertical_threat(self):
        b = Board.from_strings(["......O"] * 2 + ["X.....O"])
        assert get_best_scoring_move(b, "X", "O") == 6

    def test_no_legal_column_defaults_to_center(self, draw_board):
        assert get_best_scoring_move(draw_board, "X", "O") == 3

    def test_win_scores_stay_apart_from_opening_evals(self, empty_board):
        # Leaf values near the opening must stay below the smallest win score.
        scores = score_columns(empty_board, "X", "O", SEARCH_DEPTH)
        assert all(abs(s) < WIN_SCORE - SEARCH_DEPTH for s in scores)

    def test_legal_result(self):
        b = Board.from_strings(["X......", "O......", "X......", "O......", "X......", "O...X.."])
        col = get_best_scoring_move(b, "O", "X")
        assert b.is_legal_move(col)
