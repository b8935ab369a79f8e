"""Decision cascade: priorities, scenarios and the boundary contract."""

import logging
import random

import pytest

from connect4.ai.engine import (
    TACTICAL_CASCADE,
    Decision,
    InvalidStateError,
    Rule,
    choose_move,
    decide,
)
from connect4.ai.search import SearchStats
from connect4.ai.strategic import strategic_scores
from connect4.core.board import Board
from connect4.core.rules import check_win


class TestCascade:
    def test_empty_board_plays_center(self, empty_board):
        assert choose_move(empty_board, "X", "O") == 3
        assert decide(empty_board, "X", "O").rule is Rule.STRATEGIC

    def test_win_beats_block(self):
        b = Board.from_strings([
            "......O",
            "......O",
            "XXX...O",
        ])
        assert decide(b, "X", "O") == Decision(3, Rule.WIN)

    def test_blocks_immediate_win(self):
        b = Board.from_strings([
            "......O",
            "......O",
            "XX....O",
        ])
        assert decide(b, "X", "O") == Decision(6, Rule.BLOCK)

    def test_blocks_horizontal_three(self):
        b = Board.from_strings(["XOOO..."])
        assert choose_move(b, "X", "O") == 4

    def test_open_three_blocked_at_lowest_column(self):
        # both ends complete the four; the ascending scan reaches 0 first
        b = Board.from_strings([".OOO..."])
        assert decide(b, "X", "O") == Decision(0, Rule.BLOCK)
        assert b.is_legal_move(4)

    def test_strategic_tie_resolved_to_center(self):
        b = Board.from_strings([
            "..O....",
            "..XO...",
            "..OXO.O",
            "XXXOXXO",
        ])
        scores = strategic_scores(b, "X", "O")
        assert scores == pytest.approx([3.5, 12.5, 5.0, 12.5, 12.0, 12.5, 2.0])
        assert scores[1] == scores[3] == scores[5]
        assert decide(b, "X", "O") == Decision(3, Rule.STRATEGIC)
        assert choose_move(b, "X", "O") == 3

    def test_creates_double_threat(self):
        b = Board.from_strings(["..X.X.."])
        assert decide(b, "X", "O") == Decision(3, Rule.DOUBLE_THREAT)

    def test_double_threat_over_strategic_choice(self):
        b = Board.from_strings([".X.X..."])
        assert decide(b, "X", "O") == Decision(2, Rule.DOUBLE_THREAT)

    def test_blocks_double_threat(self):
        b = Board.from_strings([".X.X..."])
        assert decide(b, "O", "X") == Decision(2, Rule.BLOCK_DOUBLE_THREAT)

    def test_search_fallback(self, empty_board):
        stats = SearchStats()
        d = decide(empty_board, "X", "O", stats=stats, cascade=TACTICAL_CASCADE)
        assert d.rule is Rule.SEARCH
        assert empty_board.is_legal_move(d.column)
        assert stats.nodes > 0

    def test_opaque_player_tokens(self):
        b = Board.from_strings(["111...."], symbols={"1": 1, "2": 2})
        assert choose_move(b, 1, 2) == 3
        assert choose_move(b, 2, 1) == 3


class TestContract:
    def test_full_board_rejected(self, draw_board):
        with pytest.raises(InvalidStateError):
            choose_move(draw_board, "X", "O")

    def test_same_player_rejected(self, empty_board):
        with pytest.raises(InvalidStateError):
            choose_move(empty_board, "X", "X")

    def test_invalid_state_is_value_error(self):
        assert issubclass(InvalidStateError, ValueError)

    def test_board_unchanged(self):
        b = Board.from_strings(["..XO...", ".OXXO..", "XOOXXO."])
        before = b.grid
        choose_move(b, "X", "O")
        assert b.grid == before

    def test_logs_rule(self, caplog):
        b = Board.from_strings(["XXX...."])
        with caplog.at_level(logging.DEBUG, logger="connect4.ai.engine"):
            choose_move(b, "X", "O")
        assert "Found winning move at column 3" in caplog.text

    @pytest.mark.parametrize("seed", range(4))
    @pytest.mark.parametrize("cascade", ["full", "tactical"])
    def test_always_legal(self, seed, cascade):
        rng = random.Random(seed)
        board = Board()
        players = ("X", "O")
        turn = 0
        while not board.is_full():
            me, opp = players[turn % 2], players[(turn + 1) % 2]
            if turn % 2 == 0:
                if cascade == "full":
                    col = choose_move(board, me, opp)
                else:
                    col = decide(board, me, opp, cascade=TACTICAL_CASCADE).column
                assert 0 <= col <= 6
                assert board.is_legal_move(col)
            else:
                col = rng.choice(board.valid_moves())
            board, row = board.drop(col, me)
            if check_win(board, row, col, me):
                break
            turn += 1
