"""Agents and the headless league harness."""

import csv
from functools import partial

import pytest

from connect4.ai.engine_agent import EngineAgent
from connect4.ai.random_agent import RandomAgent
from connect4.ai.tactical_agent import TacticalAgent
from connect4.core.board import Board
from connect4.game.state import GameState, other
from connect4.scripts.match import (
    CSV_COLUMNS,
    Agg,
    Team,
    add_result,
    play_headless,
    run_league,
    write_results_csv,
)


class TestGameState:
    def test_play_alternates(self):
        s = GameState(board=Board(), current="X")
        s2 = s.play(3)
        assert s2.current == "O"
        assert s2.board.cell(5, 3) == "X"
        assert s.board.cell(5, 3) is None
        assert "column 3" in s2.last_status

    def test_other(self):
        assert other("X") == "O"
        assert other("O") == "X"


class TestAgents:
    def test_engine_agent_reports_rule(self):
        agent = EngineAgent()
        state = GameState(board=Board.from_strings(["OOO...."]), current="X")
        assert agent.choose_move(state) == 3
        assert agent.last_info["rule"] == "block"
        assert agent.last_info["time_ms"] >= 1

    def test_engine_agent_search_mode(self):
        agent = EngineAgent(strategic=False)
        state = GameState(board=Board(), current="X")
        col = agent.choose_move(state)
        assert state.board.is_legal_move(col)
        assert agent.last_info["rule"] == "search"
        assert agent.last_info["nodes"] > 0

    def test_tactical_agent_blocks(self):
        agent = TacticalAgent()
        state = GameState(board=Board.from_strings(["XOOO..."]), current="X")
        assert agent.choose_move(state) == 4

    def test_random_agent_legal(self):
        agent = RandomAgent()
        board = Board.from_strings(["X......", "O......", "X......", "O......", "X......", "O......"])
        for _ in range(20):
            assert agent.choose_move(GameState(board=board, current="X")) != 0

    def test_random_agent_full_board(self, draw_board):
        with pytest.raises(ValueError):
            RandomAgent().choose_move(GameState(board=draw_board, current="X"))


class TestHarness:
    def test_add_result_win_and_draw(self):
        a, b = Agg(), Agg()
        add_result(a, b, "X", a_is_x=True)
        add_result(a, b, "X", a_is_x=False)
        add_result(a, b, "D", a_is_x=True)
        assert (a.wins, a.losses, a.draws) == (1, 1, 1)
        assert (b.wins, b.losses, b.draws) == (1, 1, 1)
        assert a.points == b.points == 1.5
        assert a.games == 3
        assert a.ppg == pytest.approx(0.5)

    def test_play_headless(self):
        outcome, stats = play_headless(EngineAgent(), RandomAgent(), seed_base=7)
        assert outcome in {"X", "O", "D"}
        assert stats["X"]["moves"] > 0
        assert sum(stats["X"]["rules"].values()) == stats["X"]["moves"]
        assert stats["O"]["rules"] == {}

    def test_league_and_csv(self, tmp_path):
        roster = [
            Team("Engine", partial(EngineAgent, name="Engine")),
            Team("Random", partial(RandomAgent, name="Random")),
        ]
        agg = run_league(roster, games_per_pair=2, seed=3, max_workers=1)

        for a in agg.values():
            assert a.games == 2
            assert a.wins + a.draws + a.losses == 2
        assert agg["Engine"].points + agg["Random"].points == 2

        path = write_results_csv(agg, tmp_path)
        assert path.name.startswith("league_results_")
        with open(path, newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == CSV_COLUMNS
        assert {r[0] for r in rows[1:]} == {"Engine", "Random"}
