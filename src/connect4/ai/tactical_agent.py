from __future__ import annotations

import random
import time
from dataclasses import dataclass, field

from connect4.ai.tactics import find_winning_move
from connect4.game.state import GameState, other
from connect4.types import Move


@dataclass
class TacticalAgent:
    """
    Cheap baseline:
      1) Play immediate winning move if available
      2) Block opponent immediate winning move
      3) Otherwise one of the three most central columns, at random
    """
    name: str = "Tactical"
    seed: int = 0
    rng: random.Random = field(init=False)
    last_info: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    def choose_move(self, state: GameState) -> Move:
        t0 = time.perf_counter()
        board = state.board
        moves = board.valid_moves()
        if not moves:
            raise ValueError("No valid moves.")

        me = state.current
        m = find_winning_move(board, me)
        if m is None:
            m = find_winning_move(board, other(me))
        if m is None:
            center = board.cols // 2
            moves_sorted = sorted(moves, key=lambda c: abs(int(c) - center))
            m = self.rng.choice(moves_sorted[: min(3, len(moves_sorted))])

        self.last_info = {
            "time_ms": max(1, int((time.perf_counter() - t0) * 1000)),
            "nodes": 2 * len(moves),
            "depth": 1,
        }
        return Move(int(m))
