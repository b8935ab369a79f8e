from __future__ import annotations
import random
from dataclasses import dataclass, field

from connect4.game.state import GameState
from connect4.types import Move


@dataclass
class RandomAgent:
    name: str = "Random AI"
    rng: random.Random = field(default_factory=random.Random)
    last_info: dict = field(default_factory=dict)

    def choose_move(self, state: GameState) -> Move:
        moves = state.board.valid_moves()
        if not moves:
            raise ValueError("No valid moves.")
        self.last_info = {"time_ms": 1, "nodes": 0, "depth": 0}
        return self.rng.choice(moves)
