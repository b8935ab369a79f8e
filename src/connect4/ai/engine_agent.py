from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Optional

from connect4.config import AI_TIME_LIMIT_SEC, SEARCH_DEPTH
from connect4.ai.engine import CASCADE, TACTICAL_CASCADE, decide
from connect4.ai.search import SearchStats
from connect4.game.state import GameState, other
from connect4.types import Move


@dataclass
class EngineAgent:
    """
    Plays the decision engine for whichever side is to move.

    With `strategic=False` the strategic scorer is skipped and the
    alpha-beta search chooses every move the tactical rules leave open.
    """
    name: str = "Engine"
    depth: int = SEARCH_DEPTH
    time_limit_sec: Optional[float] = AI_TIME_LIMIT_SEC
    strategic: bool = True

    last_info: dict = field(default_factory=dict)

    def choose_move(self, state: GameState) -> Move:
        me = state.current
        stats = SearchStats()

        start = time.perf_counter()
        deadline = None if self.time_limit_sec is None else start + max(0.01, float(self.time_limit_sec))

        decision = decide(
            state.board,
            me,
            other(me),
            depth=self.depth,
            stats=stats,
            deadline=deadline,
            cascade=CASCADE if self.strategic else TACTICAL_CASCADE,
        )

        elapsed = time.perf_counter() - start
        self.last_info = {
            "rule": decision.rule.value,
            "depth": self.depth if stats.nodes else 1,
            "nodes": stats.nodes,
            "cutoffs": stats.cutoffs,
            "move_col": decision.column + 1,
            "time_ms": max(1, int(elapsed * 1000)),
        }
        return Move(decision.column)
