from __future__ import annotations
from dataclasses import dataclass, replace

from connect4.core.board import Board
from connect4.types import Player, Move


def other(p: Player) -> Player:
    return "O" if p == "X" else "X"


@dataclass(frozen=True, slots=True)
class GameState:
    board: Board
    current: Player
    last_status: str = "Player X starts."

    def play(self, move: Move) -> "GameState":
        board, _ = self.board.drop(int(move), self.current)
        return replace(
            self,
            board=board,
            current=other(self.current),
            last_status=f"Player {self.current} played column {int(move)}.",
        )
