from __future__ import annotations

from typing import Iterable, List, Optional

from connect4.config import CENTER_ORDER, DEFAULT_COLUMN
from connect4.core.board import Board
from connect4.core.rules import check_win
from connect4.types import PlayerId


def prefer_center(columns: Iterable[int]) -> int:
    """
    Pick from tied columns in the order 3, 2, 4, 1, 5, 0, 6.
    With no candidates at all, fall back to the center column.
    """
    cols = list(columns)
    if not cols:
        return DEFAULT_COLUMN
    for c in CENTER_ORDER:
        if c in cols:
            return c
    return cols[0]


def wins_at(board: Board, col: int, player: PlayerId) -> bool:
    """True if `player` dropping into `col` wins immediately."""
    r = board.drop_row(col)
    if r is None:
        return False
    return check_win(board.with_move(r, col, player), r, col, player)


def find_winning_move(board: Board, player: PlayerId) -> Optional[int]:
    """First column, scanning left to right, that wins on the spot for `player`."""
    for col in range(board.cols):
        if board.is_legal_move(col) and wins_at(board, col, player):
            return col
    return None


def count_threats(board: Board, player: PlayerId) -> int:
    return sum(1 for col in range(board.cols) if wins_at(board, col, player))


def threat_counts(board: Board, mover: PlayerId) -> List[int]:
    """
    For each column: how many immediate wins `mover` would have after playing
    there. Illegal columns count 0.
    """
    counts = [0] * board.cols
    for col in range(board.cols):
        r = board.drop_row(col)
        if r is None:
            continue
        counts[col] = count_threats(board.with_move(r, col, mover), mover)
    return counts


def find_double_threat_move(board: Board, mover: PlayerId, other: PlayerId) -> Optional[int]:
    """
    Column that leaves `mover` with the most immediate wins, if that is at
    least two. `other` does not affect the count.
    """
    counts = threat_counts(board, mover)
    best = max(counts)
    if best < 2:
        return None
    return prefer_center(c for c, n in enumerate(counts) if n == best)
