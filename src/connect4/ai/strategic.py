from __future__ import annotations

from typing import List, Optional

from connect4.config import (
    BLOCK_WEIGHT,
    BUILD_WEIGHT,
    CENTER_WEIGHT,
    FEED_PENALTY,
    HEIGHT_PENALTY,
)
from connect4.ai.tactics import prefer_center
from connect4.core.board import Board
from connect4.core.scoring import evaluate_connection_potential
from connect4.types import PlayerId


def strategic_score(board: Board, row: int, col: int, me: PlayerId, opp: PlayerId) -> float:
    score = 0.0

    # center columns first: 3, then 2/4, ...
    score += (3 - abs(col - 3)) * CENTER_WEIGHT

    # build on own pieces, sit on the opponent's lines
    score += evaluate_connection_potential(board, row, col, me) * BUILD_WEIGHT
    score += evaluate_connection_potential(board, row, col, opp) * BLOCK_WEIGHT

    # stacking right on top of an opponent piece feeds them
    if row < board.rows - 1 and board.grid[row + 1][col] == opp:
        score -= FEED_PENALTY

    # lower is better; row 0 is the top, so height is measured from the bottom row
    score -= (board.rows - 1 - row) * HEIGHT_PENALTY
    return score


def strategic_scores(board: Board, me: PlayerId, opp: PlayerId) -> List[Optional[float]]:
    """Per-column strategic score, None for full columns."""
    scores: List[Optional[float]] = []
    for col in range(board.cols):
        r = board.drop_row(col)
        scores.append(None if r is None else strategic_score(board, r, col, me, opp))
    return scores


def find_strategic_move(board: Board, me: PlayerId, opp: PlayerId) -> Optional[int]:
    scores = strategic_scores(board, me, opp)
    legal = [s for s in scores if s is not None]
    if not legal:
        return None
    best = max(legal)
    return prefer_center(c for c, s in enumerate(scores) if s == best)
