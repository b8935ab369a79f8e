from __future__ import annotations

from dataclasses import dataclass
from math import inf
import time
from typing import List, Optional

from connect4.config import SEARCH_DEPTH, WIN_SCORE
from connect4.ai.tactics import prefer_center, wins_at
from connect4.core.board import Board
from connect4.core.scoring import evaluate_board
from connect4.types import PlayerId


@dataclass(slots=True)
class SearchStats:
    nodes: int = 0
    cutoffs: int = 0


def minimax(
    board: Board,
    depth: int,
    maximizing: bool,
    alpha: float,
    beta: float,
    player: PlayerId,
    opponent: PlayerId,
    stats: Optional[SearchStats] = None,
    deadline: Optional[float] = None,
) -> float:
    """
    Depth-limited alpha-beta from `player`'s point of view.

    A side to move that can win at once scores +/-(WIN_SCORE - depth). A full
    board is a draw (0). At depth 0, or once `deadline` has passed, the node
    takes the static evaluate_board value.
    """
    if stats is not None:
        stats.nodes += 1

    mover = player if maximizing else opponent

    for col in range(board.cols):
        if wins_at(board, col, mover):
            return WIN_SCORE - depth if maximizing else -(WIN_SCORE - depth)

    if board.is_full():
        return 0

    if depth == 0 or (deadline is not None and time.perf_counter() >= deadline):
        return evaluate_board(board, player, opponent)

    if maximizing:
        value = -inf
        for col in range(board.cols):
            r = board.drop_row(col)
            if r is None:
                continue
            child = board.with_move(r, col, player)
            value = max(value, minimax(child, depth - 1, False, alpha, beta, player, opponent, stats, deadline))
            alpha = max(alpha, value)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
        return value

    value = inf
    for col in range(board.cols):
        r = board.drop_row(col)
        if r is None:
            continue
        child = board.with_move(r, col, opponent)
        value = min(value, minimax(child, depth - 1, True, alpha, beta, player, opponent, stats, deadline))
        beta = min(beta, value)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break
    return value


def score_columns(
    board: Board,
    player: PlayerId,
    opponent: PlayerId,
    depth: int = SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
    deadline: Optional[float] = None,
) -> List[Optional[float]]:
    """
    Search score for each column after `player` drops there; None marks a
    full column. `depth` counts the root move, so the reply search runs
    at depth - 1.
    """
    scores: List[Optional[float]] = []
    for col in range(board.cols):
        r = board.drop_row(col)
        if r is None:
            scores.append(None)
            continue
        child = board.with_move(r, col, player)
        scores.append(minimax(child, depth - 1, False, -inf, inf, player, opponent, stats, deadline))
    return scores


def get_best_scoring_move(
    board: Board,
    player: PlayerId,
    opponent: PlayerId,
    depth: int = SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
    deadline: Optional[float] = None,
) -> int:
    scores = score_columns(board, player, opponent, depth, stats, deadline)
    legal = [s for s in scores if s is not None]
    if not legal:
        return prefer_center([])
    best = max(legal)
    return prefer_center(c for c, s in enumerate(scores) if s == best)
