from __future__ import annotations
from typing import List, Sequence, Tuple

from connect4.config import ROWS, COLS, LINE_WIN, LINE_THREE, LINE_TWO, LINE_ONE
from connect4.core.board import Board
from connect4.core.rules import DIRECTIONS, count_direction
from connect4.types import Cell, PlayerId

Coord = Tuple[int, int]


def _all_windows() -> Tuple[Tuple[Coord, ...], ...]:
    out: List[Tuple[Coord, ...]] = []

    # Horizontal
    for r in range(ROWS):
        for c in range(COLS - 3):
            out.append(tuple((r, c + i) for i in range(4)))

    # Vertical
    for r in range(ROWS - 3):
        for c in range(COLS):
            out.append(tuple((r + i, c) for i in range(4)))

    # Diagonal down-right
    for r in range(ROWS - 3):
        for c in range(COLS - 3):
            out.append(tuple((r + i, c + i) for i in range(4)))

    # Diagonal up-right
    for r in range(3, ROWS):
        for c in range(COLS - 3):
            out.append(tuple((r - i, c + i) for i in range(4)))

    return tuple(out)


# Every 4-cell line on the board (69 on 6x7).
WINDOWS = _all_windows()


def evaluate_line(cells: Sequence[Cell], player: PlayerId, opponent: PlayerId) -> int:
    p_count = 0
    o_count = 0
    e_count = 0
    for v in cells:
        if v == player:
            p_count += 1
        elif v == opponent:
            o_count += 1
        else:
            e_count += 1

    if p_count == 4:
        return LINE_WIN
    if o_count == 4:
        return -LINE_WIN

    if p_count == 3 and e_count == 1:
        return LINE_THREE
    if p_count == 2 and e_count == 2:
        return LINE_TWO
    if p_count == 1 and e_count == 3:
        return LINE_ONE

    if o_count == 3 and e_count == 1:
        return -LINE_THREE
    if o_count == 2 and e_count == 2:
        return -LINE_TWO

    # mixed windows can never be completed
    return 0


def evaluate_board(board: Board, player: PlayerId, opponent: PlayerId) -> int:
    """
    Static score of `board` from `player`'s point of view: the sum of
    evaluate_line over every window. Knows nothing about whose turn it is.
    """
    g = board.grid
    score = 0
    for coords in WINDOWS:
        score += evaluate_line([g[r][c] for (r, c) in coords], player, opponent)
    return score


def evaluate_connection_potential(board: Board, row: int, col: int, player: PlayerId) -> int:
    """
    How many `player` pieces a stone at (row, col) would touch in a line,
    summed over the four axes (at most 3 each way).
    """
    potential = 0
    for dr, dc in DIRECTIONS:
        count = 1
        count += count_direction(board, row, col, dr, dc, player)
        count += count_direction(board, row, col, -dr, -dc, player)
        potential += max(0, count - 1)
    return potential
