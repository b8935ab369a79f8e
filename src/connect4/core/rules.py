from __future__ import annotations
from typing import Optional, List, Tuple

from connect4.config import ROWS, COLS, CONNECT_N
from connect4.types import PlayerId
from connect4.core.board import Board

Coord = Tuple[int, int]  # (row, col)

# Horizontal, vertical, diagonal down-right, diagonal up-right
DIRECTIONS: Tuple[Coord, ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def count_direction(board: Board, row: int, col: int, dr: int, dc: int, player: PlayerId) -> int:
    """Contiguous `player` cells starting next to (row, col), at most CONNECT_N - 1."""
    n = 0
    for i in range(1, CONNECT_N):
        r, c = row + dr * i, col + dc * i
        if r < 0 or r >= ROWS or c < 0 or c >= COLS or board.grid[r][c] != player:
            break
        n += 1
    return n


def check_win(board: Board, row: int, col: int, player: PlayerId) -> bool:
    """True if the piece at (row, col) completes CONNECT_N in a row for `player`."""
    if board.grid[row][col] != player:
        return False

    for dr, dc in DIRECTIONS:
        count = 1
        count += count_direction(board, row, col, dr, dc, player)
        count += count_direction(board, row, col, -dr, -dc, player)
        if count >= CONNECT_N:
            return True
    return False


def check_winner_with_line(board: Board) -> Optional[Tuple[PlayerId, List[Coord]]]:
    g = board.grid

    # Horizontal
    for r in range(ROWS):
        for c in range(COLS - 3):
            p = g[r][c]
            if p is not None and p == g[r][c + 1] == g[r][c + 2] == g[r][c + 3]:
                return p, [(r, c + i) for i in range(4)]

    # Vertical
    for r in range(ROWS - 3):
        for c in range(COLS):
            p = g[r][c]
            if p is not None and p == g[r + 1][c] == g[r + 2][c] == g[r + 3][c]:
                return p, [(r + i, c) for i in range(4)]

    # Diagonal down-right
    for r in range(ROWS - 3):
        for c in range(COLS - 3):
            p = g[r][c]
            if p is not None and p == g[r + 1][c + 1] == g[r + 2][c + 2] == g[r + 3][c + 3]:
                return p, [(r + i, c + i) for i in range(4)]

    # Diagonal up-right
    for r in range(3, ROWS):
        for c in range(COLS - 3):
            p = g[r][c]
            if p is not None and p == g[r - 1][c + 1] == g[r - 2][c + 2] == g[r - 3][c + 3]:
                return p, [(r - i, c + i) for i in range(4)]

    return None


def check_winner(board: Board) -> Optional[PlayerId]:
    res = check_winner_with_line(board)
    return res[0] if res else None


def is_draw(board: Board) -> bool:
    return board.is_full() and check_winner(board) is None
