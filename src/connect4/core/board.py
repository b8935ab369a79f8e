# src/connect4/core/board.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from connect4.config import ROWS, COLS
from connect4.types import Cell, PlayerId, Move

Grid = Tuple[Tuple[Cell, ...], ...]


def _empty_grid(rows: int, cols: int) -> Grid:
    return tuple(tuple(None for _ in range(cols)) for _ in range(rows))


@dataclass(frozen=True, slots=True)
class Board:
    """
    Immutable 6x7 grid. Row 0 is the TOP, row 5 is the BOTTOM.

    Every placement returns a new Board, so speculative moves made by the
    search never touch the caller's position.
    """
    rows: int = ROWS
    cols: int = COLS
    grid: Grid = field(default=())

    def __post_init__(self) -> None:
        if not self.grid:
            object.__setattr__(self, "grid", _empty_grid(self.rows, self.cols))

    # ----- construction -----
    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        """
        Build a board from a row-major grid (row 0 on top).
        Raises ValueError on a wrong shape or a floating piece.
        """
        if len(rows) != ROWS or any(len(r) != COLS for r in rows):
            raise ValueError(f"Board must be {ROWS}x{COLS}.")

        grid: Grid = tuple(tuple(r) for r in rows)
        for c in range(COLS):
            for r in range(ROWS - 1):
                if grid[r][c] is not None and grid[r + 1][c] is None:
                    raise ValueError(f"Floating piece at row {r}, column {c}.")
        return cls(ROWS, COLS, grid)

    @classmethod
    def from_strings(cls, lines: Iterable[str], symbols: Optional[Mapping[str, PlayerId]] = None) -> "Board":
        """
        Parse a picture like::

            .......
            ...X...
            ..OXO..

        Missing top rows are padded with empties. By default every non-'.'
        character is its own player token.
        """
        parsed: List[List[Cell]] = []
        for line in lines:
            line = line.strip()
            if not line:
                continue
            row: List[Cell] = []
            for ch in line:
                if ch == ".":
                    row.append(None)
                else:
                    row.append(symbols[ch] if symbols is not None else ch)
            parsed.append(row)

        padding = [[None] * COLS for _ in range(ROWS - len(parsed))]
        return cls.from_rows(padding + parsed)

    # ----- queries -----
    def cell(self, r: int, c: int) -> Cell:
        return self.grid[r][c]

    def is_legal_move(self, col: int) -> bool:
        return 0 <= col < self.cols and self.grid[0][col] is None

    def valid_moves(self) -> List[Move]:
        return [Move(c) for c in range(self.cols) if self.grid[0][c] is None]

    def is_full(self) -> bool:
        return all(self.grid[0][c] is not None for c in range(self.cols))

    def drop_row(self, col: int) -> Optional[int]:
        """Lowest empty row in `col`, or None if the column is full or out of range."""
        if col < 0 or col >= self.cols:
            return None
        for r in range(self.rows - 1, -1, -1):
            if self.grid[r][col] is None:
                return r
        return None

    # ----- copy-on-write updates -----
    def with_move(self, row: int, col: int, player: PlayerId) -> "Board":
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise ValueError("Cell out of range.")
        if self.grid[row][col] is not None:
            raise ValueError("Cell is occupied.")

        changed = self.grid[row][:col] + (player,) + self.grid[row][col + 1:]
        grid = self.grid[:row] + (changed,) + self.grid[row + 1:]
        return Board(self.rows, self.cols, grid)

    def drop(self, col: int, player: PlayerId) -> Tuple["Board", int]:
        r = self.drop_row(col)
        if r is None:
            raise ValueError("Column is full or out of range.")
        return self.with_move(r, col, player), r

    def render(self) -> str:
        header = " " + " ".join(str(c) for c in range(self.cols))
        lines = [header]
        for r in range(self.rows):
            cells = ["." if v is None else str(v)[0] for v in self.grid[r]]
            lines.append("|" + "|".join(cells) + "|")
        return "\n".join(lines)
