import matplotlib

matplotlib.use("Agg")

import pytest

from connect4.core.board import Board


# Full board with no four-in-a-row anywhere.
DRAW_ROWS = ["XXOOXXO", "OOXXOOX"] * 3


@pytest.fixture
def draw_board() -> Board:
    return Board.from_strings(DRAW_ROWS)


@pytest.fixture
def empty_board() -> Board:
    return Board.empty()
