# src/connect4/config.py

from __future__ import annotations

ROWS = 6
COLS = 7
CONNECT_N = 4

# Column preference used to break ties between equally scored moves.
CENTER_ORDER = (3, 2, 4, 1, 5, 0, 6)
DEFAULT_COLUMN = 3

# Search
SEARCH_DEPTH = 3          # plies, counting the root move
WIN_SCORE = 1000          # terminal score is +/-(WIN_SCORE - depth)
AI_TIME_LIMIT_SEC = None  # no deadline unless an agent asks for one

# 4-cell window scores
LINE_WIN = 10_000
LINE_THREE = 100
LINE_TWO = 10
LINE_ONE = 1

# Strategic scorer weights
CENTER_WEIGHT = 3
BUILD_WEIGHT = 2
BLOCK_WEIGHT = 2
FEED_PENALTY = 1
HEIGHT_PENALTY = 0.5
