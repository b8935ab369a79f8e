# src/connect4/types.py

from __future__ import annotations
from typing import Hashable, Literal, Optional, NewType

# The engine only compares player tokens for equality; the harness uses "X"/"O".
PlayerId = Hashable
Player = Literal["X", "O"]
Cell = Optional[PlayerId]
Move = NewType("Move", int)   # column index 0..6
