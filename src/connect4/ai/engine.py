from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable, Optional, Sequence, Tuple

from connect4.config import SEARCH_DEPTH
from connect4.ai.search import SearchStats, get_best_scoring_move
from connect4.ai.strategic import find_strategic_move
from connect4.ai.tactics import find_double_threat_move, find_winning_move
from connect4.core.board import Board
from connect4.types import PlayerId

logger = logging.getLogger(__name__)


class InvalidStateError(ValueError):
    """The engine was asked to move in a position it cannot move in."""


class Rule(Enum):
    WIN = "win"
    BLOCK = "block"
    DOUBLE_THREAT = "double_threat"
    BLOCK_DOUBLE_THREAT = "block_double_threat"
    STRATEGIC = "strategic"
    SEARCH = "search"


@dataclass(frozen=True, slots=True)
class Decision:
    column: int
    rule: Rule


Strategy = Callable[[Board, PlayerId, PlayerId], Optional[int]]


def _win(board: Board, me: PlayerId, opp: PlayerId) -> Optional[int]:
    return find_winning_move(board, me)


def _block(board: Board, me: PlayerId, opp: PlayerId) -> Optional[int]:
    return find_winning_move(board, opp)


def _double_threat(board: Board, me: PlayerId, opp: PlayerId) -> Optional[int]:
    return find_double_threat_move(board, me, opp)


def _block_double_threat(board: Board, me: PlayerId, opp: PlayerId) -> Optional[int]:
    return find_double_threat_move(board, opp, me)


# Evaluated in order; the first strategy that returns a column decides.
CASCADE: Tuple[Tuple[Rule, Strategy], ...] = (
    (Rule.WIN, _win),
    (Rule.BLOCK, _block),
    (Rule.DOUBLE_THREAT, _double_threat),
    (Rule.BLOCK_DOUBLE_THREAT, _block_double_threat),
    (Rule.STRATEGIC, find_strategic_move),
)

# Tactical rules only; the search picks every non-forced move.
TACTICAL_CASCADE = CASCADE[:4]

_MESSAGES = {
    Rule.WIN: "Found winning move at column %d",
    Rule.BLOCK: "Blocking opponent at column %d",
    Rule.DOUBLE_THREAT: "Creating double threat at column %d",
    Rule.BLOCK_DOUBLE_THREAT: "Blocking double threat at column %d",
    Rule.STRATEGIC: "Strategic move at column %d",
    Rule.SEARCH: "Best scoring move at column %d",
}


def decide(
    board: Board,
    me: PlayerId,
    opp: PlayerId,
    *,
    depth: int = SEARCH_DEPTH,
    stats: Optional[SearchStats] = None,
    deadline: Optional[float] = None,
    cascade: Sequence[Tuple[Rule, Strategy]] = CASCADE,
) -> Decision:
    """
    Run the decision cascade and report which rule picked the column:
    win, block, double threat, block double threat, strategic, then search.

    Passing a shorter `cascade` (e.g. without the strategic rule) lets the
    search make the final choice.
    """
    if me == opp:
        raise InvalidStateError("Engine and opponent must be different players.")
    if not board.valid_moves():
        raise InvalidStateError("No legal moves: the board is full.")

    for rule, strategy in cascade:
        col = strategy(board, me, opp)
        if col is not None:
            logger.debug(_MESSAGES[rule], col)
            return Decision(col, rule)

    col = get_best_scoring_move(board, me, opp, depth, stats, deadline)
    logger.debug(_MESSAGES[Rule.SEARCH], col)
    return Decision(col, Rule.SEARCH)


def choose_move(board: Board, engine_player: PlayerId, other_player: PlayerId) -> int:
    return decide(board, engine_player, other_player).column
