"""
Minimax move selection for the computer player.
Scoring, from the computer's point of view, at a terminal node `depth` plies below the root:
- computer wins: 10 - depth (prefer faster wins)
- opponent wins: depth - 10 (prefer slower losses)
- draw: 0
Root ties go to the lowest empty index.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Tuple

from .board import DRAW, Grid, Symbol, empty_indices, place, winner

logger = logging.getLogger(__name__)

WIN_SCORE = 10


def terminal_score(grid: Grid, computer: Symbol, depth: int) -> Optional[int]:
    outcome = winner(grid)
    if outcome is None:
        return None
    if outcome == DRAW:
        return 0
    if outcome is computer:
        return WIN_SCORE - depth
    return depth - WIN_SCORE


@lru_cache(maxsize=None)
def _node_value(grid: Grid, mover: Symbol, computer: Symbol, depth: int) -> int:
    maximizing = mover is computer
    best: Optional[int] = None
    for idx in empty_indices(grid):
        child = place(grid, idx, mover)
        score = terminal_score(child, computer, depth + 1)
        if score is None:
            score = _node_value(child, mover.opposite(), computer, depth + 1)
        if best is None or (score > best if maximizing else score < best):
            best = score
    # a non-terminal node always has an empty cell
    assert best is not None
    return best


def minimax(grid: Grid, computer: Symbol) -> Tuple[int, int]:
    """Return (score, index) of the best move for `computer`, who moves now.

    The game must still be open: a won or full board raises ValueError.
    """
    if winner(grid) is not None:
        raise ValueError("minimax needs an unfinished game with at least one empty cell")
    moves = empty_indices(grid)
    best_score: Optional[int] = None
    best_index = moves[0]
    for idx in moves:
        child = place(grid, idx, computer)
        score = terminal_score(child, computer, 1)
        if score is None:
            score = _node_value(child, computer.opposite(), computer, 1)
        if best_score is None or score > best_score:
            best_score = score
            best_index = idx
    assert best_score is not None
    logger.debug(
        "minimax computer=%s score=%d index=%d cache=%s",
        computer.value, best_score, best_index, _node_value.cache_info(),
    )
    return best_score, best_index


def best_move(grid: Grid, computer: Symbol) -> int:
    return minimax(grid, computer)[1]
