"""
Difficulty-driven move selection.
Notes:
- `select_move_source` is pure: the random roll is an argument, so the
  difficulty table can be checked without any randomness.
- Easy is always random; medium searches half the time; difficult always
  searches. An empty board is always answered randomly.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np

from .board import Grid, Symbol, empty_indices, is_empty
from .search import best_move

MEDIUM_SEARCH_PROBABILITY = 0.5


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    DIFFICULT = "difficult"


class MoveSource(Enum):
    RANDOM = "random"
    SEARCH = "search"


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def select_move_source(difficulty: Difficulty, board_empty: bool, roll: float) -> MoveSource:
    if difficulty is Difficulty.EASY or board_empty:
        return MoveSource.RANDOM
    if difficulty is Difficulty.MEDIUM:
        return MoveSource.SEARCH if roll < MEDIUM_SEARCH_PROBABILITY else MoveSource.RANDOM
    return MoveSource.SEARCH


def random_move(grid: Grid, rng: np.random.Generator) -> int:
    moves = empty_indices(grid)
    if not moves:
        raise ValueError("no empty cell to choose from")
    return int(rng.choice(moves))


def choose_computer_move(
    grid: Grid,
    computer: Symbol,
    difficulty: Difficulty,
    rng: np.random.Generator,
) -> int:
    source = select_move_source(difficulty, is_empty(grid), float(rng.random()))
    if source is MoveSource.SEARCH:
        return best_move(grid, computer)
    return random_move(grid, rng)
