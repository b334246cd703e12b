"""
Board evaluation for 3x3 tic-tac-toe.
Notes:
- A grid is a tuple of 9 cells in row-major order; None means empty.
- Grids are never mutated: `place` returns a new tuple.
- Winning lines are scanned rows, then columns, then diagonals.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np


class Symbol(Enum):
    """The two marks a cell can hold."""
    X = "X"
    O = "O"

    def opposite(self) -> "Symbol":
        return Symbol.O if self is Symbol.X else Symbol.X


Cell = Optional[Symbol]
Grid = Tuple[Cell, ...]
WinLine = Tuple[int, int, int]

DRAW = "draw"
Outcome = Union[Symbol, str, None]

SIZE = 3
CELLS = SIZE * SIZE

WIN_LINES: Tuple[WinLine, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

_DIGITS = {"0": None, "1": Symbol.X, "2": Symbol.O}


def empty_grid() -> Grid:
    return (None,) * CELLS


def place(grid: Grid, index: int, symbol: Symbol) -> Grid:
    if index < 0 or index >= CELLS:
        raise ValueError(f"cell index out of range: {index}")
    if grid[index] is not None:
        raise ValueError(f"cell {index} is already taken")
    return grid[:index] + (symbol,) + grid[index + 1:]


def empty_indices(grid: Grid) -> List[int]:
    return [i for i, cell in enumerate(grid) if cell is None]


def is_empty(grid: Grid) -> bool:
    return all(cell is None for cell in grid)


def winning_line(grid: Grid) -> Optional[WinLine]:
    for line in WIN_LINES:
        a, b, c = line
        if grid[a] is not None and grid[a] == grid[b] == grid[c]:
            return line
    return None


def winner(grid: Grid) -> Outcome:
    """Return the winning Symbol, DRAW for a full board, or None while ongoing."""
    line = winning_line(grid)
    if line is not None:
        return grid[line[0]]
    if None not in grid:
        return DRAW
    return None


@dataclass(frozen=True)
class Strikethrough:
    """Geometry of the line drawn over a win, in cell units.

    The origin is the top-left corner of the board and rows grow downward,
    so a rotation of 45 degrees runs from top-left to bottom-right.
    """
    center_row: float
    center_col: float
    rotation: float
    length: float


def strikethrough(line: WinLine) -> Strikethrough:
    first, _, last = line
    start = np.array(divmod(first, SIZE), dtype=float) + 0.5
    end = np.array(divmod(last, SIZE), dtype=float) + 0.5
    center = (start + end) / 2.0
    d_row, d_col = end - start
    angle = float(np.degrees(np.arctan2(d_row, d_col)))
    # fold into (-90, 90] so the anti-diagonal reads as -45
    if angle > 90.0:
        angle -= 180.0
    # centers are two cells apart; the stroke covers three full cells
    length = float(np.hypot(d_row, d_col)) * 1.5
    return Strikethrough(
        center_row=float(center[0]),
        center_col=float(center[1]),
        rotation=round(angle, 6),
        length=round(length, 6),
    )


def parse_grid(text: str) -> Grid:
    """Parse a 9-character board string: 0 empty, 1 X, 2 O."""
    raw = text.strip()
    if len(raw) != CELLS or any(ch not in _DIGITS for ch in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2.")
    return tuple(_DIGITS[ch] for ch in raw)


def format_grid(grid: Grid) -> str:
    return ''.join('0' if cell is None else ('1' if cell is Symbol.X else '2') for cell in grid)


def side_to_move(grid: Grid) -> Symbol:
    x = grid.count(Symbol.X)
    o = grid.count(Symbol.O)
    return Symbol.X if x == o else Symbol.O


def render_grid(grid: Grid) -> str:
    rows = []
    for r in range(SIZE):
        cells = []
        for c in range(SIZE):
            idx = r * SIZE + c
            cell = grid[idx]
            cells.append(str(idx) if cell is None else cell.value)
        rows.append(" " + " | ".join(cells))
    return "\n---+---+---\n".join(rows)
