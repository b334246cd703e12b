"""tictactoe_engine package.

Board evaluation, minimax search, and the human-vs-computer game
controller, plus a small terminal CLI.

Convenience imports are exposed for common workflows.
"""

from .board import DRAW, Symbol, empty_indices, is_empty, winner, winning_line
from .controller import GameController, GamePhase
from .search import minimax
from .strategy import Difficulty

__all__ = [
    "DRAW",
    "Symbol",
    "empty_indices",
    "is_empty",
    "winner",
    "winning_line",
    "minimax",
    "Difficulty",
    "GameController",
    "GamePhase",
]
