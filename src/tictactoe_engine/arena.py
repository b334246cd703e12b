"""
Headless computer-vs-computer matches.

Both sides pick moves with the same difficulty policy the controller uses,
which makes it easy to see how often each difficulty wins, loses or draws
against another. Results stay in memory as a pandas DataFrame.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .board import DRAW, Symbol, empty_grid, format_grid, place, winner
from .strategy import Difficulty, choose_computer_move, make_rng

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["x_wins", "o_wins", "draws"]


@dataclass
class MatchResult:
    x: Difficulty
    o: Difficulty
    winner: str
    plies: int
    final: str


def play_match(x: Difficulty, o: Difficulty, rng: np.random.Generator) -> MatchResult:
    policies = {Symbol.X: x, Symbol.O: o}
    grid = empty_grid()
    turn = Symbol.X
    plies = 0
    outcome = None
    while outcome is None:
        idx = choose_computer_move(grid, turn, policies[turn], rng)
        grid = place(grid, idx, turn)
        plies += 1
        turn = turn.opposite()
        outcome = winner(grid)
    label = DRAW if outcome == DRAW else outcome.value
    return MatchResult(x=x, o=o, winner=label, plies=plies, final=format_grid(grid))


def run_arena(
    x: Difficulty,
    o: Difficulty,
    games: int,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    if games < 1:
        raise ValueError(f"games must be >= 1, got {games}")
    rng = make_rng(seed)
    rows: List[Dict[str, object]] = []
    for game in range(games):
        res = play_match(x, o, rng)
        rows.append({
            "game": game,
            "x": res.x.value,
            "o": res.o.value,
            "winner": res.winner,
            "plies": res.plies,
            "final": res.final,
        })
    logger.debug("arena finished %d games x=%s o=%s", games, x.value, o.value)
    return pd.DataFrame(rows)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """One row per pairing with win/draw counts, rates and mean game length."""
    counts = pd.crosstab([df["x"], df["o"]], df["winner"])
    counts = counts.reindex(columns=["X", "O", DRAW], fill_value=0)
    counts.columns = RESULT_COLUMNS
    total = counts.sum(axis=1)
    summary = counts.copy()
    summary["games"] = total
    for col in RESULT_COLUMNS:
        summary[f"{col}_rate"] = (counts[col] / total).round(3)
    summary["mean_plies"] = df.groupby(["x", "o"])["plies"].mean().round(2)
    return summary.reset_index()
