from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import replace
from typing import Optional

import pandas as pd

from .arena import run_arena, summarize
from .board import (
    Symbol,
    empty_indices,
    parse_grid,
    render_grid,
    side_to_move,
    strikethrough,
    winner,
    winning_line,
)
from .config import Settings
from .controller import GameController, GamePhase, GameSnapshot
from .scheduling import AsyncioScheduler
from .search import minimax
from .strategy import Difficulty, make_rng

DIFFICULTY_CHOICES = [d.value for d in Difficulty]
SYMBOL_CHOICES = [s.value for s in Symbol]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe against the computer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for the computer's random moves")

    p_play = sub.add_parser("play", help="Play a game in the terminal")
    p_play.add_argument(
        "--difficulty", choices=DIFFICULTY_CHOICES, default=None,
        help="Computer strength (default: TTT_DIFFICULTY or medium)",
    )
    p_play.add_argument(
        "--player", choices=SYMBOL_CHOICES, default=None,
        help="Your symbol; X always moves first (asked interactively if omitted)",
    )
    p_play.add_argument(
        "--delay", type=float, default=None,
        help="Seconds the computer waits before answering (default: TTT_COMPUTER_DELAY or 0.5)",
    )

    p_eval = sub.add_parser("evaluate", help="Show outcome and winning line for a board (9 digits, 0=empty,1=X,2=O)")
    p_eval.add_argument("--board", required=True, help="Board string, e.g., 111020200")

    p_search = sub.add_parser("search", help="Run minimax on a board")
    p_search.add_argument("--board", required=True, help="Board string, e.g., 100020000")
    p_search.add_argument(
        "--as", dest="side", choices=SYMBOL_CHOICES, default=None,
        help="Symbol the computer plays (default: side to move)",
    )

    p_arena = sub.add_parser("arena", help="Play computer against computer and summarize results")
    p_arena.add_argument("--x", dest="x", choices=DIFFICULTY_CHOICES, default="difficult", help="Difficulty for X")
    p_arena.add_argument("--o", dest="o", choices=DIFFICULTY_CHOICES, default="easy", help="Difficulty for O")
    p_arena.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")

    return p


def _render(snap: GameSnapshot) -> None:
    print()
    print(render_grid(snap.grid))
    if snap.phase is GamePhase.OVER:
        print(f"\n{snap.result}")
        if snap.winning_line is not None:
            print(f"Winning line: {list(snap.winning_line)}")


def _ask(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        return "q"


async def _play(settings: Settings, player: Optional[Symbol]) -> int:
    changed = asyncio.Event()

    def on_change(snap: GameSnapshot) -> None:
        changed.set()

    game = GameController(
        settings.difficulty,
        scheduler=AsyncioScheduler(),
        rng=make_rng(settings.seed),
        computer_delay=settings.computer_delay,
        on_change=on_change,
    )
    print(f"Difficulty: {game.difficulty.value}")
    while player is None:
        raw = (await asyncio.to_thread(_ask, "Choose your player (X or O, q to quit): ")).strip().upper()
        if raw == "Q":
            return 0
        if raw in SYMBOL_CHOICES:
            player = Symbol(raw)
    game.choose_player(player)

    while game.phase is GamePhase.IN_PROGRESS:
        players = game.players
        assert players is not None
        if game.turn is players.computer:
            changed.clear()
            print("\nComputer is thinking...")
            await changed.wait()
            continue
        _render(game.snapshot())
        raw = (await asyncio.to_thread(_ask, f"\nYour move ({players.human.value}), cell 0-8 or q: ")).strip()
        if raw.lower() == "q":
            game.reset()
            return 0
        if not raw.isdigit() or int(raw) not in empty_indices(game.grid):
            print("That cell is not available.")
            continue
        game.human_move(int(raw))

    _render(game.snapshot())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictactoe-engine"))
        except Exception:
            print("unknown")
        return 0

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        logging.error("%s", exc)
        return 2
    if ns.seed is not None:
        settings = replace(settings, seed=ns.seed)

    if ns.cmd == "play":
        if ns.difficulty is not None:
            settings = replace(settings, difficulty=Difficulty(ns.difficulty))
        if ns.delay is not None:
            if ns.delay < 0:
                logging.error("Delay must be >= 0: %s", ns.delay)
                return 2
            settings = replace(settings, computer_delay=ns.delay)
        player = Symbol(ns.player) if ns.player else None
        try:
            return asyncio.run(_play(settings, player))
        except KeyboardInterrupt:
            return 130

    if ns.cmd in ("evaluate", "search"):
        try:
            grid = parse_grid(ns.board)
        except ValueError as exc:
            logging.error("%s", exc)
            return 2

        if ns.cmd == "evaluate":
            outcome = winner(grid)
            line = winning_line(grid)
            logging.info(
                "outcome=%s empty=%s line=%s",
                "none" if outcome is None else getattr(outcome, "value", outcome),
                empty_indices(grid),
                list(line) if line is not None else None,
            )
            if line is not None:
                geo = strikethrough(line)
                logging.info(
                    "strikethrough center=(%.2f, %.2f) rotation=%.1f length=%.3f",
                    geo.center_row, geo.center_col, geo.rotation, geo.length,
                )
            return 0

        if winner(grid) is not None:
            logging.error("Game is already over; nothing to search.")
            return 2
        side = Symbol(ns.side) if ns.side else side_to_move(grid)
        score, index = minimax(grid, side)
        logging.info("side=%s score=%d index=%d", side.value, score, index)
        return 0

    if ns.cmd == "arena":
        if ns.games < 1:
            logging.error("Games must be >= 1: %s", ns.games)
            return 2
        df = run_arena(Difficulty(ns.x), Difficulty(ns.o), ns.games, seed=settings.seed)
        with pd.option_context("display.width", 120, "display.max_columns", None):
            print(summarize(df).to_string(index=False))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
