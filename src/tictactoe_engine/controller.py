"""
Game state machine for one human against the computer.

Phases run NOT_STARTED -> IN_PROGRESS -> OVER, and any phase returns to
NOT_STARTED on reset. Calls that are not legal in the current state are
ignored: a UI may forward every click without checking it first.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import Callable, Optional, Union

import numpy as np

from .board import (
    CELLS,
    DRAW,
    Grid,
    Outcome,
    Strikethrough,
    Symbol,
    WinLine,
    empty_grid,
    place,
    strikethrough,
    winner,
    winning_line,
)
from .config import COMPUTER_DELAY, DEFAULT_DIFFICULTY
from .scheduling import Handle, Scheduler, default_scheduler
from .strategy import Difficulty, choose_computer_move, make_rng

logger = logging.getLogger(__name__)

FIRST_PLAYER = Symbol.X


class GamePhase(Enum):
    NOT_STARTED = "notStarted"
    IN_PROGRESS = "inProgress"
    OVER = "over"


@dataclass(frozen=True)
class PlayerAssignment:
    human: Symbol
    computer: Symbol

    @classmethod
    def for_human(cls, symbol: Symbol) -> "PlayerAssignment":
        return cls(human=symbol, computer=symbol.opposite())


@dataclass(frozen=True)
class GameSnapshot:
    grid: Grid
    phase: GamePhase
    turn: Optional[Symbol]
    players: Optional[PlayerAssignment]
    difficulty: Difficulty
    outcome: Outcome
    result: Optional[str]
    winning_line: Optional[WinLine]


def result_text(outcome: Outcome) -> Optional[str]:
    if outcome is None:
        return None
    if outcome == DRAW:
        return "It's a draw"
    return f"Player {outcome.value} wins!"


class GameController:
    """Owns the grid, turn, player assignment and the pending computer move."""

    def __init__(
        self,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
        *,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[np.random.Generator] = None,
        computer_delay: float = COMPUTER_DELAY,
        on_change: Optional[Callable[[GameSnapshot], None]] = None,
    ) -> None:
        self._scheduler: Scheduler = scheduler if scheduler is not None else default_scheduler()
        self._rng = rng if rng is not None else make_rng()
        self._computer_delay = computer_delay
        self._on_change = on_change
        self._difficulty = Difficulty(difficulty)
        self._grid: Grid = empty_grid()
        self._phase = GamePhase.NOT_STARTED
        self._turn: Optional[Symbol] = None
        self._players: Optional[PlayerAssignment] = None
        self._outcome: Outcome = None
        self._result: Optional[str] = None
        self._pending: Optional[Handle] = None

    # -- read-only state -------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def turn(self) -> Optional[Symbol]:
        return self._turn

    @property
    def players(self) -> Optional[PlayerAssignment]:
        return self._players

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def result(self) -> Optional[str]:
        return self._result

    @property
    def winning_line(self) -> Optional[WinLine]:
        return winning_line(self._grid)

    @property
    def strikethrough(self) -> Optional[Strikethrough]:
        line = self.winning_line
        if self._phase is not GamePhase.OVER or line is None:
            return None
        return strikethrough(line)

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def has_pending_move(self) -> bool:
        return self._pending is not None

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            grid=self._grid,
            phase=self._phase,
            turn=self._turn,
            players=self._players,
            difficulty=self._difficulty,
            outcome=self._outcome,
            result=self._result,
            winning_line=self.winning_line,
        )

    # -- inputs ------------------------------------------------------------

    def select_difficulty(self, mode: Union[Difficulty, str]) -> None:
        if self._phase is not GamePhase.NOT_STARTED:
            logger.debug("ignored select_difficulty(%s) in phase %s", mode, self._phase.value)
            return
        self._difficulty = Difficulty(mode)
        self._notify()

    def choose_player(self, symbol: Union[Symbol, str]) -> None:
        if self._phase is not GamePhase.NOT_STARTED:
            logger.debug("ignored choose_player(%s) in phase %s", symbol, self._phase.value)
            return
        players = PlayerAssignment.for_human(Symbol(symbol))
        self._cancel_pending()
        # the computer opens as X: schedule before touching state
        if players.computer is FIRST_PLAYER:
            self._schedule_computer_move()
        self._players = players
        self._phase = GamePhase.IN_PROGRESS
        self._turn = FIRST_PLAYER
        logger.info(
            "game started: human=%s computer=%s difficulty=%s",
            self._players.human.value, self._players.computer.value, self._difficulty.value,
        )
        self._notify()

    def human_move(self, index: int) -> None:
        players = self._players
        if (
            self._phase is not GamePhase.IN_PROGRESS
            or players is None
            or self._turn is not players.human
            or not isinstance(index, Integral)
            or isinstance(index, bool)
            or not 0 <= index < CELLS
            or self._grid[index] is not None
        ):
            logger.debug("ignored human_move(%r)", index)
            return
        index = int(index)
        if winner(place(self._grid, index, players.human)) is None:
            self._schedule_computer_move()
        self._apply(index, players.human)

    def computer_move(self) -> None:
        players = self._players
        if (
            self._phase is not GamePhase.IN_PROGRESS
            or players is None
            or self._turn is not players.computer
        ):
            logger.debug("ignored computer_move()")
            return
        self._cancel_pending()
        index = choose_computer_move(self._grid, players.computer, self._difficulty, self._rng)
        self._apply(index, players.computer)

    def reset(self) -> None:
        self._cancel_pending()
        self._grid = empty_grid()
        self._phase = GamePhase.NOT_STARTED
        self._turn = None
        self._players = None
        self._outcome = None
        self._result = None
        logger.debug("game reset")
        self._notify()

    # -- internals -------------------------------------------------------

    def _apply(self, index: int, symbol: Symbol) -> None:
        self._grid = place(self._grid, index, symbol)
        self._turn = symbol.opposite()
        outcome = winner(self._grid)
        if outcome is not None:
            self._outcome = outcome
            self._result = result_text(outcome)
            self._phase = GamePhase.OVER
            self._turn = None
            logger.info("game over: %s", self._result)
        self._notify()

    def _schedule_computer_move(self) -> None:
        self._cancel_pending()
        self._pending = self._scheduler.call_later(self._computer_delay, self._fire_pending)

    def _fire_pending(self) -> None:
        self._pending = None
        self.computer_move()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
