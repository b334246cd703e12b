"""Runtime settings read from the environment.

Environment-first, with defaults matching the interactive game:
TTT_COMPUTER_DELAY (seconds), TTT_DIFFICULTY and TTT_SEED.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .strategy import Difficulty

COMPUTER_DELAY = 0.5
DEFAULT_DIFFICULTY = Difficulty.MEDIUM


@dataclass(frozen=True)
class Settings:
    computer_delay: float = COMPUTER_DELAY
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        settings = cls()

        raw = env.get("TTT_COMPUTER_DELAY")
        if raw:
            try:
                delay = float(raw)
            except ValueError:
                raise ValueError(f"TTT_COMPUTER_DELAY must be a number, got {raw!r}") from None
            if delay < 0:
                raise ValueError(f"TTT_COMPUTER_DELAY must be >= 0, got {raw!r}")
            settings = replace(settings, computer_delay=delay)

        raw = env.get("TTT_DIFFICULTY")
        if raw:
            try:
                settings = replace(settings, difficulty=Difficulty(raw.strip().lower()))
            except ValueError:
                choices = ", ".join(d.value for d in Difficulty)
                raise ValueError(f"TTT_DIFFICULTY must be one of {choices}, got {raw!r}") from None

        raw = env.get("TTT_SEED")
        if raw:
            try:
                settings = replace(settings, seed=int(raw))
            except ValueError:
                raise ValueError(f"TTT_SEED must be an integer, got {raw!r}") from None

        return settings
