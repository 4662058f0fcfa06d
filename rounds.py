"""
Round controller.

    playing --answer ok--> correct --1.5--> playing
    playing --answer bad-> wrong   --2.0--> playing
    playing --countdown--> timeout --2.0--> playing
    any     --reset------> playing (level 1)

Holds at most one countdown timer and one dwell timer; every transition
cancels both before scheduling anything new.
"""

from __future__ import annotations

import logging
import random as _random
import re
from enum import Enum
from typing import Any, Callable, Dict, Optional

from levels import MAX_LEVEL, MIN_LEVEL, LevelStore, clamp_level
from operations import Operation
from problems import Problem, generate_problem
from scheduler import Scheduler, TimerToken

logger = logging.getLogger("mathhill.rounds")

COUNTDOWN_UNITS = 10
TICK_UNITS = 1.0
CORRECT_DELTA = 1
MISS_DELTA = -5

_WHOLE_NUMBER_RE = re.compile(r"^\s*[+-]?[0-9]{1,12}\s*$", re.ASCII)


class RoundState(str, Enum):
    PLAYING = "playing"
    CORRECT = "correct"
    WRONG = "wrong"
    TIMEOUT = "timeout"


DWELL_UNITS: Dict[RoundState, float] = {
    RoundState.CORRECT: 1.5,
    RoundState.WRONG: 2.0,
    RoundState.TIMEOUT: 2.0,
}

FEEDBACK: Dict[RoundState, str] = {
    RoundState.CORRECT: "Excellent! +1 Level",
    RoundState.WRONG: "Try again! -5 Levels",
    RoundState.TIMEOUT: "Time's up! -5 Levels",
}


def parse_answer(raw: Any) -> Optional[int]:
    """Whole numbers only; anything else (empty, decimals, words) is None."""
    if not isinstance(raw, str) or _WHOLE_NUMBER_RE.fullmatch(raw) is None:
        return None
    return int(raw.strip())


def apply_delta(level: int, delta: int) -> int:
    return clamp_level(level + delta)


class RoundController:
    def __init__(
        self,
        operation: Operation | str,
        store: LevelStore,
        scheduler: Scheduler,
        generate: Callable[[Operation, int, Any], Problem] = generate_problem,
        rng: Any = None,
    ):
        self.operation = Operation(operation)
        self.store = store
        self.scheduler = scheduler
        self._generate = generate
        self._rng = rng or _random

        self.level = store.load(self.operation)
        self.state = RoundState.PLAYING
        self.problem: Optional[Problem] = None
        self.time_left = COUNTDOWN_UNITS
        self.round_id = 0
        self.last_answer: Optional[int] = None

        self._submitted = False
        self._countdown: Optional[TimerToken] = None
        self._dwell: Optional[TimerToken] = None

    # --- lifecycle ----------------------------------------------------------------

    @property
    def started(self) -> bool:
        return self.problem is not None

    def start(self) -> None:
        if not self.started:
            self._begin_round()

    def close(self) -> None:
        self._cancel_timers()

    def reset(self) -> None:
        logger.info("%s: reset from level %d", self.operation.value, self.level)
        self._cancel_timers()
        self._set_level(MIN_LEVEL)
        self._begin_round()

    # --- input --------------------------------------------------------------------

    def submit_answer(self, raw_text: Any) -> bool:
        """
        Returns True only when the text was accepted as this round's answer.
        Ignored: not playing, already answered, or not a whole number.
        """
        if self.state is not RoundState.PLAYING or self._submitted or self.problem is None:
            return False
        value = parse_answer(raw_text)
        if value is None:
            return False

        self._submitted = True
        self.last_answer = value
        if value == self.problem.answer:
            self._finish(RoundState.CORRECT, CORRECT_DELTA)
        else:
            self._finish(RoundState.WRONG, MISS_DELTA)
        return True

    # --- transitions --------------------------------------------------------------

    def _cancel_timers(self) -> None:
        self.scheduler.cancel(self._countdown)
        self.scheduler.cancel(self._dwell)
        self._countdown = None
        self._dwell = None

    def _set_level(self, level: int) -> None:
        self.level = clamp_level(level)
        self.store.save(self.operation, self.level)

    def _begin_round(self) -> None:
        self._cancel_timers()
        self.round_id += 1
        self.problem = self._generate(self.operation, self.level, self._rng)
        self.state = RoundState.PLAYING
        self.time_left = COUNTDOWN_UNITS
        self.last_answer = None
        self._submitted = False
        self._countdown = self.scheduler.schedule_after(TICK_UNITS, self._tick)

    def _tick(self) -> None:
        self._countdown = None
        if self.state is not RoundState.PLAYING:
            return
        self.time_left -= 1
        if self.time_left <= 0:
            self.time_left = 0
            self._finish(RoundState.TIMEOUT, MISS_DELTA)
        else:
            self._countdown = self.scheduler.schedule_after(TICK_UNITS, self._tick)

    def _finish(self, outcome: RoundState, delta: int) -> None:
        self._cancel_timers()
        before = self.level
        self.state = outcome
        self._set_level(apply_delta(before, delta))
        logger.debug(
            "%s round %d: %s, level %d -> %d",
            self.operation.value,
            self.round_id,
            outcome.value,
            before,
            self.level,
        )
        self._dwell = self.scheduler.schedule_after(DWELL_UNITS[outcome], self._next_round)

    def _next_round(self) -> None:
        self._dwell = None
        self._begin_round()

    # --- output -------------------------------------------------------------------

    @property
    def progress(self) -> float:
        return self.level / MAX_LEVEL

    def snapshot(self) -> Dict[str, Any]:
        p = self.problem
        lost = self.state in (RoundState.WRONG, RoundState.TIMEOUT)
        return {
            "operation": self.operation.value,
            "round": self.round_id,
            "state": self.state.value,
            "operand1": p.operand1 if p else None,
            "operand2": p.operand2 if p else None,
            "symbol": p.symbol if p else self.operation.symbol,
            "time_left": self.time_left,
            "countdown": COUNTDOWN_UNITS,
            "level": self.level,
            "max_level": MAX_LEVEL,
            "progress": self.progress,
            "answer": p.answer if (p and lost) else None,
            "your_answer": self.last_answer,
            "feedback": FEEDBACK.get(self.state),
        }
