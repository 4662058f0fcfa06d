# schemas/game.py
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field

# ---------- Operations ----------


class OperationOut(BaseModel):
    id: str
    name: str
    symbol: str
    path: str


# ---------- Round ----------


class RoundOut(BaseModel):
    operation: str
    round: int
    state: str
    operand1: Optional[int] = None
    operand2: Optional[int] = None
    symbol: str
    time_left: int
    countdown: int
    level: int
    max_level: int
    progress: float
    # only filled in once the round is lost (wrong / timeout)
    answer: Optional[int] = None
    your_answer: Optional[int] = None
    feedback: Optional[str] = None


class AnswerRequest(BaseModel):
    # raw text from the input box; validated by the round controller
    answer: str = Field(default="", max_length=100)


class AnswerResponse(BaseModel):
    accepted: bool
    round: RoundOut


# ---------- Session ----------


class LeaveOut(BaseModel):
    ok: bool
    left: bool
    level: int


class LevelsOut(BaseModel):
    session_id: str
    levels: Dict[str, int]


class SessionEndOut(BaseModel):
    ok: bool
    ended: bool
