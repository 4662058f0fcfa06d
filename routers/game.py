# routers/game.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from deps.game import get_existing_session_id, get_registry, get_session_id
from levels import levels_by_operation
from operations import Operation, list_operations
from schemas.game import (
    AnswerRequest,
    AnswerResponse,
    LeaveOut,
    LevelsOut,
    OperationOut,
    RoundOut,
    SessionEndOut,
)
from sessions import SessionRegistry

logger = logging.getLogger("mathhill.api")

router = APIRouter(tags=["game"])


@router.get("/operations", response_model=List[OperationOut])
def operations():
    return list_operations()


@router.get("/game/{operation}", response_model=RoundOut)
def current_round(
    operation: Operation,
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    with registry.acquire(session_id) as session:
        return session.open(operation).snapshot()


@router.post("/game/{operation}/answer", response_model=AnswerResponse)
def submit_answer(
    operation: Operation,
    req: AnswerRequest,
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    with registry.acquire(session_id) as session:
        ctl = session.open(operation)
        accepted = ctl.submit_answer(req.answer)
        return {"accepted": accepted, "round": ctl.snapshot()}


@router.post("/game/{operation}/reset", response_model=RoundOut)
def reset_level(
    operation: Operation,
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    with registry.acquire(session_id) as session:
        ctl = session.open(operation)
        ctl.reset()
        return ctl.snapshot()


@router.post("/game/{operation}/leave", response_model=LeaveOut)
def leave_game(
    operation: Operation,
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    # the browser calls this when the game page goes away; stops the round's timers
    with registry.acquire(session_id) as session:
        left = session.leave(operation)
        return {"ok": True, "left": left, "level": session.store.load(operation)}


@router.get("/levels", response_model=LevelsOut)
def levels(
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    with registry.acquire(session_id) as session:
        return {"session_id": session_id, "levels": levels_by_operation(session.store)}


@router.delete("/session", response_model=SessionEndOut)
def end_session(
    session_id: Optional[str] = Depends(get_existing_session_id),
    registry: SessionRegistry = Depends(get_registry),
):
    if session_id is None:
        # nothing to end; don't hand out a cookie just for this
        return {"ok": True, "ended": False}
    ended = registry.end(session_id)
    logger.info("session %s: end requested (active=%s)", session_id, ended)
    return {"ok": True, "ended": ended}
