import re
import secrets
from typing import Annotated, Optional

from fastapi import Cookie, Depends, Header, HTTPException, Response

import config
from db import SessionLocal
from levels import SqlLevelStore
from sessions import SessionRegistry

_SESSION_ID_RE = re.compile(r"^[A-Za-z0-9_-]{8,64}$")

registry = SessionRegistry(store_factory=lambda sid: SqlLevelStore(SessionLocal, sid))


def get_registry() -> SessionRegistry:
    return registry


def get_existing_session_id(
    x_session_id: Annotated[str | None, Header(alias="x-session-id")] = None,
    mathhill_session: Annotated[str | None, Cookie()] = None,
) -> Optional[str]:
    """X-Session-Id header, else the session cookie; None when the browser has neither."""
    sid = x_session_id or mathhill_session
    if sid is not None and _SESSION_ID_RE.fullmatch(sid) is None:
        raise HTTPException(status_code=400, detail="invalid session id")
    return sid


def get_session_id(
    response: Response,
    sid: Annotated[Optional[str], Depends(get_existing_session_id)],
) -> str:
    """
    Like get_existing_session_id, but a browser without a session gets a new id
    handed back as a session cookie (no max-age, so it dies with the browser).
    """
    if sid is None:
        sid = secrets.token_urlsafe(24)
        response.set_cookie(config.SESSION_COOKIE, sid, httponly=True, samesite="lax")
    return sid
