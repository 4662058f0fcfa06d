from __future__ import annotations

from fastapi import APIRouter, Depends

from deps.auth import require_admin
from deps.game import get_registry
from sessions import SessionRegistry

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/sessions/purge")
def purge_sessions(registry: SessionRegistry = Depends(get_registry)):
    n = registry.purge_expired()
    return {"ok": True, "purged": n, "active": len(registry)}
