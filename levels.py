from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from models import SessionLevel
from operations import Operation

logger = logging.getLogger("mathhill.levels")

MIN_LEVEL = 1
MAX_LEVEL = 1000
DEFAULT_LEVEL = MIN_LEVEL

# plain base-10 integer string, ASCII digits only
_LEVEL_RE = re.compile(r"-?[0-9]{1,9}", re.ASCII)


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def storage_key(operation: Operation | str) -> str:
    return f"mathhill-{Operation(operation).value}-level"


def parse_level(raw: Optional[str]) -> int:
    """Stored value -> level; anything but a plain integer string falls back to the default."""
    if raw is None:
        return DEFAULT_LEVEL
    if not isinstance(raw, str) or _LEVEL_RE.fullmatch(raw) is None:
        logger.warning("ignoring unparseable stored level %r", raw)
        return DEFAULT_LEVEL
    return clamp_level(int(raw))


class LevelStore(Protocol):
    def load(self, operation: Operation) -> int: ...

    def save(self, operation: Operation, level: int) -> None: ...

    def clear(self) -> None: ...


class InMemoryLevelStore:
    """Dict-backed store; values are kept as strings, same as the SQL store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def load(self, operation: Operation) -> int:
        return parse_level(self.values.get(storage_key(operation)))

    def save(self, operation: Operation, level: int) -> None:
        self.values[storage_key(operation)] = str(clamp_level(level))

    def clear(self) -> None:
        self.values.clear()


class SqlLevelStore:
    """Levels for one browsing session, stored in `session_levels`."""

    def __init__(self, session_factory: Callable[[], Session], session_id: str):
        self._session_factory = session_factory
        self.session_id = session_id

    def load(self, operation: Operation) -> int:
        with self._session_factory() as db:
            raw = db.execute(
                select(SessionLevel.value).where(
                    SessionLevel.session_id == self.session_id,
                    SessionLevel.storage_key == storage_key(operation),
                )
            ).scalar_one_or_none()
        return parse_level(raw)

    def save(self, operation: Operation, level: int) -> None:
        key = storage_key(operation)
        value = str(clamp_level(level))
        with self._session_factory() as db:
            row = db.execute(
                select(SessionLevel).where(
                    SessionLevel.session_id == self.session_id,
                    SessionLevel.storage_key == key,
                )
            ).scalar_one_or_none()
            if row is None:
                db.add(SessionLevel(session_id=self.session_id, storage_key=key, value=value))
            else:
                row.value = value
                row.updated_at = datetime.now(UTC)
            db.commit()

    def clear(self) -> None:
        with self._session_factory() as db:
            db.execute(delete(SessionLevel).where(SessionLevel.session_id == self.session_id))
            db.commit()
        logger.debug("cleared levels for session %s", self.session_id)


def levels_by_operation(store: LevelStore) -> Dict[str, int]:
    return {op.value: store.load(op) for op in Operation}
