from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional

import config
from levels import LevelStore
from operations import Operation
from rounds import RoundController
from scheduler import ClockScheduler

logger = logging.getLogger("mathhill.sessions")


class GameSession:
    """
    Game state for one browsing session: a scheduler and the round on screen.
    Only one operation is played at a time; opening another one closes the
    previous round and its timers, and leaving the game page closes it too.

    Callers hold `lock` for anything that syncs or touches the round.
    """

    def __init__(
        self,
        session_id: str,
        store: LevelStore,
        clock: Callable[[], float] = time.monotonic,
        unit_seconds: float = config.TIME_UNIT_SECONDS,
        rng: Any = None,
    ):
        self.session_id = session_id
        self.store = store
        self.scheduler = ClockScheduler(clock, unit_seconds)
        self.active: Optional[RoundController] = None
        self.lock = threading.Lock()
        self.ended = False
        self._clock = clock
        self._rng = rng
        self.last_seen = clock()

    def sync(self) -> None:
        self.scheduler.sync()
        self.last_seen = self._clock()

    def open(self, operation: Operation | str) -> RoundController:
        op = Operation(operation)
        self.sync()
        if self.active is not None and self.active.operation is op:
            return self.active
        if self.active is not None:
            self.active.close()
        self.active = RoundController(op, self.store, self.scheduler, rng=self._rng)
        self.active.start()
        logger.debug(
            "session %s: playing %s at level %d", self.session_id, op.value, self.active.level
        )
        return self.active

    def leave(self, operation: Operation | str) -> bool:
        """Close the round for `operation` if it is the one on screen."""
        op = Operation(operation)
        self.sync()
        if self.active is None or self.active.operation is not op:
            return False
        logger.debug(
            "session %s: left %s at level %d", self.session_id, op.value, self.active.level
        )
        self.close()
        return True

    def close(self) -> None:
        if self.active is not None:
            self.active.close()
            self.active = None

    def idle_for(self, now: float) -> float:
        return now - self.last_seen


class SessionRegistry:
    """
    Browsing sessions by id. The registry lock only guards the dict; syncing
    and round calls run under each session's own lock.
    """

    def __init__(
        self,
        store_factory: Callable[[str], LevelStore],
        clock: Callable[[], float] = time.monotonic,
        ttl_seconds: float = config.SESSION_TTL_SECONDS,
        unit_seconds: float = config.TIME_UNIT_SECONDS,
        rng: Any = None,
    ):
        self._store_factory = store_factory
        self._clock = clock
        self._ttl = ttl_seconds
        self._unit = unit_seconds
        self._rng = rng
        self._sessions: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def _lookup(self, session_id: str) -> GameSession:
        with self._lock:
            now = self._clock()
            session = self._sessions.get(session_id)
            if session is not None and session.idle_for(now) > self._ttl:
                # expired before anyone purged it; start over
                self._teardown(self._sessions.pop(session_id))
                session = None
            if session is None:
                session = GameSession(
                    session_id,
                    self._store_factory(session_id),
                    clock=self._clock,
                    unit_seconds=self._unit,
                    rng=self._rng,
                )
                self._sessions[session_id] = session
                logger.info("session %s: started", session_id)
            # in use from here on, so never idle-expired mid-request
            session.last_seen = now
            return session

    @contextmanager
    def acquire(self, session_id: str) -> Iterator[GameSession]:
        """Yield the session (created on first use), synced to now, with its lock held."""
        while True:
            session = self._lookup(session_id)
            with session.lock:
                if session.ended:
                    # ended while we waited for the lock
                    continue
                session.sync()
                yield session
                return

    def _teardown(self, session: GameSession) -> None:
        # expired sessions have no request in flight, so no session lock is needed
        session.ended = True
        session.close()
        session.store.clear()
        logger.info("session %s: ended", session.session_id)

    def end(self, session_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            # levels may still be stored from before a restart
            self._store_factory(session_id).clear()
            return False
        with session.lock:
            self._teardown(session)
        return True

    def purge_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [sid for sid, s in self._sessions.items() if s.idle_for(now) > self._ttl]
            for sid in expired:
                self._teardown(self._sessions.pop(sid))
        if expired:
            logger.info("purged %d idle session(s)", len(expired))
        return len(expired)
