"""In-memory edit session registry."""

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from uuid import uuid4

from permatrix.application.ports import PresetResolver
from permatrix.application.services.edit_session import EditSession
from permatrix.application.services.role_change_reconciler import (
    RoleChangeReconciler,
    SessionMode,
)
from permatrix.domain.entities import UserAccess

logger = logging.getLogger(__name__)


class InMemorySessionRegistry:
    """Holds edit sessions by id. Sessions share no state with each other.

    A session not touched for `ttl_seconds` is dropped. When `max_sessions`
    is reached, opening a new session drops the least recently used one.
    """

    def __init__(
        self,
        resolver: PresetResolver,
        ttl_seconds: float = 1800.0,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._resolver = resolver
        self._ttl = ttl_seconds
        self._max = max_sessions
        self._clock = clock
        # Least recently used first.
        self._sessions: OrderedDict[str, tuple[EditSession, float]] = OrderedDict()

    def create(self, mode: SessionMode, access: UserAccess | None = None) -> EditSession:
        """Open a session; edit sessions start tracking once access is given."""
        self._evict_expired()
        while len(self._sessions) >= self._max:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted session at capacity", extra={"session_id": evicted})

        reconciler = RoleChangeReconciler(self._resolver, mode)
        if access is not None:
            reconciler.load_original(access)
        session = EditSession(str(uuid4()), reconciler)
        self._sessions[session.id] = (session, self._clock())
        logger.debug(
            "Opened %s session", mode.value, extra={"session_id": session.id}
        )
        return session

    def get(self, session_id: str) -> EditSession | None:
        """Look up a session and mark it used."""
        self._evict_expired()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        session, _ = entry
        self._sessions[session_id] = (session, self._clock())
        self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def _evict_expired(self) -> None:
        cutoff = self._clock() - self._ttl
        while self._sessions:
            session_id, (_, last_used) = next(iter(self._sessions.items()))
            if last_used > cutoff:
                break
            del self._sessions[session_id]
            logger.debug("Expired idle session", extra={"session_id": session_id})

    def __len__(self) -> int:
        return len(self._sessions)
