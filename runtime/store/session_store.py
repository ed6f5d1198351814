"""Session storage for running interviews.

Sessions live in memory for the duration of an interview; saving a finished
interview to disk is the job of SessionExportStore.

The in-memory store applies an explicit eviction policy instead of growing
for the life of the process:
- a sliding TTL: a session untouched for ``ttl_seconds`` is dropped
- an LRU capacity: beyond ``max_sessions`` the least recently used go first

Expired entries are purged lazily on every access. Either limit can be
disabled by passing 0 / None.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from ..models.session_models import InterviewSession

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Abstract storage interface for in-progress interview sessions."""

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[InterviewSession]:
        """Retrieve a session by id, or None if unknown (or evicted)."""
        raise NotImplementedError

    @abstractmethod
    def save_session(self, session: InterviewSession) -> None:
        """Insert or replace a session."""
        raise NotImplementedError

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        """Remove a session; return True if it existed."""
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Thread-safe in-memory store with TTL + LRU eviction.

    Parameters
    ----------
    ttl_seconds:
        Idle lifetime of a session. Every get/save refreshes it.
        0 or None disables expiry.
    max_sessions:
        Maximum number of sessions kept; the least recently used session is
        evicted first. 0 or None disables the cap.
    clock:
        Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds or None
        self._max_sessions = max_sessions or None
        self._clock = clock
        self._lock = threading.RLock()
        # session_id -> (session, last_access)
        self._sessions: "OrderedDict[str, Tuple[InterviewSession, float]]" = OrderedDict()

    def get_session(self, session_id: str) -> Optional[InterviewSession]:
        with self._lock:
            self._purge_expired()
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            session = entry[0]
            self._sessions[session_id] = (session, self._clock())
            self._sessions.move_to_end(session_id)
            return session

    def save_session(self, session: InterviewSession) -> None:
        with self._lock:
            self._purge_expired()
            self._sessions[session.id] = (session, self._clock())
            self._sessions.move_to_end(session.id)
            self._enforce_capacity()

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._sessions)

    # ------------------------------------------------------------------
    # Eviction
    # ------------------------------------------------------------------

    def _purge_expired(self) -> None:
        if self._ttl is None:
            return
        cutoff = self._clock() - self._ttl
        # Entries are ordered by last access, oldest first.
        while self._sessions:
            session_id, (_, last_access) = next(iter(self._sessions.items()))
            if last_access > cutoff:
                break
            del self._sessions[session_id]
            logger.info("[STORE] Session expired: %s", session_id)

    def _enforce_capacity(self) -> None:
        if self._max_sessions is None:
            return
        while len(self._sessions) > self._max_sessions:
            session_id, _ = self._sessions.popitem(last=False)
            logger.info("[STORE] Session evicted (capacity %d): %s", self._max_sessions, session_id)
