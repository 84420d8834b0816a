"""Thread-safe registry of live browser sessions."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Dict, Optional

from .exceptions import DuplicateSessionError, SessionNotFoundError

if TYPE_CHECKING:
    from .session_manager import BrowserSession


class SessionStore:
    """
    Registry of live sessions keyed by session ID.

    Selenium calls run in worker threads, so every structural operation is
    guarded by a ``threading.Lock``. The lock is only held for dictionary
    operations, never around driver or filesystem work.

    IDs can be reserved before their session exists so that a slow driver
    start does not let another start claim the same ID. Reserved IDs are not
    visible through ``find``.
    """

    def __init__(self):
        self._sessions: Dict[str, BrowserSession] = {}
        self._reserved: set[str] = set()
        self._lock = threading.Lock()

    def reserve(self, session_id: str) -> bool:
        """Claim an ID for a session being started. False if already taken."""
        with self._lock:
            if session_id in self._sessions or session_id in self._reserved:
                return False
            self._reserved.add(session_id)
            return True

    def release(self, session_id: str) -> None:
        """Drop a reservation whose session never started."""
        with self._lock:
            self._reserved.discard(session_id)

    def insert(self, session: BrowserSession) -> None:
        """
        Register a session.

        Raises:
            DuplicateSessionError: If the ID is already registered
        """
        with self._lock:
            if session.session_id in self._sessions:
                raise DuplicateSessionError(session.session_id)
            self._reserved.discard(session.session_id)
            self._sessions[session.session_id] = session

    def find(self, session_id: Optional[str]) -> Optional[BrowserSession]:
        """Look up a session, returning None if it is not registered."""
        if session_id is None:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def get(self, session_id: str) -> BrowserSession:
        """
        Look up a session.

        Raises:
            SessionNotFoundError: If the session is not registered
        """
        session = self.find(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def remove(self, session_id: str) -> Optional[BrowserSession]:
        """Remove a session if present. Returns the removed session or None."""
        with self._lock:
            return self._sessions.pop(session_id, None)

    def all(self) -> list[BrowserSession]:
        """Snapshot of the registered sessions, safe to iterate while mutating."""
        with self._lock:
            return list(self._sessions.values())

    @property
    def pending(self) -> int:
        """Number of reserved IDs whose sessions are still starting."""
        with self._lock:
            return len(self._reserved)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
