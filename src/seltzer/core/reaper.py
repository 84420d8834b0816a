"""Background eviction of idle and abandoned sessions."""

from __future__ import annotations

import logging
from typing import Optional

import anyio

from .session_manager import BrowserSession, SessionManager

logger = logging.getLogger(__name__)

# Default eviction thresholds
NEVER_USED_TIMEOUT_SECONDS = 600  # 10 minutes
INACTIVE_TIMEOUT_SECONDS = 3600  # 1 hour


class SessionReaper:
    """
    Periodically closes sessions that were never used within
    ``never_used_timeout_seconds`` of starting, or that have been idle for
    longer than ``inactive_timeout_seconds``.

    Eviction goes through ``SessionManager.close``, the same path as a client
    EXIT, so a session closed by both at once is only detached once.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        never_used_timeout_seconds: float = NEVER_USED_TIMEOUT_SECONDS,
        inactive_timeout_seconds: float = INACTIVE_TIMEOUT_SECONDS,
        interval_seconds: float = 60,
    ):
        self._session_manager = session_manager
        self._never_used_timeout_ms = int(never_used_timeout_seconds * 1000)
        self._inactive_timeout_ms = int(inactive_timeout_seconds * 1000)
        self._interval = interval_seconds

    def is_expired(self, session: BrowserSession, now: int) -> bool:
        """Whether a session has outlived its never-used or inactive timeout."""
        if session.last_used_at is None:
            return now - session.created_at > self._never_used_timeout_ms
        return now - session.last_used_at > self._inactive_timeout_ms

    def expired_sessions(self, now: Optional[int] = None) -> list[BrowserSession]:
        """
        Find sessions that have exceeded the never-used or inactive limits.

        Args:
            now: Timestamp in ms to evaluate against (defaults to the manager clock)

        Returns:
            Expired sessions from a snapshot of the store
        """
        if now is None:
            now = self._session_manager.clock()

        expired = []
        for session in self._session_manager.store.all():
            if self.is_expired(session, now):
                if session.never_used:
                    logger.info(f"Session {session.session_id} was never used")
                else:
                    idle = (now - session.last_used_at) / 1000
                    logger.info(f"Session {session.session_id} inactive for {idle:.0f}s")
                expired.append(session)
        return expired

    async def reap(self, now: Optional[int] = None) -> int:
        """
        Close all expired sessions.

        Returns:
            Number of sessions closed by this pass
        """
        count = 0
        for session in self.expired_sessions(now):
            # Re-check: the session may have been used while earlier ones were closing
            current = now if now is not None else self._session_manager.clock()
            if not self.is_expired(session, current):
                logger.debug(f"Session {session.session_id} was used, not reaping")
                continue
            try:
                if await self._session_manager.close(session):
                    count += 1
            except Exception as e:
                logger.error(f"Error reaping session {session.session_id}: {e}")
        return count

    async def run(self) -> None:
        """Reap every ``interval_seconds`` until cancelled."""
        logger.info(f"Session reaper started (interval: {self._interval}s)")
        try:
            while True:
                await anyio.sleep(self._interval)
                try:
                    reaped = await self.reap()
                    if reaped > 0:
                        logger.info(f"Reaped {reaped} expired session(s)")
                except Exception as e:
                    logger.error(f"Error during session reap: {e}")
        finally:
            logger.info("Session reaper stopped")
