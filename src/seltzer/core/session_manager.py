"""Browser session lifecycle: start, lookup and close."""

from __future__ import annotations

import asyncio
import logging
import shutil
import threading
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import anyio
from selenium.webdriver.remote.webdriver import WebDriver

from .driver_factory import DriverFactory
from .exceptions import SessionLimitError
from .headless import HeadlessConfig
from .session_store import SessionStore

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def new_session_id() -> str:
    return str(uuid.uuid4())


@dataclass
class BrowserSession:
    """
    An active browser session.

    Owns its WebDriver and its profile directory exclusively. ``last_used_at``
    stays None until the first command runs against the session.
    """

    session_id: str
    driver: WebDriver
    working_dir: Path
    created_at: int
    last_used_at: Optional[int] = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    _closed: bool = field(default=False, repr=False)
    _close_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def touch(self, now: int) -> None:
        """Record that a command ran at ``now``."""
        self.last_used_at = now

    @property
    def never_used(self) -> bool:
        return self.last_used_at is None

    @property
    def closed(self) -> bool:
        return self._closed

    def close_driver(self) -> bool:
        """
        Quit the browser (blocking). Safe to call more than once.

        Returns:
            True if this call quit the driver, False if it was already closed
        """
        with self._close_lock:
            if self._closed:
                return False
            self._closed = True

        self.driver.quit()
        return True

    def to_dict(self) -> dict:
        """Convert session info to dictionary for API responses."""
        current_url = None
        if not self._closed:
            try:
                current_url = self.driver.current_url
            except Exception as e:
                logger.debug(f"Could not read current URL for {self.session_id}: {e}")

        return {
            "session_id": self.session_id,
            "created_at": self.created_at,
            "last_used_at": self.last_used_at,
            "working_dir": str(self.working_dir),
            "current_url": current_url,
        }


class SessionManager:
    """
    Starts and closes browser sessions and keeps the session store in sync.

    The store is only locked for the brief insert/remove; starting a browser,
    quitting it and deleting its profile directory all happen outside the lock.
    """

    def __init__(
        self,
        store: SessionStore,
        driver_factory: DriverFactory,
        headless_config: HeadlessConfig,
        profile_root: Path,
        max_sessions: int = 10,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = new_session_id,
    ):
        self._store = store
        self._driver_factory = driver_factory
        self._headless = headless_config
        self._profile_root = Path(profile_root)
        self._max_sessions = max_sessions
        self._clock = clock
        self._id_factory = id_factory

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def clock(self) -> Callable[[], int]:
        return self._clock

    def working_dir_for(self, session_id: str) -> Path:
        """Profile directory for a session ID."""
        return self._profile_root / session_id

    def _reserve_id(self) -> str:
        """Generate IDs until one is not live or being started."""
        while True:
            session_id = self._id_factory()
            if self._store.reserve(session_id):
                return session_id
            logger.debug(f"Session ID collision on {session_id}, retrying")

    async def start_session(self) -> BrowserSession:
        """
        Start a new browser session and register it.

        Returns:
            New BrowserSession

        Raises:
            SessionLimitError: If max sessions reached
            DriverStartError: If the browser could not be started
        """
        if len(self._store) + self._store.pending >= self._max_sessions:
            raise SessionLimitError(self._max_sessions)

        session_id = self._reserve_id()
        working_dir = self.working_dir_for(session_id)

        try:
            await anyio.to_thread.run_sync(
                lambda: working_dir.mkdir(parents=True, exist_ok=True)
            )
            driver = await self._driver_factory.create(
                headless=self._headless.headless,
                user_data_dir=working_dir,
            )
        except BaseException:
            # Runs on cancellation too, so the reservation and directory never leak
            self._store.release(session_id)
            with anyio.CancelScope(shield=True):
                await anyio.to_thread.run_sync(
                    lambda: shutil.rmtree(working_dir, ignore_errors=True)
                )
            raise

        session = BrowserSession(
            session_id=session_id,
            driver=driver,
            working_dir=working_dir,
            created_at=self._clock(),
        )
        self._store.insert(session)
        logger.info(f"Started session {session_id} (headless={self._headless.headless})")

        return session

    def get_session(self, session_id: str) -> BrowserSession:
        """
        Get a session by ID.

        Raises:
            SessionNotFoundError: If session doesn't exist
        """
        return self._store.get(session_id)

    async def close(self, session: BrowserSession) -> bool:
        """
        Close a session and release its resources.

        The session is removed from the store first so no new command can
        reach it, then its browser is quit and its profile directory deleted.
        A directory that cannot be deleted is logged and otherwise ignored.

        Args:
            session: Session to close

        Returns:
            True if this call removed the session from the store
        """
        removed = self._store.remove(session.session_id) is not None

        try:
            if await anyio.to_thread.run_sync(session.close_driver):
                logger.debug(f"Quit driver for {session.session_id}")
        except Exception as e:
            logger.warning(f"Error closing driver for {session.session_id}: {e}")

        await self._remove_working_dir(session)

        if removed:
            logger.info(f"Closed session {session.session_id}")
        return removed

    async def _remove_working_dir(self, session: BrowserSession) -> None:
        working_dir = session.working_dir

        def remove() -> None:
            if working_dir.exists():
                shutil.rmtree(working_dir)

        try:
            await anyio.to_thread.run_sync(remove)
        except OSError as e:
            logger.warning(
                f"Could not delete working directory {working_dir} "
                f"for session {session.session_id}: {e}"
            )

    async def close_session(self, session_id: str) -> bool:
        """
        Close a session by ID.

        Returns:
            True if session was closed, False if not found
        """
        session = self._store.find(session_id)
        if session is None:
            return False
        return await self.close(session)

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        return [s.to_dict() for s in self._store.all()]

    async def close_all(self) -> int:
        """
        Close all sessions (for shutdown).

        Returns:
            Number of sessions closed
        """
        count = 0
        for session in self._store.all():
            if await self.close(session):
                count += 1
        logger.info(f"Closed all {count} sessions")
        return count

    @property
    def session_count(self) -> int:
        """Number of active sessions."""
        return len(self._store)
