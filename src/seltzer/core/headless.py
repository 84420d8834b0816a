"""Process-wide headless setting with a one-way lock."""

import logging
import threading

from .exceptions import ConfigurationLockedError

logger = logging.getLogger(__name__)


class HeadlessConfig:
    """
    Headless mode for newly started sessions.

    Constructed once at startup and shared with the session manager. Once a
    call locks the setting, every later change is rejected and the current
    value is kept.
    """

    def __init__(self, headless: bool = False):
        self._headless = headless
        self._locked = False
        self._lock = threading.Lock()

    @property
    def headless(self) -> bool:
        return self._headless

    @property
    def locked(self) -> bool:
        return self._locked

    def set_headless(self, enabled: bool, lock: bool = False) -> None:
        """
        Set the headless state for future sessions, optionally locking it.

        Args:
            enabled: Whether new sessions run headless
            lock: Reject all further changes after this one

        Raises:
            ConfigurationLockedError: If a previous call locked the setting
        """
        with self._lock:
            if self._locked:
                raise ConfigurationLockedError(enabled)

            self._headless = enabled
            if lock:
                self._locked = True

        logger.info(f"Headless mode {'enabled' if enabled else 'disabled'} (locked={lock})")
