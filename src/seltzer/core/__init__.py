"""Core session registry and lifecycle for the Seltzer server."""

from .exceptions import (
    SeltzerError,
    SessionNotFoundError,
    SessionLimitError,
    DuplicateSessionError,
    DriverStartError,
    ConfigurationLockedError,
    ElementNotFoundError,
    DomainNotAllowedError,
    InvalidCommandError,
)
from .headless import HeadlessConfig
from .session_store import SessionStore
from .session_manager import SessionManager, BrowserSession

__all__ = [
    "SeltzerError",
    "SessionNotFoundError",
    "SessionLimitError",
    "DuplicateSessionError",
    "DriverStartError",
    "ConfigurationLockedError",
    "ElementNotFoundError",
    "DomainNotAllowedError",
    "InvalidCommandError",
    "HeadlessConfig",
    "SessionStore",
    "SessionManager",
    "BrowserSession",
]
