"""Shared types for command handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from ..core.exceptions import SessionNotFoundError

if TYPE_CHECKING:
    from ..config import Settings
    from ..core.session_manager import BrowserSession, SessionManager
    from ..models.commands import Command
    from ..models.responses import Response


@dataclass
class HandlerContext:
    """Services a handler may need besides the session it runs against."""

    session_manager: SessionManager
    settings: Settings
    dispatch: Callable[[Optional[BrowserSession], Command], Awaitable[Response]]


Handler = Callable[
    [HandlerContext, Optional["BrowserSession"], "Command"], Awaitable["Response"]
]


def require_session(session: Optional[BrowserSession], command: Command) -> BrowserSession:
    """Session a command runs against; every command except START needs one."""
    if session is None:
        raise SessionNotFoundError(str(command.id))
    return session
