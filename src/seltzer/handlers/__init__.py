"""Command handlers organized by category."""

from .base import Handler, HandlerContext
from .cookies import HANDLERS as cookie_handlers
from .lifecycle import HANDLERS as lifecycle_handlers
from .navigation import HANDLERS as navigation_handlers
from .selectors import HANDLERS as selector_handlers
from .waits import HANDLERS as wait_handlers


def default_handlers() -> dict:
    """Every category handler keyed by command type (CHAIN is added by the dispatcher)."""
    handlers = {}
    handlers.update(lifecycle_handlers)
    handlers.update(navigation_handlers)
    handlers.update(cookie_handlers)
    handlers.update(selector_handlers)
    handlers.update(wait_handlers)
    return handlers


__all__ = ["Handler", "HandlerContext", "default_handlers"]
