"""Network boundaries that feed commands to the dispatcher."""

from .socket_listener import CommandListener

__all__ = ["CommandListener"]
