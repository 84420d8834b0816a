"""Domain-specific exceptions for the Seltzer server."""


class SeltzerError(Exception):
    """Base exception for all Seltzer errors."""

    pass


class SessionNotFoundError(SeltzerError):
    """Raised when referencing a non-existent or expired session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class SessionLimitError(SeltzerError):
    """Raised when max session limit is reached."""

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        super().__init__(f"Maximum sessions ({max_sessions}) reached")


class DuplicateSessionError(SeltzerError):
    """Raised when inserting a session whose ID is already registered."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session already registered: {session_id}")


class DriverStartError(SeltzerError):
    """Raised when a browser driver cannot be started for a new session."""

    def __init__(self, message: str):
        super().__init__(f"Failed to start browser driver: {message}")


class ConfigurationLockedError(SeltzerError):
    """Raised when changing the headless setting after it has been locked."""

    def __init__(self, requested: bool):
        self.requested = requested
        state = "on" if requested else "off"
        super().__init__(f"Headless mode is locked and cannot be turned {state}")


class ElementNotFoundError(SeltzerError):
    """Raised when a selector matches no element on the page."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"No element matched selector: {selector}")


class DomainNotAllowedError(SeltzerError):
    """Raised when attempting to navigate to a domain not in the allowed list."""

    def __init__(self, domain: str, allowed_domains: list[str]):
        self.domain = domain
        self.allowed_domains = allowed_domains
        super().__init__(f"Domain '{domain}' is not in allowed list: {allowed_domains}")


class InvalidCommandError(SeltzerError):
    """Raised when an inbound payload is not a valid command."""

    def __init__(self, message: str):
        super().__init__(f"Invalid command: {message}")
