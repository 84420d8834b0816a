"""Map Selenium and domain exceptions to structured command failures."""

from enum import Enum
from typing import Optional

from pydantic import ValidationError
from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    ElementNotInteractableException,
    InvalidSelectorException,
    TimeoutException,
    NoSuchWindowException,
    UnexpectedAlertPresentException,
    JavascriptException,
    WebDriverException,
    InvalidArgumentException,
    SessionNotCreatedException,
    InsecureCertificateException,
    InvalidSessionIdException,
    InvalidElementStateException,
    NoSuchCookieException,
)

from ..core.exceptions import (
    SessionNotFoundError,
    SessionLimitError,
    DriverStartError,
    ConfigurationLockedError,
    ElementNotFoundError,
    DomainNotAllowedError,
    InvalidCommandError,
)
from ..models.responses import BasicResponse, ErrorDetail


class ErrorCode(str, Enum):
    """Error codes attached to failed responses."""

    # Session errors
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_LIMIT_REACHED = "SESSION_LIMIT_REACHED"
    SESSION_TERMINATED = "SESSION_TERMINATED"
    DRIVER_START_FAILED = "DRIVER_START_FAILED"
    CONFIGURATION_LOCKED = "CONFIGURATION_LOCKED"

    # Command errors
    INVALID_COMMAND = "INVALID_COMMAND"
    UNSUPPORTED_COMMAND = "UNSUPPORTED_COMMAND"
    CHAIN_ID_MISMATCH = "CHAIN_ID_MISMATCH"

    # Element errors
    ELEMENT_NOT_FOUND = "ELEMENT_NOT_FOUND"
    ELEMENT_STALE = "ELEMENT_STALE"
    ELEMENT_NOT_INTERACTABLE = "ELEMENT_NOT_INTERACTABLE"
    INVALID_SELECTOR = "INVALID_SELECTOR"

    # Navigation errors
    DOMAIN_NOT_ALLOWED = "DOMAIN_NOT_ALLOWED"
    INSECURE_CERTIFICATE = "INSECURE_CERTIFICATE"
    WINDOW_NOT_FOUND = "WINDOW_NOT_FOUND"
    UNEXPECTED_ALERT = "UNEXPECTED_ALERT"

    # Cookie errors
    COOKIE_NOT_FOUND = "COOKIE_NOT_FOUND"

    TIMEOUT = "TIMEOUT"
    JAVASCRIPT_ERROR = "JAVASCRIPT_ERROR"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"

    # Generic errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# Map exceptions to error codes
EXCEPTION_MAP: dict[type[Exception], ErrorCode] = {
    # Selenium exceptions
    NoSuchElementException: ErrorCode.ELEMENT_NOT_FOUND,
    StaleElementReferenceException: ErrorCode.ELEMENT_STALE,
    ElementNotInteractableException: ErrorCode.ELEMENT_NOT_INTERACTABLE,
    InvalidElementStateException: ErrorCode.ELEMENT_NOT_INTERACTABLE,
    InvalidSelectorException: ErrorCode.INVALID_SELECTOR,
    TimeoutException: ErrorCode.TIMEOUT,
    NoSuchWindowException: ErrorCode.WINDOW_NOT_FOUND,
    UnexpectedAlertPresentException: ErrorCode.UNEXPECTED_ALERT,
    JavascriptException: ErrorCode.JAVASCRIPT_ERROR,
    InvalidArgumentException: ErrorCode.INVALID_ARGUMENT,
    InvalidSessionIdException: ErrorCode.SESSION_TERMINATED,
    SessionNotCreatedException: ErrorCode.DRIVER_START_FAILED,
    InsecureCertificateException: ErrorCode.INSECURE_CERTIFICATE,
    NoSuchCookieException: ErrorCode.COOKIE_NOT_FOUND,
    # Domain exceptions
    SessionNotFoundError: ErrorCode.SESSION_NOT_FOUND,
    SessionLimitError: ErrorCode.SESSION_LIMIT_REACHED,
    DriverStartError: ErrorCode.DRIVER_START_FAILED,
    ConfigurationLockedError: ErrorCode.CONFIGURATION_LOCKED,
    ElementNotFoundError: ErrorCode.ELEMENT_NOT_FOUND,
    DomainNotAllowedError: ErrorCode.DOMAIN_NOT_ALLOWED,
    InvalidCommandError: ErrorCode.INVALID_COMMAND,
    ValidationError: ErrorCode.INVALID_COMMAND,
    # Unknown key names and selector strategies
    ValueError: ErrorCode.INVALID_ARGUMENT,
}

# Suggestions for each error code to help the client recover
SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.SESSION_NOT_FOUND: (
        "The session ID is invalid or has expired. "
        "Send a START command to open a new session."
    ),
    ErrorCode.SESSION_LIMIT_REACHED: (
        "Maximum number of concurrent sessions reached. "
        "Send EXIT for unused sessions before starting new ones."
    ),
    ErrorCode.SESSION_TERMINATED: (
        "The browser behind this session is gone, possibly closed for inactivity. "
        "Start a new session."
    ),
    ErrorCode.DRIVER_START_FAILED: (
        "Failed to start a browser. "
        "Check that the browser and its driver binary are installed, or that Selenium Grid is reachable."
    ),
    ErrorCode.CONFIGURATION_LOCKED: (
        "Headless mode was locked at startup and cannot be changed while the server runs."
    ),
    ErrorCode.INVALID_COMMAND: (
        "The command could not be parsed. Check the command type and its required fields."
    ),
    ErrorCode.UNSUPPORTED_COMMAND: (
        "The server does not handle this command type."
    ),
    ErrorCode.CHAIN_ID_MISMATCH: (
        "Every command in a chain must target the chain's own session ID."
    ),
    ErrorCode.ELEMENT_NOT_FOUND: (
        "No element matched. Verify the selector is correct and the element exists in the DOM. "
        "Use a WAIT_EXISTS command first if the element loads dynamically."
    ),
    ErrorCode.ELEMENT_STALE: (
        "Element reference is outdated (page may have changed). "
        "Retry the command, or use REFRESHED_WAIT before interacting with it."
    ),
    ErrorCode.ELEMENT_NOT_INTERACTABLE: (
        "Element exists but cannot be interacted with. "
        "It may be hidden, disabled, or covered by another element. "
        "Wait for it to become clickable first."
    ),
    ErrorCode.INVALID_SELECTOR: (
        "The selector syntax is invalid. "
        "Check for typos in CSS selectors or XPath expressions."
    ),
    ErrorCode.DOMAIN_NOT_ALLOWED: (
        "Navigation to this domain is not permitted by the server configuration. "
        "Only allowed domains can be accessed."
    ),
    ErrorCode.TIMEOUT: (
        "Operation timed out. Increase the wait seconds or check if the condition "
        "can ever be met."
    ),
    ErrorCode.COOKIE_NOT_FOUND: (
        "No cookie with that name is set for the current page."
    ),
    ErrorCode.INVALID_ARGUMENT: (
        "Invalid argument provided. Check parameter types and values."
    ),
}


def map_exception(exc: Exception) -> tuple[ErrorCode, str]:
    """
    Map an exception to an error code and message.

    Args:
        exc: The exception to map

    Returns:
        Tuple of (ErrorCode, error message)
    """
    exc_type = type(exc)

    # Check exact type first
    if exc_type in EXCEPTION_MAP:
        return EXCEPTION_MAP[exc_type], str(exc)

    # Check parent types
    for exc_class, code in EXCEPTION_MAP.items():
        if isinstance(exc, exc_class):
            return code, str(exc)

    # Check for connection errors in WebDriverException
    if isinstance(exc, WebDriverException):
        msg_lower = str(exc).lower()
        if "connection refused" in msg_lower:
            return ErrorCode.CONNECTION_REFUSED, str(exc)
        if "session" in msg_lower and ("not found" in msg_lower or "deleted" in msg_lower):
            return ErrorCode.SESSION_TERMINATED, str(exc)

    # A driver quit underneath an in-flight command usually surfaces as a
    # dropped HTTP connection to the driver process
    if isinstance(exc, (ConnectionError, OSError)):
        return ErrorCode.SESSION_TERMINATED, str(exc)

    # Fallback
    return ErrorCode.UNKNOWN_ERROR, str(exc)


def create_error_detail(code: ErrorCode, message: str) -> ErrorDetail:
    """Create a structured error with the suggestion for its code."""
    return ErrorDetail(
        code=code.value,
        message=message,
        suggestion=SUGGESTIONS.get(code),
    )


def error_response(
    code: ErrorCode,
    message: str,
    command_id: Optional[str] = None,
) -> BasicResponse:
    """Failed response carrying a structured error."""
    return BasicResponse(
        id=command_id,
        success=False,
        error=create_error_detail(code, message),
    )


def exception_response(exc: Exception, command_id: Optional[str] = None) -> BasicResponse:
    """Failed response for an exception raised while handling a command."""
    code, message = map_exception(exc)
    return error_response(code, message, command_id)
