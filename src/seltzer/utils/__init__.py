"""Shared utilities for the Seltzer server."""

from .error_mapper import map_exception, ErrorCode, exception_response, error_response
from .guardrails import validate_domain
from .element_resolver import find_all, find_first

__all__ = [
    "map_exception",
    "ErrorCode",
    "exception_response",
    "error_response",
    "validate_domain",
    "find_all",
    "find_first",
]
