"""Command and response descriptors."""

from .commands import (
    BasicCommand,
    ChainCommand,
    Command,
    CommandType,
    FillFieldCommand,
    GetCookieCommand,
    GetCookiesCommand,
    GoToCommand,
    ReadAttributeCommand,
    RefreshedWaitCommand,
    Selector,
    SelectorCommand,
    SelectorType,
    SelectorWaitCommand,
    SendKeyCommand,
    SendKeysCommand,
    WaitCommand,
    parse_command,
)
from .responses import (
    BasicResponse,
    ChainResponse,
    ErrorDetail,
    MultiResultResponse,
    Response,
    ResponseType,
    SingleResultResponse,
)

__all__ = [
    "BasicCommand",
    "ChainCommand",
    "Command",
    "CommandType",
    "FillFieldCommand",
    "GetCookieCommand",
    "GetCookiesCommand",
    "GoToCommand",
    "ReadAttributeCommand",
    "RefreshedWaitCommand",
    "Selector",
    "SelectorCommand",
    "SelectorType",
    "SelectorWaitCommand",
    "SendKeyCommand",
    "SendKeysCommand",
    "WaitCommand",
    "parse_command",
    "BasicResponse",
    "ChainResponse",
    "ErrorDetail",
    "MultiResultResponse",
    "Response",
    "ResponseType",
    "SingleResultResponse",
]
