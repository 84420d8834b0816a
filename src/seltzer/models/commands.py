"""Command descriptors accepted by the server.

Commands are a tagged union on ``type``. Each model carries only the fields
its command type needs; ``ChainCommand`` nests further commands.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class CommandType(str, Enum):
    """Every command the dispatcher knows how to route."""

    # Lifecycle
    START = "START"
    EXIT = "EXIT"

    # Navigation
    BACK = "BACK"
    FORWARD = "FORWARD"
    GO_TO = "GO_TO"
    GET_URL = "GET_URL"

    # Cookies
    GET_COOKIE = "GET_COOKIE"
    GET_COOKIES = "GET_COOKIES"
    GET_COOKIE_FILE = "GET_COOKIE_FILE"

    # Selector-based
    CLICK = "CLICK"
    COUNT = "COUNT"
    DELETE = "DELETE"
    FILL_FIELD = "FILL_FIELD"
    FORM_SUBMIT = "FORM_SUBMIT"
    READ_TEXT = "READ_TEXT"
    READ_ATTRIBUTE = "READ_ATTRIBUTE"
    SEND_KEY = "SEND_KEY"
    SEND_KEYS = "SEND_KEYS"

    # Waits
    WAIT = "WAIT"
    WAIT_EXISTS = "WAIT_EXISTS"
    WAIT_VISIBLE = "WAIT_VISIBLE"
    WAIT_CLICKABLE = "WAIT_CLICKABLE"
    WAIT_HIDDEN = "WAIT_HIDDEN"
    REFRESHED_WAIT = "REFRESHED_WAIT"

    CHAIN = "CHAIN"


class SelectorType(str, Enum):
    """Locator strategies understood by the element resolver."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    CLASS = "class"
    TAG = "tag"
    LINK_TEXT = "link_text"
    PARTIAL_LINK_TEXT = "partial_link_text"


class Selector(BaseModel):
    type: SelectorType
    value: str

    def __str__(self) -> str:
        return f"{self.type.value}={self.value}"


class BaseCommand(BaseModel):
    """Fields shared by every command."""

    id: Optional[str] = Field(default=None, description="Target session ID")
    screenshot_before: bool = False
    screenshot_after: bool = False


class BasicCommand(BaseCommand):
    type: Literal[
        CommandType.START,
        CommandType.EXIT,
        CommandType.BACK,
        CommandType.FORWARD,
        CommandType.GET_URL,
        CommandType.GET_COOKIE_FILE,
    ]


class GoToCommand(BaseCommand):
    type: Literal[CommandType.GO_TO] = CommandType.GO_TO
    url: str


class GetCookieCommand(BaseCommand):
    type: Literal[CommandType.GET_COOKIE] = CommandType.GET_COOKIE
    cookie_name: str


class GetCookiesCommand(BaseCommand):
    type: Literal[CommandType.GET_COOKIES] = CommandType.GET_COOKIES
    cookie_names: list[str] = Field(default_factory=list)


class SelectorCommand(BaseCommand):
    type: Literal[
        CommandType.CLICK,
        CommandType.COUNT,
        CommandType.DELETE,
        CommandType.FORM_SUBMIT,
        CommandType.READ_TEXT,
    ]
    selector: Selector


class ReadAttributeCommand(BaseCommand):
    type: Literal[CommandType.READ_ATTRIBUTE] = CommandType.READ_ATTRIBUTE
    selector: Selector
    attribute: str


class FillFieldCommand(BaseCommand):
    type: Literal[CommandType.FILL_FIELD] = CommandType.FILL_FIELD
    selector: Selector
    text: str


class SendKeyCommand(BaseCommand):
    type: Literal[CommandType.SEND_KEY] = CommandType.SEND_KEY
    selector: Selector
    key: str = Field(description="Named key, e.g. ENTER, BACKSPACE, ARROW_LEFT")


class SendKeysCommand(BaseCommand):
    type: Literal[CommandType.SEND_KEYS] = CommandType.SEND_KEYS
    selector: Selector
    keys: str


class WaitCommand(BaseCommand):
    type: Literal[CommandType.WAIT] = CommandType.WAIT
    seconds: float = Field(ge=0)


class SelectorWaitCommand(BaseCommand):
    type: Literal[
        CommandType.WAIT_EXISTS,
        CommandType.WAIT_VISIBLE,
        CommandType.WAIT_CLICKABLE,
        CommandType.WAIT_HIDDEN,
    ]
    selector: Selector
    seconds: float = Field(default=10, ge=0)


class RefreshedWaitCommand(BaseCommand):
    """Wait whose condition is re-evaluated if the element goes stale."""

    type: Literal[CommandType.REFRESHED_WAIT] = CommandType.REFRESHED_WAIT
    seconds: float = Field(default=10, ge=0)
    wait: SelectorWaitCommand


class ChainCommand(BaseCommand):
    type: Literal[CommandType.CHAIN] = CommandType.CHAIN
    commands: list[Command] = Field(default_factory=list)


Command = Annotated[
    Union[
        BasicCommand,
        GoToCommand,
        GetCookieCommand,
        GetCookiesCommand,
        SelectorCommand,
        ReadAttributeCommand,
        FillFieldCommand,
        SendKeyCommand,
        SendKeysCommand,
        WaitCommand,
        SelectorWaitCommand,
        RefreshedWaitCommand,
        ChainCommand,
    ],
    Field(discriminator="type"),
]

ChainCommand.model_rebuild()

command_adapter: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(data: Union[dict, str, bytes]) -> Command:
    """
    Validate a raw payload into a command.

    Args:
        data: Decoded JSON object, or a JSON document as str/bytes

    Raises:
        pydantic.ValidationError: If the payload is not a valid command
    """
    if isinstance(data, (str, bytes)):
        return command_adapter.validate_json(data)
    return command_adapter.validate_python(data)
