"""Response descriptors returned for every command."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class ResponseType(str, Enum):
    BASIC = "BASIC"
    SINGLE_RESULT = "SINGLE_RESULT"
    MULTI_RESULT = "MULTI_RESULT"
    CHAIN = "CHAIN"


class ErrorDetail(BaseModel):
    """Structured failure information attached to unsuccessful responses."""

    code: str
    message: str
    suggestion: Optional[str] = None


class BaseResponse(BaseModel):
    id: Optional[str] = None
    success: bool = False
    error: Optional[ErrorDetail] = None
    screenshot_before: Optional[str] = None
    screenshot_after: Optional[str] = None


class BasicResponse(BaseResponse):
    type: Literal[ResponseType.BASIC] = ResponseType.BASIC


class SingleResultResponse(BaseResponse):
    type: Literal[ResponseType.SINGLE_RESULT] = ResponseType.SINGLE_RESULT
    result: Optional[str] = None


class MultiResultResponse(BaseResponse):
    type: Literal[ResponseType.MULTI_RESULT] = ResponseType.MULTI_RESULT
    results: list[str] = Field(default_factory=list)


class ChainResponse(BaseResponse):
    type: Literal[ResponseType.CHAIN] = ResponseType.CHAIN
    success: bool = True
    responses: list[Response] = Field(default_factory=list)


Response = Annotated[
    Union[BasicResponse, SingleResultResponse, MultiResultResponse, ChainResponse],
    Field(discriminator="type"),
]

ChainResponse.model_rebuild()

response_adapter: TypeAdapter[Response] = TypeAdapter(Response)
