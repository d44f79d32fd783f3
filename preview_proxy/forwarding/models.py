from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import BaseModel

DEFAULT_CONTENT_TYPE = "text/html"
MISSING_URL_MESSAGE = "Missing or invalid URL parameter"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class ForwardRequest(BaseModel):
    url: str


class ForwardResponse(BaseModel):
    content: str
    contentType: str = DEFAULT_CONTENT_TYPE
    url: str


class ForwardError(BaseModel):
    error: str


class ErrorKind(str, Enum):
    MISSING_PARAMETER = "missing_parameter"
    INVALID_URL = "invalid_url"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    UPSTREAM_FAILURE = "upstream_failure"
    TIMEOUT = "timeout"
    INTERNAL_FAILURE = "internal_failure"


@dataclass(frozen=True)
class ForwardOk:
    response: ForwardResponse
    status_code: int = 200


@dataclass(frozen=True)
class ForwardErr:
    status_code: int
    kind: ErrorKind
    error: ForwardError

    @classmethod
    def of(cls, status_code: int, kind: ErrorKind, message: str) -> "ForwardErr":
        return cls(status_code=status_code, kind=kind, error=ForwardError(error=message))


ForwardResult = Union[ForwardOk, ForwardErr]
