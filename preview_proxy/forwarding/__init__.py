from .models import (
    ErrorKind,
    ForwardErr,
    ForwardError,
    ForwardOk,
    ForwardRequest,
    ForwardResponse,
    ForwardResult,
)
from .service import forward

__all__ = [
    "ErrorKind",
    "ForwardErr",
    "ForwardError",
    "ForwardOk",
    "ForwardRequest",
    "ForwardResponse",
    "ForwardResult",
    "forward",
]
