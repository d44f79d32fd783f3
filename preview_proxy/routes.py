import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from preview_proxy.forwarding import (
    ForwardError,
    ForwardOk,
    ForwardResponse,
    ForwardResult,
    forward,
)
from preview_proxy.vars import API_BASE_PATH

router = APIRouter()

logger = logging.getLogger("uvicorn.error")

if API_BASE_PATH:
    router.prefix = API_BASE_PATH
    logger.info(f"Using API_BASE_PATH: {API_BASE_PATH}")
else:
    logger.info("No API_BASE_PATH set, using root path")


def to_json_response(result: ForwardResult) -> JSONResponse:
    """Serialize a forwarding result with the status code it carries."""
    if isinstance(result, ForwardOk):
        body = result.response.model_dump()
    else:
        body = result.error.model_dump()
    return JSONResponse(status_code=result.status_code, content=body)


@router.get(
    "/proxy",
    response_model=ForwardResponse,
    responses={
        400: {"model": ForwardError, "description": "Missing url parameter"},
        500: {"model": ForwardError, "description": "Invalid address or fetch failure"},
        504: {"model": ForwardError, "description": "Upstream timed out"},
    },
)
async def proxy(
    url: Optional[str] = Query(
        None, description="Address to preview, with or without a scheme"
    ),
):
    """Fetch a remote document and return it ready for inline rendering."""
    result = await forward(url)
    return to_json_response(result)
