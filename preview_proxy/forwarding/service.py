"""
Forwarding pipeline: validate, fetch, rewrite.

Every call is independent. Failures are returned as ``ForwardErr`` values
rather than raised, so the route only has to serialize whatever comes back.
"""

import logging
from typing import Optional

import httpx
from opentelemetry import trace

from preview_proxy.address import (
    AddressError,
    UnsupportedScheme,
    normalize_address,
    origin_of,
)
from preview_proxy.forwarding.models import (
    DEFAULT_CONTENT_TYPE,
    MISSING_URL_MESSAGE,
    ErrorKind,
    ForwardErr,
    ForwardOk,
    ForwardResponse,
    ForwardResult,
)
from preview_proxy.forwarding.rewrite import inject_base_tag, is_html
from preview_proxy.utils.exception_logging import (
    format_exception_message,
    log_exception_with_details,
)
from preview_proxy.utils.traced_requests import record_outcome, traced_request
from preview_proxy.vars import (
    PROXY_FOLLOW_REDIRECTS,
    PROXY_TIMEOUT,
    PROXY_USER_AGENT,
)

tracer = trace.get_tracer(__name__)
logger = logging.getLogger("uvicorn.error")


def _failure(status_code: int, kind: ErrorKind, exception: BaseException) -> ForwardErr:
    return ForwardErr.of(
        status_code,
        kind,
        f"Failed to proxy request: {format_exception_message(exception)}",
    )


async def fetch_document(target_url: str) -> httpx.Response:
    """Issue the single outbound GET and return the fully read response."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(PROXY_TIMEOUT),
        follow_redirects=PROXY_FOLLOW_REDIRECTS,
    ) as client:
        return await client.request(
            method="GET",
            url=target_url,
            headers={"User-Agent": PROXY_USER_AGENT},
        )


def build_forward_response(response: httpx.Response) -> ForwardResponse:
    """Read the upstream body and inject a base tag when it is HTML."""
    content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
    content = response.text
    # After redirects this is where the document actually came from
    final_url = str(response.url)

    if is_html(content_type):
        content = inject_base_tag(content, origin_of(final_url))

    return ForwardResponse(content=content, contentType=content_type, url=final_url)


async def _run_pipeline(raw_url: str) -> ForwardResult:
    try:
        target_url = normalize_address(raw_url)
    except AddressError as e:
        kind = (
            ErrorKind.UNSUPPORTED_SCHEME
            if isinstance(e, UnsupportedScheme)
            else ErrorKind.INVALID_URL
        )
        logger.warning(f"[Forward] Rejected address {raw_url!r}: {e}")
        return _failure(500, kind, e)

    try:
        response = await fetch_document(target_url)
        if not response.is_success:
            reason = response.reason_phrase or f"HTTP {response.status_code}"
            logger.warning(
                f"[Forward] Upstream {target_url} answered {response.status_code} {reason}"
            )
            return ForwardErr.of(
                response.status_code,
                ErrorKind.UPSTREAM_FAILURE,
                f"Failed to fetch URL: {reason}",
            )
        return ForwardOk(response=build_forward_response(response))
    except httpx.TimeoutException as e:
        logger.error(f"[Forward] Timeout after {PROXY_TIMEOUT:g}s for {target_url}: {e}")
        return ForwardErr.of(
            504,
            ErrorKind.TIMEOUT,
            f"Failed to proxy request: Timed out after {PROXY_TIMEOUT:g} seconds",
        )
    except Exception as e:
        log_exception_with_details(logger, f"[Forward] {target_url}", e)
        return _failure(500, ErrorKind.INTERNAL_FAILURE, e)


async def forward(raw_url: Optional[str]) -> ForwardResult:
    """
    Fetch ``raw_url`` on behalf of the caller.

    Args:
        raw_url: The ``url`` query parameter as received, possibly missing a
            scheme

    Returns:
        ``ForwardOk`` with the (possibly rewritten) document, or ``ForwardErr``
        carrying the status code to answer with
    """
    if not raw_url:
        return ForwardErr.of(400, ErrorKind.MISSING_PARAMETER, MISSING_URL_MESSAGE)

    with traced_request(
        tracer,
        operation="forward_request",
        target_url=raw_url,
        start_message=f"[Forward] Forwarding request for {raw_url}",
    ) as span:
        result = await _run_pipeline(raw_url)
        kind = result.kind.value if isinstance(result, ForwardErr) else None
        record_outcome(span, result.status_code, kind)
        return result
