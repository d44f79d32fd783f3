# Make `import preview_proxy` work when running pytest from a plain checkout.
import os
import sys

import httpx
import pytest

SERVICE_ROOT = os.path.dirname(__file__)

if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)


@pytest.fixture
def upstream_response():
    """Build a fully read httpx Response as the upstream server would return it."""

    def _create_response(
        status_code=200,
        content="",
        content_type="text/html",
        url="https://example.com/",
        headers=None,
    ):
        response_headers = dict(headers or {})
        if content_type is not None:
            response_headers["content-type"] = content_type
        return httpx.Response(
            status_code,
            headers=response_headers,
            content=content.encode("utf-8"),
            request=httpx.Request("GET", url),
        )

    return _create_response
