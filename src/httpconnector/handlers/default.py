"""Handler for ``GET /``."""

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ok

GREETING = "Hello world!"


def default_page(request: HTTPRequest) -> HTTPResponse:
    """200 text/html with a fixed greeting."""
    return ok(GREETING)
