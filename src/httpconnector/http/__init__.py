"""
HTTP protocol layer: request parsing, response rendering, routing and the
status / content type vocabularies they share.
"""

from .content_types import ContentType
from .request import (
    HTTPRequest,
    HttpMethod,
    MalformedRequest,
    RequestParser,
    parse_form_pairs,
    parse_request,
)
from .response import (
    HTTPResponse,
    ResponseBuilder,
    bad_request,
    internal_error,
    method_not_allowed,
    not_found,
    ok,
    redirect,
)
from .router import Route, Router
from .status_codes import HTTPStatus

__all__ = [
    "ContentType",
    "HTTPRequest",
    "HttpMethod",
    "MalformedRequest",
    "RequestParser",
    "parse_form_pairs",
    "parse_request",
    "HTTPResponse",
    "ResponseBuilder",
    "bad_request",
    "internal_error",
    "method_not_allowed",
    "not_found",
    "ok",
    "redirect",
    "Route",
    "Router",
    "HTTPStatus",
]
