"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The closed set of status codes this connector can answer with.

=============================================================================
STATUS CODE CATEGORIES
=============================================================================

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  2xx   │ 200 OK          - Page or static asset served             │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  3xx   │ 302 Found       - Login / register redirect               │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  4xx   │ 400 Bad Request - Unparseable request (transport only)    │
    │        │ 404 Not Found   - Static asset missing (transport only)   │
    │        │ 405 Not Allowed - Known path, unsupported method          │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  5xx   │ 500 Internal    - Unexpected handler failure              │
    │        │ 503 Unavailable - Worker queue full (transport only)      │
    └────────┴───────────────────────────────────────────────────────────┘

The routes themselves only ever produce 200 and 302. The error codes are
used by the router (405) and by the transport when an exception escapes
the protocol layer.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used on the wire.

    IntEnum so a member compares equal to its number:

        HTTPStatus.FOUND == 302   # True
        f"{HTTPStatus.OK}"        # "200"
    """

    OK = 200
    FOUND = 302
    BAD_REQUEST = 400
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503

    def __str__(self) -> str:
        return str(self.value)

    @property
    def phrase(self) -> str:
        """
        Reason phrase for the status line.

            HTTP/1.1 302 Found
                     ─── ─────
                      │    └── phrase
                      └─────── code
        """
        return _STATUS_PHRASES[self]

    @property
    def is_redirect(self) -> bool:
        """Check if this is a 3xx status code."""
        return 300 <= self < 400

    @property
    def is_error(self) -> bool:
        """Check if this is a 4xx or 5xx status code."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.FOUND: "Found",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.SERVICE_UNAVAILABLE: "Service Unavailable",
}
