"""
=============================================================================
HTTP RESPONSE RENDERER
=============================================================================

Builds HTTP/1.1 responses and serializes them to wire bytes.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

A page or static asset:

    HTTP/1.1 200 OK\\r\\n                          ← status line
    Content-Type: text/html;charset=utf-8\\r\\n    ← always for a body
    Content-Length: 12\\r\\n                       ← len(body) in bytes
    \\r\\n                                         ← blank line
    Hello world!                                 ← body

A login success:

    HTTP/1.1 302 Found\\r\\n
    Location: /index.html\\r\\n
    Set-Cookie: JSESSIONID=5b0f...\\r\\n
    \\r\\n

A redirect carries no body, so it has no Content-Type and no
Content-Length either.

=============================================================================
THE BUILDER
=============================================================================

Handlers describe a response with ResponseBuilder and hand the resulting
HTTPResponse back to the router:

    response = (ResponseBuilder()
        .redirect("/index.html")
        .cookie("JSESSIONID", session.id)
        .build())

to_bytes() is the only place wire bytes are produced.

=============================================================================
"""

import html
from dataclasses import dataclass, field
from typing import Optional, Dict, Union

from .content_types import ContentType
from .status_codes import HTTPStatus


CRLF = "\r\n"


@dataclass
class HTTPResponse:
    """
    An HTTP response waiting to be serialized.

    Built once per request, serialized once and discarded.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """``HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE``"""
        return f"{self.version} {self.status.value} {self.status.phrase}"

    @property
    def location(self) -> Optional[str]:
        return self.headers.get("Location")

    @property
    def is_bodied(self) -> bool:
        return "Content-Type" in self.headers or bool(self.body)

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        self.headers[name] = value
        return self

    def to_bytes(self) -> bytes:
        """
        Serialize to ``STATUS-LINE CRLF *(HEADER CRLF) CRLF BODY``.

        Content-Length is recomputed from the body for every bodied
        response, so it always matches the bytes that follow.

        Returns:
            The complete response, ready for socket.sendall().
        """
        headers = dict(self.headers)
        if self.is_bodied:
            headers["Content-Length"] = str(len(self.body))

        lines = [self.status_line]
        for name, value in headers.items():
            lines.append(f"{name}: {value}")

        head = CRLF.join(lines) + CRLF + CRLF
        return head.encode("utf-8") + self.body


class ResponseBuilder:
    """
    Fluent builder for HTTPResponse.

    Header order on the wire follows the order the builder methods are
    called in; content() always writes Content-Type followed by
    Content-Length.

        ResponseBuilder().html("Hello world!").build()
        ResponseBuilder().file(data, "/css/styles.css").build()
        ResponseBuilder().redirect("/401.html").build()
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: bytes = b""

    # =========================================================================
    # STATUS / HEADERS
    # =========================================================================

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def cookie(self, name: str, value: str) -> "ResponseBuilder":
        """
        Attach a ``Set-Cookie: name=value`` header.

        No attributes (Path, HttpOnly, ...) are appended.
        """
        return self.header("Set-Cookie", f"{name}={value}")

    # =========================================================================
    # BODY
    # =========================================================================

    def content(
        self,
        body: Union[str, bytes],
        content_type: ContentType = ContentType.HTML
    ) -> "ResponseBuilder":
        """
        Set the body and its Content-Type / Content-Length headers.

        Strings are encoded as UTF-8 before the length is taken.
        """
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self._headers["Content-Type"] = content_type.header_value
        self._headers["Content-Length"] = str(len(self._body))
        return self

    def html(self, html: str) -> "ResponseBuilder":
        return self.content(html, ContentType.HTML)

    def file(self, data: bytes, path: str) -> "ResponseBuilder":
        """Serve file bytes with the content type inferred from ``path``."""
        return self.content(data, ContentType.find_by(path))

    # =========================================================================
    # REDIRECT
    # =========================================================================

    def redirect(self, location: str) -> "ResponseBuilder":
        """
        Turn this into a 302 Found pointing at ``location``.

        Any body set earlier is dropped together with its headers.
        """
        self._status = HTTPStatus.FOUND
        self._body = b""
        self._headers.pop("Content-Type", None)
        self._headers.pop("Content-Length", None)
        self._headers["Location"] = location
        return self

    # =========================================================================
    # BUILD
    # =========================================================================

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status=self._status,
            headers=dict(self._headers),
            body=self._body,
        )

    def to_bytes(self) -> bytes:
        return self.build().to_bytes()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# ok() and redirect() cover every response the routes produce. The error
# helpers are used by the router (405) and by the transport when an
# exception escapes the protocol layer.
#
# =============================================================================

def ok(body: Union[str, bytes], content_type: ContentType = ContentType.HTML) -> HTTPResponse:
    """Create a 200 OK response."""
    return ResponseBuilder().content(body, content_type).build()


def redirect(location: str) -> HTTPResponse:
    """Create a 302 Found response."""
    return ResponseBuilder().redirect(location).build()


def _error(status: HTTPStatus, message: str) -> HTTPResponse:
    return (ResponseBuilder()
        .status(status)
        .html(f"<h1>{status.value} {status.phrase}</h1><p>{html.escape(message)}</p>")
        .build())


def bad_request(message: str = "Bad Request") -> HTTPResponse:
    """Create a 400 Bad Request response."""
    return _error(HTTPStatus.BAD_REQUEST, message)


def not_found(message: str = "Not Found") -> HTTPResponse:
    """Create a 404 Not Found response."""
    return _error(HTTPStatus.NOT_FOUND, message)


def method_not_allowed(allowed_methods: list[str]) -> HTTPResponse:
    """
    Create a 405 Method Not Allowed response.

    Includes the Allow header listing the methods the path accepts.
    """
    response = _error(HTTPStatus.METHOD_NOT_ALLOWED, "Method Not Allowed")
    response.set_header("Allow", ", ".join(allowed_methods))
    return response


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    """Create a 500 Internal Server Error response."""
    return _error(HTTPStatus.INTERNAL_SERVER_ERROR, message)
