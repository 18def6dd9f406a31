"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses raw HTTP/1.1 request bytes into immutable HTTPRequest objects.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ
    â                                                                      â
    â  POST /login?next=/index.html HTTP/1.1\r\n        â request line    â
    â  ââ¬ââ âââ¬âââ ââââââââ¬ââââââââ âââââ¬âââ                               â
    â Method Path    Query string    Version                               â
    â                                                                      â
    â  Host: localhost:8080\r\n                          â headers         â
    â  Cookie: JSESSIONID=3f1c...; theme=dark\r\n                          â
    â  Content-Type: application/x-www-form-urlencoded\r\n                 â
    â  Content-Length: 30\r\n                                              â
    â  \r\n                                              â separator       â
    â  account=gugu&password=password                    â body            â
    â                                                                      â
    âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ

The parser produces five lookups from this message:

    path          "/login"                  (never includes the query)
    query_params  {"next": "/index.html"}
    headers       {"host": ..., "cookie": ..., ...}   (lowercase keys)
    cookies       {"JSESSIONID": "3f1c...", "theme": "dark"}
    body_fields   {"account": "gugu", "password": "password"}

=============================================================================
KEY=VALUE PAIRS
=============================================================================

The query string and a form-encoded body use the same grammar, so both go
through parse_form_pairs():

    "a=1&b=2"      â {"a": "1", "b": "2"}
    "flag&a=1"     â {"flag": "", "a": "1"}     key without "=" â ""
    "a=1&a=2"      â {"a": "2"}                 last occurrence wins
    "a=1&&b=2"     â {"a": "1", "b": "2"}       empty segments skipped

Nothing is percent-decoded: paths, query values and body values are kept
exactly as they arrived on the wire.

=============================================================================
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict
import re


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class MalformedRequest(Exception):
    """
    Raised when raw bytes cannot be parsed into an HTTPRequest.

    Carries the status code the transport should answer with. The
    protocol layer itself never builds an error page for a parse failure.
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class HttpMethod(str, Enum):
    """HTTP request methods understood by the parser."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    def __str__(self) -> str:
        return self.value


def parse_form_pairs(text: str) -> Dict[str, str]:
    """
    Split an ``&``-delimited sequence of ``key=value`` pairs.

    Shared by the query string and the form-encoded body.

    Args:
        text: Raw pair sequence, e.g. ``"account=gugu&password=password"``.

    Returns:
        Mapping of key to value. A key with no ``=`` maps to ``""`` and the
        last occurrence of a duplicate key wins.
    """
    pairs: Dict[str, str] = {}
    for segment in text.split("&"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        pairs[key] = value
    return pairs


def parse_cookies(header: str) -> Dict[str, str]:
    """
    Parse a ``Cookie`` header value into name â value.

        "JSESSIONID=abc; theme=dark" â {"JSESSIONID": "abc", "theme": "dark"}
    """
    cookies: Dict[str, str] = {}
    for segment in header.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        name, _, value = segment.partition("=")
        cookies[name.strip()] = value.strip()
    return cookies


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         HttpMethod member (GET, POST, ...)
        path:           Request path WITHOUT the query string
        version:        "HTTP/1.1" or "HTTP/1.0"
        headers:        Header name (lowercase) â value
        query_params:   Query string pairs
        cookies:        Pairs from the Cookie header
        body_fields:    Pairs from a form-encoded body (empty otherwise)
        body:           Raw body bytes, exactly Content-Length long
        client_address: (ip, port) of the peer, for logging

    The dataclass is frozen: once the parser hands a request to the router
    nothing downstream can rewrite it.

    =========================================================================
    """

    method: HttpMethod
    path: str
    version: str = "HTTP/1.1"
    headers: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    body_fields: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    client_address: tuple[str, int] = ("", 0)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def content_type(self) -> Optional[str]:
        """Content-Type without parameters, lowercased, or None."""
        value = self.headers.get("content-type", "")
        return value.split(";")[0].strip().lower() or None

    @property
    def content_length(self) -> int:
        return len(self.body)

    @property
    def has_query_string(self) -> bool:
        return bool(self.query_params)

    @property
    def is_form(self) -> bool:
        return self.content_type == FORM_CONTENT_TYPE

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def has_header(self, name: str) -> bool:
        """
        Check for a header (case-insensitive).

            request.has_header("cookie") == request.has_header("Cookie")
        """
        return name.lower() in self.headers

    def get_header(self, name: str, default: str = "") -> str:
        """Get a header value (case-insensitive lookup)."""
        return self.headers.get(name.lower(), default)

    def has_cookie(self, name: str) -> bool:
        return name in self.cookies

    def get_cookie(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.cookies.get(name, default)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.query_params.get(name, default)

    def get_body_value(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.body_fields.get(name, default)


class RequestParser:
    """
    Parses raw HTTP request bytes into HTTPRequest objects.

    ==========================================================================
    PARSER STEPS
    ==========================================================================

        1. Size check            too large?          â MalformedRequest
        2. Find \\r\\n\\r\\n         missing?            â MalformedRequest
        3. Request line          bad shape/method?   â MalformedRequest
        4. Headers               lowercase names, last value wins
        5. Cookies               from the Cookie header
        6. Body                  exactly Content-Length bytes
        7. Body fields           only for form-encoded bodies

    ==========================================================================
    """

    REQUEST_LINE_PATTERN = re.compile(r"^([A-Z]+) ([^ ]+) (HTTP/\d\.\d)$")
    SUPPORTED_VERSIONS = ("HTTP/1.0", "HTTP/1.1")

    def __init__(self, max_request_size: int = 10 * 1024 * 1024):
        """
        Args:
            max_request_size: Maximum allowed request size in bytes.
        """
        self.max_request_size = max_request_size

    def parse(
        self,
        data: bytes,
        client_address: tuple[str, int] = ("", 0)
    ) -> HTTPRequest:
        """
        Parse raw HTTP request data into an HTTPRequest.

        Args:
            data: Raw request bytes as read from the socket.
            client_address: Peer (ip, port), kept for logging.

        Returns:
            The parsed request.

        Raises:
            MalformedRequest: If the request line, headers or body framing
                cannot be parsed.
        """
        if len(data) > self.max_request_size:
            raise MalformedRequest(f"Request too large: {len(data)} bytes")

        header_end = data.find(b"\r\n\r\n")
        if header_end == -1:
            raise MalformedRequest("Incomplete request: no header terminator")

        header_section = data[:header_end].decode("utf-8", errors="replace")
        lines = header_section.split("\r\n")

        method, path, query_params, version = self._parse_request_line(lines[0])
        headers = self._parse_headers(lines[1:])
        cookies = parse_cookies(headers.get("cookie", ""))

        body = self._read_body(data[header_end + 4:], headers)

        body_fields: Dict[str, str] = {}
        content_type = headers.get("content-type", "").split(";")[0].strip().lower()
        if body and content_type == FORM_CONTENT_TYPE:
            body_fields = parse_form_pairs(body.decode("utf-8", errors="replace"))

        return HTTPRequest(
            method=method,
            path=path,
            version=version,
            headers=headers,
            query_params=query_params,
            cookies=cookies,
            body_fields=body_fields,
            body=body,
            client_address=client_address,
        )

    def _parse_request_line(
        self,
        line: str
    ) -> tuple[HttpMethod, str, Dict[str, str], str]:
        """
        Parse ``METHOD SP TARGET SP VERSION``.

        The target is split at the first ``?``; the path keeps every byte
        it arrived with.
        """
        match = self.REQUEST_LINE_PATTERN.match(line)
        if not match:
            raise MalformedRequest(f"Invalid request line: {line!r}")

        method_name, target, version = match.groups()

        try:
            method = HttpMethod(method_name)
        except ValueError:
            raise MalformedRequest(f"Invalid method: {method_name}", status_code=405)

        if version not in self.SUPPORTED_VERSIONS:
            raise MalformedRequest(f"Unsupported HTTP version: {version}")

        path, _, query_string = target.partition("?")
        if not path.startswith("/"):
            raise MalformedRequest(f"Invalid request target: {target!r}")

        return method, path, parse_form_pairs(query_string), version

    def _parse_headers(self, lines: list[str]) -> Dict[str, str]:
        """
        Parse ``Name: Value`` lines.

        Names are normalized to lowercase so lookups are case-insensitive.
        A repeated header keeps its last value; lines without a colon are
        skipped.
        """
        headers: Dict[str, str] = {}
        for line in lines:
            name, separator, value = line.partition(":")
            if not separator or not name.strip():
                continue
            headers[name.strip().lower()] = value.strip()
        return headers

    def _read_body(self, remainder: bytes, headers: Dict[str, str]) -> bytes:
        """Cut exactly Content-Length bytes off the data after the headers."""
        raw_length = headers.get("content-length", "0")
        # ASCII digits only
        if not (raw_length.isascii() and raw_length.isdigit()):
            raise MalformedRequest(f"Invalid Content-Length: {raw_length!r}")
        content_length = int(raw_length)

        if len(remainder) < content_length:
            raise MalformedRequest(
                f"Incomplete body: expected {content_length} bytes, got {len(remainder)}"
            )
        return remainder[:content_length]


def parse_request(
    data: bytes,
    client_address: tuple[str, int] = ("", 0),
    max_size: int = 10 * 1024 * 1024
) -> HTTPRequest:
    """
    Convenience function to parse an HTTP request.

    Use RequestParser directly to parse many requests with the same limits.
    """
    parser = RequestParser(max_request_size=max_size)
    return parser.parse(data, client_address)
