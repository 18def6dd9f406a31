"""
Unit tests for HTTP response building.
"""

import pytest

from httpconnector.http.content_types import ContentType
from httpconnector.http.response import (
    HTTPResponse,
    ResponseBuilder,
    bad_request,
    internal_error,
    method_not_allowed,
    not_found,
    ok,
    redirect,
)
from httpconnector.http.status_codes import HTTPStatus


def split_wire(data: bytes):
    """Split wire bytes into (status line, header dict, body)."""
    head, _, body = data.partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        response = HTTPResponse(status=HTTPStatus.OK)
        assert response.status_line == "HTTP/1.1 200 OK"

        response = HTTPResponse(status=HTTPStatus.FOUND)
        assert response.status_line == "HTTP/1.1 302 Found"

    def test_to_bytes_layout(self):
        """Status line, headers, blank line, body."""
        response = ok("Hello world!")

        assert response.to_bytes() == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/html;charset=utf-8\r\n"
            b"Content-Length: 12\r\n"
            b"\r\n"
            b"Hello world!"
        )

    def test_content_length_matches_body(self):
        """Content-Length equals the number of body bytes that follow."""
        for body in ("", "a", "Hello world!", "안녕하세요", "x" * 10000):
            _, headers, wire_body = split_wire(ok(body).to_bytes())

            assert int(headers["Content-Length"]) == len(wire_body)
            assert wire_body == body.encode("utf-8")

    def test_content_length_recomputed(self):
        response = HTTPResponse(
            headers={"Content-Type": "text/html;charset=utf-8", "Content-Length": "999"},
            body=b"test",
        )

        assert b"Content-Length: 4\r\n" in response.to_bytes()

    def test_redirect_has_no_body_headers(self):
        data = redirect("/index.html").to_bytes()

        assert data == b"HTTP/1.1 302 Found\r\nLocation: /index.html\r\n\r\n"

    def test_set_header_chaining(self):
        """Test method chaining for headers."""
        response = (HTTPResponse()
            .set_header("X-One", "1")
            .set_header("X-Two", "2"))

        assert response.headers["X-One"] == "1"
        assert response.headers["X-Two"] == "2"


class TestResponseBuilder:
    """Tests for ResponseBuilder class."""

    def test_html_body(self):
        html = "<html><body>Hello</body></html>"
        response = ResponseBuilder().html(html).build()

        assert response.headers["Content-Type"] == "text/html;charset=utf-8"
        assert response.body == html.encode()

    @pytest.mark.parametrize("path, header", [
        ("/css/styles.css", "text/css;charset=utf-8"),
        ("/js/scripts.js", "text/javascript;charset=utf-8"),
        ("/favicon.ico", "image/x-icon;charset=utf-8"),
        ("/index.html", "text/html;charset=utf-8"),
    ])
    def test_file_infers_content_type(self, path: str, header: str):
        response = ResponseBuilder().file(b"data", path).build()

        assert response.headers["Content-Type"] == header
        assert response.headers["Content-Length"] == "4"

    def test_redirect_drops_body(self):
        response = ResponseBuilder().html("ignored").redirect("/401.html").build()

        assert response.status == HTTPStatus.FOUND
        assert response.location == "/401.html"
        assert response.body == b""
        assert "Content-Type" not in response.headers
        assert "Content-Length" not in response.headers

    def test_cookie(self):
        response = (ResponseBuilder()
            .redirect("/index.html")
            .cookie("JSESSIONID", "abc")
            .build())

        assert response.headers["Set-Cookie"] == "JSESSIONID=abc"
        assert response.to_bytes() == (
            b"HTTP/1.1 302 Found\r\n"
            b"Location: /index.html\r\n"
            b"Set-Cookie: JSESSIONID=abc\r\n"
            b"\r\n"
        )

    def test_method_chaining(self):
        """Test fluent API chaining."""
        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .header("X-Custom", "value")
            .content("{}", ContentType.JSON)
            .build())

        assert response.status == HTTPStatus.OK
        assert response.headers["X-Custom"] == "value"
        assert response.headers["Content-Type"] == "application/json;charset=utf-8"


class TestConvenienceFunctions:
    """Tests for convenience response functions."""

    def test_ok(self):
        response = ok("Hello")
        assert response.status == HTTPStatus.OK
        assert response.body == b"Hello"

    def test_ok_bytes(self):
        response = ok(b"\x89PNG", ContentType.PNG)
        assert response.body == b"\x89PNG"
        assert response.headers["Content-Type"] == "image/png;charset=utf-8"

    def test_not_found(self):
        response = not_found("Resource not found")
        assert response.status == HTTPStatus.NOT_FOUND
        assert b"Resource not found" in response.body

    def test_error_message_is_escaped(self):
        response = not_found("<script>")
        assert b"<script>" not in response.body
        assert b"&lt;script&gt;" in response.body

    def test_bad_request(self):
        response = bad_request("Invalid input")
        assert response.status == HTTPStatus.BAD_REQUEST
        assert b"Invalid input" in response.body

    def test_method_not_allowed(self):
        response = method_not_allowed(["GET", "POST"])
        assert response.status == HTTPStatus.METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "GET, POST"

    def test_internal_error(self):
        response = internal_error()
        assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR


class TestHTTPStatus:
    """Tests for HTTPStatus enum."""

    def test_status_phrases(self):
        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.FOUND.phrase == "Found"
        assert HTTPStatus.NOT_FOUND.phrase == "Not Found"
        assert HTTPStatus.INTERNAL_SERVER_ERROR.phrase == "Internal Server Error"
        assert HTTPStatus.SERVICE_UNAVAILABLE.phrase == "Service Unavailable"

    def test_every_status_has_phrase(self):
        for status in HTTPStatus:
            assert status.phrase

    def test_categories(self):
        assert HTTPStatus.FOUND.is_redirect
        assert not HTTPStatus.OK.is_redirect
        assert HTTPStatus.NOT_FOUND.is_error
        assert not HTTPStatus.FOUND.is_error
        assert str(HTTPStatus.FOUND) == "302"
