"""
=============================================================================
CONTENT TYPE DETECTION
=============================================================================

Maps a request path's file extension to the Content-Type the response is
served with.

=============================================================================
WHY A CLOSED ENUM?
=============================================================================

The connector only serves the assets of one small site: HTML pages, their
stylesheets and scripts, and a handful of images. Rather than an open
extension table, every type it can emit is a member of ContentType, so a
response can never carry a MIME string nobody planned for.

    /index.html       → ContentType.HTML  → text/html
    /css/styles.css   → ContentType.CSS   → text/css
    /js/scripts.js    → ContentType.JS    → text/javascript
    /favicon.ico      → ContentType.ICO   → image/x-icon
    /unknown.xyz      → ContentType.HTML  (fail closed)
    /login            → ContentType.HTML  (no extension)

Every type is rendered with the same charset parameter:

    Content-Type: text/css;charset=utf-8

=============================================================================
"""

from enum import Enum
from pathlib import PurePosixPath


CHARSET = "utf-8"


class ContentType(Enum):
    """Content types the connector can serve, keyed by symbolic name."""

    HTML = "text/html"
    CSS = "text/css"
    JS = "text/javascript"
    ICO = "image/x-icon"
    SVG = "image/svg+xml"
    PNG = "image/png"
    JSON = "application/json"

    @property
    def mime_type(self) -> str:
        return self.value

    @property
    def header_value(self) -> str:
        """
        Full Content-Type header value.

        Note there is no space before ``charset``; the wire format is
        ``text/html;charset=utf-8``.
        """
        return f"{self.value};charset={CHARSET}"

    @classmethod
    def find_by(cls, path: str) -> "ContentType":
        """
        Infer the content type from a path's extension.

        The lookup is case-insensitive (``/LOGO.PNG`` is a PNG). Unknown
        extensions and paths without an extension resolve to HTML.

        Args:
            path: Request path or file name, e.g. ``/css/styles.css``.

        Returns:
            The matching ContentType, or ContentType.HTML.
        """
        extension = PurePosixPath(path).suffix.lower()
        return _EXTENSIONS.get(extension, DEFAULT_CONTENT_TYPE)


DEFAULT_CONTENT_TYPE = ContentType.HTML

_EXTENSIONS = {
    ".html": ContentType.HTML,
    ".htm": ContentType.HTML,
    ".css": ContentType.CSS,
    ".js": ContentType.JS,
    ".ico": ContentType.ICO,
    ".svg": ContentType.SVG,
    ".png": ContentType.PNG,
    ".json": ContentType.JSON,
}
