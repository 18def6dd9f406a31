"""
=============================================================================
STATIC CONTENT HANDLER
=============================================================================

Serves files from a content root directory.

=============================================================================
TWO PIECES
=============================================================================

    StaticContentLoader   path → bytes          (file I/O only)
    StaticFileHandler     request → response    (content type + body)

    GET /css/styles.css
        │
        ▼
    loader.load_bytes("/css/styles.css")
        │   <root>/css/styles.css
        ▼
    200 OK
    Content-Type: text/css;charset=utf-8
    Content-Length: <size>

=============================================================================
FAILURES
=============================================================================

A missing, unreadable or out-of-root file raises StaticAssetIOError. The
handler does not turn it into a 404 page; the error propagates through the
router to the transport, which decides what the client sees.

Path traversal is refused by resolving the full path and checking it is
still inside the root:

    full_path = (root_dir / requested).resolve()
    full_path.relative_to(root_dir)     # ValueError if outside

=============================================================================
"""

import logging
from pathlib import Path
from typing import Union

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder

logger = logging.getLogger(__name__)

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class StaticAssetIOError(OSError):
    """A static asset could not be found or read."""

    def __init__(self, path: str, reason: str = "not found"):
        super().__init__(f"Static asset {path!r} {reason}")
        self.path = path
        self.reason = reason


class StaticContentLoader:
    """
    Loads file bytes from beneath a content root.

    Args:
        root_dir: Directory every served file must live under.

    Raises:
        ValueError: If root_dir is not an existing directory.
    """

    def __init__(self, root_dir: Union[str, Path] = DEFAULT_STATIC_DIR):
        self.root_dir = Path(root_dir).resolve()
        if not self.root_dir.is_dir():
            raise ValueError(f"Static root directory does not exist: {root_dir}")

    def resolve(self, relative_path: str) -> Path:
        """
        Map a request path to a file path under the root.

        Raises:
            StaticAssetIOError: If the path is unusable or escapes the root.
        """
        try:
            full_path = (self.root_dir / relative_path.lstrip("/")).resolve()
        except (ValueError, OSError) as e:
            raise StaticAssetIOError(relative_path, "is not a valid path") from e
        try:
            full_path.relative_to(self.root_dir)
        except ValueError:
            logger.warning(f"Path traversal attempt: {relative_path}")
            raise StaticAssetIOError(relative_path, "is outside the content root")
        return full_path

    def load_bytes(self, relative_path: str) -> bytes:
        """
        Read the whole file at ``<root>/<relative_path>``.

        Raises:
            StaticAssetIOError: Missing file, directory, escape from the
                root, or any OS error while reading.
        """
        full_path = self.resolve(relative_path)
        if not full_path.is_file():
            raise StaticAssetIOError(relative_path)
        try:
            return full_path.read_bytes()
        except OSError as e:
            raise StaticAssetIOError(relative_path, f"is unreadable: {e}") from e


class StaticFileHandler:
    """
    Builds 200 responses from static files.

        static = StaticFileHandler(StaticContentLoader("/srv/www"))
        router.fallback(static.handle)
    """

    def __init__(self, loader: StaticContentLoader):
        self.loader = loader

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """Serve the file named by the request path."""
        return self.page(request.path)

    def page(self, path: str) -> HTTPResponse:
        """Serve a file by path, e.g. ``page("/login.html")``."""
        data = self.loader.load_bytes(path)
        return ResponseBuilder().file(data, path).build()
