"""
=============================================================================
ROUTE HANDLERS
=============================================================================

    default_page         GET /
    LoginHandler         GET, POST /login
    RegisterHandler      GET, POST /register
    StaticFileHandler    every other path

Wiring them into a router happens in httpconnector.app.

=============================================================================
"""

from .default import default_page
from .login import LoginHandler, SESSION_COOKIE, USER
from .register import RegisterHandler
from .static import StaticContentLoader, StaticFileHandler, StaticAssetIOError

__all__ = [
    "default_page",
    "LoginHandler",
    "RegisterHandler",
    "StaticContentLoader",
    "StaticFileHandler",
    "StaticAssetIOError",
    "SESSION_COOKIE",
    "USER",
]
