"""
Handler for ``/register``.

    GET  → register.html
    POST → save User(account, password, email) from the form body,
           then 302 to /index.html

Registering does not log the user in; no session is created.
"""

import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, redirect
from ..users import User, UserRepository
from .static import StaticFileHandler

logger = logging.getLogger(__name__)

REGISTER_PAGE = "/register.html"
SUCCESS_LOCATION = "/index.html"


class RegisterHandler:
    """Handles ``GET /register`` and ``POST /register``."""

    def __init__(self, users: UserRepository, static: StaticFileHandler):
        self.users = users
        self.static = static

    def get(self, request: HTTPRequest) -> HTTPResponse:
        return self.static.page(REGISTER_PAGE)

    def post(self, request: HTTPRequest) -> HTTPResponse:
        user = User(
            account=request.get_body_value("account", ""),
            password=request.get_body_value("password", ""),
            email=request.get_body_value("email", ""),
        )
        saved = self.users.save(user)
        logger.info(f"Registered: {saved}")
        return redirect(SUCCESS_LOCATION)
