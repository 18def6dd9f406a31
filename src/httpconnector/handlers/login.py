"""
=============================================================================
LOGIN HANDLER
=============================================================================

Form-based login with a cookie-correlated server session.

=============================================================================
GET /login
=============================================================================

    Cookie: JSESSIONID=<known id>?
        yes → replay the session's user through the credential check,
              keep the same session (no new id)
        no  ↓
    Query string present?
        yes → credential check with ?account=..&password=..
        no  → serve login.html

=============================================================================
POST /login
=============================================================================

    credential check with the form body's account / password

=============================================================================
CREDENTIAL CHECK
=============================================================================

    account found AND password matches
        → log the user
        → new Session(id) with the user under USER
        → 302 Location: /index.html
          Set-Cookie: JSESSIONID=<id>

    anything else (unknown account OR wrong password)
        → 302 Location: /401.html

Both failure cases produce byte-identical responses, so a client cannot
tell whether an account exists.

=============================================================================
"""

import logging
from typing import Callable, Optional

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder, redirect
from ..session import AttributeKey, Session, SessionManager, generate_session_id
from ..users import User, UserRepository
from .static import StaticFileHandler

logger = logging.getLogger(__name__)

SESSION_COOKIE = "JSESSIONID"
USER = AttributeKey("user", User)

ACCOUNT_KEY = "account"
PASSWORD_KEY = "password"

LOGIN_PAGE = "/login.html"
SUCCESS_LOCATION = "/index.html"
UNAUTHORIZED_LOCATION = "/401.html"


class LoginHandler:
    """
    Handles ``GET /login`` and ``POST /login``.

    Args:
        users: Credential store.
        sessions: Shared session registry.
        static: Serves the login page.
        id_generator: Produces session ids; swap it out in tests.
    """

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionManager,
        static: StaticFileHandler,
        id_generator: Callable[[], str] = generate_session_id,
    ):
        self.users = users
        self.sessions = sessions
        self.static = static
        self.id_generator = id_generator

    def get(self, request: HTTPRequest) -> HTTPResponse:
        session = self._current_session(request)
        if session is not None:
            user = session.get_attribute(USER)
            if user is not None:
                return self.authenticate(user.account, user.password, session=session)

        if request.has_query_string:
            return self.authenticate(
                request.get_query(ACCOUNT_KEY),
                request.get_query(PASSWORD_KEY),
            )

        return self.static.page(LOGIN_PAGE)

    def post(self, request: HTTPRequest) -> HTTPResponse:
        return self.authenticate(
            request.get_body_value(ACCOUNT_KEY),
            request.get_body_value(PASSWORD_KEY),
        )

    def authenticate(
        self,
        account: Optional[str],
        password: Optional[str],
        session: Optional[Session] = None,
    ) -> HTTPResponse:
        """
        Check credentials and build the login outcome.

        Args:
            account: Submitted account name (None if absent).
            password: Submitted password (None if absent).
            session: Existing session to reuse on success; a new one is
                created when omitted.

        Returns:
            302 to /index.html with the session cookie, or 302 to /401.html.
        """
        user = self.users.find_by_account(account)
        if user is None or not user.check_password(password):
            return redirect(UNAUTHORIZED_LOCATION)
        return self._login_success(user, session)

    def _login_success(self, user: User, session: Optional[Session]) -> HTTPResponse:
        logger.info(f"Login success: {user}")

        if session is None:
            session = Session(self.id_generator())
            session.set_attribute(USER, user)
            self.sessions.add(session)

        return (ResponseBuilder()
            .redirect(SUCCESS_LOCATION)
            .cookie(SESSION_COOKIE, session.id)
            .build())

    def _current_session(self, request: HTTPRequest) -> Optional[Session]:
        """The session named by the request's JSESSIONID cookie, if registered."""
        if not request.has_header("Cookie") or not request.has_cookie(SESSION_COOKIE):
            return None
        session_id = request.get_cookie(SESSION_COOKIE)
        if session_id not in self.sessions:
            logger.debug(f"Ignoring unknown session id: {session_id}")
            return None
        return self.sessions.find_session(session_id)
