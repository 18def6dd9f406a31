"""
=============================================================================
APPLICATION WIRING
=============================================================================

Builds the router for the connector's fixed set of routes.

    GET  /           → default_page
    GET  /login      → LoginHandler.get
    POST /login      → LoginHandler.post
    GET  /register   → RegisterHandler.get
    POST /register   → RegisterHandler.post
    *    (other)     → StaticFileHandler.handle

Collaborators are passed in rather than looked up globally, so tests can
build an isolated application with its own users, sessions and content
root:

    router = create_router(
        users=InMemoryUserRepository(),
        sessions=SessionManager(),
        loader=StaticContentLoader(tmp_path),
    )
    response = router.handle(parse_request(raw_bytes))

=============================================================================
"""

from typing import Callable, Optional

from .handlers import (
    LoginHandler,
    RegisterHandler,
    StaticContentLoader,
    StaticFileHandler,
    default_page,
)
from .http.request import HttpMethod
from .http.router import Router
from .session import SessionManager, generate_session_id
from .users import InMemoryUserRepository, UserRepository


def create_router(
    users: Optional[UserRepository] = None,
    sessions: Optional[SessionManager] = None,
    loader: Optional[StaticContentLoader] = None,
    id_generator: Callable[[], str] = generate_session_id,
) -> Router:
    """
    Create the router with every route registered.

    Args:
        users: Credential store (in-memory with the demo user by default).
        sessions: Session registry (a fresh one by default).
        loader: Static content loader (the bundled static/ by default).
        id_generator: Session id factory used on successful login.

    Returns:
        A ready Router.
    """
    users = users if users is not None else InMemoryUserRepository()
    sessions = sessions if sessions is not None else SessionManager()
    static = StaticFileHandler(loader if loader is not None else StaticContentLoader())

    login = LoginHandler(users, sessions, static, id_generator=id_generator)
    register = RegisterHandler(users, static)

    router = Router()
    router.add_route("/", default_page, HttpMethod.GET, name="index")
    router.add_route("/login", login.get, HttpMethod.GET, name="login_form")
    router.add_route("/login", login.post, HttpMethod.POST, name="login")
    router.add_route("/register", register.get, HttpMethod.GET, name="register_form")
    router.add_route("/register", register.post, HttpMethod.POST, name="register")
    router.fallback(static.handle)
    return router
