"""
=============================================================================
ROUTE DISPATCHER
=============================================================================

Maps (method, path) to exactly one handler function.

=============================================================================
ROUTING TABLE
=============================================================================

Routes are exact path matches held in an ordered table, checked before a
single fallback handler:

    ┌────────┬─────────────┬───────────────────────────────────┐
    │ Method │ Path        │ Handler                           │
    ├────────┼─────────────┼───────────────────────────────────┤
    │ GET    │ /           │ default page                      │
    │ GET    │ /login      │ login form / session replay       │
    │ POST   │ /login      │ credential check                  │
    │ GET    │ /register   │ registration form                 │
    │ POST   │ /register   │ create account                    │
    ├────────┼─────────────┼───────────────────────────────────┤
    │ *      │ (any other) │ fallback: static content          │
    └────────┴─────────────┴───────────────────────────────────┘

Resolution order:

    1. First route whose path AND method match       → its handler
    2. Path is in the table but no method matches    → 405 + Allow
    3. Path not in the table                         → fallback
    4. No fallback registered                        → 404

There are no path parameters or wildcards; "/login/" and "/login" are
different paths.

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, Optional, List

from .request import HTTPRequest, HttpMethod
from .response import HTTPResponse, not_found, method_not_allowed


# Every handler takes the parsed request and returns a response
Handler = Callable[[HTTPRequest], HTTPResponse]


@dataclass(frozen=True)
class Route:
    """One row of the routing table."""

    path: str
    method: HttpMethod
    handler: Handler
    name: Optional[str] = None

    def matches(self, method: HttpMethod, path: str) -> bool:
        return self.path == path and self.method == method


class Router:
    """
    Exact-match router with one fallback.

        router = Router()
        router.add_route("/", default_page, HttpMethod.GET)
        router.fallback(static.handle)

        response = router.handle(request)

    Exceptions raised by a handler are not caught here; they propagate to
    whoever called handle().
    """

    def __init__(self):
        self._routes: List[Route] = []
        self._fallback: Optional[Handler] = None

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add_route(
        self,
        path: str,
        handler: Handler,
        method: HttpMethod,
        name: Optional[str] = None
    ) -> Route:
        route = Route(path=path, method=HttpMethod(method), handler=handler, name=name)
        self._routes.append(route)
        return route

    def fallback(self, handler: Handler) -> Handler:
        """Register the handler used for paths with no route."""
        self._fallback = handler
        return handler

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def match(self, method: HttpMethod, path: str) -> Optional[Route]:
        """First route matching both path and method, or None."""
        for route in self._routes:
            if route.matches(method, path):
                return route
        return None

    def get_allowed_methods(self, path: str) -> List[str]:
        """Methods registered for ``path``, in registration order."""
        methods: List[str] = []
        for route in self._routes:
            if route.path == path and route.method.value not in methods:
                methods.append(route.method.value)
        return methods

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Dispatch a request to its handler.

        Returns:
            The handler's response, a 405 for a known path with an
            unregistered method, or a 404 if nothing can serve the path.
        """
        route = self.match(request.method, request.path)
        if route:
            return route.handler(request)

        allowed = self.get_allowed_methods(request.path)
        if allowed:
            return method_not_allowed(allowed)

        if self._fallback is not None:
            return self._fallback(request)

        return not_found(f"No route matches {request.path}")
