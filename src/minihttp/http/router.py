"""
=============================================================================
PREFIX ROUTER
=============================================================================

Maps a request target to a handler function by literal prefix.

=============================================================================
HOW DISPATCH WORKS
=============================================================================

Routes are kept in the order they were added and tested one by one.
The FIRST route whose prefix matches wins; nothing after it is looked at.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                  ORDERED PREFIX DISPATCH                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   target = "/user-agent"                                            │
    │                                                                      │
    │   1. "/echo/"       startswith?  no                                 │
    │   2. "/files"       startswith?  no                                 │
    │   3. "/user-agent"  startswith?  YES  ──►  user_agent(request)      │
    │   4. "/"  (exact)   ── not evaluated                                │
    │                                                                      │
    │   no route matched  ──►  404, empty body                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Order therefore matters: a catch-all prefix such as "/" must be exact
(or registered last), otherwise it shadows every route after it.

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, List, Optional
import logging

from .request import HTTPRequest
from .response import HTTPResponse, not_found


logger = logging.getLogger(__name__)


# Handler takes a request and returns a response
Handler = Callable[[HTTPRequest], HTTPResponse]


@dataclass
class PrefixRoute:
    """
    A single routing rule.

    Attributes:
        prefix: Literal the target must start with (or equal, if exact).
        handler: Function that produces the response.
        exact: Match only when the target equals the prefix.
        name: Optional route name, used in debug logging.
    """

    prefix: str
    handler: Handler
    exact: bool = False
    name: Optional[str] = None

    def matches(self, target: str) -> bool:
        if self.exact:
            return target == self.prefix
        return target.startswith(self.prefix)


class Router:
    """
    First-match-wins prefix router.

    Usage:
        router = Router()

        @router.route("/echo/")
        def echo(request):
            return text(request.target.partition("/echo/")[2])

        router.add_route("/", root, exact=True)

        response = router.handle(request)
    """

    def __init__(self):
        self._routes: List[PrefixRoute] = []

    def add_route(
        self,
        prefix: str,
        handler: Handler,
        exact: bool = False,
        name: Optional[str] = None,
    ) -> PrefixRoute:
        """
        Append a route to the end of the dispatch order.

        Args:
            prefix: Literal target prefix.
            handler: Request handler.
            exact: Require target == prefix instead of startswith.
            name: Route name (defaults to the handler's __name__).

        Returns:
            The created route.
        """
        route = PrefixRoute(
            prefix=prefix,
            handler=handler,
            exact=exact,
            name=name or getattr(handler, "__name__", None),
        )
        self._routes.append(route)
        logger.debug(f"Added route: {prefix} -> {route.name}")
        return route

    def route(self, prefix: str, exact: bool = False, name: Optional[str] = None):
        """
        Decorator to register a route handler.

        Example:
            @router.route("/user-agent")
            def user_agent(request):
                return text(request.user_agent)
        """
        def decorator(handler: Handler) -> Handler:
            self.add_route(prefix, handler, exact=exact, name=name)
            return handler
        return decorator

    def match(self, target: str) -> Optional[PrefixRoute]:
        """
        Find the first route matching the target.

        Args:
            target: Request target.

        Returns:
            Matching route, or None.
        """
        for route in self._routes:
            if route.matches(target):
                return route
        return None

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Dispatch a request to its handler.

        Returns:
            The handler's response, or 404 with an empty body when no
            route matches.
        """
        route = self.match(request.target)
        if route is None:
            return not_found()
        return route.handler(request)

    @property
    def routes(self) -> List[PrefixRoute]:
        """Get a copy of the routes in dispatch order."""
        return list(self._routes)
