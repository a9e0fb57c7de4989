"""
=============================================================================
BASE MIDDLEWARE INTERFACE
=============================================================================

Defines the middleware protocol and the pipeline that wraps it around
the router.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    REQUEST / RESPONSE FLOW                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Request ──────────────────────────────────────────►               │
    │                                                                      │
    │   ┌──────────┐    ┌──────────┐    ┌──────────────┐                  │
    │   │ AccessLog│───►│   ...    │───►│ router.handle│                  │
    │   └──────────┘    └──────────┘    └──────────────┘                  │
    │                                                                      │
    │   ◄────────────────────────────────────────── Response              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Each middleware either calls next(request) and post-processes the
response, or returns its own response without calling next.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, List
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)


# NextHandler is the signature for the next middleware or final handler.
NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """
    Base class for all middleware.

    Example:
        class TimingMiddleware(Middleware):
            def __call__(self, request, next):
                start = time.time()
                response = next(request)
                logger.info(f"{request.target} took {time.time() - start:.3f}s")
                return response
    """

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """
        Process the request.

        Args:
            request: The incoming HTTP request
            next: The next handler in the chain (call this to continue!)

        Returns:
            HTTP response (either from next() or short-circuited)
        """

    @property
    def name(self) -> str:
        """Get the middleware name for logging."""
        return self.__class__.__name__


class MiddlewarePipeline:
    """
    Chains middleware together around a final handler.

    First added = outermost: it sees the request first and the response
    last.

        pipeline = MiddlewarePipeline()
        pipeline.add(AccessLogMiddleware())
        handler = pipeline.wrap(router.handle)
        response = handler(request)
    """

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        """
        Add middleware to the pipeline.

        Returns:
            Self for method chaining
        """
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap a handler with all middleware in the pipeline.

        Given [MW1, MW2] and handler the result calls
        MW1 → MW2 → handler.

        Args:
            handler: The final request handler

        Returns:
            Wrapped handler function that includes all middleware
        """
        current = handler

        # Wrap in reverse order so first middleware is outermost
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)

        return current

    def _create_wrapped_handler(
        self,
        middleware: Middleware,
        next_handler: NextHandler,
    ) -> NextHandler:
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)

        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self):
        return iter(self._middleware)
