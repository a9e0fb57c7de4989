"""
Middleware wrapped around the router.

    from minihttp.middleware import MiddlewarePipeline, AccessLogMiddleware

    pipeline = MiddlewarePipeline().add(AccessLogMiddleware())
    handler = pipeline.wrap(router.handle)
"""

from .base import Middleware, MiddlewarePipeline, NextHandler
from .logging import AccessLogMiddleware, RequestLog

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "AccessLogMiddleware",
    "RequestLog",
]
