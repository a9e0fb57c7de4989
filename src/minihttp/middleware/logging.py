"""
=============================================================================
ACCESS LOG MIDDLEWARE
=============================================================================

Writes one log record per routed request to the "minihttp.access" logger.

    127.0.0.1 - - [19/Oct/2026:10:15:32 +0000] "GET /echo/abc" 200 3 0.12ms

or, with log_format="json":

    {"method": "GET", "target": "/echo/abc", "status_code": 200, ...}

Requests that fail to parse never reach the middleware; the server logs
those itself.

=============================================================================
"""

from dataclasses import dataclass, asdict
import json
import logging
import time

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


# Namespaced so the access log can be routed separately:
#   logging.getLogger("minihttp.access").addHandler(file_handler)
logger = logging.getLogger("minihttp.access")


@dataclass
class RequestLog:
    """Structured log entry for a request."""

    method: str
    target: str
    client_ip: str
    user_agent: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["duration_ms"] = round(self.duration_ms, 2)
        return data

    def to_text(self) -> str:
        """Format in the style of the Apache combined log."""
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.target}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class AccessLogMiddleware(Middleware):
    """
    Request logging middleware.

    Add it first so its timing covers every other middleware:

        pipeline.add(AccessLogMiddleware(log_format="json"))
    """

    def __init__(self, log_format: str = "text", log_level: int = logging.INFO):
        """
        Args:
            log_format: "text" (human readable) or "json" (machine parseable).
            log_level: Level the access records are emitted at.
        """
        self.log_format = log_format
        self.log_level = log_level

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        start_time = time.time()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.target} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000

        log_entry = RequestLog(
            method=request.method,
            target=request.target,
            client_ip=request.client_address[0],
            user_agent=request.user_agent or "-",
            status_code=int(response.status),
            content_length=response.content_length,
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(self.log_level, log_entry.to_text())

        return response
