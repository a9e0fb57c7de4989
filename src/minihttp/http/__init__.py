"""
HTTP protocol components: request parsing, response framing, routing.

    from minihttp.http import parse_request, Router, text

    router = Router()
    router.add_route("/", lambda request: text(), exact=True)
    response = router.handle(parse_request(b"GET / HTTP/1.1\\r\\n\\r\\n"))
    response.to_bytes()  # b"HTTP/1.1 200 \\r\\nContent-Type: text/plain\\r\\n..."
"""

from .status_codes import HTTPStatus
from .request import HTTPRequest, RequestParser, HTTPParseError, parse_request, WIRE_ENCODING
from .response import (
    HTTPResponse,
    PARSE_ERROR_RESPONSE,
    TEXT_PLAIN,
    OCTET_STREAM,
    text,
    octet_stream,
    not_found,
    forbidden,
)
from .router import Router, PrefixRoute, Handler

__all__ = [
    "HTTPStatus",
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "parse_request",
    "WIRE_ENCODING",
    "HTTPResponse",
    "PARSE_ERROR_RESPONSE",
    "TEXT_PLAIN",
    "OCTET_STREAM",
    "text",
    "octet_stream",
    "not_found",
    "forbidden",
    "Router",
    "PrefixRoute",
    "Handler",
]
