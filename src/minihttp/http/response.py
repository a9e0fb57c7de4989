"""
=============================================================================
HTTP RESPONSE
=============================================================================

Builds the bytes written back on a connection.

=============================================================================
WIRE FORMAT
=============================================================================

Every routed response has exactly this shape:

    HTTP/1.1 200 \r\n                  ← status line, note the trailing space
    Content-Type: text/plain\r\n
    Content-Length: 5\r\n              ← always len(body) in bytes
    \r\n
    hello

There is no Date, Server or Connection header; clients of this server
compare responses byte for byte.

The one exception is a request that failed to parse. It gets a bare
status line and nothing else:

    HTTP/1.1 500\r\n
    \r\n

=============================================================================
"""

from dataclasses import dataclass
from typing import Union

from .request import WIRE_ENCODING
from .status_codes import HTTPStatus


TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"

# Sent instead of a routed response when the request cannot be parsed.
PARSE_ERROR_RESPONSE = b"HTTP/1.1 500\r\n\r\n"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

        Router returns           to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes

    Attributes:
        status:       HTTP status code.
        content_type: Value of the Content-Type header.
        body:         Response body bytes.
    """

    status: HTTPStatus = HTTPStatus.OK
    content_type: str = TEXT_PLAIN
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line (without CRLF).

        Format: HTTP-VERSION SP STATUS-CODE SP
        Example: "HTTP/1.1 200 "
        """
        return f"{self.version} {int(self.status)} "

    @property
    def content_length(self) -> int:
        return len(self.body)

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        """
        Set the response body.

        Strings are encoded with the same single-byte encoding the
        request was decoded with, so reflected text is returned unchanged.

        Returns:
            Self for method chaining
        """
        if isinstance(body, str):
            self.body = body.encode(WIRE_ENCODING)
        else:
            self.body = body
        return self

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        Content-Length is computed here from the final body, never taken
        from a pre-declared value.

        Returns:
            Complete HTTP response as bytes ready for socket.sendall()
        """
        head = (
            f"{self.status_line}\r\n"
            f"Content-Type: {self.content_type}\r\n"
            f"Content-Length: {self.content_length}\r\n"
            "\r\n"
        )
        return head.encode(WIRE_ENCODING) + self.body


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def text(body: Union[str, bytes] = "", status: HTTPStatus = HTTPStatus.OK) -> HTTPResponse:
    """
    Create a text/plain response.

    Example:
        return text("hello")
    """
    return HTTPResponse(status=status, content_type=TEXT_PLAIN).set_body(body)


def octet_stream(body: bytes = b"", status: HTTPStatus = HTTPStatus.OK) -> HTTPResponse:
    """Create an application/octet-stream response."""
    return HTTPResponse(status=status, content_type=OCTET_STREAM, body=body)


def not_found() -> HTTPResponse:
    """Create a 404 Not Found response with an empty body."""
    return text(status=HTTPStatus.NOT_FOUND)


def forbidden() -> HTTPResponse:
    """Create a 403 Forbidden response with an empty body."""
    return text(status=HTTPStatus.FORBIDDEN)
