"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this server can put on the wire.

The response line written by minihttp carries the numeric code only,
followed by a single space and CRLF:

    HTTP/1.1 200 \r\n
             ───
              │
              └── Status code (no reason phrase)

The reason phrases below are kept for log output and for the repr of
responses in tests; they never reach the client.

    ┌──────┬─────────────────────────┬──────────────────────────────────┐
    │ Code │ Phrase                  │ Produced by                      │
    ├──────┼─────────────────────────┼──────────────────────────────────┤
    │ 200  │ OK                      │ every matched route              │
    │ 403  │ Forbidden               │ /files escaping the base dir     │
    │ 404  │ Not Found               │ no route / missing file          │
    │ 500  │ Internal Server Error   │ parse failure / handler crash    │
    └──────┴─────────────────────────┴──────────────────────────────────┘

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by the server.

    This enum extends IntEnum, so status codes compare equal to integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """Get the reason phrase for this status code."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self < 600

    @property
    def is_error(self) -> bool:
        """Check if this is an error status code (4xx or 5xx)."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.FORBIDDEN: "Forbidden",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
