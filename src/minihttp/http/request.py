"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses the raw bytes of a single read into a structured HTTPRequest.

=============================================================================
WHAT THE PARSER LOOKS AT
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     ONE READ FROM THE SOCKET                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  GET /echo/hello HTTP/1.1\r\n      ← request line                   │
    │  ─┬─ ─────┬───── ───┬────                                           │
    │   │       │         └── version (optional, informational)          │
    │   │       └──────────── target (kept verbatim)                      │
    │   └──────────────────── method (not validated)                      │
    │                                                                      │
    │  Host: localhost:4221\r\n          ← header lines                   │
    │  User-Agent: curl/8.4.0\r\n                                         │
    │  \r\n                              ← blank lines are skipped        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Lines are split on "\n" and stripped, so both CRLF and bare LF line
endings work. The request is never read past the one buffer the
connection handed us: anything after the headers is simply treated as
more (usually colon-less, hence ignored) lines.

=============================================================================
FAILURE MODES
=============================================================================

    fewer than 2 lines            → HTTPParseError
    request line with < 2 tokens  → HTTPParseError
    empty method or target token  → HTTPParseError
    header line without a colon   → ignored

Every HTTPParseError is answered with the bare "HTTP/1.1 500\r\n\r\n".

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


# Latin-1 maps every byte to exactly one code point, so text taken from
# the request (echo path, User-Agent) encodes back to the original bytes.
WIRE_ENCODING = "iso-8859-1"


class HTTPParseError(Exception):
    """
    Raised when the raw bytes do not contain a recognizable request.

    The server answers every parse error with the same degraded
    response, so unlike a general-purpose parser we carry no status code.
    """


@dataclass
class HTTPRequest:
    """
    Represents a parsed HTTP request.

    Lives for exactly one connection: created by RequestParser, consumed
    by the router, then discarded.

    Attributes:
        method:         First token of the request line, as sent.
        target:         Second token of the request line, as sent
                        ("/echo/abc"); no query-string handling.
        headers:        Header name → value. Names keep the case they
                        arrived in; a repeated name overwrites.
        version:        Third token of the request line, "" if absent.
        client_address: (ip, port) of the peer, for logging.
    """

    method: str
    target: str
    headers: Dict[str, str] = field(default_factory=dict)
    version: str = ""
    client_address: Tuple[str, int] = ("", 0)

    @property
    def user_agent(self) -> str:
        """Value of the User-Agent header, or "" when absent."""
        return self.headers.get("User-Agent", "")

    def get_header(self, name: str, default: str = "") -> str:
        """
        Get a header value by exact name.

        Args:
            name: Header name, matched case-sensitively.
            default: Value to return if header is missing.

        Returns:
            Header value or default.
        """
        return self.headers.get(name, default)

    def __repr__(self) -> str:
        return f"HTTPRequest({self.method} {self.target})"


class RequestParser:
    """
    Turns one buffer of bytes into an HTTPRequest.

    The parser is stateless, so one instance is shared by every
    connection thread.

    Usage:
        parser = RequestParser()
        try:
            request = parser.parse(raw_bytes, client_address)
        except HTTPParseError:
            # send the bare 500
            ...
    """

    def parse(
        self,
        data: bytes,
        client_address: Tuple[str, int] = ("", 0),
    ) -> HTTPRequest:
        """
        Parse raw request bytes.

        Args:
            data: Bytes from a single read on the connection.
            client_address: Client's (ip, port) tuple for logging.

        Returns:
            Parsed HTTPRequest.

        Raises:
            HTTPParseError: If the request line is missing or malformed.
        """
        lines = data.decode(WIRE_ENCODING).split("\n")
        if len(lines) < 2:
            raise HTTPParseError("Invalid message format: fewer than 2 lines")

        method, target, version = self._parse_request_line(lines[0])
        headers = self._parse_headers(lines[1:])

        return HTTPRequest(
            method=method,
            target=target,
            headers=headers,
            version=version,
            client_address=client_address,
        )

    def _parse_request_line(self, line: str) -> Tuple[str, str, str]:
        """
        Split the request line into (method, target, version).

        The line is split on single spaces, so a doubled space produces
        an empty token in the target position and is rejected.
        """
        parts = line.strip().split(" ")
        if len(parts) < 2:
            raise HTTPParseError(f"Invalid request line: {line.strip()!r}")

        method, target = parts[0], parts[1]
        if not method or not target:
            raise HTTPParseError(f"Invalid request line: {line.strip()!r}")

        version = parts[2] if len(parts) > 2 else ""
        return method, target, version

    def _parse_headers(self, lines: list) -> Dict[str, str]:
        """
        Parse header lines into a dictionary.

        Blank lines (the header/body separator included) are skipped and
        lines without a colon are ignored. Only the first colon splits,
        so "Host: localhost:4221" keeps its port.
        """
        headers: Dict[str, str] = {}

        for line in lines:
            line = line.strip()
            if not line:
                continue

            name, sep, value = line.partition(":")
            if not sep:
                continue

            headers[name.strip()] = value.strip()

        return headers


_default_parser = RequestParser()


def parse_request(data: bytes, client_address: Tuple[str, int] = ("", 0)) -> HTTPRequest:
    """
    Convenience function to parse a request with the shared parser.

    Args:
        data: Raw HTTP request bytes.
        client_address: Client's (ip, port) tuple.

    Returns:
        Parsed HTTPRequest.
    """
    return _default_parser.parse(data, client_address)
