"""
Unit tests for HTTP request parsing.
"""

import pytest

from minihttp.http.request import (
    HTTPRequest,
    RequestParser,
    HTTPParseError,
    parse_request,
)


class TestRequestParser:
    """Tests for RequestParser class."""

    def test_parse_simple_get(self, sample_get_request: bytes):
        """Test parsing a simple GET request."""
        parser = RequestParser()
        request = parser.parse(sample_get_request, ("127.0.0.1", 12345))

        assert request.method == "GET"
        assert request.target == "/echo/hello"
        assert request.version == "HTTP/1.1"
        assert request.client_address == ("127.0.0.1", 12345)

    def test_parse_headers(self, sample_get_request: bytes):
        """Test that headers are parsed with trimmed names and values."""
        request = parse_request(sample_get_request)

        assert request.headers == {
            "Host": "localhost:4221",
            "User-Agent": "pytest",
            "Accept": "*/*",
        }
        assert request.user_agent == "pytest"

    def test_header_value_keeps_later_colons(self):
        """Only the first colon separates name from value."""
        request = parse_request(b"GET / HTTP/1.1\r\nX-Time: 12:30:45\r\n\r\n")

        assert request.headers["X-Time"] == "12:30:45"

    def test_header_names_keep_their_case(self):
        """Header names are not normalized."""
        request = parse_request(b"GET / HTTP/1.1\r\nuser-agent: lower\r\n\r\n")

        assert request.headers == {"user-agent": "lower"}
        assert request.user_agent == ""
        assert request.get_header("user-agent") == "lower"

    def test_repeated_header_overwrites(self):
        """Last value wins for a repeated header name."""
        raw = (
            b"GET / HTTP/1.1\r\n"
            b"X-Token: first\r\n"
            b"X-Token: second\r\n"
            b"\r\n"
        )
        request = parse_request(raw)

        assert request.headers["X-Token"] == "second"

    def test_lines_without_colon_are_ignored(self):
        raw = b"GET / HTTP/1.1\r\nnot a header\r\nHost: test\r\n\r\n"
        request = parse_request(raw)

        assert request.headers == {"Host": "test"}

    def test_stray_blank_lines_are_tolerated(self):
        raw = b"GET / HTTP/1.1\r\n\r\nHost: test\r\n\r\n\r\n"
        request = parse_request(raw)

        assert request.headers == {"Host": "test"}

    def test_bare_lf_line_endings(self):
        request = parse_request(b"GET /user-agent HTTP/1.1\nUser-Agent: nc\n\n")

        assert request.target == "/user-agent"
        assert request.user_agent == "nc"

    def test_version_is_optional(self):
        request = parse_request(b"GET /echo/x\r\n\r\n")

        assert request.method == "GET"
        assert request.target == "/echo/x"
        assert request.version == ""

    def test_method_is_not_validated(self):
        request = parse_request(b"BREW /pot HTTP/1.1\r\n\r\n")

        assert request.method == "BREW"
        assert request.target == "/pot"

    def test_parse_missing_headers(self):
        """Test parsing request with no headers."""
        request = parse_request(b"GET / HTTP/1.1\r\n\r\n")

        assert request.method == "GET"
        assert request.target == "/"
        assert request.headers == {}

    @pytest.mark.parametrize("raw", [
        b"",
        b"GET / HTTP/1.1",
        b"nospaces",
    ])
    def test_fewer_than_two_lines_is_malformed(self, raw: bytes):
        with pytest.raises(HTTPParseError):
            parse_request(raw)

    @pytest.mark.parametrize("raw", [
        b"GET\r\nHost: test\r\n\r\n",
        b"\r\nHost: test\r\n\r\n",
        b"GET  /double-space HTTP/1.1\r\n\r\n",
    ])
    def test_invalid_request_line_is_malformed(self, raw: bytes):
        with pytest.raises(HTTPParseError):
            parse_request(raw)

    def test_non_utf8_bytes_survive(self):
        """Every byte maps to one character and back."""
        request = parse_request(b"GET /echo/caf\xe9 HTTP/1.1\r\n\r\n")

        assert request.target.encode("iso-8859-1") == b"/echo/caf\xe9"


class TestHTTPRequest:
    """Tests for HTTPRequest dataclass."""

    def test_headers_default_to_empty(self):
        request = HTTPRequest(method="GET", target="/")

        assert request.headers == {}

    def test_get_header_default(self):
        """Test get_header with default value."""
        request = HTTPRequest(method="GET", target="/")

        assert request.get_header("X-Missing") == ""
        assert request.get_header("X-Missing", "default") == "default"
