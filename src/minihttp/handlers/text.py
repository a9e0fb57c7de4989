"""
Plain-text handlers: echo, User-Agent reflection and the root route.

All three answer 200 with a text/plain body; none of them can fail.
"""

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, text


ECHO_PREFIX = "/echo/"


def echo(request: HTTPRequest) -> HTTPResponse:
    """Return everything after the first "/echo/" in the target."""
    return text(request.target.partition(ECHO_PREFIX)[2])


def user_agent(request: HTTPRequest) -> HTTPResponse:
    """Return the User-Agent header, or an empty body when absent."""
    return text(request.user_agent)


def root(request: HTTPRequest) -> HTTPResponse:
    return text()
