"""
=============================================================================
REQUEST HANDLERS
=============================================================================

The handlers behind the built-in routes.

    ┌──────────────────┬──────────────────────┬───────────────────────────┐
    │ Route            │ Handler              │ Body                      │
    ├──────────────────┼──────────────────────┼───────────────────────────┤
    │ /echo/<text>     │ echo                 │ <text>                    │
    │ /files/<name>    │ FileHandler.handle   │ bytes of <dir>/<name>     │
    │ /user-agent      │ user_agent           │ User-Agent header         │
    │ / (exact)        │ root                 │ empty                     │
    └──────────────────┴──────────────────────┴───────────────────────────┘

=============================================================================
USAGE
=============================================================================

    from minihttp.handlers import FileHandler, echo

    router.add_route("/echo/", echo)
    router.add_route("/files", FileHandler("/var/data").handle)

=============================================================================
"""

from .text import echo, user_agent, root
from .files import FileHandler, ReadBytes, read_file_bytes

__all__ = [
    "echo",
    "user_agent",
    "root",
    "FileHandler",
    "ReadBytes",
    "read_file_bytes",
]
