"""
=============================================================================
MINIHTTP - One-shot HTTP/1.1 Server
=============================================================================

A small HTTP server built on raw sockets. Every connection carries exactly
one request, answered by one of four built-in routes:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   GET /echo/abc        →  200 text/plain "abc"                      │
    │   GET /files/a.bin     →  200 application/octet-stream <bytes>      │
    │   GET /user-agent      →  200 text/plain <User-Agent header>        │
    │   GET /                →  200 text/plain ""                         │
    │   anything else        →  404                                       │
    │   unparseable bytes    →  "HTTP/1.1 500\\r\\n\\r\\n"                    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    minihttp/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m minihttp)
    ├── server.py            # HTTPServer: accept → thread → parse → route
    ├── config.py            # ServerConfig frozen dataclass
    ├── routes.py            # The built-in routing table
    ├── core/
    │   ├── socket_server.py # Listening socket and accept loop
    │   └── connection.py    # One client socket, one read, one write
    ├── http/
    │   ├── request.py       # Request parsing
    │   ├── response.py      # Response framing
    │   ├── router.py        # Ordered prefix routing
    │   └── status_codes.py  # HTTP status enum
    ├── middleware/
    │   ├── base.py          # Middleware protocol and pipeline
    │   └── logging.py       # Access log
    └── handlers/
        ├── text.py          # echo, user-agent, root
        └── files.py         # /files retrieval

=============================================================================
QUICK START
=============================================================================

    from minihttp import HTTPServer, ServerConfig
    from minihttp.middleware import AccessLogMiddleware

    server = HTTPServer(ServerConfig(port=4221, directory="/tmp"))
    server.use(AccessLogMiddleware())
    server.run()

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig

__all__ = ["HTTPServer", "ServerConfig", "__version__"]
