"""
The built-in routing table.

Order is significant: the router stops at the first matching prefix.
"""

from typing import Optional

from .config import ServerConfig
from .handlers import FileHandler, ReadBytes, read_file_bytes, echo, user_agent, root
from .http.router import Router


def create_router(
    config: Optional[ServerConfig] = None,
    read_bytes: ReadBytes = read_file_bytes,
) -> Router:
    """
    Build the router for the built-in routes.

    Args:
        config: Server configuration (directory, lenient_file_errors).
        read_bytes: Byte-retrieval function for the /files route.

    Returns:
        Router with /echo/, /files, /user-agent and / registered in that order.
    """
    config = config or ServerConfig()
    files = FileHandler(
        config.directory,
        read_bytes=read_bytes,
        lenient=config.lenient_file_errors,
    )

    router = Router()
    router.add_route("/echo/", echo)
    router.add_route("/files", files.handle, name="files")
    router.add_route("/user-agent", user_agent)
    router.add_route("/", root, exact=True)
    return router
