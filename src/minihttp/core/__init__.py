"""
Low-level networking: the listening socket and per-client connections.

    SocketServer ──accept()──► Connection ──► HTTPServer._process_connection
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = ["Connection", "ConnectionState", "SocketServer"]
