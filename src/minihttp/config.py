"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Process-wide settings, built once at startup and never mutated.

=============================================================================
LIFETIME
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   argv ──► __main__.main() ──► ServerConfig(...)  (frozen)          │
    │                                      │                               │
    │                     ┌────────────────┼────────────────┐             │
    │                     ▼                ▼                ▼             │
    │               SocketServer        Router         FileHandler        │
    │               (host, port)    (via create_router)  (directory)      │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Every component receives the config (or the piece of it it needs) when
it is constructed. Nothing reads command-line flags while a request is
being handled, and since the dataclass is frozen no thread can change a
value another thread is reading.

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional, Tuple


LOG_FORMATS = ("text", "json")


@dataclass(frozen=True)
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout

    CONCURRENCY
    - max_connections

    FILES
    - directory, lenient_file_errors

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """
    The IP address to bind to.
    - "0.0.0.0" - All network interfaces
    - "127.0.0.1" - Localhost only
    """

    port: int = 4221
    """
    The port number to listen on. 0 lets the OS pick a free port.
    """

    backlog: int = 128
    """
    Maximum number of queued connections waiting for accept().
    """

    buffer_size: int = 2048
    """
    Size of the single read performed on each connection.
    Requests longer than this are truncated.
    """

    timeout: Optional[float] = None
    """
    Read timeout in seconds for each connection.
    None = block until the client sends data or disconnects.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONCURRENCY
    # ─────────────────────────────────────────────────────────────────────

    max_connections: Optional[int] = None
    """
    Upper bound on connections handled at the same time.
    None = one new thread per accepted connection, no limit.
    """

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    directory: Optional[str] = None
    """
    Base directory for the /files route.
    None = every /files request is treated as a failed lookup.
    """

    lenient_file_errors: bool = False
    """
    When True, a failed file lookup answers 200 with an empty
    application/octet-stream body instead of 404.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    log_format: str = "text"
    """
    Access log format: 'text' or 'json'.
    """

    @property
    def listen_address(self) -> str:
        """The listen address as a host:port string."""
        return f"{self.host}:{self.port}"

    @classmethod
    def from_address(cls, address: str, **kwargs) -> "ServerConfig":
        """
        Create configuration from a host:port listen address.

        Example:
            config = ServerConfig.from_address(":4221", directory="/tmp")
        """
        host, port = parse_listen_address(address)
        return cls(host=host, port=port, **kwargs)

    def validate(self) -> None:
        """
        Validate configuration values.

        Called by HTTPServer before anything is bound, so a bad value
        stops startup with a clear message.

        Raises:
            ValueError: If a value is out of range.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.backlog < 0:
            raise ValueError("backlog must be >= 0")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_connections is not None and self.max_connections < 1:
            raise ValueError("max_connections must be >= 1")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a host:port string.

    An empty host means all interfaces, so ":4221" binds 0.0.0.0:4221.

    Args:
        address: Listen address, e.g. "127.0.0.1:4221" or ":4221".

    Returns:
        (host, port) tuple.

    Raises:
        ValueError: If the port is missing or not a number.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address: {address!r}. Expected HOST:PORT.")
    return host or "0.0.0.0", int(port)
