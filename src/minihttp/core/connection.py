"""
=============================================================================
CLIENT CONNECTION
=============================================================================

Wraps one accepted client socket for the lifetime of one request.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──────► READING ──────► PROCESSING ──────► WRITING ──────► CLOSED
                   │                                                 ▲
                   └──── peer closed / read error ───────────────────┘

There is no way back to READING: one connection carries exactly one
request and one response.

=============================================================================
ONE READ, NOT A READ LOOP
=============================================================================

read_request() performs a single recv() of at most buffer_size bytes and
returns whatever arrived. It does not look for the end of the headers
and does not honour Content-Length; a request longer than the buffer is
cut short. Handlers only ever need the request line and headers.

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple
import uuid


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and close()."""
    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    Represents a client connection.

    Use it as a context manager so the socket is closed on every exit
    path, including exceptions:

        with conn:
            raw = conn.read_request()
            ...
            conn.send_response(data)

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short connection identifier for log lines.
        state: Current connection state.
        created_at: Timestamp when connection was accepted.
        buffer_size: Maximum number of bytes read for the request.
        timeout: Read timeout in seconds (None = block).
    """

    socket: socket.socket
    address: Tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 2048
    timeout: Optional[float] = None

    # Limits on discarding leftover client data in close()
    DRAIN_TIMEOUT = 0.5
    DRAIN_MAX_BYTES = 64 * 1024

    def __post_init__(self):
        # Accepted sockets inherit the listener's accept-poll timeout;
        # reset so reads follow our own timeout instead.
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> Optional[bytes]:
        """
        Read the request with a single bounded recv().

        Returns:
            The bytes received, or None if the client closed the
            connection without sending anything.

        Raises:
            OSError: On read errors other than a reset (including
                     socket.timeout when a timeout is configured).
        """
        self.state = ConnectionState.READING

        try:
            data = self.socket.recv(self.buffer_size)
        except ConnectionResetError:
            logger.debug(f"[{self.id}] Connection reset by peer")
            return None

        if not data:
            logger.debug(f"[{self.id}] Client closed before sending a request")
            return None

        self.state = ConnectionState.PROCESSING
        return data

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send response data to the client.

        Uses sendall() so the whole response is written.

        Returns:
            True if send succeeded, False if connection lost.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR): tell the client we're done sending
        2. Drain whatever the client still sends, briefly
        3. close(): release the file descriptor

        Safe to call more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already gone

        self._drain()

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def _drain(self):
        """
        Discard unread client data so close() does not send a RST.

        Bounded by DRAIN_TIMEOUT in total and by DRAIN_MAX_BYTES, so a
        client that keeps trickling data cannot hold the thread.
        """
        deadline = time.monotonic() + self.DRAIN_TIMEOUT
        drained = 0

        try:
            while drained < self.DRAIN_MAX_BYTES:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                chunk = self.socket.recv(1024)
                if not chunk:
                    break
                drained += len(chunk)
        except OSError:
            pass

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure connection is closed."""
        self.close()
        return False  # Don't suppress exceptions
