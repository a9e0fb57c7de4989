"""
=============================================================================
FILE RETRIEVAL HANDLER
=============================================================================

Serves "/files/<name>" from a base directory fixed at startup.

=============================================================================
REQUEST FLOW
=============================================================================

    GET /files/notes.txt
          │
          ▼
    filename = "notes.txt"           (everything after the first "/files/")
          │
          ▼
    path = <directory>/notes.txt
          │
          ├── outside <directory>?  ──►  403, empty body
          │
          ▼
    read_bytes(path)
          │
          ├── OSError  ──►  404, empty body
          │                 (200 + empty octet-stream if lenient)
          │
          ▼
    200, application/octet-stream, file bytes

The byte-retrieval function is injected, so tests (or an embedding
application) can serve from memory instead of the filesystem.

=============================================================================
"""

from pathlib import Path
from typing import Callable, Optional
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, octet_stream, not_found, forbidden


logger = logging.getLogger(__name__)


FILES_PREFIX = "/files/"

# Collaborator that returns the full content of the file at path.
# Raises OSError when the file cannot be read.
ReadBytes = Callable[[str], bytes]


def read_file_bytes(path: str) -> bytes:
    """Read an entire file in binary mode."""
    with open(path, "rb") as f:
        return f.read()


class FileHandler:
    """
    Handler for the /files route.

    Usage:
        files = FileHandler("/var/data")
        router.add_route("/files", files.handle)
    """

    def __init__(
        self,
        directory: Optional[str],
        read_bytes: ReadBytes = read_file_bytes,
        lenient: bool = False,
    ):
        """
        Initialize the file handler.

        Args:
            directory: Base directory. None disables lookups (every
                      request is answered as a failed retrieval).
            read_bytes: Byte-retrieval function, called with the full path.
            lenient: Answer failed lookups with 200 and an empty body.
        """
        self.directory = Path(directory).resolve() if directory else None
        self.read_bytes = read_bytes
        self.lenient = lenient

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Handle a file request.

        Args:
            request: The HTTP request.

        Returns:
            File content, or an error response.
        """
        filename = request.target.partition(FILES_PREFIX)[2]

        if self.directory is None:
            logger.info(f"No directory configured, cannot serve {filename!r}")
            return self._missing()

        # The OS cannot name a file with an embedded NUL
        if "\x00" in filename:
            logger.info(f"Rejected filename with NUL byte: {filename!r}")
            return self._missing()

        # ─────────────────────────────────────────────────────────────────
        # SECURITY: PATH TRAVERSAL CHECK
        # ─────────────────────────────────────────────────────────────────
        full_path = (self.directory / filename).resolve()
        try:
            full_path.relative_to(self.directory)
        except ValueError:
            logger.warning(f"Path traversal attempt: {filename!r}")
            return forbidden()

        try:
            content = self.read_bytes(str(full_path))
        except OSError as e:
            logger.info(f"Cannot read {full_path}: {e}")
            return self._missing()

        return octet_stream(content)

    def _missing(self) -> HTTPResponse:
        if self.lenient:
            return octet_stream(b"")
        return not_found()
