"""
=============================================================================
MAIN HTTP SERVER
=============================================================================

Ties the components together: socket server, request parser,
middleware and router.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    main thread                      connection thread (one per client)
    ───────────                      ─────────────────────────────────
    accept()
       │
       └── spawn ───────────────►    with conn:
    accept()                            raw = conn.read_request()   (1 recv)
       │                                   │
       └── spawn ──► ...                   ├── None ──► close, no response
                                           │
                                        parse(raw)
                                           │
                                           ├── HTTPParseError
                                           │      └──► "HTTP/1.1 500\r\n\r\n"
                                           │
                                        middleware ─► router.handle(request)
                                           │
                                        send(response.to_bytes())
                                           │
                                        close  ◄── guaranteed by `with`

Connection threads share nothing but the frozen config, the stateless
parser and the router, so they never need to lock against each other.

=============================================================================
"""

import logging
import threading
from typing import Callable, Optional, Set, Tuple

from .config import ServerConfig
from .core import SocketServer, Connection
from .handlers import ReadBytes, read_file_bytes
from .http import (
    HTTPRequest, RequestParser, HTTPParseError,
    HTTPResponse, PARSE_ERROR_RESPONSE, Router,
)
from .middleware import MiddlewarePipeline, Middleware
from .routes import create_router


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    One-request-per-connection HTTP/1.1 server.

    =========================================================================
    USAGE
    =========================================================================

        server = HTTPServer(ServerConfig(port=4221, directory="/tmp/data"))
        server.use(AccessLogMiddleware())
        server.run()   # blocks until Ctrl+C / SIGTERM / shutdown()

    =========================================================================
    """

    # Seconds between shutdown checks while waiting for a connection slot
    SLOT_POLL_INTERVAL = 0.5

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        read_bytes: ReadBytes = read_file_bytes,
        router: Optional[Router] = None,
    ):
        """
        Initialize the HTTP server.

        Args:
            config: Server configuration. Uses defaults if not provided.
            read_bytes: Byte-retrieval function for the /files route.
            router: Custom router. Defaults to the built-in routes.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()
        self._router = router or create_router(self.config, read_bytes)
        self._middleware = MiddlewarePipeline()

        # middleware.wrap(router.handle), built in run()
        self._handler: Optional[Callable[[HTTPRequest], HTTPResponse]] = None

        # Bounds concurrent connection threads when max_connections is set
        self._slots: Optional[threading.BoundedSemaphore] = None
        if self.config.max_connections:
            self._slots = threading.BoundedSemaphore(self.config.max_connections)

        self._workers: Set[threading.Thread] = set()
        self._workers_lock = threading.Lock()

        self._running = False

    # =========================================================================
    # CONFIGURATION METHODS
    # =========================================================================

    def use(self, middleware: Middleware) -> "HTTPServer":
        """
        Add middleware to the server.

        Middleware is executed in the order added.

        Returns:
            Self for method chaining.
        """
        self._middleware.add(middleware)
        return self

    @property
    def router(self) -> Router:
        return self._router

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port); the real port once listening."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start the server (blocking).

        Blocks until shutdown() is called or SIGINT/SIGTERM arrives.

        Raises:
            OSError: If the listening socket cannot be bound.
        """
        self._setup_logging()

        self._handler = self._middleware.wrap(self._router.handle)
        self._running = True

        logger.info(f"Starting HTTP server on {self.config.listen_address}")
        if self.config.directory:
            logger.info(f"Serving files from {self.config.directory}")

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._shutdown()

    def shutdown(self):
        """Stop accepting connections; run() returns shortly after."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Wait until the server is accepting connections."""
        return self._socket_server.wait_until_ready(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("minihttp").setLevel(level)

    def _shutdown(self, timeout: float = 5.0):
        """
        Wait briefly for in-flight connections, then return.

        Connection threads are daemons, so a client that never sends
        anything cannot keep the process alive past this point.
        """
        logger.info("Shutting down server...")
        self._running = False

        with self._workers_lock:
            workers = list(self._workers)

        for worker in workers:
            worker.join(timeout=timeout)

        logger.info("Server stopped")

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Hand a connection to its own thread.

        Called by SocketServer on the accept thread. With max_connections
        set this blocks until a slot frees up, which holds back accept().
        The wait is polled so shutdown() still ends the accept loop while
        every slot is taken.
        """
        if self._slots is not None:
            while not self._slots.acquire(timeout=self.SLOT_POLL_INTERVAL):
                if not self._socket_server.is_running:
                    logger.debug(f"[{conn.id}] Shutting down, dropping queued connection")
                    conn.close()
                    return

        worker = threading.Thread(
            target=self._run_worker,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        with self._workers_lock:
            self._workers.add(worker)
        worker.start()

    def _run_worker(self, conn: Connection):
        try:
            self._process_connection(conn)
        finally:
            with self._workers_lock:
                self._workers.discard(threading.current_thread())
            if self._slots is not None:
                self._slots.release()

    def _process_connection(self, conn: Connection):
        """
        Serve exactly one request on a connection (runs in its own thread).

        Args:
            conn: The client connection.
        """
        with conn:
            try:
                raw_request = conn.read_request()
            except OSError as e:
                logger.warning(f"[{conn.id}] Read error: {e}")
                return

            if raw_request is None:
                return

            try:
                request = self._parser.parse(raw_request, conn.address)
            except HTTPParseError as e:
                logger.warning(f"[{conn.id}] Malformed request from {conn.client_ip}: {e}")
                conn.send_response(PARSE_ERROR_RESPONSE)
                return

            try:
                response = self._handler(request)
            except Exception as e:
                logger.exception(f"[{conn.id}] Handler error: {e}")
                conn.send_response(PARSE_ERROR_RESPONSE)
                return

            conn.send_response(response.to_bytes())
