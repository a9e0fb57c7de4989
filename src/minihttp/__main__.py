"""
=============================================================================
HTTP SERVER CLI ENTRY POINT
=============================================================================

    # Run with defaults (0.0.0.0:4221)
    python -m minihttp

    # Serve /files/<name> from a directory
    python -m minihttp --directory /tmp/data

    # Listen address as a single host:port string
    python -m minihttp --listen 127.0.0.1:8080

    # Cap concurrent connections, JSON access log
    python -m minihttp --max-connections 64 --log-format json

Configuration is read once here; the resulting ServerConfig is frozen
and handed to the server.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig, LOG_FORMATS, parse_listen_address
from .middleware import AccessLogMiddleware
from .server import HTTPServer


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="One-request-per-connection HTTP/1.1 server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                           # Listen on 0.0.0.0:4221
  python -m minihttp --directory /tmp/data     # Enable /files/<name>
  python -m minihttp --listen 127.0.0.1:8080   # Custom listen address
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)",
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=4221,
        help="Port to listen on (default: 4221)",
    )

    parser.add_argument(
        "--listen", "-L",
        metavar="HOST:PORT",
        default=None,
        help="Listen address; overrides --host and --port",
    )

    parser.add_argument(
        "--buffer-size",
        type=int,
        default=2048,
        help="Bytes read per request (default: 2048)",
    )

    parser.add_argument(
        "--max-connections",
        type=int,
        default=None,
        help="Maximum connections handled at once (default: unlimited)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # FILE ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--directory", "-d",
        default=None,
        help="Directory served by /files/<name>",
    )

    parser.add_argument(
        "--lenient-file-errors",
        action="store_true",
        help="Answer missing files with 200 and an empty body instead of 404",
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default="text",
        help="Access log format (default: text)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """
    Translate parsed CLI arguments into a ServerConfig.

    Raises:
        ValueError: If --listen is malformed.
    """
    host, port = args.host, args.port
    if args.listen:
        host, port = parse_listen_address(args.listen)

    return ServerConfig(
        host=host,
        port=port,
        buffer_size=args.buffer_size,
        max_connections=args.max_connections,
        directory=args.directory,
        lenient_file_errors=args.lenient_file_errors,
        log_level=args.log_level,
        log_format=args.log_format,
    )


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
        server = HTTPServer(config)
    except ValueError as e:
        parser.error(str(e))

    server.use(AccessLogMiddleware(log_format=config.log_format))

    try:
        server.run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
