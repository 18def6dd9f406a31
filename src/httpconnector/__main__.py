"""
=============================================================================
HTTP CONNECTOR CLI ENTRY POINT
=============================================================================

    # Run with defaults (127.0.0.1:8080, bundled static/)
    python -m httpconnector

    # Custom port
    python -m httpconnector --port 3000

    # Listen on all interfaces (for containers)
    python -m httpconnector --host 0.0.0.0

    # Serve another content root
    python -m httpconnector --static ./webapp

Every flag defaults to the matching CONNECTOR_* environment variable (see
httpconnector.config), so a flag given on the command line always wins
over the environment.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import ConnectorConfig
from .server import HTTPConnector


def build_parser(defaults: ConnectorConfig) -> argparse.ArgumentParser:
    """Argument parser whose defaults come from ``defaults``."""
    parser = argparse.ArgumentParser(
        prog="httpconnector",
        description="Minimal HTTP/1.1 connector with login, registration and static files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpconnector                      # Run with defaults
  python -m httpconnector --port 3000          # Custom port
  python -m httpconnector --host 0.0.0.0       # Listen on all interfaces
  python -m httpconnector --workers 16         # 16 worker threads
  python -m httpconnector --static ./webapp    # Serve another content root
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host}, use 0.0.0.0 for containers)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})"
    )

    # ─────────────────────────────────────────────────────────────────────
    # PERFORMANCE ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=defaults.workers,
        help=f"Number of worker threads (default: {defaults.workers})"
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT / LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--static", "-s",
        type=str,
        default=defaults.static_dir,
        help="Content root for static files (default: the bundled static/)"
    )

    parser.add_argument(
        "--log-level", "-l",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=defaults.log_level.upper(),
        help=f"Logging level (default: {defaults.log_level.upper()})"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpconnector {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, build the connector and run it until interrupted.

    Returns:
        Process exit status.
    """
    try:
        defaults = ConnectorConfig.from_env()
    except ValueError as e:
        print(f"Error: invalid CONNECTOR_* environment variable: {e}", file=sys.stderr)
        return 2

    args = build_parser(defaults).parse_args(argv)

    config = ConnectorConfig(
        host=args.host,
        port=args.port,
        workers=args.workers,
        timeout=defaults.timeout,
        static_dir=args.static,
        log_level=args.log_level,
    )

    try:
        connector = HTTPConnector(config)
        connector.run()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
