"""
=============================================================================
CLI ENTRY POINT
=============================================================================

    helloserver                         # 127.0.0.1:9292
    helloserver --port 3000
    helloserver --host 0.0.0.0          # all interfaces (containers)
    helloserver --log-format json
    python -m helloserver ...           # same thing

=============================================================================
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .app import App
from .config import LOG_FORMATS, LOG_LEVELS, ServerConfig
from .server import HTTPServer


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="helloserver",
        description="Serve the hello/potato web application over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  helloserver                      # Run on 127.0.0.1:9292
  helloserver --port 3000          # Custom port
  helloserver --host 0.0.0.0       # Listen on all interfaces
        """,
    )

    parser.add_argument("--host", "-H", default=None,
                        help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", "-p", type=int, default=None,
                        help="Port to listen on (default: 9292)")
    parser.add_argument("--log-level", "-l", choices=LOG_LEVELS, default=None,
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, default=None,
                        help="Access log format (default: text)")
    parser.add_argument("--version", "-v", action="version",
                        version=f"helloserver {__version__}")
    return parser


def load_config(args: argparse.Namespace) -> ServerConfig:
    """Defaults with CLI flags on top."""
    config = ServerConfig().with_overrides(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        log_format=args.log_format,
    )
    config.validate()
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ValueError as e:
        parser.error(str(e))  # exits with status 2

    server = HTTPServer(App(), config)
    try:
        server.run()
    except OSError as e:
        logger.error(f"Server failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
