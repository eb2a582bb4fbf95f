"""
=============================================================================
HTTP SERVER
=============================================================================

Hosts any request handler (request descriptor in, response triple out) on
the standard library's WSGI listener.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        REQUEST FLOW                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   ThreadingWSGIServer          one thread per connection             │
    │        │                                                             │
    │        ▼                                                             │
    │   wsgiref: socket → HTTP parsing → WSGI environ                     │
    │        │                                                             │
    │        ▼                                                             │
    │   to_wsgi(handler): environ → descriptor → handler → triple         │
    │        │                                                             │
    │        ▼                                                             │
    │   wsgiref: status line, headers, body → socket                       │
    │        │                                                             │
    │        ▼                                                             │
    │   AccessLogRequestHandler.log_request() → helloserver.access        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Sockets, parsing, connection lifetime and threading all belong to wsgiref
and socketserver. This module only wires the handler in, routes wsgiref's
log output through logging, and gives tests a way to start and stop a
server on a free port.

=============================================================================
"""

import logging
import socketserver
import threading
from typing import Optional, Tuple
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from .access_log import AccessLogger, RequestLog, log_timestamp
from .app import App
from .config import ServerConfig
from .http.router import Handler
from .wsgi import to_wsgi


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger for a server process.

    basicConfig() is a no-op when the host application has already
    configured logging; the package logger level is set either way.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logging.getLogger("helloserver").setLevel(numeric)


class ThreadingWSGIServer(socketserver.ThreadingMixIn, WSGIServer):
    daemon_threads = True


class AccessLogRequestHandler(WSGIRequestHandler):
    """wsgiref request handler that logs through logging instead of stderr."""

    def log_request(self, code="-", size="-"):
        access_log: Optional[AccessLogger] = getattr(self.server, "access_log", None)
        if access_log is None:
            return
        try:
            status_code = int(code)
        except (TypeError, ValueError):
            status_code = 0
        # send_error() logs before the request line or headers may exist.
        headers = getattr(self, "headers", None)
        access_log.log(RequestLog(
            method=self.command or "-",
            path=getattr(self, "path", "-"),
            version=self.request_version,
            client_ip=self.client_address[0],
            user_agent=headers.get("User-Agent", "-") if headers is not None else "-",
            status_code=status_code,
            content_length=size if isinstance(size, int) else 0,
            timestamp=log_timestamp(),
        ))

    def log_message(self, format, *args):
        # Everything except access lines: bad request lines, timeouts.
        logger.info(f"{self.address_string()} - {format % args}")


class HTTPServer:
    """
    Threaded HTTP listener for a request handler.

    Usage:
        server = HTTPServer(App(), ServerConfig(port=9292))
        server.run()            # blocks; Ctrl+C or shutdown() stops it

    From another thread:
        server.wait_until_ready()
        host, port = server.address
        ...
        server.shutdown()
    """

    def __init__(
        self,
        handler: Optional[Handler] = None,
        config: Optional[ServerConfig] = None,
        configure_logging: bool = True,
    ):
        """
        Args:
            handler: Callable taking a request descriptor and returning a
                     response triple. Defaults to the hello/potato App.
            config: Listener settings. Validated immediately.
            configure_logging: Call setup_logging() from run(). Embedders
                     with their own logging setup pass False.
        """
        self.handler: Handler = handler if handler is not None else App()
        self.config = config or ServerConfig()
        self.config.validate()
        self.configure_logging = configure_logging

        self._httpd: Optional[WSGIServer] = None
        self._ready = threading.Event()
        self._stopped = threading.Event()
        self._lock = threading.Lock()
        self._running = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def address(self) -> Tuple[str, int]:
        """Bound (host, port); reflects the OS-chosen port when port=0."""
        if self._httpd is None:
            return self.config.host, self.config.port
        host, port = self._httpd.server_address[:2]
        return host, port

    @property
    def is_running(self) -> bool:
        return self._running

    def run(self) -> None:
        """
        Serve until shutdown() or Ctrl+C.

        Raises:
            OSError: If the listening socket cannot be bound.
        """
        if self.configure_logging:
            setup_logging(self.config.log_level)

        try:
            httpd = make_server(
                self.config.host,
                self.config.port,
                to_wsgi(self.handler),
                server_class=ThreadingWSGIServer,
                handler_class=AccessLogRequestHandler,
            )
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            raise

        httpd.access_log = AccessLogger(self.config.log_format)

        with self._lock:
            self._httpd = httpd
            self._running = True

        host, port = self.address
        logger.info(f"Listening on http://{host}:{port} with handler {self._handler_name()}")
        router = getattr(self.handler, "router", None)
        if router is not None:
            for line in router.describe():
                logger.debug(f"  route {line}")

        self._ready.set()
        try:
            httpd.serve_forever(poll_interval=0.5)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            with self._lock:
                self._running = False
            httpd.server_close()
            self._stopped.set()
            logger.info("Server stopped")

    def wait_until_ready(self, timeout: Optional[float] = 5.0) -> bool:
        """Block until the socket is listening. Returns False on timeout."""
        return self._ready.wait(timeout)

    def shutdown(self, timeout: Optional[float] = 5.0) -> None:
        """
        Stop serving and return once the listening socket is closed.

        Safe from any thread other than the one inside run(); safe to repeat.
        """
        with self._lock:
            httpd = self._httpd if self._running else None
            self._running = False
        if httpd is not None:
            logger.info("Shutting down server...")
            httpd.shutdown()
            self._stopped.wait(timeout)

    def _handler_name(self) -> str:
        handler = self.handler
        return getattr(handler, "__qualname__", None) or type(handler).__name__


def create_server(config: Optional[ServerConfig] = None, handler: Optional[Handler] = None) -> HTTPServer:
    """Server for ``handler`` (default: the hello/potato App)."""
    return HTTPServer(handler, config)
