"""
pytest configuration and fixtures.
"""

import threading
from typing import Generator, Optional, Tuple

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from helloserver import App, HTTPServer, ServerConfig
from helloserver.http.router import Handler


@pytest.fixture
def app() -> App:
    return App()


@pytest.fixture
def config() -> ServerConfig:
    """Test listener configuration on an OS-assigned port."""
    return ServerConfig(host="127.0.0.1", port=0, log_level="WARNING")


class RunningServer:
    """An HTTPServer serving from a background thread."""

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> Tuple[str, int]:
        return self.server.address

    @property
    def base_url(self) -> str:
        host, port = self.address
        return f"http://{host}:{port}"

    def start(self) -> "RunningServer":
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()
        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")
        return self

    def stop(self) -> None:
        self.server.shutdown()
        if self._thread is not None:
            self._thread.join(timeout=5.0)


@pytest.fixture
def serve(config: ServerConfig):
    """
    Factory fixture: ``serve(handler)`` starts a server for ``handler`` and
    stops it after the test.
    """
    started = []

    def _serve(handler: Optional[Handler] = None, **overrides) -> RunningServer:
        server_config = config.with_overrides(**overrides)
        running = RunningServer(HTTPServer(handler or App(), server_config, configure_logging=False))
        started.append(running)
        return running.start()

    yield _serve

    for running in started:
        running.stop()


@pytest.fixture
def running_server(serve) -> Generator[RunningServer, None, None]:
    """The default application behind a live listener."""
    yield serve()
