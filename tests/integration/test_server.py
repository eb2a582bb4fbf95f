"""
End-to-end tests against a live listener on a free local port.
"""

import http.client
import logging
import socket
import threading
import urllib.error
import urllib.request

import pytest

from helloserver import HTTPServer, ServerConfig
from helloserver.app import POTATO
from helloserver.http.response import html


def fetch(running, path, method="GET", headers=None):
    host, port = running.address
    conn = http.client.HTTPConnection(host, port, timeout=5)
    try:
        conn.request(method, path, headers=headers or {})
        response = conn.getresponse()
        return response.status, dict(response.getheaders()), response.read()
    finally:
        conn.close()


def raw_exchange(running, payload: bytes) -> bytes:
    """Send raw bytes and read until the server closes."""
    with socket.create_connection(running.address, timeout=5) as sock:
        sock.sendall(payload)
        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


class TestApplicationOverHTTP:
    """The application's routes through the real listener."""

    def test_responds_with_html(self, running_server):
        """A GET to / returns the greeting."""
        with urllib.request.urlopen(running_server.base_url + "/", timeout=5) as response:
            body = response.read().decode()

        assert "<h2>Hello <em>World</em>!</h2>" in body

    def test_root(self, running_server):
        """Status, content type and exact body for /."""
        status, headers, body = fetch(running_server, "/")

        assert status == 200
        assert headers["Content-Type"] == "text/html"
        assert body == b"<h2>Hello <em>World</em>!</h2>"

    def test_potato(self, running_server):
        """Exact body for /potato."""
        status, _, body = fetch(running_server, "/potato")

        assert status == 200
        assert body == b"<p>Boil 'em, mash 'em, stick 'em in a stew</p>"

    @pytest.mark.parametrize("path", ["/Potato", "/potato/", "/nothing", "/%50otato"])
    def test_not_found(self, running_server, path):
        """Unmatched paths get the 404 page."""
        status, headers, body = fetch(running_server, path)

        assert status == 404
        assert headers["Content-Type"] == "text/html"
        assert body == b"Page not found"

    def test_percent_encoded_path(self, running_server):
        """The listener decodes the path before routing."""
        status, _, body = fetch(running_server, "/%70otato")

        assert status == 200
        assert body == b"<p>Boil 'em, mash 'em, stick 'em in a stew</p>"

    def test_query_string_ignored(self, running_server):
        """The query string is not part of the matched path."""
        status, _, body = fetch(running_server, "/potato?size=large")

        assert status == 200
        assert body == b"<p>Boil 'em, mash 'em, stick 'em in a stew</p>"

    def test_urllib_404(self, running_server):
        """urllib sees the 404 as an HTTPError with the page body."""
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            urllib.request.urlopen(running_server.base_url + "/missing", timeout=5)

        assert exc_info.value.code == 404
        assert exc_info.value.read() == b"Page not found"
        exc_info.value.close()

    def test_any_method_routes_by_path(self, running_server):
        """The method is passed through and ignored by routing."""
        response = raw_exchange(running_server, b"BREW /potato HTTP/1.1\r\nHost: x\r\n\r\n")

        assert response.split(b"\r\n", 1)[0].endswith(b" 200 OK")
        assert response.endswith(b"<p>Boil 'em, mash 'em, stick 'em in a stew</p>")

    def test_head(self, running_server):
        """HEAD returns headers only."""
        status, headers, body = fetch(running_server, "/", method="HEAD")

        assert status == 200
        assert headers["Content-Type"] == "text/html"
        assert body == b""

    def test_listener_headers(self, running_server):
        """The listener adds Content-Length, Date and Server."""
        _, headers, body = fetch(running_server, "/potato")

        assert int(headers["Content-Length"]) == len(body)
        assert "Date" in headers
        assert "Server" in headers

    def test_access_log(self, running_server, caplog):
        """Each request leaves one access log line."""
        caplog.set_level(logging.INFO, logger="helloserver.access")

        raw_exchange(running_server, b"GET /potato HTTP/1.1\r\nHost: x\r\nUser-Agent: pytest\r\n\r\n")

        lines = [r.getMessage() for r in caplog.records if r.name == "helloserver.access"]
        assert any(f'"GET /potato HTTP/1.1" 200 {len(POTATO)} "pytest"' in line for line in lines)


class TestConcurrency:
    """Connections are served independently."""

    def test_idle_client_does_not_block_others(self, running_server):
        """A client that connects and sends nothing does not hold up the next one."""
        with socket.create_connection(running_server.address, timeout=5):
            status, _, body = fetch(running_server, "/")

        assert status == 200
        assert body == b"<h2>Hello <em>World</em>!</h2>"

    def test_parallel_requests(self, running_server):
        """Requests from several threads all succeed."""
        results = []
        lock = threading.Lock()

        def worker(path):
            status, _, _ = fetch(running_server, path)
            with lock:
                results.append((path, status))

        threads = [
            threading.Thread(target=worker, args=(path,))
            for path in ["/", "/potato", "/nope"] * 4
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert sorted(results) == sorted(
            [("/", 200), ("/potato", 200), ("/nope", 404)] * 4
        )

    def test_sequential_connections(self, running_server):
        """The listener keeps accepting after each response."""
        for _ in range(5):
            assert fetch(running_server, "/")[0] == 200


class TestListenerErrors:
    """Failures handled by the listener rather than the application."""

    def test_malformed_request(self, running_server):
        """A garbage request line gets a 400."""
        response = raw_exchange(running_server, b"NONSENSE\r\n\r\n")

        # No usable request line, so wsgiref answers without a status line.
        assert b"Error code: 400" in response

    def test_handler_exception(self, serve):
        """A crashing handler yields a 500, not a dropped connection."""
        def broken(request):
            raise RuntimeError("kaboom")

        running = serve(broken)
        status, _, body = fetch(running, "/")

        assert status == 500
        assert body == b"Internal Server Error"

    def test_custom_handler(self, serve):
        """Any triple-returning callable can be hosted."""
        running = serve(lambda request: html(request["method"].lower(), 201))

        status, _, body = fetch(running, "/", method="PUT")

        assert status == 201
        assert body == b"put"

    def test_port_in_use(self, running_server, config):
        """Binding an occupied port raises OSError from run()."""
        _, port = running_server.address
        server = HTTPServer(config=config.with_overrides(port=port), configure_logging=False)

        with pytest.raises(OSError):
            server.run()

        assert not server.is_running


class TestLifecycle:
    """Starting and stopping HTTPServer."""

    def test_port_zero_reports_bound_port(self, running_server):
        """address carries the OS-chosen port."""
        host, port = running_server.address

        assert host == "127.0.0.1"
        assert port != 0
        assert running_server.server.is_running

    def test_shutdown_idempotent(self, serve):
        """shutdown() can be repeated and stops the listener."""
        running = serve()
        running.server.shutdown()
        running.server.shutdown()

        assert not running.server.is_running
        with pytest.raises(OSError):
            socket.create_connection(running.address, timeout=1).close()

    def test_shutdown_before_run(self):
        """shutdown() on a server that never ran is a no-op."""
        server = HTTPServer(config=ServerConfig(port=0), configure_logging=False)

        server.shutdown()

        assert not server.is_running

    def test_create_server_defaults(self):
        """create_server() hosts the hello app."""
        from helloserver import App, create_server

        server = create_server(ServerConfig(port=0))

        assert isinstance(server.handler, App)
        assert server.config.port == 0
