"""
=============================================================================
IN-PROCESS TEST CLIENT
=============================================================================

Drives a handler with no sockets, the way a browser session would drive
the real server:

    client = TestClient(App())
    client.get("/")
    assert "<h2>Hello <em>World</em>!</h2>" in client.last_response.text

Each request goes through the same WSGI adapter HTTPServer uses, with the
environ a WSGI server would build (percent-decoded PATH_INFO, split-off
QUERY_STRING), so handlers see exactly what they would see live.

=============================================================================
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import Dict, List, Optional
from urllib.parse import unquote
from wsgiref.util import setup_testing_defaults

from .app import App
from .http.response import body_bytes, find_header
from .http.router import Handler
from .wsgi import to_wsgi


@dataclass
class TestResponse:
    """A response as the client received it, with conveniences for assertions."""

    __test__ = False  # not a pytest test class

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: List[bytes] = field(default_factory=list)

    @property
    def content(self) -> bytes:
        return body_bytes(self.body)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    @property
    def content_type(self) -> Optional[str]:
        return find_header(self.headers, "Content-Type")

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class TestClient:
    """
    Minimal request session against a handler.

    ``last_response`` always holds the response to the most recent call.
    """

    __test__ = False

    def __init__(self, handler: Optional[Handler] = None, remote_addr: str = "127.0.0.1"):
        self.handler: Handler = handler if handler is not None else App()
        self.remote_addr = remote_addr
        self.last_response: Optional[TestResponse] = None
        self._application = to_wsgi(self.handler)

    def request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b"",
    ) -> TestResponse:
        """
        Send one request.

        ``path`` is a request target as a client would send it: a query
        string is split off and the path is percent-decoded.
        """
        path, _, query_string = path.partition("?")
        environ = {
            "REQUEST_METHOD": method.upper(),
            "PATH_INFO": unquote(path, "iso-8859-1"),
            "QUERY_STRING": query_string,
            "SERVER_PROTOCOL": "HTTP/1.1",
            "REMOTE_ADDR": self.remote_addr,
            "CONTENT_LENGTH": str(len(body)),
            "wsgi.input": BytesIO(body),
        }
        for name, value in (headers or {}).items():
            key = name.upper().replace("-", "_")
            if key not in ("CONTENT_TYPE", "CONTENT_LENGTH"):
                key = "HTTP_" + key
            environ[key] = value
        setup_testing_defaults(environ)

        started = {}

        def start_response(status, response_headers, exc_info=None):
            started["status"] = int(status.split(" ", 1)[0])
            started["headers"] = dict(response_headers)

        chunks = list(self._application(environ, start_response))
        self.last_response = TestResponse(started["status"], started["headers"], chunks)
        return self.last_response

    def get(self, path: str, headers: Optional[Dict[str, str]] = None) -> TestResponse:
        return self.request("GET", path, headers)

    def head(self, path: str, headers: Optional[Dict[str, str]] = None) -> TestResponse:
        return self.request("HEAD", path, headers)

    def post(self, path: str, body: bytes = b"", headers: Optional[Dict[str, str]] = None) -> TestResponse:
        return self.request("POST", path, headers, body)
