"""
=============================================================================
HELLOSERVER
=============================================================================

A tiny web application, hosted on the standard library WSGI listener.

The application is one callable: give it a request descriptor (a dict with
at least "method" and "path"), get back a response triple
(status, headers, body).

    >>> from helloserver import App
    >>> App()({"method": "GET", "path": "/"})
    (200, {'Content-Type': 'text/html'}, ['<h2>Hello <em>World</em>!</h2>'])

    path        status   body
    ─────────   ──────   ──────────────────────────────────────────────
    /           200      <h2>Hello <em>World</em>!</h2>
    /potato     200      <p>Boil 'em, mash 'em, stick 'em in a stew</p>
    otherwise   404      Page not found

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    helloserver/
    ├── app.py             # The application (handler + routes)
    ├── server.py          # HTTPServer: wsgiref listener wiring
    ├── config.py          # ServerConfig dataclass
    ├── access_log.py      # Per-request access log
    ├── wsgi.py            # Handler <-> WSGI adapter
    ├── testing.py         # In-process TestClient
    ├── __main__.py        # CLI (helloserver / python -m helloserver)
    └── http/              # Descriptors, triples, router, status codes

=============================================================================
QUICK START
=============================================================================

    helloserver                 # http://127.0.0.1:9292
    helloserver --port 3000
    curl http://127.0.0.1:9292/potato

=============================================================================
"""

__version__ = "1.0.0"

from .app import App, app, handle
from .config import ServerConfig
from .server import HTTPServer, create_server

__all__ = ["App", "app", "handle", "HTTPServer", "ServerConfig", "create_server", "__version__"]
