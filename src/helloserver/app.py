"""
=============================================================================
THE APPLICATION
=============================================================================

The whole application is one callable:

    request descriptor  ──►  App  ──►  (status, headers, body)

It answers three kinds of path:

    /          200  <h2>Hello <em>World</em>!</h2>
    /potato    200  <p>Boil 'em, mash 'em, stick 'em in a stew</p>
    anything   404  Page not found

App instances hold nothing but a router filled in at construction, so
calling the same instance from many listener threads at once is safe and
two calls with the same path always return equal triples.

=============================================================================
"""

from typing import Optional

from .http.request import RequestDescriptor
from .http.response import ResponseTriple, html
from .http.router import Router


HELLO_WORLD = "<h2>Hello <em>World</em>!</h2>"
POTATO = "<p>Boil 'em, mash 'em, stick 'em in a stew</p>"


def index(request: RequestDescriptor) -> ResponseTriple:
    return html(HELLO_WORLD)


def potato(request: RequestDescriptor) -> ResponseTriple:
    return html(POTATO)


class App:
    """
    The request handler.

        app = App()
        status, headers, body = app({"method": "GET", "path": "/"})

    Any object with the same call signature can stand in for it anywhere a
    handler is expected (HTTPServer, to_wsgi, TestClient).
    """

    def __init__(self, router: Optional[Router] = None):
        if router is None:
            router = Router()
            # order matters only if routes ever overlap
            router.add_route("/", index)
            router.add_route("/potato", potato)
        self.router = router

    def handle(self, request: RequestDescriptor) -> ResponseTriple:
        """Route ``request`` by its exact path and return a fresh triple."""
        return self.router.handle(request)

    def __call__(self, request: RequestDescriptor) -> ResponseTriple:
        return self.handle(request)


# Shared instance for listeners that want a ready-made handler.
app = App()


def handle(request: RequestDescriptor) -> ResponseTriple:
    """Plain-function form of the application."""
    return app.handle(request)
