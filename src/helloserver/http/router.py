"""
=============================================================================
EXACT-PATH ROUTER
=============================================================================

Maps a request descriptor's ``path`` to the handler that produces its
response triple.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   request["path"] == "/potato"                                       │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌─────────────────────────────────────────────────────────────┐   │
    │   │  Registered routes (checked in order):                      │   │
    │   │    "/"        → index                                       │   │
    │   │    "/potato"  → potato        ← MATCH                       │   │
    │   │  Default:                                                    │   │
    │   │    *          → not_found                                   │   │
    │   └─────────────────────────────────────────────────────────────┘   │
    │        │                                                             │
    │        ▼                                                             │
    │   potato(request)  →  (200, {...}, [...])                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
MATCH RULE
=============================================================================

Exact, case-sensitive string equality. No patterns, no parameters, no
trailing-slash or case normalization:

    Route "/potato"
    Matches:        /potato
    Doesn't match:  /Potato, /potato/, /potato?x (query is not in "path")

Routes are tried in registration order and the FIRST match wins. The
method is not part of the match; every verb reaching "/" gets the same
response.

Anything unmatched goes to the DEFAULT handler, so handle() is total: it
returns a triple for every descriptor, including one with no "path" key.

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from .request import RequestDescriptor
from .response import ResponseTriple, html
from .status_codes import HTTPStatus


# Handler: request descriptor in, response triple out.
Handler = Callable[[RequestDescriptor], ResponseTriple]

NOT_FOUND_BODY = "Page not found"


def not_found(request: RequestDescriptor) -> ResponseTriple:
    """Default handler for unmatched paths."""
    return html(NOT_FOUND_BODY, HTTPStatus.NOT_FOUND)


@dataclass(frozen=True)
class Route:
    """
    A path bound to a handler.

    Frozen: once registered, a route never changes, which is what lets one
    router serve many threads at once.
    """

    path: str
    handler: Handler
    name: Optional[str] = None


class Router:
    """
    Ordered table of exact-path routes with a default handler.

    Usage:
        router = Router()

        @router.route("/")
        def index(request):
            return html("<h2>Hello</h2>")

        router.handle({"method": "GET", "path": "/"})

    The router is only mutated while routes are being registered. Register
    everything before serving traffic; after that, handle() only reads.
    """

    def __init__(self, default: Optional[Handler] = None):
        """
        Args:
            default: Handler for unmatched paths. Defaults to a 404
                     "Page not found" HTML page.
        """
        self._routes: List[Route] = []
        self.default: Handler = default or not_found

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add_route(self, path: str, handler: Handler, name: Optional[str] = None) -> Route:
        """
        Register a handler for an exact path.

        Registering the same path twice is allowed, but the later route is
        unreachable because the first match wins.
        """
        if not isinstance(path, str):
            raise TypeError(f"Route path must be a string, got {type(path).__name__}")

        route = Route(path=path, handler=handler, name=name or getattr(handler, "__name__", None))
        self._routes.append(route)
        return route

    def route(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        """
        Decorator form of add_route().

            @router.route("/potato")
            def potato(request):
                ...
        """
        def decorator(handler: Handler) -> Handler:
            self.add_route(path, handler, name)
            return handler  # unchanged, so decorators can stack
        return decorator

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def match(self, path: str) -> Optional[Route]:
        """First route whose path equals ``path`` exactly, or None."""
        for route in self._routes:
            if route.path == path:
                return route
        return None

    def handle(self, request: RequestDescriptor) -> ResponseTriple:
        """
        Dispatch a request descriptor.

        Reads only ``request["path"]``. A missing path is treated as the
        empty string, which no route registers, so it falls to the default.
        """
        path = request.get("path", "")
        route = self.match(path)
        if route is None:
            return self.default(request)
        return route.handler(request)

    __call__ = handle

    # =========================================================================
    # INTROSPECTION
    # =========================================================================

    def routes(self) -> List[Route]:
        """Registered routes in match order (a copy)."""
        return list(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def describe(self) -> List[str]:
        """
        One line per route, for the startup log.

            /          index
            /potato    potato
        """
        width = max((len(route.path) for route in self._routes), default=0)
        return [f"{route.path:<{width}}  {route.name or '-'}" for route in self._routes]
