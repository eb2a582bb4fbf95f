"""
=============================================================================
WSGI ADAPTER
=============================================================================

Lets a WSGI listener (wsgiref, gunicorn, uWSGI, ...) host any
triple-returning handler. HTTPServer uses this with wsgiref.

    WSGI environ ──► request descriptor ──► handler ──► (status, headers, body)
                                                              │
    start_response("200 OK", [...]) ◄──────────────────────────┘
    return [b"...", ...]

    gunicorn helloserver.wsgi:application

=============================================================================
PATH HANDLING
=============================================================================

The descriptor's "path" is PATH_INFO, the path below wherever the
application is mounted. WSGI servers hand PATH_INFO over percent-decoded
(as latin-1 text, per PEP 3333), so "/%70otato" arrives as "/potato" and
routes there. The router then compares it by exact string equality:
"/Potato" and "/potato/" stay 404s.

=============================================================================
"""

import logging
from typing import Any, Callable, Dict, Iterable, List

from .app import app
from .http.request import RequestDescriptor, make_request
from .http.response import error_response
from .http.router import Handler
from .http.status_codes import HTTPStatus, reason_phrase


logger = logging.getLogger(__name__)

WSGIApplication = Callable[[Dict[str, Any], Callable], Iterable[bytes]]


def request_from_environ(environ: Dict[str, Any]) -> RequestDescriptor:
    """Translate a PEP 3333 environ into a request descriptor."""
    headers = {}
    for key, value in environ.items():
        if key.startswith("HTTP_"):
            headers[key[5:].replace("_", "-").lower()] = value
    for key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
        if environ.get(key):
            headers[key.replace("_", "-").lower()] = environ[key]

    body = b""
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    if length > 0 and environ.get("wsgi.input") is not None:
        body = environ["wsgi.input"].read(length)

    try:
        remote_port = int(environ.get("REMOTE_PORT") or 0)
    except ValueError:
        remote_port = 0

    return make_request(
        method=environ.get("REQUEST_METHOD", "GET"),
        path=environ.get("PATH_INFO") or "/",
        query_string=environ.get("QUERY_STRING", ""),
        headers=headers,
        body=body,
        version=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
        remote_addr=(environ.get("REMOTE_ADDR", ""), remote_port),
    )


def to_wsgi(handler: Handler) -> WSGIApplication:
    """
    Wrap a handler as a WSGI application.

    A handler that raises gets a 500 and its traceback logged; the
    listener never sees the exception.

    Example:
        application = to_wsgi(App())
    """
    def application(environ: Dict[str, Any], start_response: Callable) -> List[bytes]:
        request = request_from_environ(environ)
        try:
            status, headers, body = handler(request)
        except Exception as e:
            logger.exception(f"Handler error on {request['method']} {request['path']}: {e}")
            status, headers, body = error_response(HTTPStatus.INTERNAL_SERVER_ERROR)

        start_response(f"{int(status)} {reason_phrase(status)}", list(headers.items()))

        if request["method"] == "HEAD":
            return []
        return [chunk.encode("utf-8") if isinstance(chunk, str) else chunk for chunk in body]

    application.__wrapped__ = handler
    return application


# Entry point for WSGI servers: "helloserver.wsgi:application"
application = to_wsgi(app)
