"""
HTTP building blocks: request descriptors, response triples, the router
and status codes.

    from helloserver.http import Router, html, make_request
"""

from .request import RequestDescriptor, make_request
from .response import (
    ResponseTriple,
    body_bytes,
    error_response,
    find_header,
    html,
    plain_text,
)
from .router import Handler, Route, Router, not_found
from .status_codes import HTTPStatus, reason_phrase

__all__ = [
    "RequestDescriptor",
    "make_request",
    "ResponseTriple",
    "body_bytes",
    "error_response",
    "find_header",
    "html",
    "plain_text",
    "Handler",
    "Route",
    "Router",
    "not_found",
    "HTTPStatus",
    "reason_phrase",
]
