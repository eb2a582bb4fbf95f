"""
=============================================================================
REQUEST DESCRIPTORS
=============================================================================

Application code never touches raw HTTP. The listener parses the request
and hands the application a REQUEST DESCRIPTOR: a plain dict with string
keys.

    GET /potato?x=1 HTTP/1.1
    Host: localhost
                              │
                              ▼  wsgi.request_from_environ()
    {
        "method":       "GET",
        "path":         "/potato",
        "query_string": "x=1",
        "version":      "HTTP/1.1",
        "headers":      {"host": "localhost"},
        "body":         b"",
        "remote_addr":  ("127.0.0.1", 51234),
    }

Only ``method`` and ``path`` are part of the application contract. The
other keys are there for anyone writing more routes.

=============================================================================
"""

from typing import Any, Dict, Optional, Tuple


RequestDescriptor = Dict[str, Any]


def make_request(
    method: str = "GET",
    path: str = "/",
    query_string: str = "",
    headers: Optional[Dict[str, str]] = None,
    body: bytes = b"",
    version: str = "HTTP/1.1",
    remote_addr: Tuple[str, int] = ("", 0),
) -> RequestDescriptor:
    """
    Build a request descriptor from its parts.

    Used by the WSGI adapter and by tests so both hand the application the
    same shape. Header names are lowercased.

    Example:
        >>> make_request("GET", "/potato")["path"]
        '/potato'
    """
    return {
        "method": method.upper(),
        "path": path,
        "query_string": query_string,
        "version": version,
        "headers": {name.lower(): value for name, value in (headers or {}).items()},
        "body": body,
        "remote_addr": remote_addr,
    }
