"""
=============================================================================
RESPONSE TRIPLES
=============================================================================

Application code answers every request with a RESPONSE TRIPLE:

    (status, headers, body)
       │        │       │
       │        │       └── list of body chunks, concatenated in order
       │        └────────── {"Content-Type": "text/html", ...}
       └─────────────────── integer HTTP status (200, 404, ...)

The triple is deliberately dumb. It knows nothing about sockets, dates or
Content-Length; writing it to the wire is the listener's job (see wsgi.py).

Body chunks may be ``str`` (encoded as UTF-8) or ``bytes`` (passed through).

=============================================================================
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from .status_codes import HTTPStatus, reason_phrase


# =============================================================================
# TYPE ALIASES
# =============================================================================

BodyChunk = Union[str, bytes]

# The contract every handler satisfies: request descriptor in, this out.
ResponseTriple = Tuple[int, Dict[str, str], List[BodyChunk]]

HTML_CONTENT_TYPE = "text/html"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


# =============================================================================
# TRIPLE CONSTRUCTORS
# =============================================================================

def html(markup: str, status: int = HTTPStatus.OK) -> ResponseTriple:
    """
    Build an HTML response triple.

    A new headers dict and body list are created on every call so callers
    never share mutable state between responses.

    Example:
        >>> html("<p>hi</p>")
        (200, {'Content-Type': 'text/html'}, ['<p>hi</p>'])
    """
    return int(status), {"Content-Type": HTML_CONTENT_TYPE}, [markup]


def plain_text(message: str, status: int = HTTPStatus.OK) -> ResponseTriple:
    """Build a plain-text response triple."""
    return int(status), {"Content-Type": TEXT_CONTENT_TYPE}, [message]


def error_response(status: int, message: Optional[str] = None) -> ResponseTriple:
    """
    Plain-text error triple, e.g. the 500 sent when a handler raises.

    The body defaults to the reason phrase.
    """
    status = int(status)
    return plain_text(message or reason_phrase(status), status)


# =============================================================================
# HELPERS
# =============================================================================

def body_bytes(body: Iterable[BodyChunk]) -> bytes:
    """Concatenate body chunks in order with no added separators."""
    return b"".join(
        chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)
        for chunk in body
    )


def find_header(headers: Dict[str, str], name: str) -> Optional[str]:
    """
    Case-insensitive header lookup.

    Response header names are written verbatim, so "content-type" and
    "Content-Type" may both show up depending on the handler.
    """
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None
