"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this package produces, with the reason phrases written on
the status line.

    HTTP/1.1 404 Not Found
             ─── ─────────
              │      │
              │      └── Reason phrase (informational only)
              └───────── Status code (what clients act on)

Handlers return plain integers in their response triples. The WSGI adapter
looks the integer up here only to find a reason phrase, so any valid status
integer is accepted even when it has no member below.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by the application and the WSGI adapter.

    IntEnum members compare equal to plain ints:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    # 2xx - the application's canned pages
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # 4xx - unmatched paths
    BAD_REQUEST = 400
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405

    # 5xx - handler crashes
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """Reason phrase for the status line."""
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.NO_CONTENT: "No Content",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}


def reason_phrase(status: int) -> str:
    """
    Reason phrase for any integer status.

    Handlers may return codes this module has no member for (e.g. 418);
    those get "Unknown" rather than raising.
    """
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown"
