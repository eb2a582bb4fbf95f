"""
=============================================================================
ACCESS LOGGING
=============================================================================

One log record per request served, on the ``helloserver.access`` logger so
it can be routed or silenced separately from the server's own messages:

    logging.getLogger("helloserver.access").setLevel(logging.WARNING)

Two renderings of the same RequestLog entry:

    text   127.0.0.1 - - [19/Oct/2026:10:00:00 +0000] "GET /potato HTTP/1.1" 200 47 "curl/8.5"
    json   {"method": "GET", "path": "/potato", "status_code": 200, ...}

=============================================================================
"""

import json
import logging
import time
from dataclasses import asdict, dataclass


logger = logging.getLogger("helloserver.access")


@dataclass
class RequestLog:
    """Structured access log entry."""

    method: str
    path: str
    version: str
    client_ip: str
    user_agent: str
    status_code: int
    content_length: int
    timestamp: str

    def to_dict(self) -> dict:
        return asdict(self)

    def to_text(self) -> str:
        """Apache combined-log style line."""
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.path} {self.version}" {self.status_code} '
            f'{self.content_length} "{self.user_agent}"'
        )


def log_timestamp() -> str:
    return time.strftime("%d/%b/%Y:%H:%M:%S %z")


class AccessLogger:
    """
    Formats and emits RequestLog entries.

    Entries log at ``level``; 5xx responses log at WARNING or above so a
    quiet server still surfaces handler failures.
    """

    def __init__(self, log_format: str = "text", level: int = logging.INFO):
        if log_format not in ("text", "json"):
            raise ValueError(f"Unknown access log format: {log_format}")
        self.log_format = log_format
        self.level = level

    def render(self, entry: RequestLog) -> str:
        if self.log_format == "json":
            return json.dumps(entry.to_dict())
        return entry.to_text()

    def log(self, entry: RequestLog) -> None:
        level = self.level
        if entry.status_code >= 500:
            level = max(level, logging.WARNING)
        if logger.isEnabledFor(level):
            logger.log(level, self.render(entry))
