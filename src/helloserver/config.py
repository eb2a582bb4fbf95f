"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Where to listen and how to log. The application itself takes no
configuration.

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── helloserver --port 3000                                    │
    │                                                                      │
    │   2. Defaults below                                                 │
    │      └── 127.0.0.1:9292                                             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from dataclasses import dataclass, replace


DEFAULT_PORT = 9292

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


@dataclass
class ServerConfig:
    """
    Listener configuration.

    Usage:
        config = ServerConfig(port=3000)
        config.validate()   # raises ValueError on bad values
    """

    host: str = "127.0.0.1"
    """Address to bind. "0.0.0.0" listens on every interface."""

    port: int = DEFAULT_PORT
    """Port to listen on. 0 lets the OS pick a free one (handy in tests)."""

    log_level: str = "INFO"
    log_format: str = "text"
    """Access log format: "text" (combined-log style) or "json"."""

    def with_overrides(self, **overrides) -> "ServerConfig":
        """
        Copy with the given fields replaced. None values are ignored, so
        unset CLI flags fall through to the defaults.
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> None:
        """
        Fail fast on values the listener cannot work with.

        Raises:
            ValueError: Describing the first bad value found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if not self.host:
            raise ValueError("host must not be empty")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format}. Use 'text' or 'json'.")
