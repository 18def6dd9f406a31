"""
=============================================================================
CONNECTOR CONFIGURATION
=============================================================================

All tunables in one dataclass, with environment variable support and
fail-fast validation.

=============================================================================
ENVIRONMENT VARIABLES
=============================================================================

    CONNECTOR_HOST         bind address          (default 127.0.0.1)
    CONNECTOR_PORT         listen port           (default 8080)
    CONNECTOR_WORKERS      worker threads        (default 8)
    CONNECTOR_TIMEOUT      socket timeout, secs  (default 30)
    CONNECTOR_STATIC_DIR   content root          (default: bundled static/)
    CONNECTOR_LOG_LEVEL    logging level         (default INFO)

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ConnectorConfig:
    """
    Connector configuration.

    Development:
        ConnectorConfig(port=8080, log_level="DEBUG")

    Container:
        ConnectorConfig(host="0.0.0.0", workers=32)
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    port: int = 8080
    backlog: int = 128
    buffer_size: int = 8192
    timeout: Optional[float] = 30.0
    max_request_size: int = 10 * 1024 * 1024

    # ─────────────────────────────────────────────────────────────────────
    # WORKERS
    # ─────────────────────────────────────────────────────────────────────

    workers: int = 8
    """Fixed number of worker threads handling connections."""

    queue_size: int = 100
    """Connections that may wait for a free worker before new ones get 503."""

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT / LOGGING
    # ─────────────────────────────────────────────────────────────────────

    static_dir: Optional[str] = None
    """Content root for static assets. None uses the package's static/."""

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ConnectorConfig":
        """Create configuration from CONNECTOR_* environment variables."""
        return cls(
            host=os.getenv("CONNECTOR_HOST", "127.0.0.1"),
            port=int(os.getenv("CONNECTOR_PORT", "8080")),
            workers=int(os.getenv("CONNECTOR_WORKERS", "8")),
            timeout=float(os.getenv("CONNECTOR_TIMEOUT", "30")),
            static_dir=os.getenv("CONNECTOR_STATIC_DIR") or None,
            log_level=os.getenv("CONNECTOR_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Check values at startup.

        Raises:
            ValueError: On the first invalid setting.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.queue_size < 1:
            raise ValueError("queue_size must be >= 1")
        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.max_request_size < 1024:
            raise ValueError("max_request_size must be >= 1024")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")
