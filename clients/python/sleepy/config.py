"""Client configuration."""

import os
from dataclasses import dataclass

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 27017
DEFAULT_SERVER = f"{DEFAULT_HOST}:{DEFAULT_PORT}"
DEFAULT_GATEWAY_URL = "http://localhost:27080"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a Sleepy.Mongoose client.

    Args:
        base_url: URL of the REST gateway.
        server: Database server address (``host:port``) sent on ``connect``.
        timeout: Request timeout in seconds.
    """

    base_url: str = DEFAULT_GATEWAY_URL
    server: str = DEFAULT_SERVER
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from ``SLEEPY_*`` environment variables.

        Unset variables fall back to the defaults.
        """
        timeout = os.getenv("SLEEPY_TIMEOUT")
        return cls(
            base_url=os.getenv("SLEEPY_GATEWAY_URL", DEFAULT_GATEWAY_URL),
            server=os.getenv("SLEEPY_SERVER", DEFAULT_SERVER),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        )
