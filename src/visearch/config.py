from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import os

from . import __version__

DEFAULT_ENDPOINT = "https://visearch.visenze.com"
DEFAULT_USER_AGENT = f"visearch-python-sdk/{__version__}"

DEFAULT_CONNECTION_TIMEOUT = 5000
DEFAULT_SOCKET_TIMEOUT = 10000
DEFAULT_MAX_CONNECTION = 200


@dataclass(frozen=True)
class ClientConfig:
    """Connection-level options, fixed once a client is built.

    Timeouts are in milliseconds. ``max_connection`` caps the pool both in
    total and per host.
    """

    connection_timeout: int = DEFAULT_CONNECTION_TIMEOUT
    socket_timeout: int = DEFAULT_SOCKET_TIMEOUT
    max_connection: int = DEFAULT_MAX_CONNECTION
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if self.connection_timeout < 0:
            raise ValueError(f"connection_timeout must be >= 0, got {self.connection_timeout}")
        if self.socket_timeout < 0:
            raise ValueError(f"socket_timeout must be >= 0, got {self.socket_timeout}")
        if self.max_connection < 1:
            raise ValueError(f"max_connection must be >= 1, got {self.max_connection}")
        if not self.user_agent:
            raise ValueError("user_agent must be a non-empty string")

    @property
    def timeouts(self) -> tuple[float, float]:
        """(connect, read) timeouts in seconds, as requests expects them."""
        return self.connection_timeout / 1000.0, self.socket_timeout / 1000.0


@dataclass
class Settings:
    """SDK defaults with environment overlay.

    Used by ``ViSearchHttpClient.from_settings`` and the CLI; a client built
    directly from its constructor never reads these.
    """

    endpoint: str = DEFAULT_ENDPOINT
    access_key: str | None = None
    secret_key: str | None = None
    client_config: ClientConfig = field(default_factory=ClientConfig)


_global_settings = Settings()


def _from_env(s: Settings) -> Settings:
    return Settings(
        endpoint=os.getenv("VISEARCH_ENDPOINT", s.endpoint),
        access_key=os.getenv("VISEARCH_ACCESS_KEY", s.access_key),
        secret_key=os.getenv("VISEARCH_SECRET_KEY", s.secret_key),
        client_config=s.client_config,
    )


def configure(**kwargs: Any) -> None:
    """Configure global SDK defaults.

    Example:
        configure(endpoint="https://visearch.visenze.com", access_key="...", secret_key="...")
    """
    for k, v in kwargs.items():
        if not hasattr(_global_settings, k):
            raise AttributeError(f"Unknown setting: {k}")
        setattr(_global_settings, k, v)


def settings() -> Settings:
    """Return the effective merged settings (env overlaid on current)."""
    return _from_env(_global_settings)
