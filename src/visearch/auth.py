"""Credentials and the two headers added to every outbound request."""

from __future__ import annotations

import logging
from base64 import b64encode
from dataclasses import dataclass, field

from requests import PreparedRequest

from .config import DEFAULT_USER_AGENT, ClientConfig
from .errors import UnauthorizedError

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"
USER_AGENT_HEADER = "User-Agent"


@dataclass(frozen=True)
class Credentials:
    access_key: str
    secret_key: str = field(repr=False)


def basic_auth_header(credentials: Credentials) -> str:
    """Return the ``Basic`` authorization value for the key pair.

    Raises:
        UnauthorizedError: the pair cannot be encoded into the basic scheme.
    """
    try:
        if ":" in credentials.access_key:
            raise ValueError("access key must not contain ':'")
        token = f"{credentials.access_key}:{credentials.secret_key}".encode("latin1")
    except (ValueError, TypeError, AttributeError) as exc:
        # UnicodeEncodeError is a ValueError
        logger.warning("Failed to build basic auth header: %s", type(exc).__name__)
        raise UnauthorizedError() from exc
    return "Basic " + b64encode(token).decode("ascii")


def add_auth_header(request: PreparedRequest, credentials: Credentials) -> None:
    request.headers[AUTHORIZATION_HEADER] = basic_auth_header(credentials)


def user_agent_value(user_agent: str) -> str:
    """Caller's agent followed by the SDK token, which is appended at most once."""
    if user_agent == DEFAULT_USER_AGENT or user_agent.endswith(" " + DEFAULT_USER_AGENT):
        return user_agent
    return f"{user_agent} {DEFAULT_USER_AGENT}"


def add_user_agent_header(request: PreparedRequest, config: ClientConfig) -> None:
    request.headers[USER_AGENT_HEADER] = user_agent_value(config.user_agent)
