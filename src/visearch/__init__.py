"""
visearch – HTTP transport for the ViSearch image-search API

Public surface:
- Client: ViSearchHttpClient (get, post, post_image, post_image_stream)
- Responses: ResponseEnvelope
- Config: ClientConfig, configure, settings
- Errors: ViSearchError, InvalidEndpointError, UnauthorizedError, NetworkError, SystemError

Response bodies are returned unparsed; interpreting them is left to the
higher-level API methods.
"""

__version__ = "0.1.0"

from .config import (
    DEFAULT_USER_AGENT,
    ClientConfig,
    Settings,
    configure,
    settings,
)
from .auth import Credentials
from .client import ViSearchHttpClient
from .response import ResponseEnvelope
from .transport import Transport
from .errors import (
    ViSearchError,
    InvalidEndpointError,
    UnauthorizedError,
    NetworkError,
    SystemError,
)

__all__ = [
    # Config
    "DEFAULT_USER_AGENT",
    "ClientConfig",
    "Settings",
    "configure",
    "settings",
    # Client
    "Credentials",
    "ViSearchHttpClient",
    "ResponseEnvelope",
    "Transport",
    # Errors
    "ViSearchError",
    "InvalidEndpointError",
    "UnauthorizedError",
    "NetworkError",
    "SystemError",
    "__version__",
]
