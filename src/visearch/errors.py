INVALID_ENDPOINT = (
    "There was an error parsing the ViSearch endpoint. Please ensure that your provided "
    "ViSearch endpoint is a well-formed URL and try again."
)
UNAUTHORIZED = (
    "There was an error generating the HTTP basic authentication header. Please check your "
    "access key and secret key and try again."
)
NETWORK_ERROR = (
    "A network error occurred when requesting to the ViSearch endpoint. Please check your "
    "network connectivity and try again."
)
SYSTEM_ERROR = "An unexpected error occurred when reading the response from the ViSearch endpoint."


class ViSearchError(Exception):
    """Base error for SDK exceptions (transport/runtime)."""

    default_message = ""
    default_code: str | None = None

    def __init__(self, message: str = "", code: str | None = None, details: dict | None = None) -> None:
        super().__init__(message or self.default_message)
        self.code = code or self.default_code
        self.details = details or {}

    @property
    def cause(self) -> BaseException | None:
        """The low-level exception this error was raised from, if any."""
        return self.__cause__


class InvalidEndpointError(ViSearchError):
    """Endpoint combined with the request path is not a well-formed URI."""

    default_message = INVALID_ENDPOINT
    default_code = "invalid_endpoint"


class UnauthorizedError(ViSearchError):
    """Basic authentication header could not be built from the credentials."""

    default_message = UNAUTHORIZED
    default_code = "unauthorized"


class NetworkError(ViSearchError):
    """Network/connection failure: refused, timeout, reset, DNS."""

    default_message = NETWORK_ERROR
    default_code = "network_error"


class SystemError(ViSearchError):
    """Unexpected failure while normalizing a response."""

    default_message = SYSTEM_ERROR
    default_code = "system_error"
