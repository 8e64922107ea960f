"""Custom exception hierarchy for the Fidex proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class BackendError(ProxyError):
    """Raised when forwarding a request to the backend fails.

    Attributes:
        message: Error message
        path: Backend path that was being called (optional)
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class BackendUnavailableError(BackendError):
    """The backend could not produce a usable response."""


class BackendTimeoutError(BackendUnavailableError):
    """Raised when the backend request times out."""


class BackendConnectionError(BackendUnavailableError):
    """Raised when unable to connect to the backend."""


class InvalidBackendResponse(BackendUnavailableError):
    """Backend response body is empty or not valid JSON.

    Attributes:
        status_code: HTTP status code the backend sent with the bad body
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.status_code = status_code


class UnforwardableRequest(BackendError):
    """The inbound request cannot be expressed as a backend URL."""
