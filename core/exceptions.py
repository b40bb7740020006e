"""Custom exception hierarchy for the media edge gateway."""


class GatewayError(Exception):
    """Base exception for errors surfaced to proxy callers.

    Attributes:
        message: Human-readable message returned in the error body
        status_code: HTTP status code of the error response
    """

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidTarget(GatewayError):
    """Proxy path is missing or does not hold an absolute http(s) URL."""

    status_code = 400


class Unauthorized(GatewayError):
    """Auth token is missing, mismatched, or expired."""

    status_code = 401


class UpstreamUnavailable(GatewayError):
    """Raised when the target origin cannot be reached.

    Attributes:
        target: URL the gateway tried to reach
    """

    status_code = 500

    def __init__(self, message: str, target: str | None = None) -> None:
        super().__init__(message)
        self.target = target


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""


class AssetNotFound(Exception):
    """Requested path has no bundled asset."""
