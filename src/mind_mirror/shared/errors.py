"""
Error taxonomy for the analysis gateway.

Every failure the gateway can surface derives from GatewayError so the API
layer can map it to an HTTP status in one place: ValidationError becomes a
400, everything else a 500.
"""
from typing import Optional


class GatewayError(Exception):
    """Base class for analysis gateway failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(GatewayError):
    """The submitted text was rejected before any remote call."""

    status_code = 400


class RateLimitExceeded(GatewayError):
    """The remote provider kept answering 429 after all retries."""


class RemoteApiError(GatewayError):
    """The remote provider answered with a non-200, non-429 status."""

    def __init__(self, message: str, remote_status: Optional[int] = None):
        super().__init__(message)
        self.remote_status = remote_status


class InvalidResponseShape(GatewayError):
    """A 200 response did not carry the expected candidates/content/parts."""


class TransportError(GatewayError):
    """The remote provider could not be reached."""


class AllModelsFailed(GatewayError):
    """The primary model was not found and every fallback model failed."""


class MissingApiKeyError(GatewayError):
    """GEMINI_API_KEY is not configured."""


UNEXPECTED_ERROR_MESSAGE = "An error occurred while analyzing the text. Please try again."
