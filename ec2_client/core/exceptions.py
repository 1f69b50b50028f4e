"""
Error taxonomy for the EC2 API Client.
Every failure surfaced to callers is one of these distinct kinds.
"""

from typing import Optional


class EC2ClientError(Exception):
    """Base class for all errors raised by the EC2 API Client."""

    retryable = False


class SigningConfigurationError(EC2ClientError):
    """Raised when no supported HMAC digest is available for signing."""
    pass


class InvalidArgumentError(EC2ClientError, ValueError):
    """Raised when a caller passes malformed input. Detected before any network call."""
    pass


class NetworkError(EC2ClientError):
    """
    Raised when the outbound HTTP call fails.
    The caller may retry; no state was applied on the server side as far as the client knows.
    """

    retryable = True

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(EC2ClientError):
    """
    Raised when the service rejects a request.
    Carries the service error code and message verbatim.
    """

    def __init__(self, code: str, message: str):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
