"""
Client-level exceptions.

Every failure keeps what the pipeline knew about it: HTTP status and
errorName for service errors, the original requests exception for transport
failures, the raw body for malformed responses.
"""

from __future__ import annotations


class XChainError(Exception):
    """Base class for all XChain client errors."""


class XChainServiceError(XChainError):
    """Raised when the service answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, error_name: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_name = error_name

    def __str__(self) -> str:
        if self.error_name:
            return f"{self.message} (status={self.status_code}, errorName={self.error_name})"
        return f"{self.message} (status={self.status_code})"


class XChainTransportError(XChainError):
    """Raised when no HTTP response was obtained (DNS, refused, timeout, TLS)."""

    def __init__(self, cause: BaseException):
        super().__init__(f"No response from XChain: {cause}")
        self.cause = cause


class XChainMalformedResponseError(XChainError):
    """Raised when a 2xx response body is not a JSON object or array."""

    def __init__(self, raw_body: str, status_code: int):
        super().__init__(f"Unexpected response: {raw_body}")
        self.raw_body = raw_body
        self.status_code = status_code


class SigningError(XChainError):
    """Local failure while signing a request. Never a remote error."""


class JsonShapeError(XChainError):
    """Decoded payload does not have the expected shape."""
