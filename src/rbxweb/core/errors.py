"""
Error taxonomy for the web API client.

Every failure reaching a binding's caller is one of these. Transport problems, decoding
problems and service-reported errors are kept apart so callers can decide which ones to retry.
"""

from __future__ import annotations

from typing import Any


class RbxError(Exception):
    """Base error class for client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message, "type": type(self).__name__}
        if self.details:
            result["details"] = self.details
        return result


class NetworkError(RbxError):
    """Transport-level failure (DNS, connect, timeout)."""


class DecodeError(RbxError):
    """The response body did not match the expected shape."""


class AuthenticationError(RbxError):
    """No credential configured, or the service rejected it."""


class RateLimited(RbxError):
    """The service answered HTTP 429."""

    def __init__(self, message: str, retry_after: float | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.retry_after = retry_after

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        return result


class TokenAcquisitionError(RbxError):
    """The anti-forgery token could not be obtained within the attempt cap."""

    def __init__(self, message: str, attempts: int, details: dict | None = None):
        super().__init__(message, details)
        self.attempts = attempts


class RemoteError(RbxError):
    """Error reported by the service in its `{errors: [...]}` envelope (first entry only)."""

    def __init__(
        self,
        code: int,
        message: str,
        user_message: str | None = None,
        status: int = 0,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.code = code
        self.user_message = user_message
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["code"] = self.code
        if self.user_message:
            result["user_message"] = self.user_message
        if self.status:
            result["status"] = self.status
        return result


class InvalidArgument(RbxError, ValueError):
    """Locally-detected misuse of a binding (never sent to the service)."""
