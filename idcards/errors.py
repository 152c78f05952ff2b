from __future__ import annotations

SERVER_ERROR = "Server error. Please try again."


class ApiError(Exception):
    """A remote API call finished with a non-success status."""

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message or f"API request failed ({status_code})")
        self.message = message
        self.status_code = status_code


class ApiUnavailable(ApiError):
    """The request never got a response (connection refused, DNS, timeout)."""


class InvalidTransition(Exception):
    """Raised when a registration flow is asked to move along an edge it does not have."""


def user_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, ApiUnavailable):
        return SERVER_ERROR
    if isinstance(exc, ApiError) and exc.message:
        return exc.message
    return fallback
