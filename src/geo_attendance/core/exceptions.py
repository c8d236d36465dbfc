from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Carries the HTTP status the controller layer answers with and an optional
    payload echoed back to the client.
    """

    status_code = 400

    def __init__(self, message: str, *, data: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    status_code = 404


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are missing or invalid."""

    status_code = 401


class AuthRequiredError(AuthenticationError):
    pass


class AuthInvalidError(AuthenticationError):
    pass


class AuthExpiredError(AuthenticationError):
    pass


class AlreadyCheckedInError(DomainError):
    pass


class AlreadyCheckedOutError(DomainError):
    pass


class NoCheckInError(DomainError):
    pass


class LocationNotFoundError(DomainError):
    """No active office location matched; needs an administrator."""

    status_code = 404


class OutOfRangeError(DomainError):
    """Submitted position lies outside the office geofence."""
