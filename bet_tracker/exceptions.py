"""
Domain exceptions raised by the tracking services.

The API layer maps each class onto an HTTP status code.
"""
from typing import Any, Optional


class BetTrackerError(Exception):
    """Base class for all domain errors."""

    status_code: int = 400

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidOperationError(BetTrackerError):
    """Request is well-formed but breaks a business rule."""

    status_code = 400


class AuthenticationError(BetTrackerError):
    """Missing, expired or otherwise unusable session."""

    status_code = 401


class NotFoundError(BetTrackerError):
    """Requested resource does not exist for this user."""

    status_code = 404
