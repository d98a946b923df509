"""
Domain exceptions with the HTTP status they map to.

Services raise these; the application factory registers a single handler that
renders them as ``{"detail": message}``.
"""

from __future__ import annotations


class PopaloonError(Exception):
    """Base exception for client-visible failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidQueryError(PopaloonError):
    """Raised when query parameters fail validation."""

    status_code = 400


class AuthenticationError(PopaloonError):
    """Raised when no bearer token accompanies the request."""

    status_code = 401

    def __init__(self, message: str = "No token provided"):
        super().__init__(message)


class PermissionDeniedError(PopaloonError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class UserNotFoundError(PopaloonError):
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__("User not found")
        self.user_id = user_id


class BalloonTypeNotFoundError(PopaloonError):
    """Raised when a balloon type name or id does not resolve."""

    status_code = 404

    def __init__(self, reference):
        super().__init__(f"Balloon type '{reference}' not found")
        self.reference = reference


class DuplicateBalloonTypeError(PopaloonError):
    status_code = 409

    def __init__(self, name: str):
        super().__init__(f"Balloon type '{name}' already exists")
        self.name = name


__all__ = [
    "AuthenticationError",
    "BalloonTypeNotFoundError",
    "DuplicateBalloonTypeError",
    "InvalidQueryError",
    "PermissionDeniedError",
    "PopaloonError",
    "UserNotFoundError",
]
