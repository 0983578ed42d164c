# shophub/utils/exceptions.py
"""
Central place for all application-specific exceptions.
Makes error handling predictable and testable.
"""
from __future__ import annotations


class ShopHubError(Exception):
    """Base exception for all app errors, never raised directly."""
    status_code = 500
    message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, **payload):
        self.message = message or self.message
        super().__init__(self.message)
        self.payload = payload


class ValidationError(ShopHubError):
    status_code = 400
    message = "Invalid input"


class AuthenticationError(ShopHubError):
    status_code = 401
    message = "Unauthorized"


class AuthorizationError(ShopHubError):
    status_code = 403
    message = "You do not have permission to perform this action"


class NotFoundError(ShopHubError):
    status_code = 404
    message = "The requested resource was not found"


class ConflictError(ShopHubError):
    status_code = 409
    message = "The resource conflicts with existing data"


class IdentityProviderError(ShopHubError):
    status_code = 502
    message = "Failed to talk to the identity provider"
