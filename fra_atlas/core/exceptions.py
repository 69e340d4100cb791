"""Custom exception hierarchy.

Every error carries the HTTP status it is reported with, so the API layer
can turn any of them into an ``{"error": message}`` response.
"""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(AppError):
    """Raised when input validation fails."""
    status_code = 400


class AuthenticationError(AppError):
    """Raised when the caller cannot be identified."""
    status_code = 401


class PermissionDeniedError(AppError):
    """Raised when the caller's role does not allow the operation."""
    status_code = 403


class NotFoundError(AppError):
    """Raised when a record does not exist or is not visible to the caller."""
    status_code = 404


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(AppError):
    """Raised when a database operation fails."""
    pass


class APIClientError(AppError):
    """Raised when an external API call fails."""
    pass


class APITimeoutError(APIClientError):
    """Raised when an external API call times out."""
    pass


class PaymentRequiredError(APIClientError):
    """Upstream service refused the call for lack of credits."""
    status_code = 402


class RateLimitError(APIClientError):
    """Upstream service is rate limiting us."""
    status_code = 429
