"""
Centralized exception hierarchy for domain-specific errors.

This module provides custom exception classes that represent specific
error conditions in the application, enabling better error handling and
client-side error recovery.
"""


class RouteMatchError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(RouteMatchError):
    """Exception raised when input fixes or uploads fail validation."""


class ConfigurationError(RouteMatchError):
    """Exception raised when required configuration (e.g. an access token) is missing."""


class ExternalServiceError(RouteMatchError):
    """Exception raised when service calls fail."""


class RateLimitError(ExternalServiceError):
    """Exception raised when rate limits are exceeded."""


class RouteMatchingError(RouteMatchError):
    """Exception raised when no strategy could produce a route geometry."""


RouteMatchException = RouteMatchError
ValidationException = ValidationError
ConfigurationException = ConfigurationError
ExternalServiceException = ExternalServiceError
RateLimitException = RateLimitError
RouteMatchingException = RouteMatchingError
