"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries. Each carries the HTTP status the
API layer should answer with.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    status_code: int = 400

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""

    status_code = 500


class ValidationException(ApplicationException):
    """Exception for validation errors."""

    status_code = 422

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.field = field
        if field and details is None:
            details = {"field": field}
        super().__init__(message, details)


class UnauthorizedException(ApplicationException):
    """Raised when a request carries no usable session or API key."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", details: Optional[dict] = None):
        super().__init__(message, details)


class ForbiddenException(ApplicationException):
    """Raised when the caller is known but the action is not allowed."""

    status_code = 403


class ResourceNotFoundException(ApplicationException):
    """
    Exception when a requested resource is not found.

    Also raised for resources owned by another organization, so callers
    cannot learn whether another tenant's resource exists.
    """

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None,
        message: Optional[str] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if message is None:
            message = f"{resource_type}"
            if resource_id:
                message += f" with id '{resource_id}'"
            message += " not found"
        super().__init__(message, details)


class ConflictException(ApplicationException):
    """Raised when a write collides with an existing unique value."""

    status_code = 409


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""

    status_code = 500


class ExternalServiceException(ApplicationException):
    """Base exception for external service failures."""

    status_code = 502

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class NotificationDeliveryException(ExternalServiceException):
    """Exception for alert delivery failures."""

    def __init__(self, channel_type: str, message: str, details: Optional[dict] = None):
        self.channel_type = channel_type
        self.reason = message
        super().__init__(f"Notification ({channel_type})", message, details)
