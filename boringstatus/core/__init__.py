"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from boringstatus.core.exceptions import (
    ApplicationException,
    DomainException,
    RepositoryException,
    ValidationException,
    UnauthorizedException,
    ForbiddenException,
    ResourceNotFoundException,
    ConflictException,
    ConfigurationException,
    ExternalServiceException,
    NotificationDeliveryException,
)

__all__ = [
    "ApplicationException",
    "DomainException",
    "RepositoryException",
    "ValidationException",
    "UnauthorizedException",
    "ForbiddenException",
    "ResourceNotFoundException",
    "ConflictException",
    "ConfigurationException",
    "ExternalServiceException",
    "NotificationDeliveryException",
]
