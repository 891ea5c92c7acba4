"""
Identity Application Layer
==========================

DTOs and services for sessions and API keys.
"""

from boringstatus.identity.application.dto import (
    ApiKeyCreateDTO,
    ApiKeyCreatedResponse,
    ApiKeyResponse,
    RevokeResponse,
)
from boringstatus.identity.application.services import (
    ApiKeyService,
    IdentityService,
    IApiKeyRepository,
    ISessionRepository,
    parse_bearer_token,
)

__all__ = [
    # DTOs
    "ApiKeyCreateDTO",
    "ApiKeyCreatedResponse",
    "ApiKeyResponse",
    "RevokeResponse",
    # Services
    "ApiKeyService",
    "IdentityService",
    "parse_bearer_token",
    # Repository Interfaces
    "IApiKeyRepository",
    "ISessionRepository",
]
