"""
Identity Domain Layer
=====================

Pure Python principals and API key helpers.
"""

from boringstatus.identity.domain.entities import (
    ApiKeyPrincipal,
    SessionPrincipal,
    generate_api_key,
    mask_api_key,
)

__all__ = [
    "ApiKeyPrincipal",
    "SessionPrincipal",
    "generate_api_key",
    "mask_api_key",
]
