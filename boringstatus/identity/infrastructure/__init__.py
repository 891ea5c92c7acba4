"""
Identity Infrastructure Layer
=============================

ORM models and repositories for organizations, sessions and API keys.
"""

from boringstatus.identity.infrastructure.models import (
    ApiKeyModel,
    MemberModel,
    OrganizationModel,
    SessionModel,
    UserModel,
)
from boringstatus.identity.infrastructure.repositories import (
    SQLAlchemyApiKeyRepository,
    SQLAlchemySessionRepository,
)

__all__ = [
    "ApiKeyModel",
    "MemberModel",
    "OrganizationModel",
    "SessionModel",
    "UserModel",
    "SQLAlchemyApiKeyRepository",
    "SQLAlchemySessionRepository",
]
