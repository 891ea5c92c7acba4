"""
Identity Application Services
=============================

Session resolution, API key authentication and key management.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from uuid import UUID

from boringstatus.core import ResourceNotFoundException, UnauthorizedException
from boringstatus.core.timeutils import as_utc, utcnow
from boringstatus.identity.application.dto import (
    ApiKeyCreateDTO,
    ApiKeyCreatedResponse,
    ApiKeyResponse,
)
from boringstatus.identity.domain import (
    ApiKeyPrincipal,
    SessionPrincipal,
    generate_api_key,
    mask_api_key,
)
from boringstatus.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

NO_ACTIVE_ORGANIZATION = "Unauthorized: You must be in an active Organization."


# ========== Repository Interfaces (Dependency Inversion) ==========

class ISessionRepository(ABC):
    """Interface for session lookup."""

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Any]:
        """Get session by its token."""


class IApiKeyRepository(ABC):
    """Interface for API key data access."""

    @abstractmethod
    async def create(self, organization_id: UUID, key: str, data: ApiKeyCreateDTO) -> Any:
        """Store a new key."""

    @abstractmethod
    async def list_by_organization(self, organization_id: UUID) -> List[Any]:
        """Keys of one organization, newest first."""

    @abstractmethod
    async def get_by_key(self, key: str) -> Optional[Any]:
        """Look up a key by its secret."""

    @abstractmethod
    async def deactivate(self, organization_id: UUID, key_id: UUID) -> bool:
        """Revoke a key; False when not found in the organization."""

    @abstractmethod
    async def touch(self, key_id: UUID) -> None:
        """Stamp last_used_at."""


# ========== Application Services ==========

class IdentityService:
    """
    Resolves callers into principals.

    Every failure collapses into UnauthorizedException so callers learn
    nothing about which part of the credential was wrong.
    """

    def __init__(self, session_repository: ISessionRepository, api_key_repository: IApiKeyRepository):
        self._sessions = session_repository
        self._api_keys = api_key_repository

    async def resolve_session(self, token: Optional[str]) -> SessionPrincipal:
        if not token:
            raise UnauthorizedException(NO_ACTIVE_ORGANIZATION)

        session = await self._sessions.get_by_token(token)
        if session is None or as_utc(session.expires_at) <= utcnow():
            raise UnauthorizedException(NO_ACTIVE_ORGANIZATION)

        if session.active_organization_id is None:
            raise UnauthorizedException(NO_ACTIVE_ORGANIZATION)

        return SessionPrincipal(
            user_id=session.user_id,
            organization_id=session.active_organization_id,
        )

    async def authenticate_api_key(self, authorization: Optional[str], scope: str) -> ApiKeyPrincipal:
        """
        Validate an `Authorization: Bearer <key>` header for scope.

        Raises:
            UnauthorizedException: missing, malformed, unknown, revoked,
                or (system keys) lacking the scope
        """
        key = parse_bearer_token(authorization)
        if key is None:
            raise UnauthorizedException("Unauthorized: Missing API key")

        model = await self._api_keys.get_by_key(key)
        if model is None or not model.is_active:
            raise UnauthorizedException("Unauthorized: Invalid API key")

        principal = ApiKeyPrincipal(
            key_id=model.id,
            organization_id=model.organization_id,
            scopes=list(model.scopes or []),
            is_active=model.is_active,
            last_used_at=model.last_used_at,
        )

        if not principal.allows(scope):
            logger.warning(
                "API key rejected for scope",
                extra={"api_key_id": str(model.id), "scope": scope}
            )
            raise UnauthorizedException(f"Unauthorized: API key lacks scope '{scope}'")

        await self._api_keys.touch(model.id)
        return principal


class ApiKeyService:
    """Organization-scoped API key management."""

    def __init__(self, api_key_repository: IApiKeyRepository):
        self._api_keys = api_key_repository

    async def create_api_key(self, organization_id: UUID, data: ApiKeyCreateDTO) -> ApiKeyCreatedResponse:
        secret = generate_api_key()
        model = await self._api_keys.create(organization_id, secret, data)

        logger.info(
            "API key created",
            extra={"organization_id": str(organization_id), "api_key_id": str(model.id)}
        )

        return ApiKeyCreatedResponse(**_key_fields(model), key=secret)

    async def list_api_keys(self, organization_id: UUID) -> List[ApiKeyResponse]:
        models = await self._api_keys.list_by_organization(organization_id)
        return [ApiKeyResponse(**_key_fields(m)) for m in models]

    async def revoke_api_key(self, organization_id: UUID, key_id: UUID) -> None:
        revoked = await self._api_keys.deactivate(organization_id, key_id)
        if not revoked:
            raise ResourceNotFoundException("API key", str(key_id))

        logger.info(
            "API key revoked",
            extra={"organization_id": str(organization_id), "api_key_id": str(key_id)}
        )


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the credential from an Authorization header value."""
    if not authorization:
        return None
    scheme, _, credential = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    credential = credential.strip()
    return credential or None


def _key_fields(model: Any) -> dict:
    return {
        "id": model.id,
        "name": model.name,
        "masked_key": mask_api_key(model.key),
        "tags": list(model.tags or []),
        "scopes": list(model.scopes or []),
        "is_active": model.is_active,
        "last_used_at": model.last_used_at,
        "created_at": model.created_at,
    }
