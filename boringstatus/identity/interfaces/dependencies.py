"""
Identity Dependencies
=====================

FastAPI dependencies every other context uses to authenticate requests.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.config import settings
from boringstatus.identity.application import IdentityService
from boringstatus.identity.domain import ApiKeyPrincipal, SessionPrincipal
from boringstatus.identity.infrastructure import (
    SQLAlchemyApiKeyRepository,
    SQLAlchemySessionRepository,
)
from boringstatus.infrastructure.database import get_session


async def get_identity_service(
    session: AsyncSession = Depends(get_session)
) -> IdentityService:
    """Get identity service instance."""
    return IdentityService(
        SQLAlchemySessionRepository(session),
        SQLAlchemyApiKeyRepository(session)
    )


async def get_session_principal(
    request: Request,
    identity: IdentityService = Depends(get_identity_service)
) -> SessionPrincipal:
    """Resolve the session from cookie or header."""
    token = (
        request.cookies.get(settings.session_cookie_name)
        or request.headers.get(settings.session_header_name)
    )
    return await identity.resolve_session(token)


async def require_active_organization(
    principal: SessionPrincipal = Depends(get_session_principal)
) -> UUID:
    """The organization every session-scoped read and write is filtered by."""
    return principal.organization_id


def require_api_key(scope: str):
    """
    Build a dependency that authenticates a bearer API key for scope.

    Usage:
        @router.post("/heartbeats")
        async def record(principal = Depends(require_api_key("heartbeat:write"))):
            ...
    """

    async def dependency(
        authorization: Optional[str] = Header(default=None),
        identity: IdentityService = Depends(get_identity_service)
    ) -> ApiKeyPrincipal:
        return await identity.authenticate_api_key(authorization, scope)

    return dependency
