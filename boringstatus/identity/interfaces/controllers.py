"""
Identity Controllers (API Routes)
=================================

API key management for organization members.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.identity.application import (
    ApiKeyCreateDTO,
    ApiKeyCreatedResponse,
    ApiKeyResponse,
    ApiKeyService,
    RevokeResponse,
)
from boringstatus.identity.infrastructure import SQLAlchemyApiKeyRepository
from boringstatus.identity.interfaces.dependencies import require_active_organization
from boringstatus.infrastructure.database import get_session

router = APIRouter(prefix="/api-keys", tags=["API Keys"])


async def get_api_key_service(
    session: AsyncSession = Depends(get_session)
) -> ApiKeyService:
    """Get API key service instance."""
    return ApiKeyService(SQLAlchemyApiKeyRepository(session))


@router.get("", response_model=List[ApiKeyResponse], summary="List API keys")
async def list_api_keys(
    organization_id: UUID = Depends(require_active_organization),
    service: ApiKeyService = Depends(get_api_key_service)
):
    return await service.list_api_keys(organization_id)


@router.post(
    "",
    response_model=ApiKeyCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue an API key",
    description="""
    Issue a bearer key for check agents of the active organization.

    The full secret is only returned in this response; listings show a
    masked form.
    """
)
async def create_api_key(
    request: ApiKeyCreateDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: ApiKeyService = Depends(get_api_key_service)
):
    return await service.create_api_key(organization_id, request)


@router.post("/{key_id}/revoke", response_model=RevokeResponse, summary="Revoke an API key")
async def revoke_api_key(
    key_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: ApiKeyService = Depends(get_api_key_service)
):
    await service.revoke_api_key(organization_id, key_id)
    return RevokeResponse()
