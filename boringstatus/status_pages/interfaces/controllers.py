"""
Status Pages Controllers (API Routes)
=====================================

Session-authenticated status page management, and the public read
endpoint that needs no authentication.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.core import ResourceNotFoundException
from boringstatus.identity.interfaces.dependencies import require_active_organization
from boringstatus.infrastructure.database import get_session
from boringstatus.status_pages.application import (
    PublicStatusPageResponse,
    StatusPageMutationResponse,
    StatusPageResponse,
    StatusPageService,
    StatusPageWriteDTO,
)
from boringstatus.status_pages.infrastructure import SQLAlchemyStatusPageRepository

router = APIRouter(prefix="/status-pages", tags=["Status Pages"])
public_router = APIRouter(prefix="/status", tags=["Public"])


async def get_status_page_service(
    session: AsyncSession = Depends(get_session)
) -> StatusPageService:
    """Get status page service instance."""
    return StatusPageService(SQLAlchemyStatusPageRepository(session))


@router.get("", response_model=List[StatusPageResponse], summary="List status pages")
async def list_status_pages(
    organization_id: UUID = Depends(require_active_organization),
    service: StatusPageService = Depends(get_status_page_service)
):
    return await service.list_status_pages(organization_id)


@router.post(
    "",
    response_model=StatusPageMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a status page",
    description="""
    Create a status page showing the given monitors.

    Slug and custom domain are unique across all organizations. Setting a
    password makes the page private.
    """
)
async def create_status_page(
    request: StatusPageWriteDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: StatusPageService = Depends(get_status_page_service)
):
    return await service.create_status_page(organization_id, request)


@router.get("/{page_id}", response_model=StatusPageResponse, summary="Get a status page")
async def get_status_page(
    page_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: StatusPageService = Depends(get_status_page_service)
):
    return await service.get_status_page(organization_id, page_id)


@router.put("/{page_id}", response_model=StatusPageMutationResponse, summary="Replace a status page")
async def update_status_page(
    page_id: UUID,
    request: StatusPageWriteDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: StatusPageService = Depends(get_status_page_service)
):
    return await service.update_status_page(organization_id, page_id, request)


@router.delete("/{page_id}", response_model=StatusPageMutationResponse, summary="Delete a status page")
async def delete_status_page(
    page_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: StatusPageService = Depends(get_status_page_service)
):
    return await service.delete_status_page(organization_id, page_id)


@public_router.get(
    "/{slug}",
    response_model=PublicStatusPageResponse,
    summary="Public status page",
    description="""
    Private pages require the `X-Status-Page-Password` header. Unknown
    slugs and wrong passwords both answer 404.
    """
)
async def get_public_status_page(
    slug: str,
    password: Optional[str] = Header(default=None, alias="X-Status-Page-Password"),
    service: StatusPageService = Depends(get_status_page_service)
):
    page = await service.get_public_status_page(slug, password)
    if page is None:
        raise ResourceNotFoundException("Status page", slug)
    return page
