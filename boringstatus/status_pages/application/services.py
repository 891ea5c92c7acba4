"""
Status Pages Application Services
=================================

Status page management for organizations and the unauthenticated public
view.
"""

import secrets
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Set
from uuid import UUID

from boringstatus.core import ConflictException, ResourceNotFoundException
from boringstatus.status_pages.application.dto import (
    PublicStatusPageResponse,
    StatusPageMonitor,
    StatusPageMutationResponse,
    StatusPageResponse,
    StatusPageWriteDTO,
)
from boringstatus.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

MONITORS_NOT_FOUND = "One or more monitors not found or unauthorized"


# ========== Repository Interfaces (Dependency Inversion) ==========

class IStatusPageRepository(ABC):
    """Interface for status page data access."""

    @abstractmethod
    async def list_by_organization(self, organization_id: UUID) -> List[Any]:
        """Pages of one organization, newest first."""

    @abstractmethod
    async def get(self, organization_id: UUID, page_id: UUID) -> Optional[Any]:
        """Page if it belongs to the organization."""

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Any]:
        """Any page by slug."""

    @abstractmethod
    async def find_conflict(self, slug: str, custom_domain: Optional[str], exclude_id: Optional[UUID]) -> Optional[str]:
        """Name of the unique field already taken by another page, if any."""

    @abstractmethod
    async def create(self, organization_id: UUID, data: StatusPageWriteDTO) -> Any:
        """Insert a page."""

    @abstractmethod
    async def update(self, model: Any, data: StatusPageWriteDTO) -> Any:
        """Replace fields and bump updated_at."""

    @abstractmethod
    async def delete(self, model: Any) -> None:
        """Delete; monitor links go with it."""

    @abstractmethod
    async def replace_monitors(self, page_id: UUID, monitor_ids: Sequence[UUID]) -> None:
        """Make monitor_ids the exact set of shown monitors."""

    @abstractmethod
    async def get_monitors(self, page_ids: Sequence[UUID]) -> Dict[UUID, List[Any]]:
        """Shown monitors (id, name, status) per page."""

    @abstractmethod
    async def owned_monitor_ids(self, organization_id: UUID, monitor_ids: Sequence[UUID]) -> Set[UUID]:
        """Subset of monitor_ids belonging to the organization."""


# ========== Application Services ==========

class StatusPageService:
    """Status page use cases."""

    def __init__(self, repository: IStatusPageRepository):
        self._pages = repository

    async def list_status_pages(self, organization_id: UUID) -> List[StatusPageResponse]:
        models = await self._pages.list_by_organization(organization_id)
        monitors = await self._pages.get_monitors([m.id for m in models])
        return [_to_response(m, monitors.get(m.id, [])) for m in models]

    async def get_status_page(self, organization_id: UUID, page_id: UUID) -> StatusPageResponse:
        model = await self._require(organization_id, page_id)
        monitors = await self._pages.get_monitors([model.id])
        return _to_response(model, monitors.get(model.id, []))

    async def create_status_page(self, organization_id: UUID, data: StatusPageWriteDTO) -> StatusPageMutationResponse:
        """
        Raises:
            ResourceNotFoundException: a monitor id is not the organization's
            ConflictException: slug or custom domain already in use
        """
        monitor_ids = list(dict.fromkeys(data.monitor_ids))
        await self._check_monitors(organization_id, monitor_ids)
        await self._check_unique(data, exclude_id=None)

        model = await self._pages.create(organization_id, data)
        await self._pages.replace_monitors(model.id, monitor_ids)

        logger.info(
            "Status page created",
            extra={"organization_id": str(organization_id), "status_page_id": str(model.id), "slug": data.slug}
        )
        return StatusPageMutationResponse(id=model.id)

    async def update_status_page(
        self,
        organization_id: UUID,
        page_id: UUID,
        data: StatusPageWriteDTO
    ) -> StatusPageMutationResponse:
        model = await self._require(organization_id, page_id)

        monitor_ids = list(dict.fromkeys(data.monitor_ids))
        await self._check_monitors(organization_id, monitor_ids)
        await self._check_unique(data, exclude_id=model.id)

        await self._pages.update(model, data)
        await self._pages.replace_monitors(model.id, monitor_ids)

        logger.info(
            "Status page updated",
            extra={"organization_id": str(organization_id), "status_page_id": str(page_id)}
        )
        return StatusPageMutationResponse(id=model.id)

    async def delete_status_page(self, organization_id: UUID, page_id: UUID) -> StatusPageMutationResponse:
        model = await self._require(organization_id, page_id)
        await self._pages.delete(model)

        logger.info(
            "Status page deleted",
            extra={"organization_id": str(organization_id), "status_page_id": str(page_id)}
        )
        return StatusPageMutationResponse(id=page_id)

    async def get_public_status_page(
        self,
        slug: str,
        password: Optional[str] = None
    ) -> Optional[PublicStatusPageResponse]:
        """
        Public view of a page.

        Returns None for an unknown slug, and for a private page when the
        password is missing or wrong, so the two cannot be told apart.
        """
        model = await self._pages.get_by_slug(slug)
        if model is None:
            return None

        if model.password is not None:
            if password is None or not secrets.compare_digest(
                model.password.encode("utf-8"), password.encode("utf-8")
            ):
                return None

        monitors = await self._pages.get_monitors([model.id])
        return PublicStatusPageResponse(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            custom_domain=model.custom_domain,
            created_at=model.created_at,
            updated_at=model.updated_at,
            monitors=[StatusPageMonitor.model_validate(m) for m in monitors.get(model.id, [])],
        )

    async def _require(self, organization_id: UUID, page_id: UUID) -> Any:
        model = await self._pages.get(organization_id, page_id)
        if model is None:
            raise ResourceNotFoundException("Status page", str(page_id))
        return model

    async def _check_monitors(self, organization_id: UUID, monitor_ids: List[UUID]) -> None:
        if not monitor_ids:
            return
        owned = await self._pages.owned_monitor_ids(organization_id, monitor_ids)
        if len(owned) != len(monitor_ids):
            raise ResourceNotFoundException("Monitor", message=MONITORS_NOT_FOUND)

    async def _check_unique(self, data: StatusPageWriteDTO, exclude_id: Optional[UUID]) -> None:
        taken = await self._pages.find_conflict(data.slug, data.custom_domain, exclude_id)
        if taken is not None:
            raise ConflictException(f"A status page with this {taken} already exists", details={"field": taken})


def _to_response(model: Any, monitors: List[Any]) -> StatusPageResponse:
    shown = [StatusPageMonitor.model_validate(m) for m in monitors]
    return StatusPageResponse(
        id=model.id,
        organization_id=model.organization_id,
        name=model.name,
        slug=model.slug,
        description=model.description,
        custom_domain=model.custom_domain,
        is_private=model.password is not None,
        created_at=model.created_at,
        updated_at=model.updated_at,
        monitor_ids=[m.id for m in shown],
        monitors=shown,
    )
