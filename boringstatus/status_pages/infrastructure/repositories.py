"""
Status Pages Infrastructure Repositories
========================================

SQLAlchemy implementation of status page storage.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set
from uuid import UUID, uuid4

from sqlalchemy import delete, insert, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.core import ConflictException
from boringstatus.core.timeutils import utcnow
from boringstatus.monitors.infrastructure.models import MonitorModel
from boringstatus.status_pages.application.dto import StatusPageWriteDTO
from boringstatus.status_pages.application.services import IStatusPageRepository
from boringstatus.status_pages.infrastructure.models import StatusPageModel, StatusPageMonitorLinkModel


class SQLAlchemyStatusPageRepository(IStatusPageRepository):
    """SQLAlchemy implementation of status page storage."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_by_organization(self, organization_id: UUID) -> List[StatusPageModel]:
        stmt = (
            select(StatusPageModel)
            .where(StatusPageModel.organization_id == organization_id)
            .order_by(StatusPageModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, organization_id: UUID, page_id: UUID) -> Optional[StatusPageModel]:
        stmt = select(StatusPageModel).where(
            StatusPageModel.id == page_id,
            StatusPageModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[StatusPageModel]:
        stmt = select(StatusPageModel).where(StatusPageModel.slug == slug)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_conflict(
        self,
        slug: str,
        custom_domain: Optional[str],
        exclude_id: Optional[UUID]
    ) -> Optional[str]:
        conditions = [StatusPageModel.slug == slug]
        if custom_domain is not None:
            conditions.append(StatusPageModel.custom_domain == custom_domain)

        stmt = select(StatusPageModel.slug, StatusPageModel.custom_domain).where(or_(*conditions))
        if exclude_id is not None:
            stmt = stmt.where(StatusPageModel.id != exclude_id)

        result = await self._session.execute(stmt)
        for existing_slug, existing_domain in result.all():
            if existing_slug == slug:
                return "slug"
            if custom_domain is not None and existing_domain == custom_domain:
                return "custom_domain"
        return None

    async def create(self, organization_id: UUID, data: StatusPageWriteDTO) -> StatusPageModel:
        now = utcnow()
        model = StatusPageModel(
            id=uuid4(),
            organization_id=organization_id,
            name=data.name,
            slug=data.slug,
            description=data.description,
            custom_domain=data.custom_domain,
            password=data.password,
            created_at=now,
            updated_at=now
        )
        self._session.add(model)
        await self._flush()
        return model

    async def update(self, model: StatusPageModel, data: StatusPageWriteDTO) -> StatusPageModel:
        model.name = data.name
        model.slug = data.slug
        model.description = data.description
        model.custom_domain = data.custom_domain
        model.password = data.password
        model.updated_at = utcnow()
        await self._flush()
        return model

    async def delete(self, model: StatusPageModel) -> None:
        await self._session.delete(model)
        await self._session.flush()

    async def replace_monitors(self, page_id: UUID, monitor_ids: Sequence[UUID]) -> None:
        await self._session.execute(
            delete(StatusPageMonitorLinkModel).where(StatusPageMonitorLinkModel.status_page_id == page_id)
        )
        if monitor_ids:
            await self._session.execute(
                insert(StatusPageMonitorLinkModel),
                [{"status_page_id": page_id, "monitor_id": monitor_id} for monitor_id in monitor_ids]
            )

    async def get_monitors(self, page_ids: Sequence[UUID]) -> Dict[UUID, List[MonitorModel]]:
        if not page_ids:
            return {}
        stmt = (
            select(StatusPageMonitorLinkModel.status_page_id, MonitorModel)
            .join(MonitorModel, MonitorModel.id == StatusPageMonitorLinkModel.monitor_id)
            .where(StatusPageMonitorLinkModel.status_page_id.in_(list(page_ids)))
            .order_by(MonitorModel.name)
        )
        result = await self._session.execute(stmt)

        monitors = defaultdict(list)
        for page_id, monitor in result.all():
            monitors[page_id].append(monitor)
        return monitors

    async def owned_monitor_ids(self, organization_id: UUID, monitor_ids: Sequence[UUID]) -> Set[UUID]:
        if not monitor_ids:
            return set()
        stmt = select(MonitorModel.id).where(
            MonitorModel.id.in_(list(monitor_ids)),
            MonitorModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise ConflictException("Status page slug or custom domain already in use") from e
