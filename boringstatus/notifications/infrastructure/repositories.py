"""
Notifications Infrastructure Repositories
=========================================

SQLAlchemy implementations of channel storage and monitor links.
"""

from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.core.timeutils import utcnow
from boringstatus.monitors.infrastructure.models import MonitorChannelLinkModel, MonitorModel
from boringstatus.notifications.application.dto import ChannelWriteDTO
from boringstatus.notifications.application.services import IChannelRepository, IMonitorOwnershipChecker
from boringstatus.notifications.infrastructure.models import NotificationChannelModel


class SQLAlchemyChannelRepository(IChannelRepository):
    """SQLAlchemy implementation of channel storage."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_by_organization(self, organization_id: UUID) -> List[NotificationChannelModel]:
        stmt = (
            select(NotificationChannelModel)
            .where(NotificationChannelModel.organization_id == organization_id)
            .order_by(NotificationChannelModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, organization_id: UUID, data: ChannelWriteDTO) -> NotificationChannelModel:
        model = NotificationChannelModel(
            id=uuid4(),
            organization_id=organization_id,
            name=data.name,
            type=data.type,
            config=data.config_dict(),
            verified=False,
            last_failure_at=None,
            failure_count=0,
            created_at=utcnow()
        )
        self._session.add(model)
        await self._session.flush()
        return model

    async def get(self, organization_id: UUID, channel_id: UUID) -> Optional[NotificationChannelModel]:
        stmt = select(NotificationChannelModel).where(
            NotificationChannelModel.id == channel_id,
            NotificationChannelModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, model: NotificationChannelModel, data: ChannelWriteDTO) -> NotificationChannelModel:
        model.name = data.name
        model.type = data.type
        model.config = data.config_dict()
        model.verified = False
        model.last_failure_at = None
        model.failure_count = 0
        await self._session.flush()
        return model

    async def delete(self, model: NotificationChannelModel) -> None:
        await self._session.delete(model)
        await self._session.flush()

    async def mark_verified(self, channel_id: UUID) -> None:
        await self._session.execute(
            update(NotificationChannelModel)
            .where(NotificationChannelModel.id == channel_id)
            .values(verified=True, last_failure_at=None)
        )

    async def record_failure(self, channel_id: UUID) -> None:
        await self._session.execute(
            update(NotificationChannelModel)
            .where(NotificationChannelModel.id == channel_id)
            .values(
                failure_count=NotificationChannelModel.failure_count + 1,
                last_failure_at=utcnow()
            )
        )

    async def list_for_monitor(self, monitor_id: UUID) -> List[NotificationChannelModel]:
        stmt = (
            select(NotificationChannelModel)
            .join(MonitorChannelLinkModel, MonitorChannelLinkModel.channel_id == NotificationChannelModel.id)
            .where(MonitorChannelLinkModel.monitor_id == monitor_id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def link(self, monitor_id: UUID, channel_id: UUID) -> None:
        existing = await self._session.get(MonitorChannelLinkModel, (monitor_id, channel_id))
        if existing is not None:
            return
        self._session.add(MonitorChannelLinkModel(monitor_id=monitor_id, channel_id=channel_id))
        await self._session.flush()

    async def unlink(self, monitor_id: UUID, channel_id: UUID) -> None:
        await self._session.execute(
            delete(MonitorChannelLinkModel).where(
                MonitorChannelLinkModel.monitor_id == monitor_id,
                MonitorChannelLinkModel.channel_id == channel_id
            )
        )


class SQLAlchemyMonitorOwnershipChecker(IMonitorOwnershipChecker):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def owns_monitor(self, organization_id: UUID, monitor_id: UUID) -> bool:
        stmt = select(MonitorModel.id).where(
            MonitorModel.id == monitor_id,
            MonitorModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None
