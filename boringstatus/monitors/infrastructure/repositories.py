"""
Monitors Infrastructure Repositories
====================================

SQLAlchemy implementations of monitor storage and channel ownership checks.
"""

from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set
from uuid import UUID, uuid4

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.config import MonitorStatus
from boringstatus.core.timeutils import utcnow
from boringstatus.monitors.application.dto import MonitorWriteDTO
from boringstatus.monitors.application.services import IChannelOwnershipChecker, IMonitorRepository
from boringstatus.monitors.infrastructure.models import MonitorChannelLinkModel, MonitorModel
from boringstatus.notifications.infrastructure.models import NotificationChannelModel


class SQLAlchemyMonitorRepository(IMonitorRepository):
    """SQLAlchemy implementation of monitor storage."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, organization_id: UUID, data: MonitorWriteDTO) -> MonitorModel:
        now = utcnow()
        model = MonitorModel(
            id=uuid4(),
            organization_id=organization_id,
            status=MonitorStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self._apply(model, data)

        self._session.add(model)
        await self._session.flush()

        return model

    async def list_by_organization(self, organization_id: UUID) -> List[MonitorModel]:
        stmt = (
            select(MonitorModel)
            .where(MonitorModel.organization_id == organization_id)
            .order_by(MonitorModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, organization_id: UUID, monitor_id: UUID) -> Optional[MonitorModel]:
        stmt = select(MonitorModel).where(
            MonitorModel.id == monitor_id,
            MonitorModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, model: MonitorModel, data: MonitorWriteDTO) -> MonitorModel:
        self._apply(model, data)
        model.updated_at = utcnow()
        await self._session.flush()
        return model

    async def set_active(self, model: MonitorModel, active: bool) -> MonitorModel:
        model.active = active
        model.updated_at = utcnow()
        await self._session.flush()
        return model

    async def delete(self, model: MonitorModel) -> None:
        await self._session.delete(model)
        await self._session.flush()

    async def get_channel_ids(self, monitor_id: UUID) -> List[UUID]:
        stmt = select(MonitorChannelLinkModel.channel_id).where(
            MonitorChannelLinkModel.monitor_id == monitor_id
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_channels(self, monitor_ids: Sequence[UUID]) -> Dict[UUID, List[NotificationChannelModel]]:
        if not monitor_ids:
            return {}
        stmt = (
            select(MonitorChannelLinkModel.monitor_id, NotificationChannelModel)
            .join(NotificationChannelModel, NotificationChannelModel.id == MonitorChannelLinkModel.channel_id)
            .where(MonitorChannelLinkModel.monitor_id.in_(list(monitor_ids)))
            .order_by(NotificationChannelModel.name)
        )
        result = await self._session.execute(stmt)

        channels = defaultdict(list)
        for monitor_id, channel in result.all():
            channels[monitor_id].append(channel)
        return channels

    async def replace_channels(self, monitor_id: UUID, channel_ids: Sequence[UUID]) -> None:
        await self._session.execute(
            delete(MonitorChannelLinkModel).where(MonitorChannelLinkModel.monitor_id == monitor_id)
        )
        if channel_ids:
            await self._session.execute(
                insert(MonitorChannelLinkModel),
                [{"monitor_id": monitor_id, "channel_id": channel_id} for channel_id in channel_ids]
            )

    @staticmethod
    def _apply(model: MonitorModel, data: MonitorWriteDTO) -> None:
        model.type = data.type
        model.name = data.name
        model.target = data.target
        model.active = data.active
        model.frequency = data.frequency
        model.timeout = data.timeout
        model.regions = list(data.regions)
        model.config = data.config_dict()
        model.alert_rules = [r.to_dict() for r in data.rules()]


class SQLAlchemyChannelOwnershipChecker(IChannelOwnershipChecker):
    """Resolves channel ids against the notification_channel table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def owned_channel_ids(self, organization_id: UUID, channel_ids: Sequence[UUID]) -> Set[UUID]:
        if not channel_ids:
            return set()
        stmt = select(NotificationChannelModel.id).where(
            NotificationChannelModel.id.in_(list(channel_ids)),
            NotificationChannelModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        return set(result.scalars().all())
