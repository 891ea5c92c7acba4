"""
Heartbeats Infrastructure Repositories
======================================

SQLAlchemy implementations of heartbeat storage and the monitor state cache.
"""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID, uuid4

from sqlalchemy import case, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.config import HeartbeatStatus
from boringstatus.heartbeats.application.services import IHeartbeatRepository, IMonitorStateRepository
from boringstatus.heartbeats.domain import Heartbeat
from boringstatus.heartbeats.infrastructure.models import HeartbeatModel
from boringstatus.monitors.domain import Monitor
from boringstatus.monitors.infrastructure.models import MonitorModel


def _to_row(heartbeat: Heartbeat) -> dict:
    return {
        "id": heartbeat.id or uuid4(),
        "time": heartbeat.time,
        "monitor_id": heartbeat.monitor_id,
        "region": heartbeat.region,
        "run_id": heartbeat.run_id,
        "status": heartbeat.status,
        "latency": heartbeat.latency,
        "message": heartbeat.message,
        "metrics": heartbeat.metrics,
    }


class SQLAlchemyHeartbeatRepository(IHeartbeatRepository):
    """SQLAlchemy implementation of heartbeat storage."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, heartbeat: Heartbeat) -> Heartbeat:
        model = HeartbeatModel(**_to_row(heartbeat))
        self._session.add(model)
        await self._session.flush()
        return Heartbeat.from_model(model)

    async def add_many(self, heartbeats: Sequence[Heartbeat]) -> None:
        if not heartbeats:
            return
        await self._session.execute(insert(HeartbeatModel), [_to_row(h) for h in heartbeats])

    async def list_range(self, monitor_id: UUID, start: datetime, end: datetime) -> List[Heartbeat]:
        stmt = (
            select(HeartbeatModel)
            .where(
                HeartbeatModel.monitor_id == monitor_id,
                HeartbeatModel.time > start,
                HeartbeatModel.time <= end
            )
            .order_by(HeartbeatModel.time.desc())
        )
        result = await self._session.execute(stmt)
        return [Heartbeat.from_model(m) for m in result.scalars().all()]

    async def latest(self, monitor_id: UUID, before: Optional[datetime] = None) -> Optional[Heartbeat]:
        stmt = select(HeartbeatModel).where(HeartbeatModel.monitor_id == monitor_id)
        if before is not None:
            stmt = stmt.where(HeartbeatModel.time <= before)
        stmt = stmt.order_by(HeartbeatModel.time.desc()).limit(1)

        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return Heartbeat.from_model(model) if model else None

    async def recent(self, monitor_id: UUID, limit: int) -> List[Heartbeat]:
        stmt = (
            select(HeartbeatModel)
            .where(HeartbeatModel.monitor_id == monitor_id)
            .order_by(HeartbeatModel.time.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [Heartbeat.from_model(m) for m in result.scalars().all()]

    async def list_since(self, monitor_ids: Sequence[UUID], since: datetime) -> List[Heartbeat]:
        if not monitor_ids:
            return []
        stmt = (
            select(HeartbeatModel)
            .where(
                HeartbeatModel.monitor_id.in_(list(monitor_ids)),
                HeartbeatModel.time >= since
            )
            .order_by(HeartbeatModel.time.asc())
        )
        result = await self._session.execute(stmt)
        return [Heartbeat.from_model(m) for m in result.scalars().all()]

    async def count_since(self, monitor_id: UUID, since: datetime) -> Tuple[int, int]:
        stmt = select(
            func.coalesce(func.sum(case((HeartbeatModel.status == HeartbeatStatus.UP, 1), else_=0)), 0),
            func.count(HeartbeatModel.id)
        ).where(
            HeartbeatModel.monitor_id == monitor_id,
            HeartbeatModel.time > since
        )
        result = await self._session.execute(stmt)
        up, total = result.one()
        return int(up or 0), int(total or 0)

    async def delete_for_monitor(self, monitor_id: UUID) -> int:
        result = await self._session.execute(
            delete(HeartbeatModel).where(HeartbeatModel.monitor_id == monitor_id)
        )
        return result.rowcount or 0


class SQLAlchemyMonitorStateRepository(IMonitorStateRepository):
    """Reads monitors and writes their cached check state."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, monitor_id: UUID) -> Optional[Monitor]:
        model = await self._session.get(MonitorModel, monitor_id)
        return Monitor.from_model(model) if model else None

    async def get_owned(self, organization_id: UUID, monitor_id: UUID) -> Optional[Monitor]:
        stmt = select(MonitorModel).where(
            MonitorModel.id == monitor_id,
            MonitorModel.organization_id == organization_id
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return Monitor.from_model(model) if model else None

    async def save_state(self, monitor: Monitor) -> None:
        stmt = (
            update(MonitorModel)
            .where(MonitorModel.id == monitor.id)
            .values(
                status=monitor.status,
                last_check_at=monitor.last_check_at,
                next_check_at=monitor.next_check_at,
            )
        )
        await self._session.execute(stmt)
