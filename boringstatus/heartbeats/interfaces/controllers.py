"""
Heartbeats Controllers (API Routes)
===================================

Ingestion for check agents (API key), history for the dashboard (session)
and development data tools.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.config import ApiKeyScope, Settings, get_settings
from boringstatus.heartbeats.application import (
    ClearHeartbeatsResponse,
    DevHeartbeatService,
    GenerateHeartbeatsDTO,
    GenerateHeartbeatsResponse,
    HeartbeatCreateDTO,
    HeartbeatRecordedResponse,
    HeartbeatResponse,
    HeartbeatService,
    SimulateHeartbeatsDTO,
    SimulateHeartbeatsResponse,
)
from boringstatus.heartbeats.infrastructure import (
    SQLAlchemyHeartbeatRepository,
    SQLAlchemyMonitorStateRepository,
)
from boringstatus.identity.domain import ApiKeyPrincipal
from boringstatus.identity.interfaces.dependencies import require_active_organization, require_api_key
from boringstatus.infrastructure.database import get_session
from boringstatus.notifications.application import INotificationSender
from boringstatus.notifications.infrastructure import get_notification_sender
from boringstatus.notifications.interfaces import dispatch_alerts

router = APIRouter(tags=["Heartbeats"])
dev_router = APIRouter(prefix="/dev", tags=["Development"])


async def get_heartbeat_service(
    session: AsyncSession = Depends(get_session)
) -> HeartbeatService:
    """Get heartbeat service instance."""
    return HeartbeatService(
        SQLAlchemyHeartbeatRepository(session),
        SQLAlchemyMonitorStateRepository(session)
    )


async def get_dev_heartbeat_service(
    session: AsyncSession = Depends(get_session),
    config: Settings = Depends(get_settings)
) -> DevHeartbeatService:
    return DevHeartbeatService(
        SQLAlchemyHeartbeatRepository(session),
        SQLAlchemyMonitorStateRepository(session),
        config=config
    )


@router.post(
    "/heartbeats",
    response_model=HeartbeatRecordedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a check result",
    description="""
    Called by check agents with `Authorization: Bearer <api key>`.

    Stores the heartbeat, refreshes the monitor status and, once committed,
    notifies linked channels of status changes and matching alert rules.
    """
)
async def record_heartbeat(
    request: HeartbeatCreateDTO,
    background_tasks: BackgroundTasks,
    principal: ApiKeyPrincipal = Depends(require_api_key(ApiKeyScope.HEARTBEAT_WRITE)),
    service: HeartbeatService = Depends(get_heartbeat_service),
    session: AsyncSession = Depends(get_session),
    sender: INotificationSender = Depends(get_notification_sender)
):
    response, events = await service.record_heartbeat(principal, request)

    # Alerts go out only for committed heartbeats.
    await session.commit()
    if events:
        background_tasks.add_task(dispatch_alerts, request.monitor_id, events, sender)

    return response


@router.get(
    "/monitors/{monitor_id}/heartbeats",
    response_model=List[HeartbeatResponse],
    summary="Heartbeats in a time range, newest first"
)
async def get_heartbeats_for_monitor(
    monitor_id: UUID,
    start: datetime = Query(..., alias="from", description="Exclusive lower bound"),
    end: datetime = Query(..., alias="to", description="Inclusive upper bound"),
    organization_id: UUID = Depends(require_active_organization),
    service: HeartbeatService = Depends(get_heartbeat_service)
):
    return await service.get_heartbeats_for_monitor(organization_id, monitor_id, start, end)


@router.get(
    "/monitors/{monitor_id}/heartbeats/latest",
    response_model=Optional[HeartbeatResponse],
    summary="Most recent heartbeat"
)
async def get_latest_heartbeat(
    monitor_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: HeartbeatService = Depends(get_heartbeat_service)
):
    return await service.get_latest_heartbeat(organization_id, monitor_id)


@dev_router.post(
    "/monitors/{monitor_id}/heartbeats/generate",
    response_model=GenerateHeartbeatsResponse,
    summary="Generate random heartbeats"
)
async def generate_fake_heartbeats(
    monitor_id: UUID,
    request: GenerateHeartbeatsDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: DevHeartbeatService = Depends(get_dev_heartbeat_service)
):
    return await service.generate_fake_heartbeats(organization_id, monitor_id, request)


@dev_router.post(
    "/monitors/{monitor_id}/heartbeats/simulate",
    response_model=SimulateHeartbeatsResponse,
    summary="Replace history with a traffic pattern"
)
async def simulate_heartbeats(
    monitor_id: UUID,
    request: SimulateHeartbeatsDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: DevHeartbeatService = Depends(get_dev_heartbeat_service)
):
    return await service.simulate_heartbeats(organization_id, monitor_id, request)


@dev_router.delete(
    "/monitors/{monitor_id}/heartbeats",
    response_model=ClearHeartbeatsResponse,
    summary="Delete all heartbeats and reset the monitor"
)
async def clear_heartbeats(
    monitor_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: DevHeartbeatService = Depends(get_dev_heartbeat_service)
):
    return await service.clear_heartbeats(organization_id, monitor_id)
