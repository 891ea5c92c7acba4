"""
Monitors Controllers (API Routes)
=================================

Session-authenticated monitor management and dashboard endpoints.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.heartbeats.infrastructure import SQLAlchemyHeartbeatRepository
from boringstatus.identity.interfaces.dependencies import require_active_organization
from boringstatus.infrastructure.database import get_session
from boringstatus.monitors.application import (
    DashboardMonitorResponse,
    MonitorDetailsResponse,
    MonitorInsightsService,
    MonitorListItem,
    MonitorResponse,
    MonitorService,
    MonitorWriteRequest,
    MutationResponse,
    ToggleActiveDTO,
)
from boringstatus.monitors.infrastructure import (
    SQLAlchemyChannelOwnershipChecker,
    SQLAlchemyMonitorRepository,
)

router = APIRouter(prefix="/monitors", tags=["Monitors"])


async def get_monitor_service(
    session: AsyncSession = Depends(get_session)
) -> MonitorService:
    """Get monitor service instance."""
    return MonitorService(
        SQLAlchemyMonitorRepository(session),
        SQLAlchemyChannelOwnershipChecker(session)
    )


async def get_insights_service(
    session: AsyncSession = Depends(get_session)
) -> MonitorInsightsService:
    return MonitorInsightsService(
        SQLAlchemyMonitorRepository(session),
        SQLAlchemyHeartbeatRepository(session)
    )


@router.get("", response_model=List[MonitorListItem], summary="List monitors")
async def list_monitors(
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorService = Depends(get_monitor_service)
):
    return await service.list_monitors(organization_id)


@router.post(
    "",
    response_model=MutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a monitor",
    description="""
    Create an HTTP, ping or TCP monitor.

    The body is discriminated on `type`; the target format and `config`
    shape depend on it. `channel_ids` must reference channels of the active
    organization.
    """
)
async def create_monitor(
    request: MonitorWriteRequest,
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorService = Depends(get_monitor_service)
):
    return await service.create_monitor(organization_id, request.root)


@router.get(
    "/dashboard",
    response_model=List[DashboardMonitorResponse],
    summary="Monitors with 24h uptime, latency and issues"
)
async def get_monitors_dashboard(
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorInsightsService = Depends(get_insights_service)
):
    return await service.get_monitors_dashboard(organization_id)


@router.get("/{monitor_id}", response_model=MonitorResponse, summary="Get a monitor")
async def get_monitor(
    monitor_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorService = Depends(get_monitor_service)
):
    return await service.get_monitor(organization_id, monitor_id)


@router.get(
    "/{monitor_id}/details",
    response_model=MonitorDetailsResponse,
    summary="Monitor with chart, recent checks and stats"
)
async def get_monitor_details(
    monitor_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorInsightsService = Depends(get_insights_service)
):
    return await service.get_monitor_details(organization_id, monitor_id)


@router.put("/{monitor_id}", response_model=MutationResponse, summary="Update a monitor")
async def update_monitor(
    monitor_id: UUID,
    request: MonitorWriteRequest,
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorService = Depends(get_monitor_service)
):
    return await service.update_monitor(organization_id, monitor_id, request.root)


@router.patch("/{monitor_id}/active", response_model=MutationResponse, summary="Pause or resume a monitor")
async def toggle_monitor_active(
    monitor_id: UUID,
    request: ToggleActiveDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorService = Depends(get_monitor_service)
):
    return await service.toggle_monitor_active(organization_id, monitor_id, request.active)


@router.delete("/{monitor_id}", response_model=MutationResponse, summary="Delete a monitor")
async def delete_monitor(
    monitor_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: MonitorService = Depends(get_monitor_service)
):
    return await service.delete_monitor(organization_id, monitor_id)
