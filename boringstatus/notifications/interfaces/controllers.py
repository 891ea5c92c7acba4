"""
Notifications Controllers (API Routes)
======================================

Session-authenticated channel management.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from boringstatus.core import NotificationDeliveryException
from boringstatus.identity.interfaces.dependencies import require_active_organization
from boringstatus.infrastructure.database import get_session
from boringstatus.notifications.application import (
    ChannelDeletedResponse,
    ChannelLinkResponse,
    ChannelResponse,
    ChannelService,
    ChannelWriteDTO,
    INotificationSender,
    NotificationTestResponse,
)
from boringstatus.notifications.infrastructure import (
    SQLAlchemyChannelRepository,
    SQLAlchemyMonitorOwnershipChecker,
    get_notification_sender,
)

router = APIRouter(prefix="/channels", tags=["Notification Channels"])


async def get_channel_service(
    session: AsyncSession = Depends(get_session),
    sender: INotificationSender = Depends(get_notification_sender)
) -> ChannelService:
    """Get channel service instance."""
    return ChannelService(
        SQLAlchemyChannelRepository(session),
        SQLAlchemyMonitorOwnershipChecker(session),
        sender
    )


@router.get("", response_model=List[ChannelResponse], summary="List notification channels")
async def list_channels(
    organization_id: UUID = Depends(require_active_organization),
    service: ChannelService = Depends(get_channel_service)
):
    return await service.list_channels(organization_id)


@router.post(
    "",
    response_model=ChannelResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a notification channel",
    description="""
    Create an email, webhook, Slack or Discord channel.

    New channels start unverified; send a test notification to verify.
    """
)
async def create_channel(
    request: ChannelWriteDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: ChannelService = Depends(get_channel_service)
):
    return await service.create_channel(organization_id, request)


@router.put("/{channel_id}", response_model=ChannelResponse, summary="Update a notification channel")
async def update_channel(
    channel_id: UUID,
    request: ChannelWriteDTO,
    organization_id: UUID = Depends(require_active_organization),
    service: ChannelService = Depends(get_channel_service)
):
    return await service.update_channel(organization_id, channel_id, request)


@router.delete("/{channel_id}", response_model=ChannelDeletedResponse, summary="Delete a notification channel")
async def delete_channel(
    channel_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: ChannelService = Depends(get_channel_service)
):
    return await service.delete_channel(organization_id, channel_id)


@router.post("/{channel_id}/test", response_model=NotificationTestResponse, summary="Send a test notification")
async def send_test_notification(
    channel_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: ChannelService = Depends(get_channel_service),
    session: AsyncSession = Depends(get_session)
):
    try:
        return await service.send_test_notification(organization_id, channel_id)
    except NotificationDeliveryException:
        # Keep the recorded failure; the request session rolls back on errors.
        await session.commit()
        raise


@router.put(
    "/{channel_id}/monitors/{monitor_id}",
    response_model=ChannelLinkResponse,
    summary="Link a monitor to a channel"
)
async def link_monitor_to_channel(
    channel_id: UUID,
    monitor_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: ChannelService = Depends(get_channel_service)
):
    return await service.link_monitor_to_channel(organization_id, channel_id, monitor_id)


@router.delete(
    "/{channel_id}/monitors/{monitor_id}",
    response_model=ChannelLinkResponse,
    summary="Unlink a monitor from a channel"
)
async def unlink_monitor_from_channel(
    channel_id: UUID,
    monitor_id: UUID,
    organization_id: UUID = Depends(require_active_organization),
    service: ChannelService = Depends(get_channel_service)
):
    return await service.unlink_monitor_from_channel(organization_id, channel_id, monitor_id)
