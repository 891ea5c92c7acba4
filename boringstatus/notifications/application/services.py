"""
Notifications Application Services
==================================

Channel management, test deliveries and alert dispatch.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from boringstatus.core import NotificationDeliveryException, ResourceNotFoundException
from boringstatus.core.timeutils import utcnow
from boringstatus.heartbeats.domain import AlertEvent, AlertKind
from boringstatus.notifications.application.dto import (
    ChannelDeletedResponse,
    ChannelLinkResponse,
    ChannelResponse,
    ChannelWriteDTO,
    NotificationTestResponse,
)
from boringstatus.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Interfaces (Dependency Inversion) ==========

class IChannelRepository(ABC):
    """Interface for notification channel data access."""

    @abstractmethod
    async def list_by_organization(self, organization_id: UUID) -> List[Any]:
        """Channels of one organization, newest first."""

    @abstractmethod
    async def create(self, organization_id: UUID, data: ChannelWriteDTO) -> Any:
        """Insert an unverified channel."""

    @abstractmethod
    async def get(self, organization_id: UUID, channel_id: UUID) -> Optional[Any]:
        """Channel if it belongs to the organization."""

    @abstractmethod
    async def update(self, model: Any, data: ChannelWriteDTO) -> Any:
        """Replace name/type/config and reset verification."""

    @abstractmethod
    async def delete(self, model: Any) -> None:
        """Delete; monitor links go with it."""

    @abstractmethod
    async def mark_verified(self, channel_id: UUID) -> None:
        """verified=true, last_failure_at cleared."""

    @abstractmethod
    async def record_failure(self, channel_id: UUID) -> None:
        """Bump failure_count and stamp last_failure_at."""

    @abstractmethod
    async def list_for_monitor(self, monitor_id: UUID) -> List[Any]:
        """Channels linked to a monitor."""

    @abstractmethod
    async def link(self, monitor_id: UUID, channel_id: UUID) -> None:
        """Create the link unless it exists."""

    @abstractmethod
    async def unlink(self, monitor_id: UUID, channel_id: UUID) -> None:
        """Remove the link if present."""


class IMonitorOwnershipChecker(ABC):

    @abstractmethod
    async def owns_monitor(self, organization_id: UUID, monitor_id: UUID) -> bool:
        """Whether the monitor belongs to the organization."""


class INotificationSender(ABC):
    """Delivers one event to one destination."""

    @abstractmethod
    async def send(self, channel_type: str, config: Dict[str, Any], event: AlertEvent) -> None:
        """
        Raises:
            NotificationDeliveryException: delivery failed after retries
        """


# ========== Application Services ==========

class ChannelService:
    """Organization-scoped channel management."""

    def __init__(
        self,
        channel_repository: IChannelRepository,
        monitor_checker: IMonitorOwnershipChecker,
        sender: INotificationSender
    ):
        self._channels = channel_repository
        self._monitors = monitor_checker
        self._sender = sender

    async def list_channels(self, organization_id: UUID) -> List[ChannelResponse]:
        models = await self._channels.list_by_organization(organization_id)
        return [ChannelResponse.model_validate(m) for m in models]

    async def create_channel(self, organization_id: UUID, data: ChannelWriteDTO) -> ChannelResponse:
        model = await self._channels.create(organization_id, data)

        logger.info(
            "Notification channel created",
            extra={"organization_id": str(organization_id), "channel_id": str(model.id), "type": data.type}
        )
        return ChannelResponse.model_validate(model)

    async def update_channel(self, organization_id: UUID, channel_id: UUID, data: ChannelWriteDTO) -> ChannelResponse:
        model = await self._require(organization_id, channel_id)
        model = await self._channels.update(model, data)

        logger.info(
            "Notification channel updated",
            extra={"organization_id": str(organization_id), "channel_id": str(channel_id)}
        )
        return ChannelResponse.model_validate(model)

    async def delete_channel(self, organization_id: UUID, channel_id: UUID) -> ChannelDeletedResponse:
        model = await self._require(organization_id, channel_id)
        await self._channels.delete(model)

        logger.info(
            "Notification channel deleted",
            extra={"organization_id": str(organization_id), "channel_id": str(channel_id)}
        )
        return ChannelDeletedResponse(id=channel_id)

    async def send_test_notification(self, organization_id: UUID, channel_id: UUID) -> NotificationTestResponse:
        """
        Deliver a test alert and record the outcome on the channel.

        Raises:
            NotificationDeliveryException: delivery failed; the failure is
                recorded before raising, so callers should commit first
        """
        model = await self._require(organization_id, channel_id)

        event = AlertEvent(
            kind=AlertKind.TEST,
            monitor_id=None,
            monitor_name="BoringStatus",
            target="",
            status="test",
            title="Test notification",
            message=f"This is a test notification for channel '{model.name}'.",
            time=utcnow(),
        )

        try:
            await self._sender.send(model.type, dict(model.config or {}), event)
        except NotificationDeliveryException as e:
            await self._channels.record_failure(model.id)
            logger.warning(
                "Test notification failed",
                extra={"channel_id": str(channel_id), "type": model.type, "error": str(e)}
            )
            raise NotificationDeliveryException(model.type, f"Failed to send test: {e.reason}") from e

        await self._channels.mark_verified(model.id)
        logger.info("Test notification sent", extra={"channel_id": str(channel_id), "type": model.type})

        return NotificationTestResponse(message=f"Test sent to {model.type}")

    async def link_monitor_to_channel(self, organization_id: UUID, channel_id: UUID, monitor_id: UUID) -> ChannelLinkResponse:
        await self._require_pair(organization_id, channel_id, monitor_id)
        await self._channels.link(monitor_id, channel_id)
        return ChannelLinkResponse()

    async def unlink_monitor_from_channel(
        self,
        organization_id: UUID,
        channel_id: UUID,
        monitor_id: UUID
    ) -> ChannelLinkResponse:
        await self._require_pair(organization_id, channel_id, monitor_id)
        await self._channels.unlink(monitor_id, channel_id)
        return ChannelLinkResponse()

    async def _require(self, organization_id: UUID, channel_id: UUID) -> Any:
        model = await self._channels.get(organization_id, channel_id)
        if model is None:
            raise ResourceNotFoundException("Channel", str(channel_id))
        return model

    async def _require_pair(self, organization_id: UUID, channel_id: UUID, monitor_id: UUID) -> None:
        await self._require(organization_id, channel_id)
        if not await self._monitors.owns_monitor(organization_id, monitor_id):
            raise ResourceNotFoundException("Monitor", str(monitor_id))


class AlertDispatcher:
    """
    Sends alert events to every channel linked to a monitor.

    A failing channel does not stop delivery to the others; the failure is
    recorded on its row.
    """

    def __init__(self, channel_repository: IChannelRepository, sender: INotificationSender):
        self._channels = channel_repository
        self._sender = sender

    async def dispatch(self, monitor_id: UUID, events: Sequence[AlertEvent]) -> int:
        """Returns the number of successful deliveries."""
        if not events:
            return 0

        channels = await self._channels.list_for_monitor(monitor_id)
        delivered = 0

        for channel in channels:
            for event in events:
                try:
                    await self._sender.send(channel.type, dict(channel.config or {}), event)
                    delivered += 1
                except NotificationDeliveryException as e:
                    await self._channels.record_failure(channel.id)
                    logger.error(
                        "Alert delivery failed",
                        extra={
                            "monitor_id": str(monitor_id),
                            "channel_id": str(channel.id),
                            "type": channel.type,
                            "error": str(e),
                        }
                    )

        logger.info(
            "Alerts dispatched",
            extra={
                "monitor_id": str(monitor_id),
                "events": len(events),
                "channels": len(channels),
                "delivered": delivered,
            }
        )
        return delivered
