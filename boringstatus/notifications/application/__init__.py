"""
Notifications Application Layer
===============================

Use cases and DTOs for channels and alert dispatch.
"""

from boringstatus.notifications.application.dto import (
    ChannelDeletedResponse,
    ChannelLinkResponse,
    ChannelResponse,
    ChannelWriteDTO,
    NotificationTestResponse,
)
from boringstatus.notifications.application.services import (
    AlertDispatcher,
    ChannelService,
    IChannelRepository,
    IMonitorOwnershipChecker,
    INotificationSender,
)

__all__ = [
    "ChannelWriteDTO",
    "ChannelResponse",
    "ChannelDeletedResponse",
    "ChannelLinkResponse",
    "NotificationTestResponse",
    "ChannelService",
    "AlertDispatcher",
    "IChannelRepository",
    "IMonitorOwnershipChecker",
    "INotificationSender",
]
